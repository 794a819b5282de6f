# Chain-level constants shared by the deposit pipeline.

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Safety margin added on top of the simulated gas estimate (integer percent)
GAS_BUFFER_PERCENT = 10

# Receipt status values (EIP-658)
TX_STATUS_SUCCESS = 1
TX_STATUS_REVERTED = 0

# Selector of deposit(uint256,address)
ERC4626_DEPOSIT_SELECTOR = "0x6e553f65"
