import pytest

from constants.constants import ERC4626_DEPOSIT_SELECTOR, TX_STATUS_REVERTED, TX_STATUS_SUCCESS
from deposit.models.receipt import TransactionReceipt
from deposit.models.transaction_descriptor import TransactionDescriptor
from deposit.services.ledger_query_service import LedgerQueryService
from deposit.services.transaction_submitter import TransactionSubmitter
from utils.exceptions import RemoteCallError

DEPOSITOR = "0x70997970c51812dc3a010c7d01b50e0d17dc79c8"
OTHER_DEPOSITOR = "0x3c44cdddb6a900fa2b585dd299e03d12fa4293bc"
VAULT = "0xe7f1725e7734ce288f8367e1bb143e90bb3f0512"
ASSET = "0x5fbdb2315678afecb367f032d93f642f64180aa3"

MAX_UINT256 = 2 ** 256 - 1
BASE_GAS_ESTIMATE = 123_457


class InMemoryVaultLedger(LedgerQueryService):
    """
    One ERC-4626 vault over one ERC-20 asset with 1:1 share accounting.
    Records every remote call so tests can assert on ordering.
    """

    def __init__(self, vault=VAULT, asset=ASSET, max_deposit=MAX_UINT256, gas_estimate=BASE_GAS_ESTIMATE):
        self.vault = vault.lower()
        self.asset = asset.lower()
        self.max_deposit = max_deposit
        self.gas_estimate = gas_estimate
        self.balances = {}
        self.allowances = {}
        self.shares = {}
        self.calls = []

    def fund(self, holder, balance=0, allowance=0):
        self.balances[holder.lower()] = balance
        self.allowances[holder.lower()] = allowance

    async def get_vault_asset(self, vault):
        self.calls.append("get_vault_asset")
        if vault.lower() != self.vault:
            raise RemoteCallError(f"asset failed: no contract at {vault}")
        return self.asset

    async def get_balance(self, asset, holder):
        self.calls.append("get_balance")
        return self.balances.get(holder.lower(), 0)

    async def get_allowance(self, asset, owner, spender):
        self.calls.append("get_allowance")
        return self.allowances.get(owner.lower(), 0)

    async def get_max_deposit(self, vault, holder):
        self.calls.append("get_max_deposit")
        return self.max_deposit

    async def get_share_balance(self, vault, holder):
        self.calls.append("get_share_balance")
        return self.shares.get(holder.lower(), 0)

    async def estimate_gas(self, call):
        self.calls.append("estimate_gas")
        return self.gas_estimate

    def encode_deposit_call(self, amount, receiver):
        return ERC4626_DEPOSIT_SELECTOR + f"{amount:064x}" + receiver[2:].lower().rjust(64, "0")

    def apply_deposit(self, depositor, data):
        amount = int(data[10:74], 16)
        receiver = "0x" + data[-40:]
        depositor = depositor.lower()
        if self.balances.get(depositor, 0) < amount or self.allowances.get(depositor, 0) < amount:
            return False
        self.balances[depositor] -= amount
        self.allowances[depositor] -= amount
        self.shares[receiver] = self.shares.get(receiver, 0) + amount
        return True


class InMemoryTransactionSubmitter(TransactionSubmitter):
    def __init__(self, ledger: InMemoryVaultLedger, force_revert=False):
        self.ledger = ledger
        self.force_revert = force_revert
        self.sent = []
        self._outcomes = {}

    async def send(self, descriptor: TransactionDescriptor) -> str:
        self.sent.append(descriptor)
        tx_hash = "0x" + f"{len(self.sent):064x}"
        applied = not self.force_revert and self.ledger.apply_deposit(descriptor.from_address, descriptor.data)
        self._outcomes[tx_hash] = (descriptor, applied)
        return tx_hash

    async def await_confirmation(self, transaction_hash: str) -> TransactionReceipt:
        descriptor, applied = self._outcomes[transaction_hash]
        return TransactionReceipt(
            transaction_hash=transaction_hash,
            status=TX_STATUS_SUCCESS if applied else TX_STATUS_REVERTED,
            from_address=descriptor.from_address,
            to_address=descriptor.to,
            block_number=len(self.sent),
            gas_used=descriptor.gas_limit - 1000,
        )


@pytest.fixture
def ledger():
    ledger = InMemoryVaultLedger()
    ledger.fund(DEPOSITOR, balance=10_000_000_000, allowance=1_000_000_000_000)
    return ledger


@pytest.fixture
def submitter(ledger):
    return InMemoryTransactionSubmitter(ledger)
