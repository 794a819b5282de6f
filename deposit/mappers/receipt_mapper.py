from typing import Any, Mapping

from deposit.models.receipt import TransactionReceipt
from utils.formatter_utils import hex_to_dec, to_hex_str, to_normalized_address


class DepositReceiptMapper(object):
    """
    Maps a transaction receipt, either web3.py's decoded AttributeDict or a raw
    JSON-RPC dict, into a TransactionReceipt.
    """

    def receipt_to_model(self, raw_receipt: Mapping[str, Any]) -> TransactionReceipt:
        return TransactionReceipt(
            transaction_hash=to_hex_str(raw_receipt.get("transactionHash")),
            status=hex_to_dec(raw_receipt.get("status")),
            from_address=to_normalized_address(raw_receipt.get("from")),
            to_address=to_normalized_address(raw_receipt.get("to")),
            block_hash=to_hex_str(raw_receipt.get("blockHash")),
            block_number=hex_to_dec(raw_receipt.get("blockNumber")),
            transaction_index=hex_to_dec(raw_receipt.get("transactionIndex")),
            gas_used=hex_to_dec(raw_receipt.get("gasUsed")),
            cumulative_gas_used=hex_to_dec(raw_receipt.get("cumulativeGasUsed")),
            effective_gas_price=hex_to_dec(raw_receipt.get("effectiveGasPrice")),
            contract_address=to_normalized_address(raw_receipt.get("contractAddress")),
        )

