from typing import Optional

import aiohttp
from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3
from web3.exceptions import TimeExhausted, Web3Exception

from deposit.mappers.receipt_mapper import DepositReceiptMapper
from deposit.models.receipt import TransactionReceipt
from deposit.models.transaction_descriptor import TransactionDescriptor
from utils.exceptions import RemoteCallError, RemoteCallTimeoutError
from utils.formatter_utils import to_hex_str
from utils.logger_utils import get_logger

logger = get_logger("Transaction Submitter")


class TransactionSubmitter(object):
    """Signs, broadcasts and confirms a prepared transaction. Never retries."""

    async def send(self, descriptor: TransactionDescriptor) -> str:
        raise NotImplementedError

    async def await_confirmation(self, transaction_hash: str) -> TransactionReceipt:
        raise NotImplementedError


class Web3TransactionSubmitter(TransactionSubmitter):
    """
    Submits through a JSON-RPC node.

    Without `account` the node signs (eth_sendTransaction), which suits unlocked
    dev-node accounts. With a LocalAccount the transaction is signed locally and
    broadcast with eth_sendRawTransaction.
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        account: Optional[LocalAccount] = None,
        confirmation_timeout: float = 120,
        poll_latency: float = 0.1,
        receipt_mapper: Optional[DepositReceiptMapper] = None,
    ):
        self._web3 = web3
        self._account = account
        self._confirmation_timeout = confirmation_timeout
        self._poll_latency = poll_latency
        self._receipt_mapper = receipt_mapper or DepositReceiptMapper()

    async def send(self, descriptor: TransactionDescriptor) -> str:
        tx_params = descriptor.to_tx_params()
        try:
            if self._account is None:
                tx_hash = await self._web3.eth.send_transaction(tx_params)
            else:
                tx_hash = await self._send_signed(tx_params)
        except (Web3Exception, aiohttp.ClientError) as e:
            raise RemoteCallError(f"Sending transaction from {descriptor.from_address} failed: {e}") from e

        tx_hash = to_hex_str(tx_hash)
        logger.info(f"Broadcast transaction {tx_hash} to {descriptor.to}")
        return tx_hash

    async def _send_signed(self, tx_params: dict):
        sender = tx_params.pop("from")
        if sender.lower() != self._account.address.lower():
            raise ValueError(f"Signer {self._account.address} cannot send a transaction from {sender}")

        tx_params["nonce"] = await self._web3.eth.get_transaction_count(self._account.address, "pending")
        tx_params["chainId"] = await self._web3.eth.chain_id
        tx_params["gasPrice"] = await self._web3.eth.gas_price

        signed = self._account.sign_transaction(tx_params)
        return await self._web3.eth.send_raw_transaction(signed.raw_transaction)

    async def await_confirmation(self, transaction_hash: str) -> TransactionReceipt:
        try:
            raw_receipt = await self._web3.eth.wait_for_transaction_receipt(
                transaction_hash,
                timeout=self._confirmation_timeout,
                poll_latency=self._poll_latency,
            )
        except TimeExhausted as e:
            raise RemoteCallTimeoutError(
                f"Transaction {transaction_hash} not confirmed within {self._confirmation_timeout}s"
            ) from e
        except (Web3Exception, aiohttp.ClientError) as e:
            raise RemoteCallError(f"Waiting for receipt of {transaction_hash} failed: {e}") from e

        return self._receipt_mapper.receipt_to_model(raw_receipt)
