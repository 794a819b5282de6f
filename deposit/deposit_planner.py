from typing import Optional, Union

from constants.constants import GAS_BUFFER_PERCENT
from deposit.models.deposit_request import DepositRequest
from deposit.models.execution_result import ExecutionResult
from deposit.models.transaction_descriptor import TransactionDescriptor
from deposit.models.vault_state import VaultState
from deposit.services.ledger_query_service import LedgerQueryService
from deposit.services.transaction_submitter import TransactionSubmitter
from utils.async_utils import call_with_timeout, gather_with_concurrency
from utils.exceptions import (
    DepositExceedsCapacityError,
    InsufficientAllowanceError,
    InsufficientBalanceError,
)
from utils.formatter_utils import to_normalized_address
from utils.logger_utils import get_logger
from utils.validation_utils import validate_deposit_addresses, validate_deposit_amount

logger = get_logger("Deposit Planner")

VAULT_STATE_READ_CONCURRENCY = 4


def inflate_gas_estimate(estimate: int) -> int:
    """Adds GAS_BUFFER_PERCENT to a gas estimate using integer (floor) arithmetic."""
    return estimate + estimate * GAS_BUFFER_PERCENT // 100


class DepositPlanner(object):
    """
    Pre-flight checks and transaction construction for ERC-4626 deposits.

    Checks run in a fixed order and stop at the first failure:
    amount, addresses (both local), then asset, balance, allowance and
    max deposit read from the ledger. Only then is gas simulated.
    The planner keeps no per-request state, so one instance can serve
    concurrent requests.
    """

    def __init__(self, ledger: LedgerQueryService, remote_call_timeout: Optional[float] = None):
        self._ledger = ledger
        self._remote_call_timeout = remote_call_timeout

    async def _remote(self, call_name: str, awaitable):
        return await call_with_timeout(awaitable, self._remote_call_timeout, call_name)

    async def plan(self, request: DepositRequest) -> Union[TransactionDescriptor, ExecutionResult]:
        if request.submitter is not None:
            return await self.execute(request)
        return await self.quote(request)

    async def quote(self, request: DepositRequest) -> TransactionDescriptor:
        """
        Validates the deposit and returns the unsent transaction.

        Raises:
            InvalidAmountError, InvalidReceiverError, InsufficientBalanceError,
            InsufficientAllowanceError, DepositExceedsCapacityError: domain failures.
            RemoteCallError: the ledger could not be read or the simulation failed.
        """
        amount = request.amount
        validate_deposit_amount(amount)
        validate_deposit_addresses(request.depositor, request.vault)

        depositor = to_normalized_address(request.depositor)
        vault = to_normalized_address(request.vault)

        asset = await self._remote("get_vault_asset", self._ledger.get_vault_asset(vault))
        logger.debug(f"Vault {vault} underlying asset: {asset}")

        balance = await self._remote("get_balance", self._ledger.get_balance(asset, depositor))
        if balance < amount:
            raise InsufficientBalanceError(required=amount, available=balance)

        allowance = await self._remote("get_allowance", self._ledger.get_allowance(asset, depositor, vault))
        if allowance < amount:
            raise InsufficientAllowanceError(required=amount, available=allowance)

        max_deposit = await self._remote("get_max_deposit", self._ledger.get_max_deposit(vault, depositor))
        if max_deposit < amount:
            raise DepositExceedsCapacityError(required=amount, available=max_deposit)

        data = self._ledger.encode_deposit_call(amount, depositor)
        base_estimate = await self._remote(
            "estimate_gas",
            self._ledger.estimate_gas({"from": depositor, "to": vault, "data": data}),
        )

        descriptor = TransactionDescriptor(
            to=vault,
            from_address=depositor,
            data=data,
            value=0,
            gas_limit=inflate_gas_estimate(base_estimate),
        )
        logger.info(
            f"Quoted deposit of {amount} into {vault} for {depositor} "
            f"(gas estimate {base_estimate}, limit {descriptor.gas_limit})"
        )
        return descriptor

    async def execute(
        self, request: DepositRequest, submitter: Optional[TransactionSubmitter] = None
    ) -> ExecutionResult:
        """
        Quotes the deposit, submits it once and waits for a terminal receipt.
        A reverted receipt is returned as-is; nothing is resubmitted.
        """
        submitter = submitter or request.submitter
        if submitter is None:
            raise ValueError("execute() requires a transaction submitter")

        descriptor = await self.quote(request)

        tx_hash = await self._remote("send", submitter.send(descriptor))
        logger.info(f"Deposit transaction {tx_hash} submitted, waiting for confirmation...")

        receipt = await submitter.await_confirmation(tx_hash)
        if receipt.is_success:
            logger.info(f"Deposit transaction {tx_hash} confirmed in block {receipt.block_number}")
        else:
            logger.warning(f"Deposit transaction {tx_hash} reverted (status={receipt.status})")

        return ExecutionResult(transaction_hash=tx_hash, receipt=receipt)

    async def read_vault_state(self, vault: str, depositor: str) -> VaultState:
        """Snapshot of everything the deposit checks look at, read concurrently."""
        validate_deposit_addresses(depositor, vault)
        depositor = to_normalized_address(depositor)
        vault = to_normalized_address(vault)

        asset = await self._remote("get_vault_asset", self._ledger.get_vault_asset(vault))
        balance, allowance, max_deposit, share_balance = await gather_with_concurrency(
            VAULT_STATE_READ_CONCURRENCY,
            self._remote("get_balance", self._ledger.get_balance(asset, depositor)),
            self._remote("get_allowance", self._ledger.get_allowance(asset, depositor, vault)),
            self._remote("get_max_deposit", self._ledger.get_max_deposit(vault, depositor)),
            self._remote("get_share_balance", self._ledger.get_share_balance(vault, depositor)),
        )

        return VaultState(
            vault=vault,
            depositor=depositor,
            asset=asset,
            balance=balance,
            allowance=allowance,
            max_deposit=max_deposit,
            share_balance=share_balance,
        )
