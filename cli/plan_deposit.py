import asyncio
import json
from typing import Optional, Union

import click
from eth_account import Account

from config.settings import settings
from deposit.deposit_planner import DepositPlanner
from deposit.models.deposit_request import DepositRequest
from deposit.models.execution_result import ExecutionResult
from deposit.models.transaction_descriptor import TransactionDescriptor
from deposit.services.ledger_query_service import Web3LedgerQueryService
from deposit.services.transaction_submitter import Web3TransactionSubmitter
from utils.exceptions import DepositError
from utils.logger_utils import configure_logging, get_logger
from utils.rpc_provider_utils import create_async_web3

logger = get_logger("Plan Deposit CLI")


@click.command()
@click.option("-v", "--vault", required=True, type=str, help="ERC-4626 vault address.")
@click.option("-d", "--depositor", required=True, type=str, help="Address that deposits and receives the shares.")
@click.option("-a", "--amount", required=True, type=int, help="Amount in the asset's smallest unit (e.g. 1000000 = 1 USDC).")
@click.option(
    "-p",
    "--provider-uri",
    default=settings.ethereum.provider_uri,
    show_default=True,
    type=str,
    help="Ethereum JSON-RPC provider URI.",
)
@click.option(
    "--execute",
    is_flag=True,
    default=False,
    help="Submit the deposit and wait for the receipt. Signs with DEPOSITOR_PRIVATE_KEY when set, "
    "otherwise the node signs.",
)
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def plan_deposit(vault: str, depositor: str, amount: int, provider_uri: str, execute: bool, log_file: str):
    """
    Checks that a deposit into an ERC-4626 vault would succeed and prints the
    transaction (or, with --execute, the transaction hash and receipt) as JSON.
    """
    configure_logging(log_file, settings.app.log_level)

    try:
        result = asyncio.run(_plan_deposit(vault, depositor, amount, provider_uri, execute))
    except DepositError as e:
        logger.error(f"Deposit rejected: {e}")
        raise click.ClickException(str(e))
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        return
    except Exception as e:
        logger.exception("An error occurred while planning the deposit:")
        raise e

    click.echo(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))


async def _plan_deposit(
    vault: str, depositor: str, amount: int, provider_uri: str, execute: bool
) -> Union[TransactionDescriptor, ExecutionResult]:
    web3 = create_async_web3(provider_uri, timeout=settings.ethereum.rpc_timeout)
    planner = DepositPlanner(
        Web3LedgerQueryService(web3),
        remote_call_timeout=settings.deposit.remote_call_timeout,
    )

    submitter: Optional[Web3TransactionSubmitter] = None
    if execute:
        account = Account.from_key(settings.deposit.private_key) if settings.deposit.private_key else None
        submitter = Web3TransactionSubmitter(
            web3,
            account=account,
            confirmation_timeout=settings.deposit.confirmation_timeout,
            poll_latency=settings.deposit.confirmation_poll_latency,
        )

    try:
        request = DepositRequest(depositor=depositor, vault=vault, amount=amount, submitter=submitter)
        return await planner.plan(request)
    finally:
        await web3.provider.disconnect()


if __name__ == "__main__":
    plan_deposit()
