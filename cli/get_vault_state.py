import asyncio
import json

import click

from config.settings import settings
from deposit.deposit_planner import DepositPlanner
from deposit.models.vault_state import VaultState
from deposit.services.ledger_query_service import Web3LedgerQueryService
from utils.exceptions import DepositError
from utils.logger_utils import configure_logging, get_logger
from utils.rpc_provider_utils import create_async_web3

logger = get_logger("Get Vault State CLI")


@click.command()
@click.option("-v", "--vault", required=True, type=str, help="ERC-4626 vault address.")
@click.option("-d", "--depositor", required=True, type=str, help="Depositor address.")
@click.option(
    "-p",
    "--provider-uri",
    default=settings.ethereum.provider_uri,
    show_default=True,
    type=str,
    help="Ethereum JSON-RPC provider URI.",
)
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def get_vault_state(vault: str, depositor: str, provider_uri: str, log_file: str):
    """
    Prints the depositor's asset balance, allowance, max deposit and share balance for a vault.
    """
    configure_logging(log_file, settings.app.log_level)

    try:
        state = asyncio.run(_read_vault_state(vault, depositor, provider_uri))
    except DepositError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        logger.exception("An error occurred while reading vault state:")
        raise e

    click.echo(json.dumps(state.model_dump(mode="json"), indent=2))


async def _read_vault_state(vault: str, depositor: str, provider_uri: str) -> VaultState:
    web3 = create_async_web3(provider_uri, timeout=settings.ethereum.rpc_timeout)
    planner = DepositPlanner(
        Web3LedgerQueryService(web3),
        remote_call_timeout=settings.deposit.remote_call_timeout,
    )
    try:
        return await planner.read_vault_state(vault, depositor)
    finally:
        await web3.provider.disconnect()
