import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
from web3 import AsyncWeb3
from web3.exceptions import ContractLogicError

from constants.constants import ERC4626_DEPOSIT_SELECTOR
from deposit.services.ledger_query_service import Web3LedgerQueryService
from utils.exceptions import RemoteCallError

DEPOSITOR = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
VAULT = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"
ASSET = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


def _contract_returning(function_name, value=None, side_effect=None):
    contract = MagicMock()
    bound_call = MagicMock()
    bound_call.call = AsyncMock(return_value=value, side_effect=side_effect)
    getattr(contract.functions, function_name).return_value = bound_call
    return contract


@pytest.fixture
def mock_web3():
    web3 = MagicMock()
    web3.to_checksum_address = AsyncWeb3.to_checksum_address
    web3.eth.estimate_gas = AsyncMock()
    return web3


@pytest.mark.asyncio
async def test_get_vault_asset(mock_web3):
    contract = _contract_returning("asset", ASSET.lower())
    mock_web3.eth.contract.return_value = contract
    service = Web3LedgerQueryService(mock_web3)

    asset = await service.get_vault_asset(VAULT.lower())

    assert asset == ASSET
    _, kwargs = mock_web3.eth.contract.call_args
    assert kwargs["address"] == VAULT


@pytest.mark.asyncio
async def test_get_balance_and_allowance(mock_web3):
    balance_contract = _contract_returning("balanceOf", 500)
    allowance_contract = _contract_returning("allowance", 200)
    mock_web3.eth.contract.side_effect = [balance_contract, allowance_contract]
    service = Web3LedgerQueryService(mock_web3)

    assert await service.get_balance(ASSET, DEPOSITOR) == 500
    assert await service.get_allowance(ASSET, DEPOSITOR, VAULT) == 200

    balance_contract.functions.balanceOf.assert_called_once_with(DEPOSITOR)
    allowance_contract.functions.allowance.assert_called_once_with(DEPOSITOR, VAULT)


@pytest.mark.asyncio
async def test_get_max_deposit_and_share_balance(mock_web3):
    max_deposit_contract = _contract_returning("maxDeposit", 2 ** 256 - 1)
    shares_contract = _contract_returning("balanceOf", 7)
    mock_web3.eth.contract.side_effect = [max_deposit_contract, shares_contract]
    service = Web3LedgerQueryService(mock_web3)

    assert await service.get_max_deposit(VAULT, DEPOSITOR) == 2 ** 256 - 1
    assert await service.get_share_balance(VAULT, DEPOSITOR) == 7


@pytest.mark.asyncio
async def test_estimate_gas_passes_call_through(mock_web3):
    mock_web3.eth.estimate_gas.return_value = 84_000
    service = Web3LedgerQueryService(mock_web3)
    call = {"from": DEPOSITOR, "to": VAULT, "data": "0x6e553f65"}

    assert await service.estimate_gas(call) == 84_000
    mock_web3.eth.estimate_gas.assert_awaited_once_with(call)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        ContractLogicError("execution reverted"),
        aiohttp.ClientConnectionError("connection refused"),
        asyncio.TimeoutError(),
    ],
)
async def test_remote_failures_become_remote_call_error(mock_web3, error):
    mock_web3.eth.contract.return_value = _contract_returning("asset", side_effect=error)
    service = Web3LedgerQueryService(mock_web3)

    with pytest.raises(RemoteCallError) as exc_info:
        await service.get_vault_asset(VAULT)

    assert exc_info.value.__cause__ is error


@pytest.mark.asyncio
async def test_malformed_address_becomes_remote_call_error(mock_web3):
    service = Web3LedgerQueryService(mock_web3)

    with pytest.raises(RemoteCallError):
        await service.get_vault_asset("0xnot-an-address")

    mock_web3.eth.contract.assert_not_called()


def test_encode_deposit_call():
    service = Web3LedgerQueryService(AsyncWeb3(AsyncWeb3.AsyncHTTPProvider("http://127.0.0.1:8545")))

    data = service.encode_deposit_call(100_000_000, DEPOSITOR)

    assert data.startswith(ERC4626_DEPOSIT_SELECTOR)
    assert len(data) == 2 + 8 + 64 + 64
    assert int(data[10:74], 16) == 100_000_000
    assert data[-40:] == DEPOSITOR[2:].lower()
