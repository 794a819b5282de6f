import asyncio
from typing import Any, Awaitable, Callable, Dict, TypeVar

import aiohttp
from web3 import AsyncWeb3
from web3.exceptions import Web3Exception

from abi.erc20_abi import ERC20_ABI
from abi.erc4626_abi import ERC4626_ABI
from utils.exceptions import RemoteCallError
from utils.formatter_utils import to_hex_str
from utils.logger_utils import get_logger

logger = get_logger("Ledger Query Service")

T = TypeVar("T")

# Failures below the domain layer: node errors, reverted calls, transport, bad addresses
REMOTE_CALL_EXCEPTIONS = (Web3Exception, aiohttp.ClientError, asyncio.TimeoutError, ValueError)


class LedgerQueryService(object):
    """
    Read-only view of the chain needed to plan a vault deposit.
    Amounts are integers in the asset's smallest unit.
    """

    async def get_vault_asset(self, vault: str) -> str:
        raise NotImplementedError

    async def get_balance(self, asset: str, holder: str) -> int:
        raise NotImplementedError

    async def get_allowance(self, asset: str, owner: str, spender: str) -> int:
        raise NotImplementedError

    async def get_max_deposit(self, vault: str, holder: str) -> int:
        raise NotImplementedError

    async def get_share_balance(self, vault: str, holder: str) -> int:
        raise NotImplementedError

    async def estimate_gas(self, call: Dict[str, Any]) -> int:
        raise NotImplementedError

    def encode_deposit_call(self, amount: int, receiver: str) -> str:
        raise NotImplementedError


class Web3LedgerQueryService(LedgerQueryService):
    def __init__(self, web3: AsyncWeb3):
        self._web3 = web3

    def _vault_contract(self, vault: str):
        return self._web3.eth.contract(address=self._web3.to_checksum_address(vault), abi=ERC4626_ABI)

    def _asset_contract(self, asset: str):
        return self._web3.eth.contract(address=self._web3.to_checksum_address(asset), abi=ERC20_ABI)

    async def _call(self, method_name: str, call: Callable[[], Awaitable[T]]) -> T:
        try:
            return await call()
        except REMOTE_CALL_EXCEPTIONS as e:
            logger.error(f"Remote call {method_name} failed: {e}")
            raise RemoteCallError(f"{method_name} failed: {e}") from e

    async def get_vault_asset(self, vault: str) -> str:
        asset = await self._call(
            "asset", lambda: self._vault_contract(vault).functions.asset().call()
        )
        return self._web3.to_checksum_address(asset)

    async def get_balance(self, asset: str, holder: str) -> int:
        return await self._call(
            "balanceOf",
            lambda: self._asset_contract(asset).functions.balanceOf(self._web3.to_checksum_address(holder)).call(),
        )

    async def get_allowance(self, asset: str, owner: str, spender: str) -> int:
        return await self._call(
            "allowance",
            lambda: self._asset_contract(asset).functions.allowance(
                self._web3.to_checksum_address(owner), self._web3.to_checksum_address(spender)
            ).call(),
        )

    async def get_max_deposit(self, vault: str, holder: str) -> int:
        return await self._call(
            "maxDeposit",
            lambda: self._vault_contract(vault).functions.maxDeposit(self._web3.to_checksum_address(holder)).call(),
        )

    async def get_share_balance(self, vault: str, holder: str) -> int:
        return await self._call(
            "balanceOf(vault)",
            lambda: self._vault_contract(vault).functions.balanceOf(self._web3.to_checksum_address(holder)).call(),
        )

    async def estimate_gas(self, call: Dict[str, Any]) -> int:
        return await self._call("eth_estimateGas", lambda: self._web3.eth.estimate_gas(call))

    def encode_deposit_call(self, amount: int, receiver: str) -> str:
        vault_factory = self._web3.eth.contract(abi=ERC4626_ABI)
        encoded = vault_factory.encode_abi("deposit", args=[amount, self._web3.to_checksum_address(receiver)])
        return to_hex_str(encoded)
