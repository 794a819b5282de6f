import asyncio
from typing import Any, Awaitable, Coroutine, Optional, TypeVar

from utils.exceptions import RemoteCallTimeoutError
from utils.logger_utils import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


async def call_with_timeout(awaitable: Awaitable[T], timeout: Optional[float], call_name: str) -> T:
    """
    Awaits a remote call, bounded by `timeout` seconds when one is given.
    Expiry raises RemoteCallTimeoutError; task cancellation propagates untouched.
    """
    if timeout is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.warning(f"Remote call {call_name} timed out after {timeout:.2f}s")
        raise RemoteCallTimeoutError(f"{call_name} timed out after {timeout}s") from e


async def gather_with_concurrency(n: int, *tasks: Coroutine[Any, Any, Any]) -> list[Any]:
    """
    Runs the coroutines concurrently, at most `n` at a time, preserving order.
    """
    semaphore = asyncio.Semaphore(n)

    async def sem_task(task: Coroutine[Any, Any, Any]) -> Any:
        async with semaphore:
            return await task

    return await asyncio.gather(*(sem_task(task) for task in tasks))
