from urllib.parse import urlparse

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3

from utils.logger_utils import get_logger

logger = get_logger("RPC Provider Utils")


def get_async_provider_from_uri(uri_string: str, timeout: int = 60) -> AsyncHTTPProvider:
    """
    Creates an asynchronous Web3 provider based on the URI scheme.
    Currently supports HTTP/HTTPS.
    """
    uri = urlparse(uri_string)

    if uri.scheme == "http" or uri.scheme == "https":
        request_kwargs = {"timeout": aiohttp.ClientTimeout(total=timeout)}
        return AsyncHTTPProvider(uri_string, request_kwargs=request_kwargs)
    raise ValueError(f"Unknown uri schema {uri_string}. Supported: http, https")


def create_async_web3(uri_string: str, timeout: int = 60) -> AsyncWeb3:
    provider = get_async_provider_from_uri(uri_string, timeout)
    logger.info(f"Using JSON-RPC provider at {urlparse(uri_string).netloc}")
    return AsyncWeb3(provider)
