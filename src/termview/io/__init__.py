"""Fetch layer for termview - full and ranged GETs of one resource."""

# Re-export these for import convenience
from .base import Fetcher, AsyncFetcher, DEFAULT_RANGE, DEFAULT_RANGE_END, DEFAULT_TIMEOUT
from .local import open_local_fetcher, open_local_fetcher_async
from .http_sync import open_http_fetcher
from .http_async import open_http_fetcher_async, close_global_client


def is_remote(locator) -> bool:
    return str(locator).startswith(('http://', 'https://'))


def open_fetcher(locator, timeout: float = DEFAULT_TIMEOUT):
    """Factory function to create the appropriate Fetcher for a locator."""
    if is_remote(locator):
        return open_http_fetcher(timeout)
    return open_local_fetcher()


async def open_fetcher_async(locator, timeout: float = DEFAULT_TIMEOUT):
    """Factory function to create the appropriate AsyncFetcher for a locator."""
    if is_remote(locator):
        return await open_http_fetcher_async(timeout)
    return await open_local_fetcher_async()
