"""Asynchronous HTTP fetcher using httpx."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx

from ..core.model import FetchResult, NetworkError
from .base import ByteRange, DEFAULT_TIMEOUT, is_range_success, range_header, total_length

logger = logging.getLogger(__name__)


# Global async client
_client: Optional[httpx.AsyncClient] = None


@asynccontextmanager
async def _get_client():
    """Get or create the global httpx AsyncClient."""
    global _client
    if _client is None:
        _client = httpx.AsyncClient(timeout=DEFAULT_TIMEOUT, follow_redirects=True)

    try:
        yield _client
    finally:
        # Don't close the client here - it's shared
        pass


class HTTPAsyncFetcher:
    """Asynchronous HTTP fetcher with Range support."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout
        self.bytes_fetched = 0
        self.requests_made = 0

    async def fetch(self, locator: str, byte_range: Optional[ByteRange] = None) -> FetchResult:
        """GET the whole resource, or `byte_range` of it."""
        headers = range_header(byte_range) if byte_range is not None else {}

        self.requests_made += 1
        async with _get_client() as client:
            try:
                response = await client.get(locator, headers=headers, timeout=self.timeout)
            except httpx.HTTPError as e:
                raise NetworkError(f"Request failed: {e} ({locator})")

        status = response.status_code
        if byte_range is None:
            ok = response.is_success
        else:
            ok = is_range_success(status)
        if not ok:
            raise NetworkError(f"HTTP {status} {response.reason_phrase or ''}".rstrip() + f" ({locator})", status)

        data = response.content
        self.bytes_fetched += len(data)
        logger.debug("GET %s range=%s -> %d, %d bytes", locator, byte_range, status, len(data))

        return FetchResult(
            data=data,
            total_length=total_length(response.headers.get("content-range"), len(data)),
            range_honored=status == 206,
            status_ok=True,
            status_code=status,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        # Client is shared, don't close it here
        pass


async def open_http_fetcher_async(timeout: float = DEFAULT_TIMEOUT) -> HTTPAsyncFetcher:
    """Create an asynchronous HTTP fetcher."""
    return HTTPAsyncFetcher(timeout)


async def close_global_client():
    """Close the global httpx client. Call this at application shutdown."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
