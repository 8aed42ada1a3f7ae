"""Synchronous HTTP fetcher using requests."""

import logging
from typing import Optional

import requests

from ..core.model import FetchResult, NetworkError
from .base import ByteRange, DEFAULT_TIMEOUT, is_range_success, range_header, total_length

logger = logging.getLogger(__name__)


# Module-level session for connection pooling
_session = None


def _get_session():
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class HTTPFetcher:
    """Synchronous HTTP fetcher with Range support."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout
        self.bytes_fetched = 0
        self.requests_made = 0
        self._session = _get_session()

    def fetch(self, locator: str, byte_range: Optional[ByteRange] = None) -> FetchResult:
        """GET the whole resource, or `byte_range` of it."""
        headers = range_header(byte_range) if byte_range is not None else {}

        self.requests_made += 1
        try:
            response = self._session.get(locator, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(f"Request failed: {e} ({locator})")

        status = response.status_code
        if byte_range is None:
            ok = 200 <= status < 300
        else:
            ok = is_range_success(status)
        if not ok:
            raise NetworkError(f"HTTP {status} {response.reason or ''}".rstrip() + f" ({locator})", status)

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

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Session is shared, don't close it here
        pass


def open_http_fetcher(timeout: float = DEFAULT_TIMEOUT) -> HTTPFetcher:
    """Create a synchronous HTTP fetcher."""
    return HTTPFetcher(timeout)
