"""Base protocols and shared constants for the fetch layer."""

import re
from typing import Optional, Protocol, Tuple, runtime_checkable

from ..core.model import FetchResult


DEFAULT_RANGE_END = 150_000        # bytes=0-150000, enough for a header and some rows
DEFAULT_RANGE: Tuple[int, int] = (0, DEFAULT_RANGE_END)
DEFAULT_TIMEOUT = 60.0

ByteRange = Tuple[int, int]        # (start, end) inclusive, as in the Range header

_CONTENT_RANGE = re.compile(r"bytes\s+\d+-\d+/(\d+)")


def range_header(byte_range: ByteRange) -> dict:
    start, end = byte_range
    if start < 0 or end < start:
        raise ValueError(f"Invalid byte range {start}-{end}")
    return {"Range": f"bytes={start}-{end}"}


def total_length(content_range: Optional[str], received: int) -> int:
    """Full resource size from a Content-Range header, else what was received."""
    if content_range:
        m = _CONTENT_RANGE.match(content_range.strip())
        if m:
            return int(m.group(1))
    return received


def is_range_success(status_code: int) -> bool:
    # 200 means the server ignored the Range header and sent everything
    return status_code in (200, 206)


@runtime_checkable
class Fetcher(Protocol):
    """Protocol for synchronous fetchers."""

    bytes_fetched: int  # running total
    requests_made: int

    def fetch(self, locator: str, byte_range: Optional[ByteRange] = None) -> FetchResult:
        """GET `locator`, optionally restricted to `byte_range`.
        Bad status or transport failure → raise NetworkError.
        """
        ...


@runtime_checkable
class AsyncFetcher(Protocol):
    """Protocol for asynchronous fetchers."""

    bytes_fetched: int  # running total
    requests_made: int

    async def fetch(self, locator: str, byte_range: Optional[ByteRange] = None) -> FetchResult:
        """GET `locator`, optionally restricted to `byte_range`.
        Bad status or transport failure → raise NetworkError.
        """
        ...
