"""Local file fetchers, so the pipeline can be pointed at a downloaded file."""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from ..core.model import FetchResult, NetworkError
from .base import ByteRange

logger = logging.getLogger(__name__)


class LocalFetcher:
    """Synchronous local file fetcher."""

    def __init__(self):
        self.bytes_fetched = 0
        self.requests_made = 0

    def fetch(self, locator: Union[Path, str], byte_range: Optional[ByteRange] = None) -> FetchResult:
        """Read the whole file, or `byte_range` of it."""
        self.requests_made += 1
        path = Path(locator)
        try:
            with open(path, "rb") as f:
                size = f.seek(0, 2)
                if byte_range is None:
                    f.seek(0)
                    data = f.read()
                else:
                    start, end = byte_range
                    if start < 0 or end < start:
                        raise ValueError(f"Invalid byte range {start}-{end}")
                    f.seek(start)
                    data = f.read(end - start + 1)
        except OSError as e:
            raise NetworkError(f"Cannot read {path}: {e.strerror or e}")

        self.bytes_fetched += len(data)
        logger.debug("read %s range=%s, %d bytes", path, byte_range, len(data))
        return FetchResult(
            data=data,
            total_length=size,
            range_honored=byte_range is not None,
            status_ok=True,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pass


class LocalAsyncFetcher:
    """Asynchronous local file fetcher - thin wrapper around sync fetcher."""

    def __init__(self):
        self._sync_fetcher = LocalFetcher()

    @property
    def bytes_fetched(self) -> int:
        return self._sync_fetcher.bytes_fetched

    @property
    def requests_made(self) -> int:
        return self._sync_fetcher.requests_made

    async def fetch(self, locator: Union[Path, str], byte_range: Optional[ByteRange] = None) -> FetchResult:
        return await asyncio.to_thread(self._sync_fetcher.fetch, locator, byte_range)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass


def open_local_fetcher() -> LocalFetcher:
    """Create a synchronous local fetcher."""
    return LocalFetcher()


async def open_local_fetcher_async() -> LocalAsyncFetcher:
    """Create an asynchronous local fetcher."""
    return LocalAsyncFetcher()
