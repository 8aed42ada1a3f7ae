"""termview - load versioned, gzip-compressed CSV terminology files."""

from .core.model import (                                             # re-export
    Classification, LoadResult, LoadStage, ParseOutcome,
    NetworkError, DecodeError, ParseError, TermviewError,
)
from .pipeline import ResourceLoader, AsyncResourceLoader, LoadPolicy, DEFAULT_POLICY
from .session import LoadSession
from .catalog import build_locator


async def load(locator, *, policy: LoadPolicy = DEFAULT_POLICY, fetcher=None) -> LoadResult:
    """Load a resource asynchronously from a URL or local path."""
    return await AsyncResourceLoader(fetcher, policy).load(locator)


def load_sync(locator, *, policy: LoadPolicy = DEFAULT_POLICY, fetcher=None) -> LoadResult:
    """Load a resource synchronously from a URL or local path."""
    return ResourceLoader(fetcher, policy).load(locator)


__all__ = [
    "load", "load_sync", "build_locator",
    "ResourceLoader", "AsyncResourceLoader", "LoadSession", "LoadPolicy",
    "LoadResult", "ParseOutcome", "Classification", "LoadStage",
    "TermviewError", "NetworkError", "DecodeError", "ParseError",
]
