from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List


class TermviewError(RuntimeError):
    """Base class for errors raised inside the load pipeline."""
    pass


class NetworkError(TermviewError):
    """Raised when a fetch fails: bad HTTP status or transport failure."""

    def __init__(self, reason: str, status: int | None = None):
        super().__init__(reason)
        self.status = status
        self.reason = reason


class DecodeError(TermviewError):
    """Raised when neither gzip nor plain-text decoding produced usable text."""
    pass


class ParseError(TermviewError):
    """Raised when the tokenizer produced no usable rows."""
    pass


class LoadStage(str, Enum):
    FULL_FETCH = "full-fetch"
    RANGED_FETCH = "ranged-fetch"


class Classification(str, Enum):
    COMPLETE = "complete"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(slots=True)
class FetchResult:
    data: bytes
    total_length: int          # full resource size when known, else len(data)
    range_honored: bool
    status_ok: bool
    status_code: int | None = None


@dataclass(slots=True)
class DecodedText:
    text: str
    used_compression: bool
    is_partial: bool = False   # gzip stream ended before its trailer


@dataclass(slots=True)
class ParseOutcome:
    rows: List[List[str]]
    is_truncated: bool
    column_count: int


@dataclass(slots=True)
class LoadState:
    stage: LoadStage = LoadStage.FULL_FETCH
    classification: Classification | None = None
    reason: str | None = None
    requests_made: int = 0     # this load only, even with a shared fetcher
    bytes_fetched: int = 0

    def finish(self, classification: Classification, reason: str | None = None) -> None:
        if self.classification is not None:
            raise RuntimeError(f"load already classified as {self.classification.value}")
        self.classification = classification
        self.reason = reason


@dataclass(slots=True)
class LoadResult:
    locator: str
    classification: Classification
    outcome: ParseOutcome | None
    error: str | None
    stage: LoadStage
    bytes_fetched: int = 0
    requests_made: int = 0

    @property
    def success(self) -> bool:
        return self.classification is not Classification.FAILED

    @property
    def is_partial(self) -> bool:
        return self.classification is Classification.PARTIAL
