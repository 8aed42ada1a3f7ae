"""Fetch, decode, parse and degrade: the load pipeline for one resource.

A load first tries the whole resource. When the full payload cannot be
decoded or parsed it re-requests a fixed byte window from the start of the
resource and parses that instead, marking the rows partial. HTTP errors are
terminal at either stage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .core.decoder import decode
from .core.materializer import materialize
from .core.model import (
    Classification, DecodeError, FetchResult, LoadResult, LoadStage, LoadState,
    NetworkError, ParseError, ParseOutcome,
)
from .io import open_fetcher, open_fetcher_async
from .io.base import ByteRange, DEFAULT_RANGE

logger = logging.getLogger(__name__)


ROW_CAP = 50_000
TEXT_SIZE_LIMIT = 2_000_000        # characters of decoded text
BYTE_SIZE_LIMIT = 5_000_000        # bytes of fetched payload


@dataclass(frozen=True)
class LoadPolicy:
    row_cap: int = ROW_CAP
    text_size_limit: int = TEXT_SIZE_LIMIT
    byte_size_limit: int = BYTE_SIZE_LIMIT
    byte_range: ByteRange = DEFAULT_RANGE

    def cap_for(self, text: str, payload_size: int) -> int | None:
        """Row cap to apply to a full payload, or None to parse everything."""
        if len(text) > self.text_size_limit or payload_size > self.byte_size_limit:
            return self.row_cap
        return None


DEFAULT_POLICY = LoadPolicy()


# ---------------------------------------------------------------------- #
def _parse_full(fetched: FetchResult, policy: LoadPolicy) -> tuple[ParseOutcome, Classification]:
    decoded = decode(fetched.data)
    cap = policy.cap_for(decoded.text, len(fetched.data))
    if cap is not None:
        logger.info("large payload (%d chars, %d bytes), capping at %d rows",
                    len(decoded.text), len(fetched.data), cap)
    outcome = materialize(decoded.text, cap)
    if cap is not None and outcome.is_truncated:
        return outcome, Classification.PARTIAL
    return outcome, Classification.COMPLETE


def _parse_ranged(fetched: FetchResult) -> ParseOutcome:
    # the byte window already bounds the input, so no cap
    decoded = decode(fetched.data, allow_partial=True)
    return materialize(decoded.text)


def _after_full_fetch(state: LoadState, fetched: FetchResult, policy: LoadPolicy) -> Optional[ParseOutcome]:
    """Returns the outcome, or None when the ranged fallback should run."""
    state.bytes_fetched += len(fetched.data)
    try:
        outcome, classification = _parse_full(fetched, policy)
    except (DecodeError, ParseError) as e:
        logger.warning("full payload unreadable (%s), retrying with bytes=%d-%d",
                       e, *policy.byte_range)
        state.stage = LoadStage.RANGED_FETCH
        return None
    state.finish(classification)
    return outcome


def _after_ranged_fetch(state: LoadState, fetched: FetchResult) -> Optional[ParseOutcome]:
    state.bytes_fetched += len(fetched.data)
    try:
        outcome = _parse_ranged(fetched)
    except (DecodeError, ParseError) as e:
        state.finish(Classification.FAILED, f"Unable to process this file format: {e}")
        return None
    state.finish(Classification.PARTIAL)
    return outcome


def _build_result(locator: str, state: LoadState, outcome: Optional[ParseOutcome]) -> LoadResult:
    if state.classification is Classification.FAILED:
        outcome = None
        logger.error("load of %s failed: %s", locator, state.reason)
    else:
        logger.info("loaded %s: %s, %d rows via %s", locator, state.classification.value,
                    len(outcome.rows), state.stage.value)
    return LoadResult(
        locator=locator,
        classification=state.classification,
        outcome=outcome,
        error=state.reason,
        stage=state.stage,
        bytes_fetched=state.bytes_fetched,
        requests_made=state.requests_made,
    )


# ---------------------------------------------------------------------- #
class ResourceLoader:
    """Synchronous load pipeline. ``load`` never raises for load failures."""

    def __init__(self, fetcher=None, policy: LoadPolicy = DEFAULT_POLICY):
        self.fetcher = fetcher
        self.policy = policy

    def _run(self, fetcher, locator: str, state: LoadState) -> Optional[ParseOutcome]:
        state.requests_made += 1
        try:
            fetched = fetcher.fetch(locator)
        except NetworkError as e:
            state.finish(Classification.FAILED, f"Failed to fetch data: {e}")
            return None

        outcome = _after_full_fetch(state, fetched, self.policy)
        if state.classification is not None:
            return outcome

        state.requests_made += 1
        try:
            fetched = fetcher.fetch(locator, self.policy.byte_range)
        except NetworkError as e:
            state.finish(Classification.FAILED, f"Error fetching partial data: {e}")
            return None
        return _after_ranged_fetch(state, fetched)

    def load(self, locator: str) -> LoadResult:
        locator = str(locator)
        fetcher = self.fetcher or open_fetcher(locator)
        state = LoadState()
        try:
            outcome = self._run(fetcher, locator, state)
        except Exception as e:
            logger.exception("unexpected error loading %s", locator)
            state.classification = None
            state.finish(Classification.FAILED, f"Unexpected error: {e}")
            outcome = None
        return _build_result(locator, state, outcome)


class AsyncResourceLoader:
    """Asynchronous load pipeline. Network calls are the only await points."""

    def __init__(self, fetcher=None, policy: LoadPolicy = DEFAULT_POLICY):
        self.fetcher = fetcher
        self.policy = policy

    async def _run(self, fetcher, locator: str, state: LoadState) -> Optional[ParseOutcome]:
        state.requests_made += 1
        try:
            fetched = await fetcher.fetch(locator)
        except NetworkError as e:
            state.finish(Classification.FAILED, f"Failed to fetch data: {e}")
            return None

        outcome = _after_full_fetch(state, fetched, self.policy)
        if state.classification is not None:
            return outcome

        state.requests_made += 1
        try:
            fetched = await fetcher.fetch(locator, self.policy.byte_range)
        except NetworkError as e:
            state.finish(Classification.FAILED, f"Error fetching partial data: {e}")
            return None
        return _after_ranged_fetch(state, fetched)

    async def load(self, locator: str) -> LoadResult:
        locator = str(locator)
        fetcher = self.fetcher or await open_fetcher_async(locator)
        state = LoadState()
        try:
            outcome = await self._run(fetcher, locator, state)
        except Exception as e:
            logger.exception("unexpected error loading %s", locator)
            state.classification = None
            state.finish(Classification.FAILED, f"Unexpected error: {e}")
            outcome = None
        return _build_result(locator, state, outcome)
