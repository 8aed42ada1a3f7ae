"""One display surface: the most recently requested locator wins."""

from __future__ import annotations

import logging
from typing import Optional

from .core.model import LoadResult
from .pipeline import AsyncResourceLoader, DEFAULT_POLICY, LoadPolicy

logger = logging.getLogger(__name__)


class LoadSession:
    """Publishes load results for a single viewer, discarding stale ones.

    Every ``request`` takes a new generation number. A load whose generation
    is no longer the latest when it settles is dropped instead of replacing
    the published result.
    """

    def __init__(self, fetcher=None, policy: LoadPolicy = DEFAULT_POLICY):
        self._loader = AsyncResourceLoader(fetcher, policy)
        self._generation = 0
        self.current: Optional[LoadResult] = None
        self.current_locator: Optional[str] = None

    @property
    def generation(self) -> int:
        return self._generation

    async def request(self, locator: str) -> Optional[LoadResult]:
        """Load `locator` and publish it unless a newer request came in meanwhile."""
        self._generation += 1
        generation = self._generation
        self.current_locator = str(locator)

        result = await self._loader.load(locator)

        if generation != self._generation:
            logger.info("discarding stale load of %s (generation %d, latest %d)",
                        locator, generation, self._generation)
            return None
        self.current = result
        return result
