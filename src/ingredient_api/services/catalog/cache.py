"""
Time-bound in-memory mirror of the reference catalog.

The key -> entry map is rebuilt off to the side and swapped in whole, so a
reader never sees a half-populated cache. Concurrent refreshes share one
in-flight fetch.
"""

import asyncio
import logging
import time
from types import MappingProxyType
from typing import Awaitable, Callable, Mapping

from ingredient_api.core.exceptions import CatalogUnavailable
from ingredient_api.models import CatalogEntry

from ..classification import normalize_name

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60
DEFAULT_STALE_RETRY_SECONDS = 60.0

Fetcher = Callable[[], Awaitable[list[CatalogEntry]]]


class CatalogCache:
    """Lazily refreshed catalog keyed by normalized canonical name."""

    def __init__(
        self,
        fetcher: Fetcher,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        serve_stale: bool = False,
        stale_retry_seconds: float = DEFAULT_STALE_RETRY_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize an empty cache.

        Args:
            fetcher: Coroutine function returning the full catalog
            ttl_seconds: Age after which the cache is refetched
            serve_stale: Keep serving an expired cache when a refresh fails
            stale_retry_seconds: While serving stale, wait this long after a
                failed refresh before fetching again
            clock: Monotonic time source (injectable for tests)
        """
        self._fetcher = fetcher
        self.ttl_seconds = ttl_seconds
        self.serve_stale = serve_stale
        self.stale_retry_seconds = stale_retry_seconds
        self._clock = clock
        self._entries: Mapping[str, CatalogEntry] = MappingProxyType({})
        self.last_refreshed: float | None = None
        self.last_failed: float | None = None
        self._inflight: asyncio.Future | None = None

    @property
    def entries(self) -> Mapping[str, CatalogEntry]:
        """Read-only view of the current map."""
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def is_fresh(self) -> bool:
        if not self._entries or self.last_refreshed is None:
            return False
        return self._clock() - self.last_refreshed < self.ttl_seconds

    async def ensure_fresh(self) -> Mapping[str, CatalogEntry]:
        """
        Refresh the cache if it is empty or expired.

        Returns:
            The current entry map

        Raises:
            CatalogUnavailable: If the fetch fails and no usable cache exists
        """
        if self.is_fresh():
            logger.debug("Using cached catalog")
            return self._entries

        if self._in_stale_backoff():
            logger.debug("Serving stale catalog until the next refresh attempt")
            return self._entries

        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._refresh())
            self._inflight.add_done_callback(self._clear_inflight)
        else:
            logger.debug("Joining in-flight catalog refresh")

        await asyncio.shield(self._inflight)
        return self._entries

    def _in_stale_backoff(self) -> bool:
        if not (self.serve_stale and self._entries) or self.last_failed is None:
            return False
        return self._clock() - self.last_failed < self.stale_retry_seconds

    def _clear_inflight(self, future: asyncio.Future) -> None:
        self._inflight = None

    async def _refresh(self) -> None:
        logger.info("Refreshing ingredient catalog cache")
        try:
            entries = await self._fetcher()
            if not entries:
                raise CatalogUnavailable("Catalog returned no ingredients")
        except Exception as e:
            error = e if isinstance(e, CatalogUnavailable) else CatalogUnavailable(
                f"Catalog fetch failed: {e}"
            )
            if self._entries and self.serve_stale:
                self.last_failed = self._clock()
                logger.warning(f"Catalog refresh failed, serving stale cache: {error.message}")
                return
            logger.error(f"Catalog refresh failed: {error.message}")
            if error is e:
                raise
            raise error from e

        fresh: dict[str, CatalogEntry] = {}
        for entry in entries:
            key = normalize_name(entry.canonical_name)
            if key and key not in fresh:
                fresh[key] = entry

        self._entries = MappingProxyType(fresh)
        self.last_refreshed = self._clock()
        self.last_failed = None
        logger.info(f"Cached {len(fresh)} catalog ingredients")

    def clear(self) -> None:
        """Drop all entries (next access refetches)."""
        self._entries = MappingProxyType({})
        self.last_refreshed = None
        self.last_failed = None
