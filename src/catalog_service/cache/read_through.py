"""In-process read-through cache for catalog fetch results.

Only definitive results (``Found`` / ``NotFound``) are stored. A ``Failure``
from the loader is handed back to the caller and leaves the cache untouched,
so the next call retries the upstream instead of replaying the failure for a
whole TTL.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from catalog_service.clients.catalog.results import is_cacheable
from catalog_service.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from catalog_service.clients.catalog.results import FetchResult


logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached result and the monotonic instant it stops being served."""

    value: FetchResult
    expires_at: float

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


class ReadThroughCache:
    """TTL cache that populates itself from an async loader on miss.

    Entries are replaced whole. Two callers missing the same key at once
    will both run the loader; whichever finishes last owns the entry.
    The lock is only held for dictionary access, never across the loader.

    Attributes:
        max_entries: Upper bound on stored entries. Past it, expired entries
            are dropped first, then the oldest writes. ``None`` disables
            the bound.
    """

    def __init__(
        self,
        max_entries: int | None = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def peek(self, key: str) -> FetchResult | None:
        """Return the live value for ``key`` without loading, else None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not entry.is_live(self._clock()):
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: FetchResult, ttl_seconds: int) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds``."""
        if not is_cacheable(value):
            msg = f"Refusing to cache a failure under {key!r}"
            raise ValueError(msg)
        with self._lock:
            now = self._clock()
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(value, now + ttl_seconds)
            if self.max_entries is None or len(self._entries) <= self.max_entries:
                return
            # Expired entries go before live ones
            expired = self._drop_expired(now)
            if expired:
                logger.debug("Expired cache entries purged", removed=expired)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Cache entry evicted", key=evicted)

    async def get_or_fetch(
        self,
        key: str,
        ttl_seconds: int,
        loader: Callable[[], Awaitable[FetchResult]],
    ) -> FetchResult:
        """Serve ``key`` from cache or populate it from ``loader``.

        Args:
            key: Cache key.
            ttl_seconds: Lifetime of a newly stored entry.
            loader: Coroutine factory performing the upstream fetch.

        Returns:
            The cached or freshly loaded result. Failures are returned
            but never stored.
        """
        cached = self.peek(key)
        if cached is not None:
            logger.debug("Cache hit", key=key)
            return cached

        logger.debug("Cache miss", key=key)
        result = await loader()

        if is_cacheable(result):
            self.set(key, result, ttl_seconds)
            logger.debug("Cached result", key=key, ttl=ttl_seconds)
        else:
            logger.debug("Loader failed, nothing cached", key=key)
        return result

    def invalidate(self, key: str) -> bool:
        """Drop ``key``. Returns True if an entry was removed."""
        with self._lock:
            removed = self._entries.pop(key, None) is not None
        logger.debug("Cache invalidated", key=key, removed=removed)
        return removed

    def invalidate_all(self) -> int:
        """Drop every entry. Returns the number removed."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info("Cache cleared", removed=count)
        return count

    def _drop_expired(self, now: float) -> int:
        """Remove expired entries; the caller holds the lock."""
        expired = [k for k, e in self._entries.items() if not e.is_live(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)
