"""
Application service: time-bounded cache of computed summaries, keyed by subject.

One entry per key, last write wins, no eviction other than TTL expiry;
the key space is a handful of human-entered ticker symbols. Lookups for
the same key are serialised behind a per-key asyncio.Lock, so concurrent
misses trigger a single fetch (single-flight). Failed fetches are not
stored.

The cache is an ordinary object injected where it is needed; its
lifetime is that of the composition root that created it.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

NEWS_TTL_SECONDS: float = 10 * 60


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    stored_at: float

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return now - self.stored_at < ttl_seconds


class InsightsCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry[Any]] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get_or_fetch(
        self,
        key: str,
        ttl_seconds: float,
        fetch_fn: Callable[[], Awaitable[T]],
    ) -> T:
        """Return the fresh cached value for *key*, or fetch, store and return a new one.

        Exceptions raised by *fetch_fn* propagate and leave any previous
        entry untouched.
        """
        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_fresh(self._clock(), ttl_seconds):
                logger.debug("Cache hit for %s", key)
                return entry.value

            logger.debug("Cache miss for %s", key)
            value = await fetch_fn()
            self._entries[key] = CacheEntry(value=value, stored_at=self._clock())
            return value
