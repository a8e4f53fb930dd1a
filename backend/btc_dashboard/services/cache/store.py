"""
In-memory TTL cache shared by all upstream fetchers.

Entries are never evicted. A stale entry reads as absent and stays in the
map until the next successful fetch overwrites it.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from btc_dashboard.core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached value and when it was written (clock seconds)."""

    key: str
    value: Any
    stored_at: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.stored_at < ttl


class CacheStore:
    """
    Process-lifetime key/value cache with a fixed TTL.

    Keys:
    - btc_price → PriceSnapshot
    - price_history_{days} → list[HistoryPoint]
    - fear_greed → SentimentSeries
    - network_stats → NetworkSnapshot
    - news → list[NewsItem]
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._ttl = settings.cache_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    def now(self) -> float:
        """Current reading of the store's clock."""
        return self._clock()

    def get(self, key: str, now: Optional[float] = None) -> Optional[Any]:
        """
        Return the cached value, or None if missing or stale.

        Pass `now` to evaluate freshness against a shared logical time.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None

        if now is None:
            now = self._clock()

        if not entry.is_fresh(now, self._ttl):
            logger.debug(f"Cache stale: {key}")
            return None

        logger.debug(f"Cache hit: {key}")
        return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store a value, overwriting any previous entry for the key."""
        self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock())

    def lock(self, key: str) -> asyncio.Lock:
        """
        Per-key lock serializing upstream fills.

        Concurrent misses on the same key wait here so only the first
        one goes upstream.
        """
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def clear(self) -> None:
        self._entries.clear()
        self._locks.clear()

    def stats(self) -> Dict[str, Any]:
        """Entry counts for the health endpoint."""
        now = self._clock()
        fresh = sorted(k for k, e in self._entries.items() if e.is_fresh(now, self._ttl))
        stale = sorted(k for k in self._entries if k not in fresh)
        return {
            "ttl_seconds": self._ttl,
            "entries": len(self._entries),
            "fresh": fresh,
            "stale": stale,
        }


# Singleton instance
_cache_store: Optional[CacheStore] = None


def get_cache_store() -> CacheStore:
    """Get the cache store singleton."""
    global _cache_store
    if _cache_store is None:
        _cache_store = CacheStore()
    return _cache_store
