"""
Cache module for the BTC dashboard.

Provides the in-memory TTL cache shared by all fetchers.
"""

from btc_dashboard.services.cache.store import (
    CacheEntry,
    CacheStore,
    get_cache_store,
)

__all__ = [
    "CacheEntry",
    "CacheStore",
    "get_cache_store",
]
