"""
Upstream Fetchers

CONTRACT:
    Input:  nothing (history: window in days; news: limit)
    Output: normalized market data schemas

RESPONSIBILITIES:
    - One fetcher per third-party API contract
    - Normalize raw upstream JSON/text into schemas.market types
    - Read and fill the shared CacheStore under a per-kind key
    - Map failures to UpstreamError / SchemaError (news degrades to empty)
"""

from btc_dashboard.services.fetchers.price import PriceFetcher, PRICE_CACHE_KEY
from btc_dashboard.services.fetchers.history import HistoryFetcher, history_cache_key
from btc_dashboard.services.fetchers.sentiment import (
    SentimentFetcher,
    SENTIMENT_CACHE_KEY,
    rolling_average,
)
from btc_dashboard.services.fetchers.network import (
    NetworkFetcher,
    NETWORK_CACHE_KEY,
    estimate_halving,
    gigahashes_to_exahashes,
)
from btc_dashboard.services.fetchers.news import NewsFetcher, NEWS_CACHE_KEY

__all__ = [
    "PriceFetcher",
    "HistoryFetcher",
    "SentimentFetcher",
    "NetworkFetcher",
    "NewsFetcher",
    "PRICE_CACHE_KEY",
    "SENTIMENT_CACHE_KEY",
    "NETWORK_CACHE_KEY",
    "NEWS_CACHE_KEY",
    "history_cache_key",
    "rolling_average",
    "estimate_halving",
    "gigahashes_to_exahashes",
]
