"""
Dashboard Service

The core contract consumed by the HTTP layer: one method per data kind
plus the aggregated dashboard.
"""

import logging
from typing import Iterable, Optional

from btc_dashboard.core.config import settings
from btc_dashboard.schemas.market import (
    DashboardComposite,
    HistoryPoint,
    NetworkSnapshot,
    NewsItem,
    PriceSnapshot,
    SentimentSeries,
)
from btc_dashboard.services.cache.store import CacheStore, get_cache_store
from btc_dashboard.services.dashboard.aggregator import DashboardAggregator
from btc_dashboard.services.fetchers import (
    HistoryFetcher,
    NetworkFetcher,
    NewsFetcher,
    PriceFetcher,
    SentimentFetcher,
)
from btc_dashboard.services.http.client import UpstreamClient, get_upstream_client

logger = logging.getLogger(__name__)


class DashboardService:
    """
    Facade over the fetchers, all sharing one cache and one HTTP client.

    get_price / get_history / get_sentiment / get_network_stats raise
    UpstreamError or SchemaError. get_news never raises.
    """

    def __init__(
        self,
        cache: Optional[CacheStore] = None,
        client: Optional[UpstreamClient] = None,
        news_timeout_seconds: Optional[float] = None,
    ):
        self.cache = cache or get_cache_store()
        self.client = client or get_upstream_client()

        self._price = PriceFetcher(self.cache, self.client)
        self._sentiment = SentimentFetcher(self.cache, self.client)
        self._network = NetworkFetcher(self.cache, self.client)
        self._news = NewsFetcher(self.cache, self.client)
        self._history: dict[int, HistoryFetcher] = {}
        self._aggregator = DashboardAggregator(self, news_timeout_seconds)

    def _history_fetcher(self, days: int) -> HistoryFetcher:
        fetcher = self._history.get(days)
        if fetcher is None:
            fetcher = HistoryFetcher(self.cache, self.client, days)
            self._history[days] = fetcher
        return fetcher

    async def get_price(self, now: Optional[float] = None) -> PriceSnapshot:
        return await self._price.fetch(now)

    async def get_history(self, days: int, now: Optional[float] = None) -> list[HistoryPoint]:
        """Price series for `days`. The caller restricts `days` to allowed windows."""
        return await self._history_fetcher(days).fetch(now)

    async def get_sentiment(self, now: Optional[float] = None) -> SentimentSeries:
        return await self._sentiment.fetch(now)

    async def get_network_stats(self, now: Optional[float] = None) -> NetworkSnapshot:
        return await self._network.fetch(now)

    async def get_news(self, limit: int, now: Optional[float] = None) -> list[NewsItem]:
        return await self._news.get(limit, now)

    async def get_dashboard_composite(
        self,
        history_windows: Optional[Iterable[int]] = None,
        news_limit: Optional[int] = None,
    ) -> DashboardComposite:
        """Everything at once. Raises if any essential source fails."""
        windows = settings.dashboard_history_windows if history_windows is None else history_windows
        limit = settings.dashboard_news_limit if news_limit is None else news_limit
        return await self._aggregator.build(windows, limit)


# Singleton instance
_dashboard_service: Optional[DashboardService] = None


def get_dashboard_service() -> DashboardService:
    """Get the dashboard service singleton."""
    global _dashboard_service
    if _dashboard_service is None:
        _dashboard_service = DashboardService()
    return _dashboard_service
