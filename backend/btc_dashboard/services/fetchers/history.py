"""
History Fetcher

BTC/USD price series from CoinGecko market_chart, one cache slot per window.
"""

import logging
from typing import Any

from btc_dashboard.core.config import settings
from btc_dashboard.schemas.market import HistoryPoint
from btc_dashboard.services.base import BaseFetcher

logger = logging.getLogger(__name__)


def history_cache_key(days: int) -> str:
    return f"price_history_{days}"


class HistoryFetcher(BaseFetcher[list[HistoryPoint]]):
    """
    Price series for a window of `days`.

    Upstream granularity depends on the window, so each window is cached
    separately. Points keep upstream order. `days` is not validated here.
    """

    def __init__(self, cache, client, days: int, base_url: str = None):
        super().__init__(cache, client)
        self._days = days
        self._base_url = (base_url or settings.coingecko_base_url).rstrip("/")

    @property
    def name(self) -> str:
        return "CoinGecko"

    @property
    def days(self) -> int:
        return self._days

    @property
    def cache_key(self) -> str:
        return history_cache_key(self._days)

    async def _fetch_upstream(self) -> list[HistoryPoint]:
        url = f"{self._base_url}/coins/bitcoin/market_chart"
        data = await self._client.get_json(
            url,
            params={"vs_currency": "usd", "days": str(self._days)},
            source=self.name,
        )
        points = self._normalize(data)
        logger.info(f"BTC history {self._days}d: {len(points)} points")
        return points

    def _normalize(self, data: Any) -> list[HistoryPoint]:
        # Usually {"prices": [...]}, occasionally the bare list
        if isinstance(data, dict):
            if "prices" not in data:
                raise self._schema_error("History payload has no 'prices' field")
            pairs = data["prices"]
        else:
            pairs = data

        if not isinstance(pairs, list):
            raise self._schema_error("History prices is not a list")

        points = []
        for pair in pairs:
            try:
                timestamp, price = pair
                points.append(HistoryPoint(timestamp=int(timestamp), price=float(price)))
            except (TypeError, ValueError) as e:
                raise self._schema_error(f"Malformed history point: {pair!r}", e)

        return points
