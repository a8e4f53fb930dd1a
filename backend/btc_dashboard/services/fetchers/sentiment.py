"""
Sentiment Fetcher

Fear & Greed Index from alternative.me, plus rolling averages.
"""

import logging
from typing import Any, Sequence

from btc_dashboard.core.config import settings
from btc_dashboard.schemas.market import SentimentReading, SentimentSeries
from btc_dashboard.services.base import BaseFetcher

logger = logging.getLogger(__name__)

SENTIMENT_CACHE_KEY = "fear_greed"

AVERAGE_WINDOWS = (7, 30, 90)


def rolling_average(readings: Sequence[SentimentReading], window: int) -> float:
    """
    Mean of the first `window` readings (newest first).

    Uses every reading when fewer than `window` exist.
    """
    values = [r.value for r in readings[:window]]
    if not values:
        return 0.0
    return sum(values) / len(values)


class SentimentFetcher(BaseFetcher[SentimentSeries]):
    """Maps the alternative.me daily series into a SentimentSeries."""

    def __init__(self, cache, client, url: str = None, limit: int = None):
        super().__init__(cache, client)
        self._url = url or settings.fear_greed_url
        self._limit = limit or settings.sentiment_history_limit

    @property
    def name(self) -> str:
        return "Alternative.me"

    @property
    def cache_key(self) -> str:
        return SENTIMENT_CACHE_KEY

    async def _fetch_upstream(self) -> SentimentSeries:
        data = await self._client.get_json(self._url, params={"limit": str(self._limit)}, source=self.name)
        series = self._normalize(data)
        logger.info(
            f"Fear & Greed: {series.current.value} ({series.current.value_classification}), "
            f"{len(series.history)} days"
        )
        return series

    def _normalize(self, data: Any) -> SentimentSeries:
        rows = data.get("data") if isinstance(data, dict) else data
        if not isinstance(rows, list):
            raise self._schema_error("Fear & Greed payload has no data list")
        if not rows:
            raise self._schema_error("Fear & Greed payload is empty")

        readings = []
        for row in rows:
            try:
                readings.append(
                    SentimentReading(
                        value=int(row["value"]),
                        value_classification=row["value_classification"],
                        timestamp=int(row["timestamp"]) * 1000,
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                raise self._schema_error("Malformed Fear & Greed reading", e)

        avg_7d, avg_30d, avg_90d = (rolling_average(readings, w) for w in AVERAGE_WINDOWS)

        return SentimentSeries(
            current=readings[0],
            history=readings,
            avg_7d=avg_7d,
            avg_30d=avg_30d,
            avg_90d=avg_90d,
        )
