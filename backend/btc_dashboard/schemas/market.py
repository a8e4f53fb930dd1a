"""
Market Data Contracts

Normalized shapes produced by the upstream fetchers and served to the
dashboard frontend. Every upstream payload is mapped into one of these
models at the fetcher boundary; nothing downstream sees raw upstream JSON.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# PRICE (CoinGecko)
# =============================================================================


class PriceSnapshot(_Snapshot):
    """Current BTC market data, USD denominated."""

    price: float = Field(..., description="Current price in USD")
    price_change_24h: float
    price_change_percentage_24h: float
    high_24h: float
    low_24h: float
    market_cap: float
    total_volume: float
    circulating_supply: float
    last_updated: str = Field(..., description="Upstream ISO-8601 timestamp")


class HistoryPoint(_Snapshot):
    """One sample of the price series."""

    timestamp: int = Field(..., description="Epoch milliseconds")
    price: float


# =============================================================================
# SENTIMENT (alternative.me Fear & Greed)
# =============================================================================


class SentimentReading(_Snapshot):
    value: int = Field(..., ge=0, le=100)
    value_classification: str
    timestamp: int = Field(..., description="Epoch milliseconds")


class SentimentSeries(_Snapshot):
    """
    Most recent daily readings, newest first.

    history[0] is the same reading as current.
    """

    current: SentimentReading
    history: list[SentimentReading]
    avg_7d: float
    avg_30d: float
    avg_90d: float


# =============================================================================
# NETWORK (blockchain.info)
# =============================================================================


class NetworkSnapshot(_Snapshot):
    block_height: int
    hash_rate: float = Field(..., description="Exahashes per second")
    difficulty: float
    next_halving_block: int
    blocks_until_halving: int
    estimated_halving_date: datetime
    avg_block_time: int = Field(..., description="Seconds, fixed estimate")


# =============================================================================
# NEWS
# =============================================================================


class NewsItem(_Snapshot):
    title: str
    url: str
    source: str
    published_at: Optional[str] = None


# =============================================================================
# COMPOSITE
# =============================================================================


class DashboardComposite(_Snapshot):
    """
    Everything the dashboard page needs in one response.

    Built fresh per request; only the members are cached.
    """

    price: PriceSnapshot
    fear_greed: SentimentSeries
    network: NetworkSnapshot
    news: list[NewsItem]
    price_history: dict[str, list[HistoryPoint]] = Field(
        ...,
        description="Series keyed by window, e.g. '7d', '30d'",
    )
    generated_at: datetime
    warnings: list[str] = Field(default_factory=list)
