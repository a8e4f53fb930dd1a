"""
BTC Dashboard Schema Contracts

JSON contracts between the aggregation layer and the frontend.
"""

from btc_dashboard.schemas.market import (
    PriceSnapshot,
    HistoryPoint,
    SentimentReading,
    SentimentSeries,
    NetworkSnapshot,
    NewsItem,
    DashboardComposite,
)

__all__ = [
    "PriceSnapshot",
    "HistoryPoint",
    "SentimentReading",
    "SentimentSeries",
    "NetworkSnapshot",
    "NewsItem",
    "DashboardComposite",
]
