"""
Market Data API Endpoints

Endpoints backing the dashboard page. Every failure is reported as a
generic 500; upstream details only go to the log.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from btc_dashboard.api.dependencies import get_service
from btc_dashboard.core.config import settings
from btc_dashboard.schemas.market import (
    DashboardComposite,
    HistoryPoint,
    NetworkSnapshot,
    NewsItem,
    PriceSnapshot,
    SentimentSeries,
)
from btc_dashboard.services.dashboard import DashboardService

logger = logging.getLogger(__name__)

router = APIRouter()


def resolve_history_days(days: Optional[str]) -> int:
    """Map the raw `days` query to an allowed window, defaulting to 30."""
    try:
        value = int(days) if days is not None else settings.history_default_days
    except ValueError:
        return settings.history_default_days

    if value not in settings.history_allowed_days:
        return settings.history_default_days
    return value


def _unavailable(kind: str) -> HTTPException:
    return HTTPException(status_code=500, detail=f"{kind} data temporarily unavailable")


@router.get("/price", response_model=PriceSnapshot)
async def get_price(service: DashboardService = Depends(get_service)):
    """Current BTC price, 24h change, market cap and volume."""
    try:
        return await service.get_price()
    except Exception as e:
        logger.error(f"Price API error: {e}")
        raise _unavailable("Price")


@router.get("/history", response_model=list[HistoryPoint])
async def get_history(
    days: Optional[str] = Query(None, description="Window in days: 7, 30, 90 or 365"),
    service: DashboardService = Depends(get_service),
):
    """
    Price series for a window.

    Unknown or invalid windows fall back to 30 days.
    """
    actual_days = resolve_history_days(days)

    try:
        return await service.get_history(actual_days)
    except Exception as e:
        logger.error(f"History API error ({actual_days}d): {e}")
        raise _unavailable("Price history")


@router.get("/fear-greed", response_model=SentimentSeries)
async def get_fear_greed(service: DashboardService = Depends(get_service)):
    """Fear & Greed index, 31 days of history and 7/30/90-day averages."""
    try:
        return await service.get_sentiment()
    except Exception as e:
        logger.error(f"Fear & Greed API error: {e}")
        raise _unavailable("Fear & Greed")


@router.get("/network", response_model=NetworkSnapshot)
async def get_network(service: DashboardService = Depends(get_service)):
    """Block height, hash rate, difficulty and halving countdown."""
    try:
        return await service.get_network_stats()
    except Exception as e:
        logger.error(f"Network API error: {e}")
        raise _unavailable("Network")


@router.get("/news", response_model=list[NewsItem])
async def get_news(
    limit: int = Query(settings.news_default_limit, ge=1, le=settings.news_max_items, description="Number of articles"),
    service: DashboardService = Depends(get_service),
):
    """Bitcoin headlines. Empty when the feed is unavailable."""
    return await service.get_news(limit)


@router.get("/dashboard", response_model=DashboardComposite)
async def get_dashboard(service: DashboardService = Depends(get_service)):
    """
    Everything the dashboard page needs in one call.

    Fails if price, sentiment, network or history is unavailable;
    missing news just yields an empty list.
    """
    try:
        return await service.get_dashboard_composite()
    except Exception as e:
        logger.error(f"Dashboard API error: {e}")
        raise _unavailable("Dashboard")
