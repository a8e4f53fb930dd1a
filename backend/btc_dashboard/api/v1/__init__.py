"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from btc_dashboard.api.v1.endpoints import market

router = APIRouter()

router.include_router(market.router, prefix="/market", tags=["Market Data"])
