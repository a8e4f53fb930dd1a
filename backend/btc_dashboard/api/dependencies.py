"""
FastAPI dependency functions shared across all endpoints.

Usage
-----
    from btc_dashboard.api.dependencies import get_service

    @router.get("/foo")
    async def my_route(service = Depends(get_service)):
        ...
"""

from btc_dashboard.services.dashboard import DashboardService, get_dashboard_service


def get_service() -> DashboardService:
    """Dashboard service singleton; tests override this."""
    return get_dashboard_service()
