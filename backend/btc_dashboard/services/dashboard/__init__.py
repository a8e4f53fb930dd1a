"""
Dashboard Aggregation Service

CONTRACT:
    Input:  history windows (days), news limit
    Output: DashboardComposite

NO PERSISTENCE - members are cached individually in memory for the TTL.
"""

from btc_dashboard.services.dashboard.aggregator import (
    DashboardAggregator,
    FetchOutcome,
)
from btc_dashboard.services.dashboard.service import (
    DashboardService,
    get_dashboard_service,
)

__all__ = [
    "DashboardAggregator",
    "FetchOutcome",
    "DashboardService",
    "get_dashboard_service",
]
