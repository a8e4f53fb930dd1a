"""
BTC Dashboard Services

Data aggregation layer: cache, upstream fetchers and the dashboard
aggregator.
"""

from btc_dashboard.services.base import (
    BaseFetcher,
    SchemaError,
    ServiceError,
    UpstreamError,
)

__all__ = ["BaseFetcher", "SchemaError", "ServiceError", "UpstreamError"]
