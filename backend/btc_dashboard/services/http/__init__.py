"""
HTTP access to third-party market data APIs.
"""

from btc_dashboard.services.http.client import (
    UpstreamClient,
    get_upstream_client,
    close_upstream_client,
)

__all__ = [
    "UpstreamClient",
    "get_upstream_client",
    "close_upstream_client",
]
