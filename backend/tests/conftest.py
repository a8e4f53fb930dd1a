"""
tests/conftest.py
──────────────────
Shared pytest fixtures for the backend test suite.

Fixtures
--------
clock
    ``FakeClock`` driving the ``CacheStore`` so TTL expiry is instant.

upstream
    ``FakeUpstreamClient`` pre-scripted with healthy responses for every
    upstream endpoint; records every call so tests can count them.

service
    ``DashboardService`` wired to ``cache`` and ``upstream``.

app_client
    ``httpx.AsyncClient`` on the FastAPI app with the service dependency
    overridden by ``service``. No real network calls are made.
"""

import asyncio
from typing import Any, AsyncGenerator, Callable, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from btc_dashboard.api.dependencies import get_service
from btc_dashboard.main import app
from btc_dashboard.services.base import UpstreamError
from btc_dashboard.services.cache import CacheStore
from btc_dashboard.services.dashboard import DashboardService


# ── Fakes ─────────────────────────────────────────────────────────────────────


class FakeClock:
    """Manually advanced clock, seconds."""

    def __init__(self, start: float = 1_000_000.0):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


class FakeUpstreamClient:
    """
    Stand-in for ``UpstreamClient``.

    Routes are matched on URL suffix. A route's response may be a payload,
    a callable taking the query params, or an exception instance to raise.
    """

    def __init__(self):
        self.routes: dict[str, Any] = {}
        self.delays: dict[str, float] = {}
        self.calls: list[tuple[str, Optional[dict]]] = []

    def route(self, suffix: str, response: Any) -> None:
        self.routes[suffix] = response

    def fail(self, suffix: str, status: int = 500) -> None:
        self.routes[suffix] = UpstreamError("fake", f"API error: {status}", status=status, url=suffix)

    def delay(self, suffix: str, seconds: float) -> None:
        self.delays[suffix] = seconds

    def count(self, suffix: str) -> int:
        return sum(1 for url, _ in self.calls if url.endswith(suffix))

    def params_for(self, suffix: str) -> list[Optional[dict]]:
        return [params for url, params in self.calls if url.endswith(suffix)]

    async def _respond(self, url: str, params: Optional[dict]) -> Any:
        self.calls.append((url, params))
        for suffix, response in self.routes.items():
            if not url.endswith(suffix):
                continue
            # Yield so concurrent callers interleave like real I/O
            await asyncio.sleep(self.delays.get(suffix, 0))
            if isinstance(response, BaseException):
                raise response
            if callable(response):
                return response(params)
            return response
        raise AssertionError(f"Unexpected upstream call: {url}")

    async def get_json(self, url: str, params: Optional[dict] = None, source: str = "upstream") -> Any:
        return await self._respond(url, params)

    async def get_text(self, url: str, params: Optional[dict] = None, source: str = "upstream") -> str:
        return await self._respond(url, params)

    async def close(self) -> None:
        pass


# ── Upstream payloads ─────────────────────────────────────────────────────────

PRICE_PAYLOAD = {
    "id": "bitcoin",
    "last_updated": "2026-10-18T12:00:00.000Z",
    "market_data": {
        "current_price": {"usd": 67000.5, "eur": 61000.0},
        "price_change_24h": 1200.25,
        "price_change_percentage_24h": 1.82,
        "high_24h": {"usd": 67500.0},
        "low_24h": {"usd": 65500.0},
        "market_cap": {"usd": 1.32e12},
        "total_volume": {"usd": 3.1e10},
        "circulating_supply": 19_750_000.0,
    },
}

HISTORY_START_MS = 1_760_000_000_000


def history_payload(params: Optional[dict]) -> dict:
    """Three hourly points whose price encodes the requested window."""
    days = int(params["days"])
    return {
        "prices": [
            [HISTORY_START_MS + i * 3_600_000, 60_000.0 + days + i]
            for i in range(3)
        ],
        "market_caps": [],
        "total_volumes": [],
    }


FEAR_GREED_VALUES = [50 + i for i in range(31)]

FEAR_GREED_PAYLOAD = {
    "name": "Fear and Greed Index",
    "data": [
        {
            "value": str(v),
            "value_classification": "Greed",
            "timestamp": str(1_760_000_000 - i * 86_400),
        }
        for i, v in enumerate(FEAR_GREED_VALUES)
    ],
}

BLOCK_HEIGHT_TEXT = "849000"
HASH_RATE_TEXT = "5.2e10"
DIFFICULTY_TEXT = "83148355189239.77"

NEWS_PAYLOAD = {
    "data": [
        {
            "title": "Bitcoin breaks new all-time high",
            "url": "https://example.com/btc-ath",
            "news_site": "CoinDesk",
            "created_at": "2026-10-18T10:00:00Z",
        },
        {
            "title": "Ethereum upgrade ships on mainnet",
            "url": "https://example.com/eth",
            "news_site": "The Block",
            "created_at": "2026-10-18T09:00:00Z",
        },
        {
            "title": "BTC miners expand capacity",
            "url": "https://example.com/miners",
            "created_at": "2026-10-18T08:00:00Z",
        },
        {
            "title": "Crypto regulation bill advances",
            "url": "https://example.com/regulation",
            "news_site": "Reuters",
            "created_at": 1_760_000_000,
        },
    ]
}


def install_default_routes(upstream: FakeUpstreamClient) -> None:
    upstream.route("/coins/bitcoin", PRICE_PAYLOAD)
    upstream.route("/coins/bitcoin/market_chart", history_payload)
    upstream.route("/fng/", FEAR_GREED_PAYLOAD)
    upstream.route("/getblockcount", BLOCK_HEIGHT_TEXT)
    upstream.route("/hashrate", HASH_RATE_TEXT)
    upstream.route("/getdifficulty", DIFFICULTY_TEXT)
    upstream.route("/news", NEWS_PAYLOAD)


# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> CacheStore:
    return CacheStore(ttl_seconds=300, clock=clock)


@pytest.fixture
def upstream() -> FakeUpstreamClient:
    client = FakeUpstreamClient()
    install_default_routes(client)
    return client


@pytest.fixture
def service(cache: CacheStore, upstream: FakeUpstreamClient) -> DashboardService:
    return DashboardService(cache=cache, client=upstream, news_timeout_seconds=1.0)


@pytest.fixture
async def app_client(service: DashboardService) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTPX client with the dashboard service overridden by ``service``.

    Startup lifespan is skipped; nothing needs initializing.
    """
    app.dependency_overrides[get_service] = lambda: service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_fetcher(cache: CacheStore, upstream: FakeUpstreamClient) -> Callable:
    """Build a fetcher class against the shared fake cache and upstream."""

    def _make(fetcher_cls, *args, **kwargs):
        return fetcher_cls(cache, upstream, *args, **kwargs)

    return _make
