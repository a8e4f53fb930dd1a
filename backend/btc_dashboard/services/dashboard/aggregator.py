"""
Dashboard Aggregator

Fans out to every fetcher concurrently and reduces the results into one
DashboardComposite.

Failure policy:
- price, fear_greed, network and every history window are essential;
  the first essential failure (in that order) fails the whole composite
- news is not essential; a failure or timeout becomes an empty list
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Iterable, Optional

from btc_dashboard.core.config import settings
from btc_dashboard.schemas.market import DashboardComposite

logger = logging.getLogger(__name__)


@dataclass
class FetchOutcome:
    """Tagged result of one fetcher in a fan-out."""

    name: str
    essential: bool
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def window_label(days: int) -> str:
    return f"{days}d"


class DashboardAggregator:
    """
    Start all fetches, wait for all, then apply the failure policy.

    No retries: a failed composite is retried by the next request.
    """

    def __init__(self, service, news_timeout_seconds: Optional[float] = None):
        self._service = service
        self._news_timeout = (
            settings.news_timeout_seconds if news_timeout_seconds is None else news_timeout_seconds
        )

    async def _gather(self, jobs: list[tuple[str, bool, Awaitable]]) -> list[FetchOutcome]:
        results = await asyncio.gather(*(job for _, _, job in jobs), return_exceptions=True)

        outcomes = []
        for (name, essential, _), result in zip(jobs, results):
            if isinstance(result, BaseException):
                outcomes.append(FetchOutcome(name=name, essential=essential, error=result))
            else:
                outcomes.append(FetchOutcome(name=name, essential=essential, value=result))
        return outcomes

    async def _bounded_news(self, limit: int, now: float):
        return await asyncio.wait_for(self._service.get_news(limit, now=now), timeout=self._news_timeout)

    async def build(self, history_windows: Iterable[int], news_limit: int) -> DashboardComposite:
        """
        Build the composite for the given history windows.

        Raises:
            The first essential fetcher's exception (UpstreamError, SchemaError)
        """
        # One logical "now" for every freshness check in this fan-out
        now = self._service.cache.now()
        windows = list(dict.fromkeys(history_windows))

        jobs: list[tuple[str, bool, Awaitable]] = [
            ("price", True, self._service.get_price(now=now)),
            ("fear_greed", True, self._service.get_sentiment(now=now)),
            ("network", True, self._service.get_network_stats(now=now)),
        ]
        for days in windows:
            jobs.append((f"history_{window_label(days)}", True, self._service.get_history(days, now=now)))
        jobs.append(("news", False, self._bounded_news(news_limit, now)))

        outcomes = await self._gather(jobs)
        return self._reduce(outcomes, windows)

    def _reduce(self, outcomes: list[FetchOutcome], windows: list[int]) -> DashboardComposite:
        warnings: list[str] = []

        for outcome in outcomes:
            if outcome.ok:
                continue
            if outcome.essential:
                logger.error(f"Dashboard failed: essential source '{outcome.name}' errored: {outcome.error}")
                raise outcome.error

            logger.warning(f"Dashboard: non-essential source '{outcome.name}' dropped: {outcome.error!r}")
            warnings.append(f"{outcome.name} unavailable")

        values = {o.name: o.value for o in outcomes}

        return DashboardComposite(
            price=values["price"],
            fear_greed=values["fear_greed"],
            network=values["network"],
            news=values["news"] or [],
            price_history={
                window_label(days): values[f"history_{window_label(days)}"]
                for days in windows
            },
            generated_at=datetime.now(timezone.utc),
            warnings=warnings,
        )
