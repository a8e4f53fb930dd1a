"""
News Fetcher

Bitcoin headlines from the CoinGecko news feed. Never fails: any problem
upstream degrades to an empty list and the frontend hides the section.
"""

import logging
from typing import Any, Iterable, Optional

from btc_dashboard.core.config import settings
from btc_dashboard.schemas.market import NewsItem
from btc_dashboard.services.base import BaseFetcher

logger = logging.getLogger(__name__)

NEWS_CACHE_KEY = "news"

DEFAULT_SOURCE = "CoinGecko News"


def is_relevant(title: str, keywords: Iterable[str]) -> bool:
    """Case-insensitive substring match against any keyword."""
    title_lower = title.lower()
    return any(kw in title_lower for kw in keywords)


def _as_text(value: Any) -> Optional[str]:
    # created_at is an ISO string on some feeds, unix seconds on others
    return None if value is None else str(value)


class NewsFetcher(BaseFetcher[list[NewsItem]]):
    """
    Filtered headline list, at most `max_items` long.

    Only a non-empty filtered list is cached; an empty result is retried on
    the next call.
    """

    def __init__(
        self,
        cache,
        client,
        url: str = None,
        keywords: Optional[list[str]] = None,
        max_items: int = None,
        page_size: int = None,
    ):
        super().__init__(cache, client)
        self._url = url or settings.news_url
        self._keywords = [k.lower() for k in (keywords or settings.news_keywords)]
        self._max_items = max_items or settings.news_max_items
        self._page_size = page_size or settings.news_upstream_page_size

    @property
    def name(self) -> str:
        return "CoinGecko News"

    @property
    def cache_key(self) -> str:
        return NEWS_CACHE_KEY

    async def get(self, limit: int, now: Optional[float] = None) -> list[NewsItem]:
        """Up to `limit` relevant headlines; empty list on any failure."""
        try:
            items = await self.fetch(now)
        except Exception as e:
            logger.error(f"News fetch error: {e}")
            return []
        return items[:limit]

    async def fetch(self, now: Optional[float] = None) -> list[NewsItem]:
        cached = self._cache.get(self.cache_key, now)
        if cached is not None:
            return cached

        async with self._cache.lock(self.cache_key):
            cached = self._cache.get(self.cache_key)
            if cached is not None:
                return cached

            items = await self._fetch_upstream()
            if items:
                self._cache.set(self.cache_key, items)
            else:
                logger.warning("News feed had no relevant headlines")
            return items

    async def _fetch_upstream(self) -> list[NewsItem]:
        data = await self._client.get_json(
            self._url,
            params={"per_page": str(self._page_size)},
            source=self.name,
        )
        return self._normalize(data)

    def _normalize(self, data: Any) -> list[NewsItem]:
        rows = data.get("data") if isinstance(data, dict) else data
        if not isinstance(rows, list):
            raise self._schema_error("News payload has no data list")

        items = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            title = row.get("title")
            if not isinstance(title, str) or not is_relevant(title, self._keywords):
                continue

            items.append(
                NewsItem(
                    title=title,
                    url=row.get("url") or "",
                    source=row.get("news_site") or DEFAULT_SOURCE,
                    published_at=_as_text(row.get("created_at")),
                )
            )
            if len(items) >= self._max_items:
                break

        return items
