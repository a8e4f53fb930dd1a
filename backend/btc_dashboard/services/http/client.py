"""
Upstream HTTP client.

Thin wrapper around a shared aiohttp session. Every fetcher goes through
here so status and transport failures are mapped to the same errors.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from btc_dashboard.core.config import settings
from btc_dashboard.services.base import SchemaError, UpstreamError

logger = logging.getLogger(__name__)


class UpstreamClient:
    """
    Shared HTTP client for all third-party APIs.

    Raises UpstreamError on non-200 responses, connection errors and
    timeouts; SchemaError when a body cannot be decoded.
    """

    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        self._session: Optional[aiohttp.ClientSession] = None
        self._timeout = timeout_seconds or settings.http_timeout_seconds
        self._user_agent = user_agent or settings.http_user_agent

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={
                    "User-Agent": self._user_agent,
                    "Accept": "application/json, text/plain",
                },
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def _get(self, url: str, params: Optional[dict], source: str, as_json: bool) -> Any:
        session = await self._ensure_session()

        try:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    logger.warning(f"{source} returned status {response.status} for {url}")
                    raise UpstreamError(
                        source,
                        f"API error: {response.status}",
                        status=response.status,
                        url=url,
                    )

                if as_json:
                    # Some upstreams send JSON as text/plain
                    return await response.json(content_type=None)
                return await response.text()

        except (aiohttp.ContentTypeError, ValueError) as e:
            raise SchemaError(source, "Response body is not valid JSON", {"url": url, "error": str(e)})
        except asyncio.TimeoutError:
            raise UpstreamError(source, "Request timed out", url=url)
        except aiohttp.ClientError as e:
            raise UpstreamError(source, f"Request failed: {e}", url=url)

    async def get_json(self, url: str, params: Optional[dict] = None, source: str = "upstream") -> Any:
        """GET a URL and decode the JSON body."""
        return await self._get(url, params, source, as_json=True)

    async def get_text(self, url: str, params: Optional[dict] = None, source: str = "upstream") -> str:
        """GET a URL and return the raw text body."""
        return await self._get(url, params, source, as_json=False)


# Singleton instance
_upstream_client: Optional[UpstreamClient] = None


def get_upstream_client() -> UpstreamClient:
    """Get the upstream client singleton."""
    global _upstream_client
    if _upstream_client is None:
        _upstream_client = UpstreamClient()
    return _upstream_client


async def close_upstream_client() -> None:
    """Close the singleton's session. Called on application shutdown."""
    global _upstream_client
    if _upstream_client is not None:
        await _upstream_client.close()
        _upstream_client = None
