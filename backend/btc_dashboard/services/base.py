"""
Base Fetcher Interface

All upstream fetchers inherit from this base class.
"""

import logging
from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from btc_dashboard.services.cache.store import CacheStore

logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT")


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class UpstreamError(ServiceError):
    """Third-party API returned a non-success status or the call failed."""

    def __init__(
        self,
        service_name: str,
        message: str,
        status: Optional[int] = None,
        url: Optional[str] = None,
    ):
        self.status = status
        self.url = url
        super().__init__(service_name, message, {"status": status, "url": url})


class SchemaError(ServiceError):
    """Upstream payload is missing expected fields or has the wrong shape."""
    pass


class BaseFetcher(ABC, Generic[OutputT]):
    """
    Base class for all upstream fetchers.

    Each fetcher:
    - Owns one upstream API contract
    - Normalizes the raw payload into one fixed internal shape
    - Reads and fills the shared cache under its own key

    On a fresh cache hit the upstream is not called. On a miss the upstream
    is called once and the normalized result is cached before it is
    returned. Failures propagate and leave the cache untouched, so the next
    call retries instead of serving an empty value.
    """

    def __init__(self, cache: CacheStore, client):
        self._cache = cache
        self._client = client

    @property
    @abstractmethod
    def name(self) -> str:
        """Fetcher name for logging and errors."""
        pass

    @property
    @abstractmethod
    def cache_key(self) -> str:
        pass

    @abstractmethod
    async def _fetch_upstream(self) -> OutputT:
        """
        Call the upstream API and normalize its response.

        Raises:
            UpstreamError: On non-success status or transport failure
            SchemaError: If the payload cannot be normalized
        """
        pass

    async def fetch(self, now: Optional[float] = None) -> OutputT:
        """Return the cached value when fresh, otherwise fetch and cache it."""
        key = self.cache_key
        cached = self._cache.get(key, now)
        if cached is not None:
            return cached

        async with self._cache.lock(key):
            # Another caller may have filled the key while we waited
            cached = self._cache.get(key)
            if cached is not None:
                return cached

            logger.info(f"{self.name}: cache miss for {key}, calling upstream")
            value = await self._fetch_upstream()
            self._cache.set(key, value)
            return value

    def _schema_error(self, message: str, exc: Exception = None) -> SchemaError:
        details = {"error": str(exc)} if exc is not None else {}
        return SchemaError(self.name, message, details)
