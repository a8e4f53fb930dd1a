"""
Price Fetcher

Current BTC market data from CoinGecko.
"""

import logging
from typing import Any

from btc_dashboard.core.config import settings
from btc_dashboard.schemas.market import PriceSnapshot
from btc_dashboard.services.base import BaseFetcher

logger = logging.getLogger(__name__)

PRICE_CACHE_KEY = "btc_price"

# Trim the coin payload to market data only
COIN_QUERY = {
    "localization": "false",
    "tickers": "false",
    "community_data": "false",
    "developer_data": "false",
}


class PriceFetcher(BaseFetcher[PriceSnapshot]):
    """Maps CoinGecko /coins/bitcoin into a PriceSnapshot (USD)."""

    def __init__(self, cache, client, base_url: str = None):
        super().__init__(cache, client)
        self._base_url = (base_url or settings.coingecko_base_url).rstrip("/")

    @property
    def name(self) -> str:
        return "CoinGecko"

    @property
    def cache_key(self) -> str:
        return PRICE_CACHE_KEY

    async def _fetch_upstream(self) -> PriceSnapshot:
        url = f"{self._base_url}/coins/bitcoin"
        data = await self._client.get_json(url, params=COIN_QUERY, source=self.name)
        snapshot = self._normalize(data)
        logger.info(f"BTC price: ${snapshot.price:,.2f} ({snapshot.price_change_percentage_24h:+.2f}%)")
        return snapshot

    def _normalize(self, data: Any) -> PriceSnapshot:
        try:
            market = data["market_data"]
            return PriceSnapshot(
                price=market["current_price"]["usd"],
                price_change_24h=market["price_change_24h"],
                price_change_percentage_24h=market["price_change_percentage_24h"],
                high_24h=market["high_24h"]["usd"],
                low_24h=market["low_24h"]["usd"],
                market_cap=market["market_cap"]["usd"],
                total_volume=market["total_volume"]["usd"],
                circulating_supply=market["circulating_supply"],
                last_updated=data["last_updated"],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise self._schema_error("Price payload missing market data fields", e)
