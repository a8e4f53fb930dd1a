"""
Network Fetcher

Bitcoin network statistics from blockchain.info plus halving estimates.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from btc_dashboard.core.config import settings
from btc_dashboard.schemas.market import NetworkSnapshot
from btc_dashboard.services.base import BaseFetcher

logger = logging.getLogger(__name__)

NETWORK_CACHE_KEY = "network_stats"

# blockchain.info reports hash rate in GH/s
GIGAHASHES_PER_EXAHASH = 1e9


def gigahashes_to_exahashes(rate: float) -> float:
    return rate / GIGAHASHES_PER_EXAHASH


def estimate_halving(
    block_height: int,
    next_halving_block: int,
    avg_block_time_seconds: int,
    now: datetime,
) -> tuple[int, datetime]:
    """
    Blocks left until the halving and its estimated date.

    Uses the fixed average block time, not the observed rate.
    """
    blocks_until_halving = next_halving_block - block_height
    eta = now + timedelta(seconds=blocks_until_halving * avg_block_time_seconds)
    return blocks_until_halving, eta


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NetworkFetcher(BaseFetcher[NetworkSnapshot]):
    """
    Block height, hash rate and difficulty, fetched concurrently.

    Any one of the three calls failing fails the whole snapshot.
    """

    def __init__(
        self,
        cache,
        client,
        base_url: str = None,
        next_halving_block: int = None,
        avg_block_time_seconds: int = None,
        utcnow: Callable[[], datetime] = _utcnow,
    ):
        super().__init__(cache, client)
        self._base_url = (base_url or settings.blockchain_info_base_url).rstrip("/")
        self._next_halving_block = next_halving_block or settings.next_halving_block
        self._avg_block_time = avg_block_time_seconds or settings.avg_block_time_seconds
        self._utcnow = utcnow

    @property
    def name(self) -> str:
        return "Blockchain.info"

    @property
    def cache_key(self) -> str:
        return NETWORK_CACHE_KEY

    async def _fetch_upstream(self) -> NetworkSnapshot:
        height_text, hash_rate_text, difficulty_text = await asyncio.gather(
            self._client.get_text(f"{self._base_url}/getblockcount", source=self.name),
            self._client.get_text(f"{self._base_url}/hashrate", source=self.name),
            self._client.get_text(f"{self._base_url}/getdifficulty", source=self.name),
        )

        try:
            block_height = int(height_text.strip())
            hash_rate = gigahashes_to_exahashes(float(hash_rate_text.strip()))
            difficulty = float(difficulty_text.strip())
        except (AttributeError, ValueError) as e:
            raise self._schema_error("Network stats are not numeric", e)

        blocks_until_halving, eta = estimate_halving(
            block_height,
            self._next_halving_block,
            self._avg_block_time,
            self._utcnow(),
        )
        if blocks_until_halving < 0:
            logger.warning(
                f"Block {block_height} is past halving block {self._next_halving_block}; "
                f"NEXT_HALVING_BLOCK needs updating"
            )

        logger.info(f"Network: block {block_height}, {hash_rate:.2f} EH/s, {blocks_until_halving} blocks to halving")

        return NetworkSnapshot(
            block_height=block_height,
            hash_rate=hash_rate,
            difficulty=difficulty,
            next_halving_block=self._next_halving_block,
            blocks_until_halving=blocks_until_halving,
            estimated_halving_date=eta,
            avg_block_time=self._avg_block_time,
        )
