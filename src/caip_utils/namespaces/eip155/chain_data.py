import logging
import time
from typing import Awaitable, Callable, Dict, Optional

from .chain_models import ChainInfo

logger = logging.getLogger(__name__)

ChainFetcher = Callable[[], Awaitable[Dict[str, ChainInfo]]]


class ChainDataCache:
    """
    Chain metadata keyed by chain id string.

    Remote data is refreshed once the TTL has elapsed. Static snapshot entries
    always override remote ones with the same key, and the snapshot alone is
    served when the remote source has never been reachable.
    """

    def __init__(
        self,
        fetcher: ChainFetcher,
        static_chains: Dict[str, ChainInfo],
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.fetcher = fetcher
        self.static_chains = static_chains
        self.ttl = ttl_seconds
        self.clock = clock

        self.entries: Optional[Dict[str, ChainInfo]] = None
        self.last_refreshed_at: float = 0.0

    def is_fresh(self) -> bool:
        return self.entries is not None and (self.clock() - self.last_refreshed_at) < self.ttl

    async def get_chain_data(self, force_refresh: bool = False) -> Dict[str, ChainInfo]:
        """Get merged chain data, refreshing when stale or forced. Never raises."""
        if not force_refresh and self.is_fresh():
            return self.entries

        try:
            remote = await self.fetcher()
        except Exception as e:
            logger.warning(f"Failed to fetch chainlist data: {e}")
            if self.entries is None:
                logger.warning("Using static chain fallback data")
                self._store(dict(self.static_chains))
            return self.entries

        self._store({**remote, **self.static_chains})
        return self.entries

    async def get_chain(self, chain_id: str, force_refresh: bool = False) -> Optional[ChainInfo]:
        chains = await self.get_chain_data(force_refresh)
        return chains.get(chain_id)

    async def refresh_snapshot(self) -> Dict[str, ChainInfo]:
        """Force a remote fetch that must succeed; raises if the source is unreachable"""
        remote = await self.fetcher()
        self._store({**remote, **self.static_chains})
        return self.entries

    def _store(self, entries: Dict[str, ChainInfo]) -> None:
        self.entries = entries
        self.last_refreshed_at = self.clock()
