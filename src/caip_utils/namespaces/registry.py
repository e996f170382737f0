import logging
from functools import lru_cache
from typing import Dict, List, Optional

from ..config import settings
from .base import GenericResolver, NamespaceResolver
from .eip155 import ChainDataCache, ChainlistClient, EIP155Resolver, load_static_chains
from .stellar import HorizonClient, StellarResolver

logger = logging.getLogger(__name__)


class NamespaceRegistry:
    def __init__(self, resolvers: Optional[List[NamespaceResolver]] = None):
        self.resolvers: Dict[str, NamespaceResolver] = {}
        for resolver in resolvers or []:
            self.register(resolver)

    def register(self, resolver: NamespaceResolver) -> None:
        """Register a resolver, replacing any earlier one for the same namespace"""
        if resolver.namespace in self.resolvers:
            logger.debug(f"Replacing resolver for namespace {resolver.namespace}")
        self.resolvers[resolver.namespace] = resolver

    def get(self, namespace: str) -> NamespaceResolver:
        """Get the resolver for a namespace, or a generic one if none is registered"""
        resolver = self.resolvers.get(namespace)
        if resolver is None:
            return GenericResolver(namespace)
        return resolver

    @property
    def namespaces(self) -> List[str]:
        return sorted(self.resolvers)


@lru_cache
def get_default_registry() -> NamespaceRegistry:
    """Process-wide registry with the eip155 and stellar resolvers built from settings"""
    chainlist = ChainlistClient(settings.CHAINLIST_URL, timeout=settings.REQUEST_TIMEOUT)
    chain_data = ChainDataCache(
        fetcher=chainlist.fetch_chains,
        static_chains=load_static_chains(settings.CHAINS_SNAPSHOT_PATH),
        ttl_seconds=settings.CHAINLIST_TTL_SECONDS,
    )
    horizon = HorizonClient(settings.HORIZON_URL, timeout=settings.REQUEST_TIMEOUT)

    return NamespaceRegistry([
        EIP155Resolver(
            chain_data,
            max_rpc_attempts=settings.MAX_RPC_ATTEMPTS,
            timeout=settings.REQUEST_TIMEOUT,
        ),
        StellarResolver(horizon),
    ])
