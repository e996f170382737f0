"""
Entry points: validate the CAIP grammar, then hand the fields to the
resolver registered for the identifier's namespace.
"""

from typing import Optional

from . import grammar
from .models import AccountIdentifier, AssetIdentifier, ChainIdentifier, TransactionIdentifier
from .namespaces import NamespaceRegistry, get_default_registry


def _registry(registry: Optional[NamespaceRegistry]) -> NamespaceRegistry:
    return registry if registry is not None else get_default_registry()


async def parse_caip2(identifier: str, registry: Optional[NamespaceRegistry] = None) -> ChainIdentifier:
    chain = grammar.split_caip2(identifier)
    resolver = _registry(registry).get(chain.namespace)
    return await resolver.parse_chain(chain.reference)


async def parse_caip10(identifier: str, registry: Optional[NamespaceRegistry] = None) -> AccountIdentifier:
    account = grammar.split_caip10(identifier)
    resolver = _registry(registry).get(account.namespace)
    return await resolver.parse_account(account.reference, account.address)


async def parse_caip19(identifier: str, registry: Optional[NamespaceRegistry] = None) -> AssetIdentifier:
    asset = grammar.split_caip19(identifier)
    resolver = _registry(registry).get(asset.namespace)
    return await resolver.parse_asset(asset.reference, asset.asset_namespace, asset.asset_reference, asset.token_id)


async def verify_caip19(identifier: str, registry: Optional[NamespaceRegistry] = None) -> AssetIdentifier:
    """Parse an asset id and confirm it on-chain; only verification failures are reported softly"""
    asset = grammar.split_caip19(identifier)
    resolver = _registry(registry).get(asset.namespace)
    return await resolver.verify_asset(asset.reference, asset.asset_namespace, asset.asset_reference, asset.token_id)


async def parse_caip221(identifier: str, registry: Optional[NamespaceRegistry] = None) -> TransactionIdentifier:
    tx = grammar.split_caip221(identifier)
    resolver = _registry(registry).get(tx.namespace)
    return await resolver.parse_transaction(tx.reference, tx.transaction_id)


async def verify_caip221(identifier: str, registry: Optional[NamespaceRegistry] = None) -> TransactionIdentifier:
    """Parse a transaction id and confirm the transaction exists on-chain"""
    tx = grammar.split_caip221(identifier)
    resolver = _registry(registry).get(tx.namespace)
    return await resolver.verify_transaction(tx.reference, tx.transaction_id)
