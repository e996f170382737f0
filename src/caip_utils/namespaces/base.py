from abc import ABC, abstractmethod
from typing import Optional

from ..models import (
    AccountIdentifier,
    AssetIdentifier,
    ChainIdentifier,
    TransactionIdentifier,
    generic_chain_name,
)


class NamespaceResolver(ABC):
    """
    Resolves syntactically valid identifier fields within one namespace.

    ``parse_*`` methods raise on namespace rule violations. ``verify_*`` methods
    parse first (letting those errors propagate) and report any later failure
    on the returned object instead of raising.
    """

    namespace: str

    @abstractmethod
    async def parse_chain(self, reference: str) -> ChainIdentifier:
        """Resolve a CAIP-2 reference"""
        pass

    @abstractmethod
    async def parse_account(self, reference: str, address: str) -> AccountIdentifier:
        """Resolve a CAIP-10 account"""
        pass

    @abstractmethod
    async def parse_asset(
        self,
        reference: str,
        asset_namespace: str,
        asset_reference: str,
        token_id: Optional[str] = None,
    ) -> AssetIdentifier:
        """Resolve a CAIP-19 asset"""
        pass

    @abstractmethod
    async def parse_transaction(self, reference: str, transaction_id: str) -> TransactionIdentifier:
        """Resolve a CAIP-221 transaction"""
        pass

    async def verify_asset(
        self,
        reference: str,
        asset_namespace: str,
        asset_reference: str,
        token_id: Optional[str] = None,
    ) -> AssetIdentifier:
        parsed = await self.parse_asset(reference, asset_namespace, asset_reference, token_id)
        return parsed.model_copy(update={
            "verified": False,
            "verification_note": f"Verification not supported for namespace: {self.namespace}",
        })

    async def verify_transaction(self, reference: str, transaction_id: str) -> TransactionIdentifier:
        parsed = await self.parse_transaction(reference, transaction_id)
        return parsed.model_copy(update={
            "verified": False,
            "verification_note": f"Transaction verification not supported for namespace: {self.namespace}",
        })


class GenericResolver(NamespaceResolver):
    """Fallback for namespaces without a dedicated resolver: raw fields plus a derived chain name"""

    def __init__(self, namespace: str):
        self.namespace = namespace

    async def parse_chain(self, reference: str) -> ChainIdentifier:
        return ChainIdentifier(
            namespace=self.namespace,
            reference=reference,
            chain_name=generic_chain_name(self.namespace, reference),
        )

    async def parse_account(self, reference: str, address: str) -> AccountIdentifier:
        return AccountIdentifier(
            namespace=self.namespace,
            reference=reference,
            address=address,
            chain_name=generic_chain_name(self.namespace, reference),
        )

    async def parse_asset(
        self,
        reference: str,
        asset_namespace: str,
        asset_reference: str,
        token_id: Optional[str] = None,
    ) -> AssetIdentifier:
        return AssetIdentifier(
            namespace=self.namespace,
            reference=reference,
            asset_namespace=asset_namespace,
            asset_reference=asset_reference,
            token_id=token_id,
            chain_name=generic_chain_name(self.namespace, reference),
        )

    async def parse_transaction(self, reference: str, transaction_id: str) -> TransactionIdentifier:
        return TransactionIdentifier(
            namespace=self.namespace,
            reference=reference,
            transaction_id=transaction_id,
            chain_name=generic_chain_name(self.namespace, reference),
        )
