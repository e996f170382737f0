import logging
import re
from functools import partial
from typing import Awaitable, Callable, List, Optional

from ...exceptions import RpcFallbackError, UnsupportedIdentifierError
from ...fallback import fetch_with_fallback
from ...models import AccountIdentifier, AssetIdentifier, ChainIdentifier, TransactionIdentifier
from ...types import EIP155AssetNamespace
from ..base import NamespaceResolver
from .chain_data import ChainDataCache
from .chain_models import ChainInfo
from .rpc import EIP155Transaction, TokenInfo, fetch_eip155_transaction, fetch_erc20_token_info

logger = logging.getLogger(__name__)

ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")
TX_HASH_RE = re.compile(r"^0x[a-fA-F0-9]{64}$")
TOKEN_ID_RE = re.compile(r"^[-.%a-zA-Z0-9]+$")

TokenFetcher = Callable[[str, str], Awaitable[TokenInfo]]
TransactionFetcher = Callable[[str, str], Awaitable[EIP155Transaction]]


class EIP155Resolver(NamespaceResolver):
    """EVM chains, with chain metadata from a ChainDataCache and verification over public RPCs"""

    namespace = "eip155"

    def __init__(
        self,
        chain_data: ChainDataCache,
        token_fetcher: Optional[TokenFetcher] = None,
        transaction_fetcher: Optional[TransactionFetcher] = None,
        max_rpc_attempts: int = 3,
        timeout: float = 10.0,
    ):
        self.chain_data = chain_data
        self.token_fetcher = token_fetcher or partial(fetch_erc20_token_info, timeout=timeout)
        self.transaction_fetcher = transaction_fetcher or partial(fetch_eip155_transaction, timeout=timeout)
        self.max_rpc_attempts = max_rpc_attempts

    async def _get_chain(self, reference: str) -> ChainInfo:
        chain = await self.chain_data.get_chain(reference)
        if chain is None:
            raise UnsupportedIdentifierError(f"Unsupported EIP155 chain ID: {reference}")
        return chain

    async def parse_chain(self, reference: str) -> ChainIdentifier:
        chain = await self._get_chain(reference)
        return ChainIdentifier(
            namespace=self.namespace,
            reference=reference,
            chain_name=chain.name,
            explorer_url=chain.explorer_url,
        )

    async def parse_account(self, reference: str, address: str) -> AccountIdentifier:
        chain = await self.parse_chain(reference)

        if not ADDRESS_RE.match(address):
            raise UnsupportedIdentifierError(
                "Invalid EIP155 address format: must be 0x followed by 40 hex characters"
            )

        return AccountIdentifier(
            namespace=self.namespace,
            reference=reference,
            address=address,
            chain_name=chain.chain_name,
            explorer_url=f"{chain.explorer_url}/address/{address}" if chain.explorer_url else None,
        )

    async def parse_asset(
        self,
        reference: str,
        asset_namespace: str,
        asset_reference: str,
        token_id: Optional[str] = None,
    ) -> AssetIdentifier:
        chain = await self._get_chain(reference)

        try:
            kind = EIP155AssetNamespace(asset_namespace)
        except ValueError:
            supported = ", ".join(member.value for member in EIP155AssetNamespace)
            raise UnsupportedIdentifierError(
                f"Unsupported EIP155 asset namespace: {asset_namespace}. Supported: {supported}"
            ) from None

        asset = AssetIdentifier(
            namespace=self.namespace,
            reference=reference,
            chain_name=chain.name,
            asset_namespace=asset_namespace,
            asset_reference=asset_reference,
            token_id=token_id,
            asset_type=kind.value.upper(),
        )

        if kind is EIP155AssetNamespace.SLIP44:
            if chain.slip44 is None:
                raise UnsupportedIdentifierError("Slip44 number not found for this chain")
            if asset_reference != str(chain.slip44):
                raise UnsupportedIdentifierError(f"Invalid slip44 number, should be {chain.slip44}")
            return asset.model_copy(update={
                "explorer_url": chain.explorer_url,
                "is_native_token": True,
                "symbol": chain.nativeCurrency.symbol if chain.nativeCurrency else None,
            })

        if not ADDRESS_RE.match(asset_reference):
            raise UnsupportedIdentifierError(f"Invalid contract address format for {asset.asset_type} asset")

        if kind is EIP155AssetNamespace.ERC20 and token_id is not None:
            raise UnsupportedIdentifierError("ERC20 tokens should not have a token ID")
        if token_id is not None and not TOKEN_ID_RE.match(token_id):
            raise UnsupportedIdentifierError("Invalid token ID format")

        explorer_url = None
        if chain.explorer_url:
            explorer_url = f"{chain.explorer_url}/token/{asset_reference}"
            if token_id:
                explorer_url = f"{explorer_url}?a={token_id}"

        return asset.model_copy(update={"explorer_url": explorer_url, "is_native_token": False})

    async def verify_asset(
        self,
        reference: str,
        asset_namespace: str,
        asset_reference: str,
        token_id: Optional[str] = None,
    ) -> AssetIdentifier:
        parsed = await self.parse_asset(reference, asset_namespace, asset_reference, token_id)
        kind = EIP155AssetNamespace(asset_namespace)

        if kind is EIP155AssetNamespace.SLIP44:
            return parsed.model_copy(update={
                "verified": False,
                "verification_note": f"Verification not supported for asset namespace: {asset_namespace}",
            })

        try:
            token_info = await self.fetch_token_info_with_fallback(reference, asset_reference)
        except Exception as e:
            update = {"verified": False, "verification_error": str(e)}
            if kind.is_nft:
                update["verification_note"] = (
                    "Could not fetch contract info - contract may not exist or RPC unavailable"
                )
            return parsed.model_copy(update=update)

        if kind.is_nft:
            return parsed.model_copy(update={
                "name": token_info.name,
                "symbol": token_info.symbol,
                "verified": True,
                "verification_note": "Contract info verified, but individual token existence not checked",
            })

        return parsed.model_copy(update={
            "name": token_info.name,
            "symbol": token_info.symbol,
            "decimals": token_info.decimals,
            "total_supply": token_info.total_supply,
            "verified": True,
        })

    async def parse_transaction(self, reference: str, transaction_id: str) -> TransactionIdentifier:
        chain = await self.parse_chain(reference)

        if not TX_HASH_RE.match(transaction_id):
            raise UnsupportedIdentifierError(
                "Invalid EIP155 transaction hash format: must be 0x followed by 64 hex characters"
            )

        return TransactionIdentifier(
            namespace=self.namespace,
            reference=reference,
            chain_name=chain.chain_name,
            transaction_id=transaction_id,
            explorer_url=f"{chain.explorer_url}/tx/{transaction_id}" if chain.explorer_url else None,
            verified=False,
        )

    async def verify_transaction(self, reference: str, transaction_id: str) -> TransactionIdentifier:
        parsed = await self.parse_transaction(reference, transaction_id)

        try:
            tx = await self.fetch_transaction_with_fallback(reference, transaction_id)
        except Exception as e:
            return parsed.model_copy(update={"verified": False, "verification_error": str(e)})

        if tx.is_pending:
            return parsed.model_copy(update={
                "verified": False,
                "verification_note": "Transaction is pending and not yet included in a block",
            })
        return parsed.model_copy(update={"verified": True, "block_number": tx.block_number})

    async def rpc_urls(self, chain_id: str) -> List[str]:
        """Candidate HTTP RPC endpoints of a chain, capped at max_rpc_attempts"""
        chain = await self._get_chain(chain_id)
        urls = chain.http_rpc_urls
        if not urls:
            raise RpcFallbackError(f"No HTTP RPC endpoints available for chain {chain_id}")
        return urls[:self.max_rpc_attempts]

    async def fetch_token_info_with_fallback(self, chain_id: str, contract_address: str) -> TokenInfo:
        """Fetch token metadata, trying the chain's RPC endpoints in order"""
        urls = await self.rpc_urls(chain_id)
        return await fetch_with_fallback(
            urls,
            lambda url: self.token_fetcher(url, contract_address),
            description="token info",
        )

    async def fetch_transaction_with_fallback(self, chain_id: str, transaction_hash: str) -> EIP155Transaction:
        """Look up a transaction, trying the chain's RPC endpoints in order"""
        urls = await self.rpc_urls(chain_id)
        return await fetch_with_fallback(
            urls,
            lambda url: self.transaction_fetcher(url, transaction_hash),
            description="transaction",
        )
