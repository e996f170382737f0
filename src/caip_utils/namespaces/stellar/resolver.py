import re
from typing import Optional

from ...exceptions import UnsupportedIdentifierError
from ...models import AccountIdentifier, AssetIdentifier, ChainIdentifier, TransactionIdentifier
from ...types import StellarNetwork, TransactionStatus
from ..base import NamespaceResolver
from .horizon import HorizonClient, split_asset_reference

EXPLORER_ROOTS = {
    StellarNetwork.PUBNET: "https://stellar.expert/explorer/public",
    StellarNetwork.TESTNET: "https://stellar.expert/explorer/testnet",
}
CHAIN_NAMES = {
    StellarNetwork.PUBNET: "Stellar Mainnet",
    StellarNetwork.TESTNET: "Stellar Testnet",
}

XLM_SLIP44 = "148"
TX_HASH_RE = re.compile(r"^[a-fA-F0-9]{64}$")


class StellarResolver(NamespaceResolver):
    """
    Stellar networks. CAIP-2 and CAIP-221 parsing accept pubnet and testnet;
    accounts, assets and verification are pubnet only.
    """

    namespace = "stellar"

    def __init__(self, horizon: HorizonClient):
        self.horizon = horizon

    def _chain(self, network: StellarNetwork) -> ChainIdentifier:
        return ChainIdentifier(
            namespace=self.namespace,
            reference=network.value,
            chain_name=CHAIN_NAMES[network],
            explorer_url=EXPLORER_ROOTS[network],
        )

    def _require_pubnet(self, reference: str) -> ChainIdentifier:
        if reference != StellarNetwork.PUBNET.value:
            raise UnsupportedIdentifierError(f"Unsupported Stellar namespace reference: {reference}")
        return self._chain(StellarNetwork.PUBNET)

    async def parse_chain(self, reference: str) -> ChainIdentifier:
        try:
            network = StellarNetwork(reference)
        except ValueError:
            raise UnsupportedIdentifierError(f"Unsupported Stellar namespace reference: {reference}") from None
        return self._chain(network)

    async def parse_account(self, reference: str, address: str) -> AccountIdentifier:
        # TODO: validate the StrKey checksum of G... account addresses
        chain = self._require_pubnet(reference)
        return AccountIdentifier(
            namespace=self.namespace,
            reference=reference,
            address=address,
            chain_name=chain.chain_name,
            explorer_url=f"{chain.explorer_url}/account/{address}",
        )

    async def parse_asset(
        self,
        reference: str,
        asset_namespace: str,
        asset_reference: str,
        token_id: Optional[str] = None,
    ) -> AssetIdentifier:
        chain = self._require_pubnet(reference)

        # Stellar assets are fungible; a token id is ignored
        asset = AssetIdentifier(
            namespace=self.namespace,
            reference=reference,
            chain_name=chain.chain_name,
            asset_namespace=asset_namespace,
            asset_reference=asset_reference,
        )

        if asset_namespace == "slip44":
            if asset_reference != XLM_SLIP44:
                raise UnsupportedIdentifierError(f"Wrong slip44 asset reference, should be {XLM_SLIP44}")
            return asset.model_copy(update={
                "explorer_url": f"{chain.explorer_url}/asset/XLM",
                "symbol": "XLM",
                "asset_type": "native",
                "is_native_token": True,
            })

        if asset_namespace == "asset":
            return asset.model_copy(update={
                "explorer_url": f"{chain.explorer_url}/asset/{asset_reference}",
                "asset_type": "asset",
                "is_native_token": False,
            })

        raise UnsupportedIdentifierError("Only stellar assets and XLM native token are supported at this time")

    async def verify_asset(
        self,
        reference: str,
        asset_namespace: str,
        asset_reference: str,
        token_id: Optional[str] = None,
    ) -> AssetIdentifier:
        parsed = await self.parse_asset(reference, asset_namespace, asset_reference, token_id)

        # XLM exists by definition on the network
        if parsed.is_native_token:
            return parsed.model_copy(update={"verified": True})

        try:
            asset_info = await self.horizon.fetch_asset_info(asset_reference)
        except Exception as e:
            return parsed.model_copy(update={
                "verified": False,
                "verification_error": f"Cannot fetch asset info: {e}",
            })

        if asset_info is None:
            return parsed.model_copy(update={
                "verified": False,
                "verification_error": "Asset not found on Stellar network",
            })

        asset_code, asset_issuer = split_asset_reference(asset_reference)
        return parsed.model_copy(update={
            "verified": True,
            "asset_code": asset_info.get("asset_code", asset_code),
            "asset_issuer": asset_info.get("asset_issuer", asset_issuer),
        })

    async def parse_transaction(self, reference: str, transaction_id: str) -> TransactionIdentifier:
        chain = await self.parse_chain(reference)

        if not TX_HASH_RE.match(transaction_id):
            raise UnsupportedIdentifierError("Invalid Stellar transaction hash format: must be 64 hex characters")

        return TransactionIdentifier(
            namespace=self.namespace,
            reference=reference,
            chain_name=chain.chain_name,
            transaction_id=transaction_id,
            explorer_url=f"{chain.explorer_url}/tx/{transaction_id}",
            verified=False,
        )

    async def verify_transaction(self, reference: str, transaction_id: str) -> TransactionIdentifier:
        parsed = await self.parse_transaction(reference, transaction_id)
        self._require_pubnet(reference)

        status = await self.horizon.fetch_transaction_info(transaction_id)
        if status is TransactionStatus.SUCCESS:
            return parsed.model_copy(update={"verified": True})
        return parsed.model_copy(update={
            "verified": False,
            "verification_error": "Transaction not found on Stellar network",
            "verification_note": f"Horizon lookup status: {status.value}",
        })
