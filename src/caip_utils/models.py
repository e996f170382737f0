from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CAIPModel(BaseModel):
    """Immutable identifier value; dumps to camelCase keys with by_alias=True"""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ChainIdentifier(CAIPModel):
    """CAIP-2 chain id, e.g. ``eip155:1``"""
    namespace: str
    reference: str
    chain_name: Optional[str] = None
    explorer_url: Optional[str] = None


class AccountIdentifier(ChainIdentifier):
    """CAIP-10 account id, e.g. ``eip155:1:0xab16...``"""
    address: str


class AssetIdentifier(ChainIdentifier):
    """CAIP-19 asset id, e.g. ``eip155:1/erc721:0x0601.../771769``"""
    asset_namespace: str
    asset_reference: str
    token_id: Optional[str] = None
    is_native_token: Optional[bool] = None
    asset_type: Optional[str] = None
    symbol: Optional[str] = None

    # Set by verification
    verified: Optional[bool] = None
    verification_error: Optional[str] = None
    verification_note: Optional[str] = None
    name: Optional[str] = None
    decimals: Optional[int] = None
    total_supply: Optional[int] = None
    asset_code: Optional[str] = None
    asset_issuer: Optional[str] = None


class TransactionIdentifier(ChainIdentifier):
    """CAIP-221 transaction id, e.g. ``eip155:1:txn/0x...``"""
    transaction_id: str
    verified: bool = False
    verification_error: Optional[str] = None
    verification_note: Optional[str] = None
    block_number: Optional[int] = None


def generic_chain_name(namespace: str, reference: str) -> str:
    """Best-effort display name for chains without a dedicated resolver"""
    return f"{namespace.capitalize()} {reference}"
