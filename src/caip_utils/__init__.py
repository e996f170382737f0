from .dispatch import parse_caip2, parse_caip10, parse_caip19, parse_caip221, verify_caip19, verify_caip221
from .exceptions import (
    CAIPError,
    CAIPFormatError,
    UnsupportedIdentifierError,
    VerificationError,
    RpcError,
    RpcFallbackError,
    HorizonError,
)
from .models import ChainIdentifier, AccountIdentifier, AssetIdentifier, TransactionIdentifier
from .namespaces import NamespaceRegistry, NamespaceResolver, get_default_registry


__all__ = [
    "parse_caip2",
    "parse_caip10",
    "parse_caip19",
    "parse_caip221",
    "verify_caip19",
    "verify_caip221",
    "CAIPError",
    "CAIPFormatError",
    "UnsupportedIdentifierError",
    "VerificationError",
    "RpcError",
    "RpcFallbackError",
    "HorizonError",
    "ChainIdentifier",
    "AccountIdentifier",
    "AssetIdentifier",
    "TransactionIdentifier",
    "NamespaceRegistry",
    "NamespaceResolver",
    "get_default_registry",
]
