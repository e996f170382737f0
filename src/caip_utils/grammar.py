"""
Namespace-agnostic CAIP grammar.

Each ``split_*`` function breaks a raw identifier into its fields on the fixed
CAIP delimiters and checks every field against its pattern. The result carries
only syntactic fields; namespace resolvers enrich it afterwards.
"""

import re
from typing import Dict, Tuple

from .exceptions import CAIPFormatError
from .models import AccountIdentifier, AssetIdentifier, ChainIdentifier, TransactionIdentifier


FIELD_RULES: Dict[str, Tuple[re.Pattern, str]] = {
    "namespace": (
        re.compile(r"^[-a-z0-9]{3,8}$"),
        "must be 3-8 characters, lowercase letters, numbers, and hyphens only",
    ),
    "reference": (
        re.compile(r"^[-_a-zA-Z0-9]{1,32}$"),
        "must be 1-32 characters, letters, numbers, hyphens, and underscores only",
    ),
    "address": (
        re.compile(r"^[-.%a-zA-Z0-9]{1,128}$"),
        "must be 1-128 characters, letters, numbers, hyphens, dots, and percent signs only",
    ),
    "asset_namespace": (
        re.compile(r"^[-a-z0-9]{3,8}$"),
        "must be 3-8 characters, lowercase letters, numbers, and hyphens only",
    ),
    "asset_reference": (
        re.compile(r"^[-.%a-zA-Z0-9]{1,128}$"),
        "must be 1-128 characters, letters, numbers, hyphens, dots, and percent signs only",
    ),
    "token_id": (
        re.compile(r"^[-.%a-zA-Z0-9]{1,78}$"),
        "must be 1-78 characters, letters, numbers, hyphens, dots, and percent signs only",
    ),
    "transaction_id": (
        re.compile(r"^[-%a-zA-Z0-9]{1,128}$"),
        "must be 1-128 characters, letters, numbers, hyphens, and percent signs only",
    ),
}

# CAIP-221 draft: chain_id ":" ["block:"] "txn/" transaction_id
TRANSACTION_MARKERS = ("txn", "tx")
BLOCK_MARKER = "block"


def validate_field(caip: int, field: str, value: str) -> str:
    pattern, description = FIELD_RULES[field]
    if not pattern.match(value):
        raise CAIPFormatError(f"Invalid CAIP{caip} {field}: {description}")
    return value


def split_caip2(identifier: str) -> ChainIdentifier:
    parts = identifier.split(":")
    if len(parts) != 2:
        raise CAIPFormatError("Invalid CAIP2 format: must be namespace:reference")

    namespace, reference = parts
    validate_field(2, "namespace", namespace)
    validate_field(2, "reference", reference)
    return ChainIdentifier(namespace=namespace, reference=reference)


def split_caip10(identifier: str) -> AccountIdentifier:
    parts = identifier.split(":")
    if len(parts) != 3:
        raise CAIPFormatError("Invalid CAIP10 format: must be namespace:reference:address")

    namespace, reference, address = parts
    validate_field(10, "namespace", namespace)
    validate_field(10, "reference", reference)
    validate_field(10, "address", address)
    return AccountIdentifier(namespace=namespace, reference=reference, address=address)


def split_caip19(identifier: str) -> AssetIdentifier:
    """
    Split ``namespace:reference/asset_namespace:asset_reference[/token_id]``.

    Only the first slash separates the chain from the asset; a second one
    inside the asset part introduces the optional NFT token id.
    """
    chain_part, slash, asset_part = identifier.partition("/")
    if not slash:
        raise CAIPFormatError("Invalid CAIP19 format: must contain at least one forward slash")

    chain_fields = chain_part.split(":")
    if len(chain_fields) != 2:
        raise CAIPFormatError("Invalid CAIP19 chain format: must be namespace:reference")

    asset_fields = asset_part.split(":")
    if len(asset_fields) != 2:
        raise CAIPFormatError("Invalid CAIP19 asset format: must be asset_namespace:asset_reference")

    namespace, reference = chain_fields
    asset_namespace, asset_reference = asset_fields

    validate_field(19, "namespace", namespace)
    validate_field(19, "reference", reference)
    validate_field(19, "asset_namespace", asset_namespace)

    token_id = None
    asset_reference, slash, token = asset_reference.partition("/")
    if slash:
        token_id = validate_field(19, "token_id", token)
    validate_field(19, "asset_reference", asset_reference)

    return AssetIdentifier(
        namespace=namespace,
        reference=reference,
        asset_namespace=asset_namespace,
        asset_reference=asset_reference,
        token_id=token_id,
    )


def split_caip221(identifier: str) -> TransactionIdentifier:
    """
    Split ``namespace:reference:txn/transaction_id``, also accepting the
    ``namespace:reference:block:txn/transaction_id`` form and ``tx`` as the marker.
    """
    parts = identifier.split("/")
    if len(parts) != 2:
        raise CAIPFormatError("Invalid CAIP221 format: must contain exactly one forward slash")

    prefix, transaction_id = parts
    chain_fields = prefix.split(":")
    if not _is_transaction_prefix(chain_fields):
        raise CAIPFormatError(
            "Invalid CAIP221 format: must be namespace:reference:txn/transaction_id "
            "or namespace:reference:block:txn/transaction_id"
        )

    namespace, reference = chain_fields[:2]
    validate_field(221, "namespace", namespace)
    validate_field(221, "reference", reference)
    validate_field(221, "transaction_id", transaction_id)

    return TransactionIdentifier(namespace=namespace, reference=reference, transaction_id=transaction_id)


def _is_transaction_prefix(fields: list[str]) -> bool:
    if len(fields) == 3:
        return fields[2] in TRANSACTION_MARKERS
    if len(fields) == 4:
        return fields[2] == BLOCK_MARKER and fields[3] in TRANSACTION_MARKERS
    return False
