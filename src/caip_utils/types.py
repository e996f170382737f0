from enum import Enum


class TransactionStatus(str, Enum):
    """Lookup outcome reported by a Horizon transaction query"""
    SUCCESS = "success"
    PENDING = "pending"    # 404, not (yet) in a ledger
    ERROR = "error"        # 400, malformed hash
    UNKNOWN = "unknown"    # any other status or a network failure


class EIP155AssetNamespace(str, Enum):
    """Asset namespaces understood on EVM chains"""
    SLIP44 = "slip44"
    ERC20 = "erc20"
    ERC721 = "erc721"
    ERC1155 = "erc1155"

    @property
    def is_nft(self) -> bool:
        return self in (EIP155AssetNamespace.ERC721, EIP155AssetNamespace.ERC1155)


class StellarNetwork(str, Enum):
    """CAIP-2 references of the Stellar networks"""
    PUBNET = "pubnet"
    TESTNET = "testnet"
