from .chain_data import ChainDataCache
from .chain_models import ChainInfo
from .chainlist import ChainlistClient, load_static_chains, write_chains_snapshot
from .resolver import EIP155Resolver
from .rpc import JsonRpcClient, TokenInfo, EIP155Transaction, fetch_erc20_token_info, fetch_eip155_transaction

__all__ = [
    "ChainDataCache",
    "ChainInfo",
    "ChainlistClient",
    "load_static_chains",
    "write_chains_snapshot",
    "EIP155Resolver",
    "JsonRpcClient",
    "TokenInfo",
    "EIP155Transaction",
    "fetch_erc20_token_info",
    "fetch_eip155_transaction",
]
