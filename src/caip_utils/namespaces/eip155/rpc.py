"""
Minimal async JSON-RPC access to EVM nodes for token and transaction lookups.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from eth_abi import decode
from eth_abi.exceptions import DecodingError
from pydantic import BaseModel
from web3 import Web3

from ...exceptions import RpcError

logger = logging.getLogger(__name__)

# 4-byte selectors of the ERC-20 metadata getters
NAME_SELECTOR = "0x06fdde03"
SYMBOL_SELECTOR = "0x95d89b41"
DECIMALS_SELECTOR = "0x313ce567"
TOTAL_SUPPLY_SELECTOR = "0x18160ddd"


class TokenInfo(BaseModel):
    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = None
    total_supply: Optional[int] = None
    rpc_url: Optional[str] = None


class EIP155Transaction(BaseModel):
    hash: str
    block_number: Optional[int] = None
    block_hash: Optional[str] = None
    transaction_index: Optional[int] = None
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    value: int = 0
    nonce: Optional[int] = None
    gas: Optional[int] = None
    type: int = 0

    @property
    def is_pending(self) -> bool:
        return self.block_number is None


class JsonRpcClient:
    """JSON-RPC 2.0 over HTTP POST, single or batched"""

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        url = (rpc_url or "").strip()
        if not url:
            raise ValueError("rpc_url must be a non-empty string.")

        self.rpc_url = url
        self.timeout = timeout
        self.transport = transport

    async def _post(self, payload: Any) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(self.rpc_url, json=payload)
            response.raise_for_status()
            return response.json()

    async def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params or []}
        data = await self._post(payload)
        if not isinstance(data, dict):
            raise RpcError("Unexpected JSON-RPC response (non-object).")
        if data.get("error"):
            raise RpcError(_format_rpc_error(data["error"]))
        if "result" not in data:
            raise RpcError("Unexpected JSON-RPC response (missing result).")
        return data["result"]

    async def batch(self, calls: List[tuple[str, List[Any]]]) -> List[Dict[str, Any]]:
        """
        Send several calls in one request.

        Returns the raw response objects in call order; per-call errors are
        left in place for the caller to inspect.
        """
        payload = [
            {"jsonrpc": "2.0", "id": index, "method": method, "params": params}
            for index, (method, params) in enumerate(calls, start=1)
        ]
        data = await self._post(payload)
        if isinstance(data, dict) and data.get("error"):
            raise RpcError(_format_rpc_error(data["error"]))
        if not isinstance(data, list):
            raise RpcError("Unexpected JSON-RPC batch response (not a list).")

        by_id = {item.get("id"): item for item in data if isinstance(item, dict)}
        missing = [index for index in range(1, len(calls) + 1) if index not in by_id]
        if missing:
            raise RpcError(f"JSON-RPC batch response is missing ids {missing}")
        return [by_id[index] for index in range(1, len(calls) + 1)]


def _format_rpc_error(error_obj: Any) -> str:
    if not isinstance(error_obj, dict):
        return f"RPC error: {error_obj}."
    parts: list[str] = []
    if error_obj.get("code") is not None:
        parts.append(f"code {error_obj['code']}")
    if error_obj.get("message"):
        parts.append(str(error_obj["message"]))
    detail = ": ".join(parts) if parts else "unknown error"
    return f"RPC error: {detail}."


def _call_bytes(response: Dict[str, Any]) -> Optional[bytes]:
    """Return data of a successful eth_call, or None if it failed or returned nothing"""
    if response.get("error"):
        return None
    result = response.get("result")
    if not isinstance(result, str) or result in ("0x", ""):
        return None
    return Web3.to_bytes(hexstr=result)


def decode_string(data: Optional[bytes]) -> Optional[str]:
    """Decode an ABI string return, falling back to bytes32 used by some older tokens"""
    if data is None:
        return None
    try:
        return decode(["string"], data)[0]
    except (DecodingError, OverflowError, UnicodeDecodeError):
        if len(data) == 32:
            return data.rstrip(b"\x00").decode("utf-8", errors="replace")
        return None


def decode_uint(data: Optional[bytes]) -> Optional[int]:
    if data is None:
        return None
    try:
        return decode(["uint256"], data)[0]
    except DecodingError:
        return None


async def fetch_erc20_token_info(
    rpc_url: str,
    contract_address: str,
    timeout: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TokenInfo:
    """
    Read name, symbol, decimals and totalSupply of a token contract in one batch.

    Getters the contract does not implement come back as None (NFT contracts
    have no decimals). Raises RpcError when nothing could be read at all.
    """
    client = JsonRpcClient(rpc_url, timeout=timeout, transport=transport)
    responses = await client.batch([
        ("eth_call", [{"to": contract_address, "data": selector}, "latest"])
        for selector in (NAME_SELECTOR, SYMBOL_SELECTOR, DECIMALS_SELECTOR, TOTAL_SUPPLY_SELECTOR)
    ])
    name, symbol, decimals, total_supply = (_call_bytes(response) for response in responses)

    token_info = TokenInfo(
        name=decode_string(name),
        symbol=decode_string(symbol),
        decimals=decode_uint(decimals),
        total_supply=decode_uint(total_supply),
        rpc_url=rpc_url,
    )
    if token_info.name is None and token_info.symbol is None and token_info.total_supply is None:
        raise RpcError(f"No token contract found at {contract_address}")
    return token_info


def _hex_int(value: Optional[str]) -> Optional[int]:
    if not value or value == "0x":
        return None
    return Web3.to_int(hexstr=value)


async def fetch_eip155_transaction(
    rpc_url: str,
    transaction_hash: str,
    timeout: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> EIP155Transaction:
    """Look up a transaction with eth_getTransactionByHash; raises RpcError if unknown to the node"""
    client = JsonRpcClient(rpc_url, timeout=timeout, transport=transport)
    tx = await client.call("eth_getTransactionByHash", [transaction_hash])
    if not tx:
        raise RpcError("Transaction not found")

    return EIP155Transaction(
        hash=tx["hash"],
        block_number=_hex_int(tx.get("blockNumber")),
        block_hash=tx.get("blockHash"),
        transaction_index=_hex_int(tx.get("transactionIndex")),
        from_address=tx.get("from"),
        to_address=tx.get("to"),
        value=_hex_int(tx.get("value")) or 0,
        nonce=_hex_int(tx.get("nonce")),
        gas=_hex_int(tx.get("gas")),
        type=_hex_int(tx.get("type")) or 0,
    )
