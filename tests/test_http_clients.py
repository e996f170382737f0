import json

import httpx
import pytest
from eth_abi import encode

from caip_utils.exceptions import HorizonError, RpcError
from caip_utils.namespaces.eip155 import (
    ChainlistClient,
    JsonRpcClient,
    fetch_eip155_transaction,
    fetch_erc20_token_info,
    load_static_chains,
    write_chains_snapshot,
)
from caip_utils.namespaces.eip155.chainlist import chains_from_list
from caip_utils.namespaces.eip155.rpc import (
    DECIMALS_SELECTOR,
    NAME_SELECTOR,
    SYMBOL_SELECTOR,
    TOTAL_SUPPLY_SELECTOR,
)
from caip_utils.namespaces.stellar import HorizonClient
from caip_utils.types import TransactionStatus

from conftest import ETH_TX, STELLAR_TX, USDC, USDC_ISSUER

RPC_URL = "https://rpc.example"


def _hex(types, values) -> str:
    return "0x" + encode(types, values).hex()


def eth_call_transport(results: dict) -> httpx.MockTransport:
    """Answer batched eth_calls by selector; selectors missing from ``results`` revert"""

    def handler(request: httpx.Request) -> httpx.Response:
        calls = json.loads(request.content)
        responses = []
        for call in calls:
            selector = call["params"][0]["data"]
            if selector in results:
                responses.append({"jsonrpc": "2.0", "id": call["id"], "result": results[selector]})
            else:
                responses.append({
                    "jsonrpc": "2.0",
                    "id": call["id"],
                    "error": {"code": 3, "message": "execution reverted"},
                })
        return httpx.Response(200, json=list(reversed(responses)))

    return httpx.MockTransport(handler)


class TestERC20TokenInfo:
    async def test_decodes_batch(self):
        transport = eth_call_transport({
            NAME_SELECTOR: _hex(["string"], ["USD Coin"]),
            SYMBOL_SELECTOR: _hex(["string"], ["USDC"]),
            DECIMALS_SELECTOR: _hex(["uint8"], [6]),
            TOTAL_SUPPLY_SELECTOR: _hex(["uint256"], [2**200]),
        })
        info = await fetch_erc20_token_info(RPC_URL, USDC, transport=transport)
        assert info.name == "USD Coin"
        assert info.symbol == "USDC"
        assert info.decimals == 6
        assert info.total_supply == 2**200
        assert info.rpc_url == RPC_URL

    async def test_bytes32_symbol(self):
        transport = eth_call_transport({
            NAME_SELECTOR: "0x" + b"Maker".ljust(32, b"\x00").hex(),
            SYMBOL_SELECTOR: "0x" + b"MKR".ljust(32, b"\x00").hex(),
        })
        info = await fetch_erc20_token_info(RPC_URL, USDC, transport=transport)
        assert info.name == "Maker"
        assert info.symbol == "MKR"
        assert info.decimals is None

    async def test_no_contract(self):
        transport = eth_call_transport({
            NAME_SELECTOR: "0x",
            SYMBOL_SELECTOR: "0x",
            DECIMALS_SELECTOR: "0x",
            TOTAL_SUPPLY_SELECTOR: "0x",
        })
        with pytest.raises(RpcError, match="No token contract found"):
            await fetch_erc20_token_info(RPC_URL, "0x" + "0" * 40, transport=transport)

    async def test_http_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(503))
        with pytest.raises(httpx.HTTPStatusError):
            await fetch_erc20_token_info(RPC_URL, USDC, transport=transport)


class TestJsonRpcClient:
    async def test_error_object(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={
            "jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "Method not found"},
        }))
        client = JsonRpcClient(RPC_URL, transport=transport)
        with pytest.raises(RpcError, match="code -32601: Method not found"):
            await client.call("eth_foo")

    async def test_batch_missing_ids(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[
            {"jsonrpc": "2.0", "id": 1, "result": "0x1"},
        ]))
        client = JsonRpcClient(RPC_URL, transport=transport)
        with pytest.raises(RpcError, match="missing ids"):
            await client.batch([("eth_blockNumber", []), ("eth_chainId", [])])

    def test_requires_url(self):
        with pytest.raises(ValueError):
            JsonRpcClient("  ")


class TestTransactionLookup:
    async def test_decodes_hex_fields(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={
            "jsonrpc": "2.0",
            "id": 1,
            "result": {
                "hash": ETH_TX,
                "blockNumber": "0x121eac0",
                "blockHash": "0x" + "ab" * 32,
                "transactionIndex": "0x5",
                "from": "0x" + "1" * 40,
                "to": None,
                "value": "0xde0b6b3a7640000",
                "nonce": "0x2a",
                "gas": "0x5208",
                "type": "0x2",
            },
        }))
        tx = await fetch_eip155_transaction(RPC_URL, ETH_TX, transport=transport)
        assert tx.block_number == 19000000
        assert tx.value == 10**18
        assert tx.nonce == 42
        assert tx.gas == 21000
        assert tx.type == 2
        assert tx.to_address is None
        assert not tx.is_pending

    async def test_not_found(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={
            "jsonrpc": "2.0", "id": 1, "result": None,
        }))
        with pytest.raises(RpcError, match="Transaction not found"):
            await fetch_eip155_transaction(RPC_URL, ETH_TX, transport=transport)

    async def test_empty_hex_fields(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={
            "jsonrpc": "2.0",
            "id": 1,
            "result": {"hash": ETH_TX, "blockNumber": "0x10", "nonce": "0x", "value": "0x", "gas": ""},
        }))
        tx = await fetch_eip155_transaction(RPC_URL, ETH_TX, transport=transport)
        assert tx.block_number == 16
        assert tx.nonce is None
        assert tx.gas is None
        assert tx.value == 0


class TestChainlistClient:
    async def test_indexes_by_chain_id(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[
            {"chainId": 1, "name": "Ethereum Mainnet", "rpc": [{"url": "https://eth.example"}]},
            {"chainId": 250, "name": "Fantom Opera", "slip44": 1007},
            {"name": "no id"},
            {"chainId": 5, "nativeCurrency": "broken"},
            "junk",
        ]))
        chains = await ChainlistClient("https://chainlist.example/rpcs.json", transport=transport).fetch_chains()
        assert set(chains) == {"1", "250"}
        assert chains["1"].rpc_urls == ["https://eth.example"]
        assert chains["250"].slip44 == 1007

    def test_keeps_chains_with_null_fields(self):
        chains = chains_from_list([
            {"chainId": 5, "name": "Goerli", "explorers": None, "rpc": ["https://goerli.example"]},
            {"chainId": 6, "name": "Kotti", "rpc": None},
            {"chainId": 7, "name": "ThaiChain", "nativeCurrency": {"symbol": "TCH"}},
        ])
        assert set(chains) == {"5", "6", "7"}
        assert chains["5"].explorer_url is None
        assert chains["5"].http_rpc_urls == ["https://goerli.example"]
        assert chains["6"].rpc_urls == []
        assert chains["7"].nativeCurrency.symbol == "TCH"
        assert chains["7"].nativeCurrency.decimals is None

    async def test_rejects_non_list(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"chains": []}))
        with pytest.raises(ValueError):
            await ChainlistClient("https://chainlist.example", transport=transport).fetch_chains()

    def test_snapshot_round_trip(self, tmp_path, static_chains):
        path = write_chains_snapshot(static_chains, tmp_path / "chains.json")
        assert load_static_chains(path) == static_chains


class TestHorizonClient:
    async def test_asset_found(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/assets"
            assert request.url.params["asset_code"] == "USDC"
            assert request.url.params["asset_issuer"] == USDC_ISSUER
            return httpx.Response(200, json={"_embedded": {"records": [
                {"asset_code": "USDC", "asset_issuer": USDC_ISSUER},
            ]}})

        horizon = HorizonClient("https://horizon.example/", transport=httpx.MockTransport(handler))
        record = await horizon.fetch_asset_info(f"USDC-{USDC_ISSUER}")
        assert record["asset_code"] == "USDC"

    async def test_asset_missing(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"_embedded": {"records": []}}))
        horizon = HorizonClient("https://horizon.example", transport=transport)
        assert await horizon.fetch_asset_info(f"USDC-{USDC_ISSUER}") is None

    async def test_malformed_asset_reference(self):
        horizon = HorizonClient("https://horizon.example")
        with pytest.raises(HorizonError, match="CODE-ISSUER"):
            await horizon.fetch_asset_info("USDC")

    @pytest.mark.parametrize("status_code, expected", [
        (200, TransactionStatus.SUCCESS),
        (404, TransactionStatus.PENDING),
        (400, TransactionStatus.ERROR),
        (500, TransactionStatus.UNKNOWN),
    ])
    async def test_transaction_status(self, status_code, expected):
        transport = httpx.MockTransport(lambda request: httpx.Response(status_code, json={}))
        horizon = HorizonClient("https://horizon.example", transport=transport)
        assert await horizon.fetch_transaction_info(STELLAR_TX) is expected

    async def test_transaction_network_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline", request=request)

        horizon = HorizonClient("https://horizon.example", transport=httpx.MockTransport(handler))
        assert await horizon.fetch_transaction_info(STELLAR_TX) is TransactionStatus.UNKNOWN
