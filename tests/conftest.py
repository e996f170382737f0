from typing import Any, Dict, List, Optional

import httpx
import pytest

from caip_utils.namespaces import NamespaceRegistry
from caip_utils.namespaces.eip155 import (
    ChainDataCache,
    ChainInfo,
    EIP155Resolver,
    EIP155Transaction,
    TokenInfo,
    load_static_chains,
)
from caip_utils.namespaces.stellar import StellarResolver
from caip_utils.types import TransactionStatus


USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
BAYC = "0xBC4CA0EdA7647A8aB7C2061c2E118A18a936f13D"
CRYPTOKITTIES = "0x06012c8cf97BEaD5deAe237070F9587f8E7A266d"
ETH_ACCOUNT = "0x742d35Cc6634C0532925a3b8D4f25A2E7F2b4b2b"
ETH_TX = "0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef"
STELLAR_ACCOUNT = "GCKFBEIYTKP5RDBKX6XVQQ2YBZJQKJ4XQMF7XJKFBKJQKJ4XQMF7XJK"
STELLAR_TX = "28ca90240d17b8d59b7b5a55d4494214befa5afb4feeb09bc43676c5e734e81f"
USDC_ISSUER = "GA5ZSEJYB37JRC5AVCIA5MOP4RHTM335X2KGX3IHOJAPP5RE34K4KZVN"


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeChainFetcher:
    """Stands in for ChainlistClient.fetch_chains"""

    def __init__(self, chains: Optional[Dict[str, ChainInfo]] = None, error: Optional[Exception] = None):
        self.chains = chains
        self.error = error
        self.calls = 0

    async def __call__(self) -> Dict[str, ChainInfo]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.chains


class FakeRpc:
    """Records endpoint attempts; fails for URLs listed in ``failing``"""

    def __init__(self, result: Any = None, failing: Optional[List[str]] = None):
        self.result = result
        self.failing = failing or []
        self.attempts: List[str] = []

    async def __call__(self, rpc_url: str, target: str) -> Any:
        self.attempts.append(rpc_url)
        if rpc_url in self.failing or "*" in self.failing:
            raise httpx.ConnectError(f"cannot reach {rpc_url}")
        return self.result


class FakeHorizon:
    def __init__(
        self,
        assets: Optional[Dict[str, Dict[str, Any]]] = None,
        transaction_status: TransactionStatus = TransactionStatus.SUCCESS,
        error: Optional[Exception] = None,
    ):
        self.assets = assets or {}
        self.transaction_status = transaction_status
        self.error = error
        self.calls: List[str] = []

    async def fetch_asset_info(self, asset_reference: str) -> Optional[Dict[str, Any]]:
        self.calls.append(asset_reference)
        if self.error is not None:
            raise self.error
        return self.assets.get(asset_reference)

    async def fetch_transaction_info(self, transaction_hash: str) -> TransactionStatus:
        self.calls.append(transaction_hash)
        return self.transaction_status


def chain_info(chain_id: int, name: str, **fields: Any) -> ChainInfo:
    return ChainInfo.model_validate({"chainId": chain_id, "name": name, **fields})


@pytest.fixture
def static_chains() -> Dict[str, ChainInfo]:
    return load_static_chains()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def offline_fetcher() -> FakeChainFetcher:
    return FakeChainFetcher(error=httpx.ConnectError("offline"))


@pytest.fixture
def chain_data(static_chains, offline_fetcher, clock) -> ChainDataCache:
    return ChainDataCache(offline_fetcher, static_chains, ttl_seconds=3600, clock=clock)


@pytest.fixture
def token_fetcher() -> FakeRpc:
    return FakeRpc(TokenInfo(name="USD Coin", symbol="USDC", decimals=6, total_supply=10**15))


@pytest.fixture
def transaction_fetcher() -> FakeRpc:
    return FakeRpc(EIP155Transaction(hash=ETH_TX, block_number=19000000))


@pytest.fixture
def eip155(chain_data, token_fetcher, transaction_fetcher) -> EIP155Resolver:
    return EIP155Resolver(
        chain_data,
        token_fetcher=token_fetcher,
        transaction_fetcher=transaction_fetcher,
    )


@pytest.fixture
def horizon() -> FakeHorizon:
    return FakeHorizon(assets={
        f"USDC-{USDC_ISSUER}": {"asset_code": "USDC", "asset_issuer": USDC_ISSUER},
    })


@pytest.fixture
def stellar(horizon) -> StellarResolver:
    return StellarResolver(horizon)


@pytest.fixture
def registry(eip155, stellar) -> NamespaceRegistry:
    return NamespaceRegistry([eip155, stellar])
