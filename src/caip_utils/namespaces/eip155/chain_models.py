from typing import Optional, List, Union
from pydantic import BaseModel, ConfigDict, field_validator


class RpcEndpoint(BaseModel):
    url: str
    tracking: Optional[str] = None
    isOpenSource: Optional[bool] = None


class NativeCurrency(BaseModel):
    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = None


class Explorer(BaseModel):
    name: Optional[str] = None
    url: str
    standard: Optional[str] = None
    icon: Optional[str] = None


class ChainInfo(BaseModel):
    """Chain metadata in the chainlist.org shape"""
    model_config = ConfigDict(extra="allow")

    chainId: int
    name: str
    shortName: Optional[str] = None
    nativeCurrency: Optional[NativeCurrency] = None
    explorers: List[Explorer] = []
    rpc: List[Union[RpcEndpoint, str]] = []
    infoURL: Optional[str] = None
    slip44: Optional[int] = None

    @field_validator("explorers", "rpc", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return [] if value is None else value

    @property
    def explorer_url(self) -> Optional[str]:
        """URL of the first listed explorer, without a trailing slash"""
        if not self.explorers:
            return None
        return self.explorers[0].url.rstrip("/")

    @property
    def rpc_urls(self) -> List[str]:
        """RPC URLs whether listed as plain strings or endpoint objects"""
        return [entry if isinstance(entry, str) else entry.url for entry in self.rpc]

    @property
    def http_rpc_urls(self) -> List[str]:
        """HTTP(S) RPC URLs that need no API key substitution"""
        return [
            url for url in self.rpc_urls
            if url.startswith(("http://", "https://")) and "$" not in url
        ]
