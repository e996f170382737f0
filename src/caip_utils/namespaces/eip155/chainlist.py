import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from .chain_models import ChainInfo

logger = logging.getLogger(__name__)

SNAPSHOT_FILE = Path(__file__).parent / "chains_snapshot.json"


def chains_from_list(chain_list: Any) -> Dict[str, ChainInfo]:
    """Index a chainlist array by chain id string, skipping unusable entries"""
    if not isinstance(chain_list, list):
        raise ValueError("Unexpected chainlist response (not a list)")

    chains: Dict[str, ChainInfo] = {}
    for item in chain_list:
        if not isinstance(item, dict) or not item.get("chainId"):
            continue
        try:
            chain = ChainInfo.model_validate(item)
        except ValidationError as e:
            logger.debug(f"Skipping chainlist entry {item.get('chainId')}: {e}")
            continue
        chains[str(chain.chainId)] = chain
    return chains


class ChainlistClient:
    def __init__(
        self,
        url: str = "https://chainlist.org/rpcs.json",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def fetch_chains(self) -> Dict[str, ChainInfo]:
        """Fetch the remote chain list keyed by chain id string"""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(self.url)
            response.raise_for_status()
            chains = chains_from_list(response.json())

        if not chains:
            raise ValueError("Chainlist returned an empty or unparseable chain set")
        return chains


def load_static_chains(path: Optional[Path] = None) -> Dict[str, ChainInfo]:
    """Load a chain snapshot (defaults to the one bundled with the package)"""
    snapshot_file = Path(path) if path else SNAPSHOT_FILE
    with open(snapshot_file, "r", encoding="utf-8") as f:
        snapshot = json.load(f)
    return {key: ChainInfo.model_validate(value) for key, value in snapshot.items()}


def write_chains_snapshot(chains: Dict[str, ChainInfo], path: Optional[Path] = None) -> Path:
    """Write chain data as a snapshot file and return its path"""
    snapshot_file = Path(path) if path else SNAPSHOT_FILE
    data = {
        key: chain.model_dump(mode="json", exclude_none=True)
        for key, chain in sorted(chains.items(), key=lambda item: int(item[0]))
    }
    with open(snapshot_file, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    logger.info(f"Wrote {len(data)} chains to {snapshot_file}")
    return snapshot_file
