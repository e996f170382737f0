import logging
from typing import Any, Dict, Optional

import httpx

from ...exceptions import HorizonError
from ...types import TransactionStatus

logger = logging.getLogger(__name__)


def split_asset_reference(asset_reference: str) -> tuple[str, str]:
    """Split ``CODE-ISSUER`` into asset code and issuer account"""
    asset_code, dash, asset_issuer = asset_reference.partition("-")
    if not dash or not asset_code or not asset_issuer:
        raise HorizonError(f"Stellar asset reference must be CODE-ISSUER, got {asset_reference}")
    return asset_code, asset_issuer


class HorizonClient:
    def __init__(
        self,
        base_url: str = "https://horizon.stellar.org",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def fetch_asset_info(self, asset_reference: str) -> Optional[Dict[str, Any]]:
        """
        Look up an issued asset.

        Returns:
            The first matching asset record, or None if Horizon knows no such asset

        Raises:
            HorizonError: On a malformed reference or unexpected response
            httpx.HTTPError: On network failure or an error status
        """
        asset_code, asset_issuer = split_asset_reference(asset_reference)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(
                f"{self.base_url}/assets",
                params={"asset_issuer": asset_issuer, "asset_code": asset_code},
            )
            response.raise_for_status()
            data = response.json()

        if not isinstance(data, dict):
            raise HorizonError("Unexpected Horizon assets response (non-object)")
        records = data.get("_embedded", {}).get("records") or []
        return records[0] if records else None

    async def fetch_transaction_info(self, transaction_hash: str) -> TransactionStatus:
        """Map the status of a Horizon transaction lookup; network failures count as unknown"""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(f"{self.base_url}/transactions/{transaction_hash}")
        except httpx.HTTPError as e:
            logger.warning(f"Horizon transaction lookup failed for {transaction_hash}: {e}")
            return TransactionStatus.UNKNOWN

        if response.status_code == 200:
            return TransactionStatus.SUCCESS
        elif response.status_code == 404:
            return TransactionStatus.PENDING
        elif response.status_code == 400:
            return TransactionStatus.ERROR
        return TransactionStatus.UNKNOWN
