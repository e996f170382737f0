"""
Configuration settings for CAIP resolution.
"""

from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Remote sources, cache lifetime and request limits, all overridable via CAIP_* env vars."""

    model_config = SettingsConfigDict(
        env_prefix="CAIP_",
        env_file=".env",
        extra="ignore",
    )

    CHAINLIST_URL: str = "https://chainlist.org/rpcs.json"
    CHAINLIST_TTL_SECONDS: int = 3600
    HORIZON_URL: str = "https://horizon.stellar.org"

    REQUEST_TIMEOUT: float = 10.0
    MAX_RPC_ATTEMPTS: int = Field(3, ge=1)

    # Falls back to the snapshot bundled with the package
    CHAINS_SNAPSHOT_PATH: Optional[Path] = None

    LOG_LEVEL: str = "WARNING"


settings = Settings()
