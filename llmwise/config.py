from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client defaults read from ``LLMWISE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LLMWISE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    # None means no client-side timeout
    timeout: Optional[float] = None


@lru_cache()
def get_settings() -> ClientSettings:
    return ClientSettings()
