from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Product store settings; flat fields so env overrides stay simple."""

    model_config = SettingsConfigDict(
        env_prefix="PRODUCT_STORE_",  # PRODUCT_STORE_DATA_DIR, PRODUCT_STORE_PORT, ...
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    data_dir: Path | None = Field(default=None, description="Directory holding one JSON file per product")
    file_extension: str = Field(default=".json")
    id_match: Literal["substring", "exact"] = Field(default="substring")
    json_indent: int = Field(default=4, ge=0)

    # Pagination
    default_page_limit: int = Field(default=10, ge=0)
    cursor_start_sentinel: str = Field(default="0")

    # HTTP
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, gt=0, le=65535)
    max_body_bytes: int = Field(default=10_000_000, gt=0)
    title: str = Field(default="Product Store")
    version: str = Field(default="0.1.0")

    # Logging; None means pick per environment
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = Field(default=None)
    log_format: Literal["plain", "json"] | None = Field(default=None)


@lru_cache
def _cached_settings() -> StoreSettings:
    return StoreSettings()


def get_settings(**kwargs) -> StoreSettings:
    """Build settings from the environment, applying non-None ``kwargs`` on top."""
    overrides = {k: v for k, v in kwargs.items() if v is not None}
    if not overrides:
        return _cached_settings()
    return StoreSettings(**overrides)
