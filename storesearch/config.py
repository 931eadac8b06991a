"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSettings(BaseModel):
    search_url: HttpUrl = Field(
        default="https://itunes.apple.com/search",
        description="iTunes Search API endpoint.",
    )
    lang: str = Field(default="en_us", min_length=2)
    request_timeout_seconds: float = Field(default=10, gt=0, le=60)
    user_agent: str = "storesearch/0.1"


class SearchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STORESEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: str = "INFO"
    debounce_seconds: float = Field(default=0.3, ge=0, le=5)
    single_scope_limit: int = Field(default=20, ge=1, le=200)
    fan_out_limit: int = Field(default=50, ge=1, le=200)

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper() or "INFO"
        return value


@lru_cache
def get_settings() -> SearchSettings:
    """Return cached settings instance."""

    return SearchSettings()


__all__ = [
    "CatalogSettings",
    "SearchSettings",
    "get_settings",
]
