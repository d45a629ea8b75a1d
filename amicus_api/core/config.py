"""
Application configuration loaded from environment variables.
"""

import re
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from amicus_api.core.log import resolve_level

_URL_PATTERN = re.compile(r"https?://[^\s/?#]+(/[^\s?#]*)?")


class Settings(BaseSettings):
    """Subscription API configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Row store (required)
    supabase_url: str = Field(min_length=1)
    supabase_anon_key: str = Field(min_length=1)
    subscriptions_table: str = "subscriptions"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS
    cors_origins: list[str] = ["*"]

    # Logging
    log_level: str = "info"
    log_format: Literal["json", "text"] = "json"

    @field_validator("supabase_url")
    @classmethod
    def _check_store_url(cls, value: str) -> str:
        value = value.strip()
        if not _URL_PATTERN.fullmatch(value):
            raise ValueError("must be an http(s) URL such as https://<project>.supabase.co")
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        resolve_level(value)
        return value.lower()


@lru_cache
def get_settings() -> Settings:
    return Settings()
