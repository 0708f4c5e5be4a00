"""Pydantic Settings configuration models.

3-tier config hierarchy (lowest to highest priority):
1. Pydantic defaults (in code below)
2. .env file (loaded by Pydantic Settings)
3. Environment variables (e.g., ADMIN_API__BASE_URL=https://api.example.com)
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
VALID_LOG_FORMATS = frozenset({"console", "json"})


class ApiConfig(BaseModel):
    """Order/catalog API connection configuration."""

    base_url: str = "http://localhost:5000/api"
    timeout_seconds: float = Field(default=10.0, gt=0, le=120)
    token: str = ""

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {v!r}")
        return v.rstrip("/")


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Env var examples:
        ADMIN_LOG_LEVEL=DEBUG
        ADMIN_API__BASE_URL=https://shop.example.com/api
        ADMIN_API__TOKEN=eyJhbGciOi...
    """

    model_config = SettingsConfigDict(
        env_prefix="ADMIN_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    log_format: str = "console"
    api: ApiConfig = ApiConfig()
    page_size: int = Field(default=10, ge=1, le=100)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got {v}"
            )
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in VALID_LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {sorted(VALID_LOG_FORMATS)}, got {v}"
            )
        return v
