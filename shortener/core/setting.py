"""
Configuration Settings

Application configuration using Pydantic Settings.
All values are loaded from environment variables or a .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Defaults to a local SQLite file so the service starts with no setup
- PORT keeps its conventional name so hosting platforms can inject it
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["EnvSettingsOptions", "Settings", "get_settings"]


class EnvSettingsOptions(Enum):
    """Environment options for deployment."""
    production = "production"
    staging = "staging"
    development = "dev"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    ENV_SETTING: EnvSettingsOptions = Field(
        default=EnvSettingsOptions.development,
        description="Environment setting (production, staging, dev)"
    )

    # For SQLite: sqlite+aiosqlite:///./shortener.db (default)
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./shortener.db",
        description="Async SQLAlchemy connection string"
    )

    BASE_URL: Optional[str] = Field(
        default=None,
        description="Public base URL for short links; the request host is used when unset"
    )
    HOST: str = Field(default="0.0.0.0", description="Address the server binds to")
    PORT: int = Field(default=3000, description="Port the server listens on")
    LOG_LEVEL: str = Field(default="INFO", description="Root logging level")

    SHORT_CODE_LENGTH: int = Field(
        default=6,
        gt=0,
        description="Length of generated short codes (62^6 is about 56.8 billion codes)"
    )
    SHORT_CODE_MAX_ATTEMPTS: int = Field(
        default=10,
        gt=0,
        description="How many candidate codes to try before giving up on a create"
    )

    REDIRECT_DELAY_SECONDS: int = Field(
        default=3,
        ge=0,
        description="Seconds the preview page waits before redirecting"
    )

    RATE_LIMIT_ENABLED: bool = Field(
        default=True,
        description="Enable per-IP rate limiting"
    )


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
