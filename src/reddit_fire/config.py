# ABOUTME: Centralized configuration using Pydantic Settings.
# ABOUTME: Loads runtime settings from FIRE_* environment variables and .env file.

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

REDDIT_BASE_URL = "https://www.reddit.com"


class ConfigurationError(Exception):
    """Raised when the feed configuration is missing, malformed, or unusable."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FIRE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Feed configuration file
    config_path: Path = Path.home() / ".fire.json"

    # Collection
    timeout: float = Field(default=3.0, ge=0)  # 0 waits for every feed
    request_timeout: float = 10.0
    base_url: str = REDDIT_BASE_URL
    user_agent: str = "reddit-fire/0.1.0 (personal feed reader)"

    # Browser output
    host: str = "127.0.0.1"
    port: int = Field(default=17000, ge=1, le=65535)

    # Logging
    log_level: str = "WARNING"
    log_format: str = "console"  # "console" or "json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded from environment variables and .env file.
    Command-line flags are applied on top with ``model_copy``.
    """
    return Settings()
