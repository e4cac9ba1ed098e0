"""Application settings and configuration."""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Livefolio"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Upstream market data site
    upstream_base_url: str = "https://www.nseindia.com"
    upstream_timeout_seconds: float = 10.0

    # Fetch client limits
    max_connections: int = 5
    max_fetch_attempts: int = 10
    fetch_retry_delay_seconds: float = 0.25

    # Session credential rotation
    credential_max_age_seconds: float = 60.0
    credential_max_uses: int = 10

    # Live feed
    poll_interval_seconds: float = 5.0
    market_data_provider: Literal["nse", "stub"] = "nse"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (used by tests and embedding code)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
