"""Application settings and configuration."""

from datetime import date
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from cartera.core.periods import DEFAULT_HISTORY_START
from cartera.core.timezone import DEFAULT_TZ_NAME


def get_default_data_dir() -> Path:
    """Return the default snapshot directory."""
    return Path.cwd() / "data"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Cartera"
    app_version: str = "0.1.0"

    # Directory holding portfolio.json, prices.json, transactions.json, ...
    data_dir: Optional[Path] = None

    log_level: str = "INFO"

    # "Today" and period presets are evaluated in this timezone
    timezone: str = DEFAULT_TZ_NAME
    history_start: date = DEFAULT_HISTORY_START

    # Listing behavior
    movements_page_size: int = 20
    ticker_page_size: int = 5
    max_compare_periods: int = 3

    def get_data_dir(self) -> Path:
        """Get the snapshot directory (not created; snapshots are read-only)."""
        return self.data_dir or get_default_data_dir()


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
