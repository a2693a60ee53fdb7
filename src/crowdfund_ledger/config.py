"""Application configuration via pydantic-settings.

Reads from .env file or environment variables. All settings are validated
at startup — if a setting is malformed, the app fails fast with a clear
error message.

Usage:
    from crowdfund_ledger.config import get_settings
    settings = get_settings()
    print(settings.campaign_duration_seconds)
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the Crowdfund Ledger."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = True
    app_log_level: str = "DEBUG"
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    # --- Campaigns ---
    campaign_duration_seconds: int = Field(default=5 * 24 * 60 * 60, gt=0)

    # --- Funds host ---
    escrow_account: str = "ESCROW"
    wallet_opening_balance: int = Field(default=0, ge=0)

    # --- Time source ---
    # "manual" enables POST /api/v1/clock/advance for local testing
    clock_mode: Literal["system", "manual"] = "system"

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def campaign_window(self) -> timedelta:
        """Fixed funding window applied to every new campaign."""
        return timedelta(seconds=self.campaign_duration_seconds)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the application settings."""
    return Settings()
