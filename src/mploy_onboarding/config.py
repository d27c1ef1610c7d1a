"""
Mploy Onboarding - Configuration and settings.

OnboardingSettings holds the tunables of the wizard engine (age bounds,
default search radius) plus the optional Supabase connection used by the
bundled profile submitter.
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class OnboardingSettings(BaseSettings):
    """
    Onboarding engine settings.

    Loaded from the environment (and .env). Supabase fields are optional;
    only the Supabase profile submitter needs them.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    mploy_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Validation bounds
    min_age: int = 18
    max_age: int = 100

    # Job seeker location
    default_search_radius_km: int = 10

    # Supabase (optional)
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None
    profiles_table: str = "users"

    @property
    def is_development(self) -> bool:
        return self.mploy_env == "development"

    @property
    def is_production(self) -> bool:
        return self.mploy_env == "production"


@lru_cache
def get_settings() -> OnboardingSettings:
    """Get cached settings instance."""
    return OnboardingSettings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: OnboardingSettings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level to the package logger."""
    logging.getLogger("mploy_onboarding").setLevel(level or settings.log_level)
