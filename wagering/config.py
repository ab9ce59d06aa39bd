"""Configuration for settlement limits and finalize behaviour."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WageringSettings(BaseSettings):
    max_bet_amount: Decimal = Field(default=Decimal("10000"))
    max_individual_settlement: Decimal = Field(default=Decimal("50000"))
    max_total_settlement: Decimal = Field(default=Decimal("100000"))
    notify_on_finalize: bool = True

    model_config = SettingsConfigDict(
        env_prefix="WAGERING_", env_file=".env", extra="ignore"
    )


@lru_cache(maxsize=1)
def get_settings() -> WageringSettings:
    """Return cached wagering settings."""

    return WageringSettings()


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


__all__ = ["WageringSettings", "get_settings", "reset_settings_cache"]
