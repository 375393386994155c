"""Typed settings configuration - single source of truth."""

from datetime import date
from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Persistence
    data_dir: Path = Path.home() / ".tripbook"
    storage_key: str = "trip_state_v1"

    # Trip
    trip_start: date = date(2025, 12, 15)
    trip_end: date = date(2026, 1, 5)
    trip_location: str = "Taipei, Taiwan"
    map_query_suffix: str = "Taiwan"
    location_lat: float = 25.0330
    location_lon: float = 121.5654

    # Money
    default_exchange_rate: float = 0.15  # 1 TWD = 0.15 MYR (approx)
    default_budget_limit_myr: float = 5000.0

    # Weather
    forecast_days: int = 3
    weather_base_url: str = "https://api.open-meteo.com/v1/forecast"

    # Place lookup
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"

    # Timeouts (milliseconds)
    lookup_timeout_ms: int = 8000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
