"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
Every setting has a usable default, so the advisor runs without any
configuration at all.

## Optional Environment Variables

- WEATHER_ADVISOR_LOG_LEVEL: Root log level for the CLI (default: WARNING)
- WEATHER_ADVISOR_DEFAULT_LOCATION: City used when nothing else is known
- WEATHER_ADVISOR_PREFERENCES_PATH: Where user preferences are stored
- WEATHER_ADVISOR_REQUEST_TIMEOUT_SECONDS: HTTP timeout for weather requests
- WEATHER_ADVISOR_GEOLOCATION_TIMEOUT_SECONDS: Upper bound for geolocation

## Example .env file

```
WEATHER_ADVISOR_DEFAULT_LOCATION=Oslo
WEATHER_ADVISOR_LOG_LEVEL=INFO
```
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_ADVISOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    # Weather provider (Open-Meteo)
    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    user_agent: str = "weather-advisor/0.1.0"
    request_timeout_seconds: float = Field(default=30.0, gt=0, le=300)

    # Geolocation
    ip_geolocation_url: str = "https://ipapi.co/json/"
    geolocation_timeout_seconds: float = Field(default=5.0, gt=0, le=60)

    # Locations
    default_location: str = "London"

    # Preferences
    preferences_path: Path = Field(
        default=Path.home() / ".weather_advisor" / "preferences.json",
        description="JSON file holding user preferences",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug flag."""
        return "DEBUG" if self.debug else self.log_level


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()


def get_settings_uncached() -> Settings:
    """Get fresh settings without caching.

    Useful for testing when environment variables change.
    """
    return Settings()
