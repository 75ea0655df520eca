"""Weather data providers."""

from weather_advisor.providers.base import (
    LocationNotFoundError,
    ProviderError,
    WeatherProvider,
)
from weather_advisor.providers.openmeteo import OpenMeteoProvider

__all__ = [
    "WeatherProvider",
    "ProviderError",
    "LocationNotFoundError",
    "OpenMeteoProvider",
]
