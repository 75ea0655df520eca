"""Open-Meteo weather provider.

## API Documentation Summary
Source: https://open-meteo.com/en/docs
Source: https://open-meteo.com/en/docs/geocoding-api

## Endpoints
- Geocoding: https://geocoding-api.open-meteo.com/v1/search?name=Oslo&count=1
- Forecast: https://api.open-meteo.com/v1/forecast?latitude=59.91&longitude=10.75&current=...

## Authentication
- No API key required for non-commercial use

## Geocoding Response
```json
{
  "results": [
    {"name": "Oslo", "latitude": 59.91, "longitude": 10.75,
     "country_code": "NO", "country": "Norway"}
  ]
}
```
A missing or empty `results` list means the place is unknown.

## Forecast Response (current block only)
```json
{
  "current": {
    "time": "2024-01-01T12:00",
    "temperature_2m": 5.2,
    "relative_humidity_2m": 81,
    "wind_speed_10m": 3.1,
    "wind_direction_10m": 200,
    "weather_code": 61,
    "surface_pressure": 1002.4
  }
}
```

## Variable Translation (Open-Meteo -> Provider Payload)
| Open-Meteo Field | Payload Field | Unit | Notes |
|------------------|---------------|------|-------|
| temperature_2m | main.temp | °C | Direct mapping |
| relative_humidity_2m | main.humidity | % | Direct mapping |
| surface_pressure | main.pressure | hPa | Direct mapping |
| wind_speed_10m | wind.speed | m/s | Requested with wind_speed_unit=ms |
| wind_direction_10m | wind.deg | degrees | 0=N, 90=E |
| weather_code | weather[0].code | WMO | Name and description from tables |
| (none) | visibility | m | Not provided, defaults to 10000 |
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from weather_advisor.models.location import Coordinates, GeocodedPlace
from weather_advisor.models.weather import DEFAULT_VISIBILITY_M
from weather_advisor.normalizer import condition_from_code
from weather_advisor.providers.base import (
    LocationNotFoundError,
    ProviderError,
    WeatherProvider,
)

logger = logging.getLogger(__name__)

CURRENT_VARIABLES = (
    "temperature_2m",
    "relative_humidity_2m",
    "wind_speed_10m",
    "wind_direction_10m",
    "weather_code",
    "surface_pressure",
)

CODE_DESCRIPTIONS: dict[int, str] = {
    0: "clear sky",
    1: "mainly clear",
    2: "partly cloudy",
    3: "overcast",
    45: "fog",
    48: "depositing rime fog",
    51: "light drizzle",
    53: "moderate drizzle",
    55: "dense drizzle",
    56: "light freezing drizzle",
    57: "dense freezing drizzle",
    61: "slight rain",
    63: "moderate rain",
    65: "heavy rain",
    66: "light freezing rain",
    67: "heavy freezing rain",
    71: "slight snow",
    73: "moderate snow",
    75: "heavy snow",
    77: "snow grains",
    80: "slight rain showers",
    81: "moderate rain showers",
    82: "violent rain showers",
    85: "slight snow showers",
    86: "heavy snow showers",
    95: "thunderstorm",
    96: "thunderstorm with slight hail",
    99: "thunderstorm with heavy hail",
}

CURRENT_LOCATION_NAME = "Current Location"


def describe_code(code: int | None) -> str:
    """Human-readable description for a WMO weather code."""
    if code is None:
        return "unknown conditions"
    return CODE_DESCRIPTIONS.get(code, "unknown conditions")


class OpenMeteoProvider(WeatherProvider):
    """Open-Meteo geocoding and current-conditions provider.

    Example:
        ```python
        async with OpenMeteoProvider() as provider:
            payload = await provider.get_current_weather("Oslo")
            observation = normalize(payload)
        ```
    """

    name = "open-meteo"

    def __init__(
        self,
        geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search",
        forecast_url: str = "https://api.open-meteo.com/v1/forecast",
        user_agent: str | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the Open-Meteo provider.

        Args:
            geocoding_url: Geocoding search endpoint
            forecast_url: Forecast endpoint
            user_agent: User-Agent string for requests
            timeout: Request timeout in seconds
            client: Pre-built HTTP client
        """
        super().__init__(user_agent=user_agent, timeout=timeout, client=client)
        self.geocoding_url = geocoding_url
        self.forecast_url = forecast_url

    async def geocode(self, city: str) -> GeocodedPlace:
        """Resolve a city name with the Open-Meteo geocoding API."""
        data = await self._fetch_json(
            self.geocoding_url,
            params={"name": city, "count": 1, "language": "en", "format": "json"},
        )

        results = data.get("results") or []
        if not results:
            logger.info(f"Geocoding found no match for {city!r}")
            raise LocationNotFoundError(city, provider=self.name)

        result = results[0]
        try:
            coordinates = Coordinates(
                latitude=result["latitude"], longitude=result["longitude"]
            )
        except (KeyError, ValueError) as e:
            raise ProviderError(
                f"Invalid geocoding result: {e}", provider=self.name
            ) from e

        return GeocodedPlace(
            name=result.get("name") or city,
            country=result.get("country_code") or result.get("country") or "Unknown",
            coordinates=coordinates,
        )

    async def get_weather_by_coordinates(
        self,
        coordinates: Coordinates,
        place_name: str | None = None,
        country: str | None = None,
    ) -> dict[str, Any]:
        """Get current conditions from the Open-Meteo forecast API."""
        params = {
            "latitude": coordinates.latitude,
            "longitude": coordinates.longitude,
            "current": ",".join(CURRENT_VARIABLES),
            "wind_speed_unit": "ms",
            "timezone": "auto",
        }
        data = await self._fetch_json(self.forecast_url, params=params)
        return self._translate_response(data, coordinates, place_name, country)

    def _translate_response(
        self,
        response_data: dict[str, Any],
        coordinates: Coordinates,
        place_name: str | None = None,
        country: str | None = None,
    ) -> dict[str, Any]:
        """Translate an Open-Meteo response to the provider payload shape.

        See module docstring for the field mapping. Missing values are left
        as None so the normalizer decides what is required.
        """
        current = response_data.get("current")
        if not isinstance(current, dict):
            raise ProviderError(
                "Response has no current conditions", provider=self.name
            )

        code = current.get("weather_code")
        if isinstance(code, float) and code.is_integer():
            code = int(code)
        condition = condition_from_code(code) if isinstance(code, int) else None

        return {
            "name": place_name or CURRENT_LOCATION_NAME,
            "sys": {"country": country or "Unknown"},
            "coord": {"lat": coordinates.latitude, "lon": coordinates.longitude},
            "main": {
                "temp": current.get("temperature_2m"),
                "humidity": current.get("relative_humidity_2m"),
                "pressure": current.get("surface_pressure"),
            },
            "wind": {
                "speed": current.get("wind_speed_10m"),
                "deg": current.get("wind_direction_10m"),
            },
            "weather": [
                {
                    "main": condition.value.title() if condition else "Unknown",
                    "description": describe_code(code if isinstance(code, int) else None),
                    "code": code,
                }
            ],
            "visibility": DEFAULT_VISIBILITY_M,
            "time": current.get("time"),
        }
