"""Base weather provider abstraction.

This module defines the interface for weather data providers. Providers
resolve a city name or a coordinate pair to a raw current-conditions
payload in the provider shape understood by `weather_advisor.normalizer`.

## Provider Payload Shape

```json
{
  "name": "Oslo",
  "sys": {"country": "NO"},
  "coord": {"lat": 59.91, "lon": 10.75},
  "main": {"temp": 5.2, "humidity": 81, "pressure": 1002.4},
  "wind": {"speed": 3.1, "deg": 200},
  "weather": [{"main": "Rain", "description": "slight rain", "code": 61}],
  "visibility": 10000
}
```

### Canonical Units (SI-based)
- Temperature: Celsius (°C)
- Wind speed: meters per second (m/s)
- Pressure: hectopascals (hPa)
- Visibility: meters (m)
- Humidity: percentage (0-100)

## Failure Model

Requests are sent once; there is no retry. A failed request raises
`ProviderError` (or `LocationNotFoundError` when a city cannot be
resolved) and the caller decides what to show the user.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from weather_advisor.models.location import Coordinates, GeocodedPlace

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Base exception for weather provider errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class LocationNotFoundError(ProviderError):
    """Raised when a place name cannot be geocoded."""

    def __init__(self, query: str, provider: str):
        super().__init__(f'Could not find location for "{query}"', provider=provider)
        self.query = query


class WeatherProvider(ABC):
    """Abstract base class for current-weather providers.

    Attributes:
        name: Human-readable provider name

    Example:
        ```python
        async with OpenMeteoProvider() as provider:
            payload = await provider.get_current_weather("Oslo")
        ```
    """

    name: str

    def __init__(
        self,
        user_agent: str | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the provider.

        Args:
            user_agent: User-Agent string for requests
            timeout: Request timeout in seconds
            client: Pre-built HTTP client (tests inject a mock transport)
        """
        self.user_agent = user_agent or "weather-advisor/0.1.0"
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> WeatherProvider:
        """Enter async context manager."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    async def _fetch_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Fetch a JSON document from the API.

        Args:
            url: Full URL to fetch
            params: Query parameters

        Returns:
            Decoded JSON object

        Raises:
            ProviderError: If the request fails or the body is not JSON
        """
        client = self._get_client()
        try:
            response = await client.get(
                url, params=params, headers=self._get_default_headers()
            )
        except httpx.HTTPError as e:
            logger.error(f"{self.name} request to {url} failed: {e}")
            raise ProviderError(
                f"Network error contacting {self.name}: {e}", provider=self.name
            ) from e

        if response.status_code >= 400:
            logger.error(f"{self.name} returned {response.status_code}: {response.text}")
            raise ProviderError(
                f"API request failed: {response.status_code}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                f"Failed to parse response: {e}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            ) from e

        if not isinstance(data, dict):
            raise ProviderError(
                "Unexpected response format",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )
        return data

    @abstractmethod
    async def geocode(self, city: str) -> GeocodedPlace:
        """Resolve a city name to coordinates.

        Raises:
            LocationNotFoundError: If the city is unknown
            ProviderError: If the lookup fails
        """

    @abstractmethod
    async def get_weather_by_coordinates(
        self,
        coordinates: Coordinates,
        place_name: str | None = None,
        country: str | None = None,
    ) -> dict[str, Any]:
        """Get current conditions for a point as a provider payload.

        Raises:
            ProviderError: If conditions cannot be retrieved
        """

    async def get_current_weather(self, city: str) -> dict[str, Any]:
        """Get current conditions for a city as a provider payload.

        Raises:
            LocationNotFoundError: If the city is unknown
            ProviderError: If conditions cannot be retrieved
        """
        place = await self.geocode(city)
        return await self.get_weather_by_coordinates(
            place.coordinates, place_name=place.name, country=place.country
        )
