"""Approximate device location lookup.

A `GeolocationSource` answers "where is the user?" with coordinates. Every
lookup goes through `locate`, which bounds the source by a timeout so a
slow or hanging source can never stall the application.

Sources:
- `IPGeolocation`: approximate position from the public IP address
- `FixedGeolocation`: a known position (configuration, tests)
- `DeniedGeolocation`: the user opted out of location lookups
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

import httpx

from weather_advisor.models.location import Coordinates

logger = logging.getLogger(__name__)


class GeolocationError(Exception):
    """Base exception for location lookup failures."""


class GeolocationPermissionError(GeolocationError):
    """Raised when location access is not permitted."""


class GeolocationTimeoutError(GeolocationError):
    """Raised when a location lookup exceeds its time bound."""


class GeolocationSource(ABC):
    """Abstract source of the user's coordinates."""

    @abstractmethod
    async def current_position(self) -> Coordinates:
        """Get the current position.

        Raises:
            GeolocationError: If the position cannot be determined
        """


class FixedGeolocation(GeolocationSource):
    """A source that always reports the same position."""

    def __init__(self, coordinates: Coordinates):
        self.coordinates = coordinates

    async def current_position(self) -> Coordinates:
        return self.coordinates


class DeniedGeolocation(GeolocationSource):
    """A source for users who did not allow location access."""

    async def current_position(self) -> Coordinates:
        raise GeolocationPermissionError("Location access denied")


class IPGeolocation(GeolocationSource):
    """Approximate position from an IP geolocation service.

    The service must answer with a JSON object holding `latitude` and
    `longitude`. Accuracy is city-level at best.
    """

    def __init__(
        self,
        url: str = "https://ipapi.co/json/",
        user_agent: str = "weather-advisor/0.1.0",
        client: httpx.AsyncClient | None = None,
    ):
        self.url = url
        self.user_agent = user_agent
        self._client = client

    async def current_position(self) -> Coordinates:
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        try:
            if self._client is not None:
                response = await self._client.get(self.url, headers=headers)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(self.url, headers=headers)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise GeolocationError(f"IP geolocation failed: {e}") from e

        try:
            return Coordinates(latitude=data["latitude"], longitude=data["longitude"])
        except (KeyError, TypeError, ValueError) as e:
            raise GeolocationError(f"IP geolocation returned no position: {e}") from e


async def locate(source: GeolocationSource, timeout: float = 5.0) -> Coordinates:
    """Get the current position, giving up after `timeout` seconds.

    Raises:
        GeolocationTimeoutError: If the source does not answer in time
        GeolocationError: If the source fails
    """
    try:
        position = await asyncio.wait_for(source.current_position(), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise GeolocationTimeoutError(
            f"Location lookup timed out after {timeout:g}s"
        ) from e

    logger.info(f"Got user location: {position}")
    return position
