"""Application controller.

`WeatherApp` ties the collaborators together: it resolves a location,
fetches current conditions, normalizes them and asks the recommendation
engine for advice. Only one lookup runs at a time; a lookup requested
while another is in flight is refused rather than queued.

## Usage

```python
from weather_advisor.app import WeatherApp

app = WeatherApp.from_settings()
report = await app.lookup_city("Oslo")
print(report.bundle.personalized_tip)
await app.close()
```
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from weather_advisor.config import Settings, get_settings
from weather_advisor.geolocation import (
    GeolocationError,
    GeolocationSource,
    IPGeolocation,
    locate,
)
from weather_advisor.models.location import (
    Coordinates,
    format_location_name,
    is_valid_city_name,
)
from weather_advisor.models.recommendation import PredictionResult, RecommendationBundle
from weather_advisor.models.weather import WeatherObservation
from weather_advisor.normalizer import normalize
from weather_advisor.preferences import PreferencesStore, UserPreferences
from weather_advisor.providers.base import ProviderError, WeatherProvider
from weather_advisor.providers.openmeteo import OpenMeteoProvider
from weather_advisor.recommendations.engine import RecommendationEngine

logger = logging.getLogger(__name__)


class InvalidLocationError(ValueError):
    """Raised when a user-entered city name fails validation."""


class WeatherReport(BaseModel):
    """Everything shown to the user for one lookup."""

    location_name: str = Field(..., description="Display name of the location")
    coordinates: Coordinates | None = Field(default=None)
    description: str = Field(default="", description="Provider condition text")
    observation: WeatherObservation = Field(..., description="Normalized conditions")
    result: PredictionResult = Field(..., description="Recommendations")
    fetched_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the conditions were fetched",
    )

    @property
    def bundle(self) -> RecommendationBundle:
        """The recommendations, whichever pipeline produced them."""
        return self.result.bundle


class WeatherApp:
    """Coordinates weather lookups for one user.

    Attributes:
        current_location: Location of the most recent successful lookup
        user_searched_location: True when the user picked the location
        last_report: Most recent report, if any
    """

    def __init__(
        self,
        provider: WeatherProvider,
        preferences_store: PreferencesStore,
        geolocation: GeolocationSource | None = None,
        engine: RecommendationEngine | None = None,
        geolocation_timeout: float = 5.0,
        default_location: str = "London",
    ):
        self.provider = provider
        self.preferences_store = preferences_store
        self.geolocation = geolocation
        self.engine = engine or RecommendationEngine()
        self.geolocation_timeout = geolocation_timeout
        self.default_location = default_location

        self.preferences: UserPreferences = preferences_store.load()
        self.current_location: str | None = None
        self.user_searched_location = False
        self.last_report: WeatherReport | None = None
        self._busy = False

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> WeatherApp:
        """Build an app wired to the real providers."""
        settings = settings or get_settings()
        provider = OpenMeteoProvider(
            geocoding_url=settings.geocoding_url,
            forecast_url=settings.forecast_url,
            user_agent=settings.user_agent,
            timeout=settings.request_timeout_seconds,
        )
        return cls(
            provider=provider,
            preferences_store=PreferencesStore(
                settings.preferences_path, default_location=settings.default_location
            ),
            geolocation=IPGeolocation(
                url=settings.ip_geolocation_url, user_agent=settings.user_agent
            ),
            geolocation_timeout=settings.geolocation_timeout_seconds,
            default_location=settings.default_location,
        )

    @property
    def is_busy(self) -> bool:
        """Check if a lookup is in flight."""
        return self._busy

    def _build_report(
        self,
        payload: dict[str, Any],
        coordinates: Coordinates | None,
    ) -> WeatherReport:
        observation = normalize(payload)
        result = self.engine.evaluate(observation)

        weather = payload.get("weather") or [{}]
        sys_info = payload.get("sys") or {}
        return WeatherReport(
            location_name=format_location_name(payload.get("name"), sys_info.get("country")),
            coordinates=coordinates,
            description=weather[0].get("description", ""),
            observation=observation,
            result=result,
        )

    async def _fetch_city(self, city: str) -> WeatherReport:
        place = await self.provider.geocode(city)
        payload = await self.provider.get_weather_by_coordinates(
            place.coordinates, place_name=place.name, country=place.country
        )
        return self._build_report(payload, place.coordinates)

    async def _fetch_coordinates(
        self, coordinates: Coordinates, place_name: str | None = None
    ) -> WeatherReport:
        payload = await self.provider.get_weather_by_coordinates(
            coordinates, place_name=place_name
        )
        return self._build_report(payload, coordinates)

    async def lookup_city(
        self, city: str, user_initiated: bool = True
    ) -> WeatherReport | None:
        """Look up conditions and advice for a city.

        Args:
            city: City name as entered by the user
            user_initiated: The user chose this city; it is remembered as the
                last location and reused by `refresh`

        Returns:
            The report, or None if another lookup is already in flight

        Raises:
            InvalidLocationError: If the city name is not plausible
            ProviderError: If the city cannot be found or fetched
            MalformedObservationError: If the provider payload is unusable
        """
        if self._busy:
            logger.info(f"Lookup already in progress, ignoring request for {city!r}")
            return None
        if not is_valid_city_name(city):
            raise InvalidLocationError("Please enter a valid city name")

        city = city.strip()
        logger.info(f"Searching weather for: {city}")

        self._busy = True
        try:
            report = await self._fetch_city(city)
        finally:
            self._busy = False

        self.current_location = city
        self.last_report = report
        if user_initiated:
            self.user_searched_location = True
            self.save_preferences()
        return report

    async def lookup_coordinates(
        self,
        coordinates: Coordinates,
        place_name: str | None = None,
    ) -> WeatherReport | None:
        """Look up conditions and advice for a coordinate pair.

        Returns:
            The report, or None if another lookup is already in flight
        """
        if self._busy:
            logger.info(f"Lookup already in progress, ignoring request for {coordinates}")
            return None

        self._busy = True
        try:
            report = await self._fetch_coordinates(coordinates, place_name)
        finally:
            self._busy = False

        self.current_location = report.location_name
        self.last_report = report
        return report

    async def lookup_current_location(self) -> WeatherReport | None:
        """Look up conditions where the user is.

        Falls back to the saved (or default) city when the position is
        unavailable or conditions there cannot be fetched. The app stays
        busy from the position request until the report is ready.

        Raises:
            InvalidLocationError: If the fallback city name is not plausible
            ProviderError: If the fallback city cannot be found or fetched
        """
        if self._busy:
            logger.info("Lookup already in progress, ignoring current-location request")
            return None

        self.user_searched_location = False
        self._busy = True
        try:
            try:
                if self.geolocation is None:
                    raise GeolocationError("No geolocation source configured")
                coordinates = await locate(self.geolocation, timeout=self.geolocation_timeout)
                report = await self._fetch_coordinates(coordinates)
                location = report.location_name
            except (GeolocationError, ProviderError) as e:
                location = (self.preferences.last_location or self.default_location).strip()
                logger.info(f"Current location error: {e}; using {location}")
                if not is_valid_city_name(location):
                    raise InvalidLocationError("Please enter a valid city name") from e
                report = await self._fetch_city(location)
        finally:
            self._busy = False

        self.current_location = location
        self.last_report = report
        return report

    async def start(self) -> WeatherReport | None:
        """Initial lookup, honoring the auto-location preference."""
        if self.preferences.auto_location:
            return await self.lookup_current_location()
        return await self.lookup_city(self.preferences.last_location or self.default_location)

    async def refresh(self) -> WeatherReport | None:
        """Repeat the last kind of lookup."""
        logger.info("Refreshing weather data")
        if self.user_searched_location and self.current_location:
            return await self.lookup_city(self.current_location)
        return await self.lookup_current_location()

    def save_preferences(self) -> None:
        """Persist the current location; failures are logged, not raised."""
        update: dict[str, Any] = {"last_updated": datetime.now(timezone.utc)}
        if self.user_searched_location and self.current_location:
            update["last_location"] = self.current_location
        self.preferences = self.preferences.model_copy(update=update)

        try:
            self.preferences_store.save(self.preferences)
        except OSError as e:
            logger.error(f"Failed to save preferences: {e}")

    async def close(self) -> None:
        """Save preferences and release the provider's HTTP client."""
        self.save_preferences()
        await self.provider.aclose()
