"""Pytest fixtures for weather advisor tests.

This module provides test fixtures that ensure:
1. No external API calls are made (weather, geocoding, IP geolocation)
2. No real preference files are touched
3. Isolated test environment with controlled configuration
"""

from typing import Any

import pytest

from weather_advisor.geolocation import FixedGeolocation
from weather_advisor.models.location import Coordinates, GeocodedPlace
from weather_advisor.models.weather import ConditionCategory, WeatherObservation
from weather_advisor.preferences import PreferencesStore
from weather_advisor.providers.base import LocationNotFoundError, WeatherProvider


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at a temporary directory and reset the settings cache."""
    from weather_advisor.config import get_settings

    monkeypatch.setenv("WEATHER_ADVISOR_PREFERENCES_PATH", str(tmp_path / "prefs.json"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeProvider(WeatherProvider):
    """In-memory provider returning canned conditions.

    Set `gate` to an asyncio.Event to hold geocoding until it is set.
    """

    name = "fake"

    def __init__(self, current: dict[str, Any] | None = None):
        super().__init__()
        self.places = {
            "london": GeocodedPlace(
                name="London",
                country="GB",
                coordinates=Coordinates(latitude=51.5074, longitude=-0.1278),
            ),
            "oslo": GeocodedPlace(
                name="Oslo",
                country="NO",
                coordinates=Coordinates(latitude=59.9139, longitude=10.7522),
            ),
        }
        self.current = current or {
            "main": {"temp": 22.0, "humidity": 50, "pressure": 1015.0},
            "wind": {"speed": 3.0, "deg": 180},
            "weather": [{"main": "Clear", "description": "clear sky", "code": 0}],
            "visibility": 10000,
        }
        self.calls: list[tuple[str, Any]] = []
        self.gate = None

    async def geocode(self, city: str) -> GeocodedPlace:
        self.calls.append(("geocode", city))
        if self.gate is not None:
            await self.gate.wait()
        try:
            return self.places[city.lower()]
        except KeyError:
            raise LocationNotFoundError(city, provider=self.name) from None

    async def get_weather_by_coordinates(
        self,
        coordinates: Coordinates,
        place_name: str | None = None,
        country: str | None = None,
    ) -> dict[str, Any]:
        self.calls.append(("weather", coordinates.to_tuple()))
        return {
            "name": place_name or "Current Location",
            "sys": {"country": country or "Unknown"},
            **self.current,
        }


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Provider that never touches the network."""
    return FakeProvider()


@pytest.fixture
def preferences_store(tmp_path) -> PreferencesStore:
    """Preference store in a temporary directory."""
    return PreferencesStore(tmp_path / "preferences.json")


@pytest.fixture
def oslo_geolocation() -> FixedGeolocation:
    """Geolocation source that reports Oslo."""
    return FixedGeolocation(Coordinates(latitude=59.9139, longitude=10.7522))


# =============================================================================
# Observations
# =============================================================================


@pytest.fixture
def mild_observation() -> WeatherObservation:
    """Pleasant, dry and calm conditions."""
    return WeatherObservation(
        temperature_c=22.0,
        humidity_percent=50.0,
        wind_speed_ms=3.0,
        pressure_hpa=1015.0,
        condition=ConditionCategory.CLEAR,
        visibility_m=10000.0,
    )


@pytest.fixture
def hot_observation() -> WeatherObservation:
    """Hot, clear day above 30°C."""
    return WeatherObservation(
        temperature_c=32.0,
        humidity_percent=50.0,
        wind_speed_ms=5.0,
        pressure_hpa=1015.0,
        condition=ConditionCategory.CLEAR,
        visibility_m=10000.0,
    )


@pytest.fixture
def snowy_observation() -> WeatherObservation:
    """Light frost with snowfall."""
    return WeatherObservation(
        temperature_c=-2.0,
        humidity_percent=80.0,
        wind_speed_ms=2.0,
        pressure_hpa=1015.0,
        condition=ConditionCategory.SNOW,
    )


@pytest.fixture
def rainy_observation() -> WeatherObservation:
    """Cool, humid rain with reduced visibility."""
    return WeatherObservation(
        temperature_c=12.0,
        humidity_percent=85.0,
        wind_speed_ms=8.0,
        pressure_hpa=1000.0,
        condition=ConditionCategory.RAIN,
        visibility_m=4000.0,
    )


@pytest.fixture
def stormy_observation() -> WeatherObservation:
    """Cold, humid gale with a thunderstorm."""
    return WeatherObservation(
        temperature_c=3.0,
        humidity_percent=90.0,
        wind_speed_ms=28.0,
        pressure_hpa=980.0,
        condition=ConditionCategory.THUNDERSTORM,
    )
