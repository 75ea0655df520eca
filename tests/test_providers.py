"""Tests for the Open-Meteo provider, using an in-process HTTP transport."""

import asyncio
import json

import httpx
import pytest

from weather_advisor.models.location import Coordinates
from weather_advisor.models.weather import ConditionCategory
from weather_advisor.normalizer import normalize
from weather_advisor.providers.base import LocationNotFoundError, ProviderError
from weather_advisor.providers.openmeteo import OpenMeteoProvider, describe_code

GEOCODING_URL = "https://geo.test/v1/search"
FORECAST_URL = "https://forecast.test/v1/forecast"

OSLO_GEOCODING = {
    "results": [
        {
            "name": "Oslo",
            "latitude": 59.91273,
            "longitude": 10.74609,
            "country_code": "NO",
            "country": "Norway",
        }
    ]
}

OSLO_CURRENT = {
    "latitude": 59.92,
    "longitude": 10.74,
    "current": {
        "time": "2024-01-15T12:00",
        "temperature_2m": -4.2,
        "relative_humidity_2m": 86,
        "wind_speed_10m": 3.4,
        "wind_direction_10m": 200,
        "weather_code": 73,
        "surface_pressure": 1002.1,
    },
}


def make_provider(handler) -> tuple[OpenMeteoProvider, list[httpx.Request]]:
    """Provider whose requests are answered by `handler` and recorded."""
    requests: list[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
    provider = OpenMeteoProvider(
        geocoding_url=GEOCODING_URL,
        forecast_url=FORECAST_URL,
        user_agent="weather-advisor-tests",
        client=client,
    )
    return provider, requests


def open_meteo_handler(request: httpx.Request) -> httpx.Response:
    if request.url.host == "geo.test":
        if request.url.params["name"] == "Oslo":
            return httpx.Response(200, json=OSLO_GEOCODING)
        return httpx.Response(200, json={"generationtime_ms": 0.5})
    return httpx.Response(200, json=OSLO_CURRENT)


class TestGeocode:
    """Tests for city geocoding."""

    def test_found(self):
        """Test a known city resolves to its first result."""
        provider, requests = make_provider(open_meteo_handler)
        place = asyncio.run(provider.geocode("Oslo"))

        assert place.name == "Oslo"
        assert place.country == "NO"
        assert place.coordinates.latitude == pytest.approx(59.91273)
        params = requests[0].url.params
        assert params["count"] == "1"
        assert params["format"] == "json"
        assert requests[0].headers["User-Agent"] == "weather-advisor-tests"

    def test_not_found(self):
        """Test an empty result set raises LocationNotFoundError."""
        provider, _ = make_provider(open_meteo_handler)
        with pytest.raises(LocationNotFoundError) as exc_info:
            asyncio.run(provider.geocode("Nowhereville"))
        assert str(exc_info.value) == 'Could not find location for "Nowhereville"'
        assert exc_info.value.provider == "open-meteo"

    def test_country_defaults_to_unknown(self):
        """Test a result without country data gets the placeholder."""

        def handler(request):
            return httpx.Response(
                200,
                json={"results": [{"name": "X", "latitude": 1, "longitude": 2}]},
            )

        provider, _ = make_provider(handler)
        assert asyncio.run(provider.geocode("X")).country == "Unknown"


class TestCurrentWeather:
    """Tests for current conditions."""

    def test_payload_translation(self):
        """Test the forecast response is translated to the provider payload."""
        provider, requests = make_provider(open_meteo_handler)
        payload = asyncio.run(provider.get_current_weather("Oslo"))

        assert payload["name"] == "Oslo"
        assert payload["sys"]["country"] == "NO"
        assert payload["main"] == {"temp": -4.2, "humidity": 86, "pressure": 1002.1}
        assert payload["wind"]["speed"] == 3.4
        assert payload["weather"][0]["main"] == "Snow"
        assert payload["weather"][0]["description"] == "moderate snow"
        assert payload["visibility"] == 10000.0

        forecast_params = requests[1].url.params
        assert forecast_params["wind_speed_unit"] == "ms"
        assert "temperature_2m" in forecast_params["current"]

    def test_payload_normalizes(self):
        """Test the translated payload is accepted by the normalizer."""
        provider, _ = make_provider(open_meteo_handler)
        payload = asyncio.run(provider.get_current_weather("Oslo"))
        observation = normalize(payload)
        assert observation.temperature_c == -4.2
        assert observation.condition == ConditionCategory.SNOW
        assert observation.is_snowing is True

    def test_by_coordinates_without_name(self):
        """Test coordinate lookups get the current-location placeholder."""
        provider, _ = make_provider(open_meteo_handler)
        payload = asyncio.run(
            provider.get_weather_by_coordinates(Coordinates(latitude=59.9, longitude=10.7))
        )
        assert payload["name"] == "Current Location"
        assert payload["sys"]["country"] == "Unknown"

    def test_float_weather_code(self):
        """Test a weather code sent as 61.0 is described and categorized."""
        current = dict(OSLO_CURRENT["current"], weather_code=61.0)
        provider, _ = make_provider(
            lambda request: httpx.Response(200, json={"current": current})
        )
        payload = asyncio.run(
            provider.get_weather_by_coordinates(Coordinates(latitude=59.9, longitude=10.7))
        )
        assert payload["weather"][0]["main"] == "Rain"
        assert payload["weather"][0]["code"] == 61
        assert normalize(payload).condition == ConditionCategory.RAIN

    def test_missing_current_block(self):
        """Test a response without current conditions is rejected."""
        provider, _ = make_provider(lambda request: httpx.Response(200, json={}))
        with pytest.raises(ProviderError, match="no current conditions"):
            asyncio.run(
                provider.get_weather_by_coordinates(Coordinates(latitude=0, longitude=0))
            )


class TestTransportErrors:
    """Tests for HTTP-level failures."""

    def test_server_error(self):
        """Test 5xx responses raise ProviderError with the status."""
        provider, _ = make_provider(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(provider.geocode("Oslo"))
        assert exc_info.value.status_code == 500
        assert exc_info.value.response_body == "boom"

    def test_invalid_json(self):
        """Test a non-JSON body raises ProviderError."""
        provider, _ = make_provider(
            lambda request: httpx.Response(200, content=b"<html>")
        )
        with pytest.raises(ProviderError, match="Failed to parse response"):
            asyncio.run(provider.geocode("Oslo"))

    def test_non_object_json(self):
        """Test a JSON array body raises ProviderError."""
        provider, _ = make_provider(
            lambda request: httpx.Response(200, content=json.dumps([1, 2]).encode())
        )
        with pytest.raises(ProviderError, match="Unexpected response format"):
            asyncio.run(provider.geocode("Oslo"))

    def test_network_error(self):
        """Test connection failures raise ProviderError."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider, _ = make_provider(handler)
        with pytest.raises(ProviderError, match="Network error"):
            asyncio.run(provider.geocode("Oslo"))


class TestDescribeCode:
    """Tests for describe_code."""

    def test_known(self):
        assert describe_code(0) == "clear sky"

    def test_unknown(self):
        assert describe_code(None) == "unknown conditions"
        assert describe_code(42) == "unknown conditions"
