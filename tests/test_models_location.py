"""Tests for location models."""

import pytest

from weather_advisor.models.location import (
    Coordinates,
    GeocodedPlace,
    format_location_name,
    is_valid_city_name,
)


class TestCoordinates:
    """Tests for the Coordinates model."""

    def test_valid_coordinates(self):
        """Test creating valid coordinates."""
        coords = Coordinates(latitude=59.9139, longitude=10.7522)
        assert coords.latitude == 59.9139
        assert coords.longitude == 10.7522

    def test_boundary_values(self):
        """Test boundary latitude/longitude values."""
        assert Coordinates(latitude=90, longitude=0).latitude == 90
        assert Coordinates(latitude=-90, longitude=0).latitude == -90
        assert Coordinates(latitude=0, longitude=180).longitude == 180
        assert Coordinates(latitude=0, longitude=-180).longitude == -180

    @pytest.mark.parametrize("lat, lon", [(91, 0), (-91, 0), (0, 181), (0, -181)])
    def test_out_of_range(self, lat: float, lon: float):
        """Test that out-of-range values raise errors."""
        with pytest.raises(ValueError):
            Coordinates(latitude=lat, longitude=lon)

    def test_from_string(self):
        """Test parsing coordinates from a string."""
        coords = Coordinates.from_string("+51.5074, -0.1278")
        assert coords.latitude == pytest.approx(51.5074)
        assert coords.longitude == pytest.approx(-0.1278)

    def test_from_string_southern_hemisphere(self):
        """Test parsing coordinates in the southern hemisphere."""
        # Sydney, Australia
        coords = Coordinates.from_string("-33.8688,151.2093")
        assert coords.latitude == pytest.approx(-33.8688)
        assert coords.longitude == pytest.approx(151.2093)

    @pytest.mark.parametrize("value", ["not,valid", "40.7128", "Oslo"])
    def test_from_string_invalid_format(self, value: str):
        """Test that invalid formats raise errors."""
        with pytest.raises(ValueError, match="Invalid coordinate format"):
            Coordinates.from_string(value)

    def test_str_and_tuple(self):
        """Test string and tuple representations."""
        coords = Coordinates(latitude=40.7128, longitude=-74.0060)
        assert str(coords) == "40.7128,-74.006"
        assert coords.to_tuple() == (40.7128, -74.0060)

    def test_distance_km(self):
        """Test great-circle distance between London and Paris."""
        london = Coordinates(latitude=51.5074, longitude=-0.1278)
        paris = Coordinates(latitude=48.8566, longitude=2.3522)
        assert london.distance_km(paris) == pytest.approx(344, abs=2)
        assert london.distance_km(london) == 0.0


class TestGeocodedPlace:
    """Tests for GeocodedPlace."""

    def test_display_name_with_country(self):
        """Test display name includes the country."""
        place = GeocodedPlace(
            name="Oslo",
            country="NO",
            coordinates=Coordinates(latitude=59.9139, longitude=10.7522),
        )
        assert place.display_name() == "Oslo, NO"

    def test_display_name_unknown_country(self):
        """Test the unknown-country placeholder is hidden."""
        place = GeocodedPlace(
            name="Atlantis", coordinates=Coordinates(latitude=0, longitude=0)
        )
        assert place.country == "Unknown"
        assert place.display_name() == "Atlantis"


class TestCityNameValidation:
    """Tests for is_valid_city_name."""

    @pytest.mark.parametrize(
        "name",
        ["London", "New York", "Saint-Etienne", "L'Aquila", "  Oslo  ", "Ny"],
    )
    def test_valid(self, name: str):
        """Test plausible city names."""
        assert is_valid_city_name(name) is True

    @pytest.mark.parametrize(
        "name",
        ["", " ", "A", "x" * 51, "London1", "Oslo!", "51.5,-0.12", None, 42],
    )
    def test_invalid(self, name):
        """Test rejected inputs."""
        assert is_valid_city_name(name) is False


class TestFormatLocationName:
    """Tests for format_location_name."""

    def test_with_country(self):
        assert format_location_name("Paris", "FR") == "Paris, FR"

    def test_unknown_country(self):
        assert format_location_name("Paris", "Unknown") == "Paris"
        assert format_location_name("Paris") == "Paris"

    def test_missing_name(self):
        assert format_location_name(None, "FR") == "Unknown Location"
