"""Location models and helpers for weather lookups."""

from __future__ import annotations

import math
import re
from typing import Any, Self

from pydantic import BaseModel, Field


# Regex for parsing lat/long coordinates: "latitude,longitude"
# Supports optional +/- prefix for both values
COORDINATE_PATTERN = re.compile(
    r"^(?P<lat>[-+]?\d*\.?\d+)\s*,\s*(?P<lon>[-+]?\d*\.?\d+)$"
)

# Letters, spaces, hyphens and apostrophes
CITY_NAME_PATTERN = re.compile(r"^[a-zA-Z\s\-']+$")

EARTH_RADIUS_KM = 6371.0


class Coordinates(BaseModel):
    """Geographic coordinates (latitude/longitude).

    Latitude:
        - Negative (-) = south of equator
        - Positive (+) = north of equator
        - Range: -90 to +90

    Longitude:
        - Negative (-) = west of prime meridian
        - Positive (+) = east of prime meridian
        - Range: -180 to +180
    """

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse coordinates from string format 'latitude,longitude'.

        Examples:
            '40.7128,-74.0060' -> New York City
            '-33.8688,151.2093' -> Sydney
            '+51.5074,-0.1278' -> London
        """
        match = COORDINATE_PATTERN.match(value.strip())
        if not match:
            raise ValueError(
                f"Invalid coordinate format: '{value}'. "
                "Expected format: 'latitude,longitude' (e.g., '40.7128,-74.0060')"
            )
        return cls(
            latitude=float(match.group("lat")),
            longitude=float(match.group("lon")),
        )

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"

    def to_tuple(self) -> tuple[float, float]:
        """Return coordinates as (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)

    def distance_km(self, other: Coordinates) -> float:
        """Great-circle (haversine) distance to another point in kilometers."""
        lat1, lon1 = map(math.radians, self.to_tuple())
        lat2, lon2 = map(math.radians, other.to_tuple())
        d_lat = lat2 - lat1
        d_lon = lon2 - lon1

        a = (
            math.sin(d_lat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return EARTH_RADIUS_KM * c


class GeocodedPlace(BaseModel):
    """A place name resolved to coordinates by a geocoding service."""

    name: str = Field(..., description="Place name as returned by the geocoder")
    country: str = Field(default="Unknown", description="Country code or name")
    coordinates: Coordinates = Field(..., description="Resolved coordinates")

    def display_name(self) -> str:
        """Get a display name for this place."""
        if self.country and self.country != "Unknown":
            return f"{self.name}, {self.country}"
        return self.name


def is_valid_city_name(city_name: Any) -> bool:
    """Check whether user input looks like a city name.

    Names must be 2-50 characters after trimming and contain only letters,
    spaces, hyphens and apostrophes.
    """
    if not city_name or not isinstance(city_name, str):
        return False

    trimmed = city_name.strip()
    if len(trimmed) < 2 or len(trimmed) > 50:
        return False

    return CITY_NAME_PATTERN.match(trimmed) is not None


def format_location_name(name: str | None, country: str | None = None) -> str:
    """Format a location for display, e.g. 'Paris, FR'."""
    if not name:
        return "Unknown Location"
    if country and country != "Unknown":
        return f"{name}, {country}"
    return name
