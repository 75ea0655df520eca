"""Weather observation models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_VISIBILITY_M = 10000.0
STANDARD_PRESSURE_HPA = 1013.25


class ConditionCategory(str, Enum):
    """Canonical weather condition categories."""

    CLEAR = "clear"
    CLOUDS = "clouds"
    RAIN = "rain"
    DRIZZLE = "drizzle"
    SNOW = "snow"
    MIST = "mist"  # Mist, fog and haze
    THUNDERSTORM = "thunderstorm"
    UNKNOWN = "unknown"


class ConditionFlags(BaseModel):
    """Boolean flags derived from a condition category.

    Only the Rain category counts as raining; drizzle and thunderstorms
    keep their own category without setting the rain flag.
    """

    model_config = ConfigDict(frozen=True)

    is_raining: bool = False
    is_snowing: bool = False
    is_cloudy: bool = False

    @classmethod
    def from_category(cls, category: ConditionCategory) -> "ConditionFlags":
        """Create flags from a ConditionCategory."""
        return cls(
            is_raining=category == ConditionCategory.RAIN,
            is_snowing=category == ConditionCategory.SNOW,
            is_cloudy=category == ConditionCategory.CLOUDS,
        )


class WeatherObservation(BaseModel):
    """A normalized snapshot of current weather.

    All values are in canonical SI-based units. Instances are immutable;
    build them with `weather_advisor.normalizer.normalize` from provider
    payloads or directly from known values.
    """

    model_config = ConfigDict(frozen=True)

    temperature_c: float = Field(..., description="Air temperature in Celsius")
    humidity_percent: float = Field(
        ..., ge=0, le=100, description="Relative humidity percentage"
    )
    wind_speed_ms: float = Field(
        default=0.0, ge=0, description="Wind speed in meters per second"
    )
    pressure_hpa: float = Field(
        default=STANDARD_PRESSURE_HPA, gt=0, description="Atmospheric pressure in hPa"
    )
    condition: ConditionCategory = Field(
        default=ConditionCategory.UNKNOWN, description="Condition category"
    )
    visibility_m: float = Field(
        default=DEFAULT_VISIBILITY_M, ge=0, description="Visibility in meters"
    )

    @property
    def flags(self) -> ConditionFlags:
        """Condition flags derived from the category."""
        return ConditionFlags.from_category(self.condition)

    @property
    def is_raining(self) -> bool:
        return self.flags.is_raining

    @property
    def is_snowing(self) -> bool:
        return self.flags.is_snowing

    @property
    def is_cloudy(self) -> bool:
        return self.flags.is_cloudy

    @property
    def temperature_f(self) -> float:
        """Temperature in Fahrenheit."""
        return self.temperature_c * 9 / 5 + 32

    @property
    def wind_speed_kph(self) -> float:
        """Wind speed in kilometers per hour."""
        return self.wind_speed_ms * 3.6

    def summary(self) -> str:
        """Build a human-readable summary of conditions."""
        parts = [
            f"{self.temperature_c:.0f}°C ({self.temperature_f:.0f}°F)",
            self.condition.value,
            f"humidity {self.humidity_percent:.0f}%",
            f"wind {self.wind_speed_ms:.0f} m/s",
            f"pressure {self.pressure_hpa:.0f} hPa",
        ]
        if self.visibility_m < DEFAULT_VISIBILITY_M:
            parts.append(f"visibility {self.visibility_m:.0f} m")
        return ", ".join(parts)
