"""Score calculation for weather observations.

Three independent scores are derived from an observation, each clamped to
[0, 1]:

- clothing weight: how heavily to dress
- activity level: how suitable conditions are for being outdoors
- comfort index: how pleasant conditions feel overall

## Clothing weight bands
| Temperature | Base weight |
|-------------|-------------|
| < -10°C | 1.0 |
| -10 to < 0°C | 0.9 |
| 0 to < 10°C | 0.7 |
| 10 to < 20°C | 0.5 |
| 20 to < 30°C | 0.3 |
| >= 30°C | 0.1 |

Snow raises the weight to at least 0.8; rain adds 0.1; wind above 15 m/s
adds 0.1 and wind above 25 m/s adds another 0.1.
"""

from __future__ import annotations

from weather_advisor.models.recommendation import ScoreSet
from weather_advisor.models.weather import WeatherObservation

# (upper bound exclusive, base weight), checked in order
CLOTHING_WEIGHT_BANDS: tuple[tuple[float, float], ...] = (
    (-10, 1.0),
    (0, 0.9),
    (10, 0.7),
    (20, 0.5),
    (30, 0.3),
)
HOT_CLOTHING_WEIGHT = 0.1


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp a value into [low, high]."""
    return min(max(value, low), high)


def clothing_weight(
    temperature_c: float,
    wind_speed_ms: float,
    is_raining: bool,
    is_snowing: bool,
) -> float:
    """Calculate how heavily to dress, 0 (minimal) to 1 (full winter)."""
    weight = HOT_CLOTHING_WEIGHT
    for upper_bound, band_weight in CLOTHING_WEIGHT_BANDS:
        if temperature_c < upper_bound:
            weight = band_weight
            break

    if is_snowing:
        weight = max(weight, 0.8)
    if is_raining:
        weight += 0.1
    # Both wind bonuses apply above 25 m/s
    if wind_speed_ms > 15:
        weight += 0.1
    if wind_speed_ms > 25:
        weight += 0.1

    return clamp(weight)


def activity_level(
    temperature_c: float,
    is_raining: bool,
    wind_speed_ms: float,
    visibility_m: float,
) -> float:
    """Calculate suitability for outdoor activity.

    Penalties are cumulative. Mild, dry and calm weather (15-25°C, no rain,
    wind below 10 m/s) always scores 1.0 regardless of other penalties.
    """
    level = 0.7

    if is_raining:
        level -= 0.4
    if wind_speed_ms > 20:
        level -= 0.3
    if visibility_m < 5000:
        level -= 0.2
    if temperature_c < -5 or temperature_c > 35:
        level -= 0.3

    if 15 <= temperature_c <= 25 and not is_raining and wind_speed_ms < 10:
        level = 1.0

    return clamp(level)


def comfort_index(
    temperature_c: float,
    humidity_percent: float,
    wind_speed_ms: float,
    pressure_hpa: float,
) -> float:
    """Calculate overall comfort from temperature, humidity, wind and pressure."""
    comfort = 0.5

    if 18 <= temperature_c <= 24:
        comfort += 0.3
    elif 15 <= temperature_c <= 27:
        comfort += 0.1
    elif temperature_c < 5 or temperature_c > 30:
        comfort -= 0.2

    if 40 <= humidity_percent <= 60:
        comfort += 0.2
    elif humidity_percent > 80:
        comfort -= 0.2
    elif humidity_percent < 30:
        comfort -= 0.1

    if 5 <= wind_speed_ms <= 15:
        comfort += 0.1
    elif wind_speed_ms > 25:
        comfort -= 0.2

    # Normal range: 1013.25 +/- 20 hPa
    if 993 <= pressure_hpa <= 1033:
        comfort += 0.1
    else:
        comfort -= 0.1

    return clamp(comfort)


def score_observation(observation: WeatherObservation) -> ScoreSet:
    """Compute all three scores for an observation."""
    flags = observation.flags
    return ScoreSet(
        clothing_weight=clothing_weight(
            observation.temperature_c,
            observation.wind_speed_ms,
            flags.is_raining,
            flags.is_snowing,
        ),
        activity_level=activity_level(
            observation.temperature_c,
            flags.is_raining,
            observation.wind_speed_ms,
            observation.visibility_m,
        ),
        comfort_index=comfort_index(
            observation.temperature_c,
            observation.humidity_percent,
            observation.wind_speed_ms,
            observation.pressure_hpa,
        ),
    )
