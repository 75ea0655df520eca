"""Normalization of provider payloads into weather observations.

## Accepted Payload Shapes

Provider shape (what `weather_advisor.providers` emits):

```json
{
  "main": {"temp": 12.3, "humidity": 71, "pressure": 1008.2},
  "wind": {"speed": 4.1, "deg": 220},
  "weather": [{"main": "Rain", "description": "slight rain", "code": 61}],
  "visibility": 10000
}
```

Flat canonical shape:

```json
{"temperature": 12.3, "humidity": 71, "wind_speed": 4.1,
 "pressure": 1008.2, "condition": "rain", "visibility": 10000}
```

## Field Rules
| Field | Required | Default | Notes |
|-------|----------|---------|-------|
| temperature | yes | - | °C |
| humidity | yes | - | %, 0-100 |
| condition | yes | - | name or WMO code; unknown values -> UNKNOWN |
| wind_speed | no | 0 | m/s, >= 0 |
| visibility | no | 10000 | m, >= 0 |
| pressure | no | 1013.25 | hPa |

### WMO weather codes -> ConditionCategory
| code | ConditionCategory |
|------|-------------------|
| 0, 1 | CLEAR |
| 2, 3 | CLOUDS |
| 45, 48 | MIST |
| 51-57 | DRIZZLE |
| 61-67, 80-82 | RAIN |
| 71-77, 85, 86 | SNOW |
| 95, 96, 99 | THUNDERSTORM |
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from weather_advisor.models.weather import (
    DEFAULT_VISIBILITY_M,
    STANDARD_PRESSURE_HPA,
    ConditionCategory,
    WeatherObservation,
)


class MalformedObservationError(ValueError):
    """Raised when a payload cannot be turned into an observation."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


CODE_TO_CONDITION: dict[int, ConditionCategory] = {
    0: ConditionCategory.CLEAR,
    1: ConditionCategory.CLEAR,
    2: ConditionCategory.CLOUDS,
    3: ConditionCategory.CLOUDS,
    45: ConditionCategory.MIST,
    48: ConditionCategory.MIST,
    51: ConditionCategory.DRIZZLE,
    53: ConditionCategory.DRIZZLE,
    55: ConditionCategory.DRIZZLE,
    56: ConditionCategory.DRIZZLE,
    57: ConditionCategory.DRIZZLE,
    61: ConditionCategory.RAIN,
    63: ConditionCategory.RAIN,
    65: ConditionCategory.RAIN,
    66: ConditionCategory.RAIN,
    67: ConditionCategory.RAIN,
    71: ConditionCategory.SNOW,
    73: ConditionCategory.SNOW,
    75: ConditionCategory.SNOW,
    77: ConditionCategory.SNOW,
    80: ConditionCategory.RAIN,
    81: ConditionCategory.RAIN,
    82: ConditionCategory.RAIN,
    85: ConditionCategory.SNOW,
    86: ConditionCategory.SNOW,
    95: ConditionCategory.THUNDERSTORM,
    96: ConditionCategory.THUNDERSTORM,
    99: ConditionCategory.THUNDERSTORM,
}

NAME_TO_CONDITION: dict[str, ConditionCategory] = {
    "clear": ConditionCategory.CLEAR,
    "clouds": ConditionCategory.CLOUDS,
    "cloudy": ConditionCategory.CLOUDS,
    "rain": ConditionCategory.RAIN,
    "drizzle": ConditionCategory.DRIZZLE,
    "snow": ConditionCategory.SNOW,
    "mist": ConditionCategory.MIST,
    "fog": ConditionCategory.MIST,
    "haze": ConditionCategory.MIST,
    "thunderstorm": ConditionCategory.THUNDERSTORM,
}

# Lookup paths per field, tried in order
_FIELD_PATHS: dict[str, tuple[tuple[str, ...], ...]] = {
    "temperature": (("main", "temp"), ("temperature",)),
    "humidity": (("main", "humidity"), ("humidity",)),
    "pressure": (("main", "pressure"), ("pressure",)),
    "wind_speed": (("wind", "speed"), ("wind_speed",)),
    "visibility": (("visibility",),),
}

_MISSING = object()


def condition_from_code(code: int) -> ConditionCategory:
    """Map a WMO weather code to a condition category."""
    return CODE_TO_CONDITION.get(code, ConditionCategory.UNKNOWN)


def condition_from_name(name: str) -> ConditionCategory:
    """Map a provider condition name (e.g. 'Rain') to a category."""
    return NAME_TO_CONDITION.get(name.strip().lower(), ConditionCategory.UNKNOWN)


def _lookup(payload: Mapping[str, Any], field: str) -> Any:
    for path in _FIELD_PATHS[field]:
        node: Any = payload
        for key in path:
            if not isinstance(node, Mapping) or key not in node:
                node = _MISSING
                break
            node = node[key]
        if node is not _MISSING and node is not None:
            return node
    return _MISSING


def _as_number(value: Any, field: str) -> float:
    # bool is an int subclass but never a measurement
    if isinstance(value, bool):
        raise MalformedObservationError(f"Field '{field}' must be numeric, got bool", field)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise MalformedObservationError(
                f"Field '{field}' must be numeric, got {value!r}", field
            ) from None
    else:
        raise MalformedObservationError(
            f"Field '{field}' must be numeric, got {type(value).__name__}", field
        )

    if not math.isfinite(number):
        raise MalformedObservationError(f"Field '{field}' must be finite", field)
    return number


def _required_number(payload: Mapping[str, Any], field: str) -> float:
    value = _lookup(payload, field)
    if value is _MISSING:
        raise MalformedObservationError(f"Missing required field '{field}'", field)
    return _as_number(value, field)


def _optional_number(payload: Mapping[str, Any], field: str, default: float) -> float:
    value = _lookup(payload, field)
    if value is _MISSING:
        return default
    return _as_number(value, field)


def _parse_condition(payload: Mapping[str, Any]) -> ConditionCategory:
    """Extract the condition category.

    The first entry of a provider `weather` list wins; its `main` name is
    preferred over its numeric `code`.
    """
    entry: Any = _MISSING
    weather = payload.get("weather")
    if isinstance(weather, list) and weather:
        entry = weather[0]
    elif "condition" in payload and payload["condition"] is not None:
        entry = payload["condition"]

    if entry is _MISSING:
        raise MalformedObservationError("Missing required field 'condition'", "condition")

    if isinstance(entry, Mapping):
        name = entry.get("main")
        if isinstance(name, str) and name.strip():
            return condition_from_name(name)
        code = entry.get("code", entry.get("id"))
        if code is None:
            raise MalformedObservationError(
                "Condition entry has neither a name nor a code", "condition"
            )
        entry = code

    if isinstance(entry, ConditionCategory):
        return entry
    if isinstance(entry, bool):
        raise MalformedObservationError("Condition must be a name or a code", "condition")
    if isinstance(entry, float) and entry.is_integer():
        # JSON decoders may hand over WMO codes as 61.0
        entry = int(entry)
    if isinstance(entry, int):
        return condition_from_code(entry)
    if isinstance(entry, str):
        return condition_from_name(entry)
    raise MalformedObservationError(
        f"Condition must be a name or a code, got {type(entry).__name__}", "condition"
    )


def normalize(raw_payload: Mapping[str, Any]) -> WeatherObservation:
    """Convert a raw provider payload into a WeatherObservation.

    Args:
        raw_payload: Provider-shaped or flat payload (see module docstring)

    Returns:
        Canonical, immutable observation

    Raises:
        MalformedObservationError: If a required field is missing, a numeric
            field is not numeric, or a value is physically impossible
    """
    if not isinstance(raw_payload, Mapping):
        raise MalformedObservationError(
            f"Payload must be a mapping, got {type(raw_payload).__name__}"
        )

    temperature = _required_number(raw_payload, "temperature")
    humidity = _required_number(raw_payload, "humidity")
    condition = _parse_condition(raw_payload)
    wind_speed = _optional_number(raw_payload, "wind_speed", 0.0)
    visibility = _optional_number(raw_payload, "visibility", DEFAULT_VISIBILITY_M)
    pressure = _optional_number(raw_payload, "pressure", STANDARD_PRESSURE_HPA)

    try:
        return WeatherObservation(
            temperature_c=temperature,
            humidity_percent=humidity,
            wind_speed_ms=wind_speed,
            pressure_hpa=pressure,
            condition=condition,
            visibility_m=visibility,
        )
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or None
        raise MalformedObservationError(
            f"Invalid observation value for '{field}': {error['msg']}", field
        ) from e
