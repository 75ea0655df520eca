"""Domain models for weather advice."""

from weather_advisor.models.location import (
    Coordinates,
    GeocodedPlace,
    format_location_name,
    is_valid_city_name,
)
from weather_advisor.models.weather import (
    ConditionCategory,
    ConditionFlags,
    WeatherObservation,
)
from weather_advisor.models.recommendation import (
    ActivitySuggestions,
    PredictionResult,
    PredictionSource,
    RecommendationBundle,
    ScoreSet,
)

__all__ = [
    # Location
    "Coordinates",
    "GeocodedPlace",
    "format_location_name",
    "is_valid_city_name",
    # Weather
    "ConditionCategory",
    "ConditionFlags",
    "WeatherObservation",
    # Recommendation
    "ActivitySuggestions",
    "PredictionResult",
    "PredictionSource",
    "RecommendationBundle",
    "ScoreSet",
]
