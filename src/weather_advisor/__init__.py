"""Weather Advisor - rule-based advice for current weather conditions."""

from weather_advisor.models.recommendation import RecommendationBundle
from weather_advisor.models.weather import ConditionCategory, WeatherObservation
from weather_advisor.normalizer import MalformedObservationError, normalize
from weather_advisor.recommendations.engine import predict, predict_async

__version__ = "0.1.0"

__all__ = [
    "ConditionCategory",
    "MalformedObservationError",
    "RecommendationBundle",
    "WeatherObservation",
    "normalize",
    "predict",
    "predict_async",
]
