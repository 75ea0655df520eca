"""Recommendation engine turning weather observations into advice."""

from weather_advisor.recommendations.engine import (
    PredictionFailure,
    RecommendationEngine,
    expand,
    predict,
    predict_async,
)
from weather_advisor.recommendations.fallback import fallback
from weather_advisor.recommendations.scoring import (
    activity_level,
    clothing_weight,
    comfort_index,
    score_observation,
)

__all__ = [
    "PredictionFailure",
    "RecommendationEngine",
    "expand",
    "predict",
    "predict_async",
    "fallback",
    "activity_level",
    "clothing_weight",
    "comfort_index",
    "score_observation",
]
