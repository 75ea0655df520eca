"""Degraded recommendations used when the main pipeline fails.

Only the temperature and the rain flag are read, both already validated
when the observation was built, and nothing here calls out to other
modules' rule tables.
"""

from __future__ import annotations

from weather_advisor.models.recommendation import (
    ActivitySuggestions,
    RecommendationBundle,
    ScoreSet,
)
from weather_advisor.models.weather import WeatherObservation

FALLBACK_TIP = "Have a wonderful day! 😊"


def fallback(observation: WeatherObservation) -> RecommendationBundle:
    """Build a reduced-fidelity bundle from temperature and rain alone."""
    temperature_c = observation.temperature_c
    is_raining = observation.is_raining

    if temperature_c < 10:
        clothing_weight = 0.8
        clothing = ("🧥 Warm jacket", "👖 Long pants")
    elif temperature_c > 25:
        clothing_weight = 0.2
        clothing = ("👕 Comfortable clothing",)
    else:
        clothing_weight = 0.5
        clothing = ("👕 Comfortable clothing",)

    if is_raining:
        items = ("☔ Umbrella", "💧 Waterproof bag")
        outdoor: tuple[str, ...] = ()
    else:
        items = ("💧 Water bottle",)
        outdoor = ("🚶‍♂️ Walking",)

    return RecommendationBundle(
        scores=ScoreSet(
            clothing_weight=clothing_weight,
            activity_level=0.3 if is_raining else 0.7,
            comfort_index=0.5,
        ),
        clothing=clothing,
        items=items,
        activities=ActivitySuggestions(
            outdoor=outdoor,
            indoor=("📚 Reading", "🏛️ Museums"),
            tips=("Have a great day!",),
        ),
        personalized_tip=FALLBACK_TIP,
    )
