"""Activity suggestions and the personalized tip.

Activities are chosen from one tier selected by the activity level score,
then weather-specific rules add outdoor suggestions or tips on top of
whatever tier was chosen. Outdoor, indoor and tip lists are independent:
the same text may appear in two lists, never twice in one.

The personalized tip is a strict priority cascade; the first matching rule
wins, so snow always beats a high comfort score.
"""

from __future__ import annotations

from dataclasses import dataclass

from weather_advisor.models.recommendation import ActivitySuggestions
from weather_advisor.rules.engine import (
    AdviceList,
    AdviceRule,
    RuleContext,
    apply_rules,
    first_match,
)

DEFAULT_TIP = "😊 Have a wonderful day! Check the weather again if conditions change."


@dataclass(frozen=True)
class ActivityTier:
    """Base suggestions selected by activity level."""

    name: str
    min_activity_level: float  # exclusive
    outdoor: tuple[str, ...] = ()
    indoor: tuple[str, ...] = ()


# Highest threshold first; the last tier catches everything
ACTIVITY_TIERS: tuple[ActivityTier, ...] = (
    ActivityTier(
        name="excellent",
        min_activity_level=0.8,
        outdoor=(
            "🚶‍♂️ Walking or hiking",
            "🚴‍♂️ Cycling",
            "🏃‍♂️ Jogging or running",
            "🏐 Outdoor sports",
            "📸 Photography walk",
            "🧺 Picnic in the park",
            "🌳 Nature exploration",
        ),
    ),
    ActivityTier(
        name="good",
        min_activity_level=0.5,
        outdoor=("🚶‍♂️ Light walking", "☕ Outdoor café visits", "🛍️ Outdoor markets"),
        indoor=("🏛️ Museums", "🛍️ Shopping centers"),
    ),
    ActivityTier(
        name="poor",
        min_activity_level=float("-inf"),
        indoor=(
            "🏛️ Museums and galleries",
            "📚 Libraries",
            "🛍️ Indoor shopping",
            "🎬 Movie theaters",
            "🎮 Gaming centers",
            "☕ Cozy cafés",
            "🍽️ Indoor dining",
        ),
    ),
)


def create_outdoor_rules() -> list[AdviceRule]:
    """Create weather-specific outdoor additions."""
    return [
        AdviceRule(
            "snow_fun",
            lambda ctx: ctx.is_snowing and ctx.temperature_c > -10,
            ("⛄ Snow activities (if you enjoy winter sports)",),
        ),
        AdviceRule(
            "water",
            lambda ctx: ctx.temperature_c > 30,
            ("🏊‍♂️ Swimming", "🌊 Water sports"),
        ),
    ]


def create_tip_rules() -> list[AdviceRule]:
    """Create weather-specific activity tips."""
    return [
        AdviceRule(
            "heat",
            lambda ctx: ctx.temperature_c > 30,
            ("Stay hydrated and seek shade frequently",),
        ),
        AdviceRule(
            "freezing",
            lambda ctx: ctx.temperature_c < 0,
            ("Limit outdoor exposure, dress warmly",),
        ),
        AdviceRule(
            "gale",
            lambda ctx: ctx.wind_speed_ms > 25,
            ("Avoid activities with loose items outdoors",),
        ),
        AdviceRule(
            "low_visibility",
            lambda ctx: ctx.visibility_m < 5000,
            ("Be extra careful if driving or walking outdoors",),
        ),
    ]


def create_personalized_tip_rules() -> list[AdviceRule]:
    """Create the tip cascade in priority order.

    The default tip is not part of the table; it applies when nothing
    matches.
    """
    return [
        AdviceRule(
            "snow",
            lambda ctx: ctx.is_snowing,
            ("❄️ Snow day! Perfect for cozy indoor activities with hot cocoa.",),
        ),
        AdviceRule(
            "comfortable",
            lambda ctx: ctx.comfort_index > 0.8,
            (
                "🌟 Perfect weather conditions! Great time to enjoy outdoor "
                "activities and get some fresh air.",
            ),
        ),
        AdviceRule(
            "uncomfortable",
            lambda ctx: ctx.comfort_index < 0.3,
            (
                "🏠 Weather conditions are challenging today. Stay comfortable "
                "indoors and take care of yourself.",
            ),
        ),
        AdviceRule(
            "active",
            lambda ctx: ctx.activity_level > 0.7,
            (
                "🏃‍♂️ Excellent weather for being active! Don't forget to stay "
                "hydrated and enjoy the outdoors.",
            ),
        ),
        AdviceRule(
            "hot",
            lambda ctx: ctx.temperature_c > 30,
            ("🌞 Hot day ahead! Seek shade, wear light colors, and drink plenty of water.",),
        ),
        AdviceRule(
            "cold",
            lambda ctx: ctx.temperature_c < 5,
            ("🧥 Bundle up today! Layer your clothing and keep extremities warm.",),
        ),
        AdviceRule(
            "rain",
            lambda ctx: ctx.is_raining,
            (
                "☔ Rainy day vibes! Perfect for indoor activities or a cozy walk "
                "with an umbrella.",
            ),
        ),
        AdviceRule(
            "wind",
            lambda ctx: ctx.wind_speed_ms > 20,
            (
                "🌬️ Windy conditions today! Secure loose items and dress in "
                "wind-resistant clothing.",
            ),
        ),
    ]


OUTDOOR_RULES = create_outdoor_rules()
TIP_RULES = create_tip_rules()
PERSONALIZED_TIP_RULES = create_personalized_tip_rules()


def select_activity_tier(activity_level: float) -> ActivityTier:
    """Select the single tier for an activity level."""
    for tier in ACTIVITY_TIERS:
        if activity_level > tier.min_activity_level:
            return tier
    return ACTIVITY_TIERS[-1]


def recommend_activities(context: RuleContext) -> ActivitySuggestions:
    """Suggest outdoor and indoor activities plus short tips."""
    tier = select_activity_tier(context.activity_level)

    outdoor = AdviceList(tier.outdoor)
    indoor = AdviceList(tier.indoor)
    tips = AdviceList()

    apply_rules(OUTDOOR_RULES, context, outdoor)
    apply_rules(TIP_RULES, context, tips)

    return ActivitySuggestions(
        outdoor=outdoor.to_tuple(),
        indoor=indoor.to_tuple(),
        tips=tips.to_tuple(),
    )


def personalized_tip(context: RuleContext) -> str:
    """Pick the single most relevant tip for the conditions."""
    rule = first_match(PERSONALIZED_TIP_RULES, context)
    if rule is None:
        return DEFAULT_TIP
    return rule.advice[0]
