"""Clothing and carried-item recommendations.

## How Rules Work

Clothing advice starts from exactly one temperature tier, then every
matching weather block adds its items on top:

| Tier | Temperature |
|------|-------------|
| arctic | <= -10°C |
| freezing | <= 0°C |
| cold | <= 10°C |
| cool | <= 20°C |
| warm | <= 30°C |
| hot | > 30°C |

Carried items start from a fixed baseline (phone, wallet, keys) and every
matching rule adds to it. Both lists are duplicate-free and keep the order
in which items were first recommended. Advice text carries a leading emoji
as a visual cue; two entries are duplicates only if their text is equal.
"""

from __future__ import annotations

from weather_advisor.rules.engine import (
    AdviceList,
    AdviceRule,
    RuleContext,
    apply_rules,
    first_match,
)

BASELINE_ITEMS: tuple[str, ...] = ("📱 Phone", "💳 Wallet", "🔑 Keys")

# The hot tier and the sun block recommend different hats
SUN_HAT = "👒 Sun hat"
SUN_PROTECTION_HAT = "👒 Sun protection hat"
SUNGLASSES = "🕶️ Sunglasses"


def create_clothing_tier_rules() -> list[AdviceRule]:
    """Create the mutually exclusive temperature tiers, coldest first."""
    return [
        AdviceRule(
            "arctic",
            lambda ctx: ctx.temperature_c <= -10,
            (
                "🧥 Heavy winter coat",
                "🧤 Insulated gloves",
                "👢 Winter boots",
                "🧣 Warm scarf",
                "🎿 Thermal underwear",
            ),
        ),
        AdviceRule(
            "freezing",
            lambda ctx: ctx.temperature_c <= 0,
            ("🧥 Winter jacket", "🧤 Gloves", "👢 Warm boots", "🧣 Scarf"),
        ),
        AdviceRule(
            "cold",
            lambda ctx: ctx.temperature_c <= 10,
            (
                "🧥 Warm jacket or coat",
                "👖 Long pants",
                "👟 Closed shoes",
                "🧣 Light scarf (optional)",
            ),
        ),
        AdviceRule(
            "cool",
            lambda ctx: ctx.temperature_c <= 20,
            (
                "👕 Light sweater or cardigan",
                "👖 Long pants or jeans",
                "👟 Comfortable shoes",
            ),
        ),
        AdviceRule(
            "warm",
            lambda ctx: ctx.temperature_c <= 30,
            (
                "👕 T-shirt or light shirt",
                "🩳 Shorts or light pants",
                "👟 Breathable shoes",
            ),
        ),
        AdviceRule(
            "hot",
            lambda ctx: True,
            (
                "👕 Lightweight, breathable clothing",
                "🩳 Shorts",
                "🩴 Sandals or breathable shoes",
                SUN_HAT,
            ),
        ),
    ]


def create_clothing_condition_rules() -> list[AdviceRule]:
    """Create the additive weather blocks applied after the tier."""
    return [
        AdviceRule(
            "rain",
            lambda ctx: ctx.is_raining,
            ("☔ Waterproof jacket or raincoat", "👢 Waterproof shoes or rain boots"),
        ),
        AdviceRule(
            "snow",
            lambda ctx: ctx.is_snowing,
            ("❄️ Waterproof outer layer", "👢 Non-slip winter boots"),
        ),
        AdviceRule(
            "wind",
            lambda ctx: ctx.wind_speed_ms > 15,
            ("🌬️ Windbreaker or wind-resistant jacket", "👒 Secure hat or cap"),
        ),
        AdviceRule(
            "sun",
            lambda ctx: ctx.temperature_c > 25,
            (SUNGLASSES, SUN_PROTECTION_HAT),
        ),
    ]


def create_item_rules() -> list[AdviceRule]:
    """Create the additive carried-item rules in evaluation order."""
    return [
        AdviceRule(
            "rain",
            lambda ctx: ctx.is_raining,
            ("☔ Umbrella", "💧 Waterproof bag cover", "🧻 Tissues (for wet conditions)"),
        ),
        AdviceRule(
            "snow",
            lambda ctx: ctx.is_snowing,
            ("🧤 Extra gloves", "🧻 Tissues"),
        ),
        AdviceRule(
            "heat",
            lambda ctx: ctx.temperature_c > 25,
            ("🧴 Sunscreen (SPF 30+)", "💧 Water bottle", SUNGLASSES),
        ),
        AdviceRule(
            "cold",
            lambda ctx: ctx.temperature_c < 5,
            ("🔥 Hand warmers", "☕ Thermos with hot drink"),
        ),
        AdviceRule(
            "humidity",
            lambda ctx: ctx.humidity_percent > 80,
            ("🧻 Extra tissues", "💧 Dehumidifying packets"),
        ),
        AdviceRule(
            "wind",
            lambda ctx: ctx.wind_speed_ms > 20,
            ("🎯 Secure bag or backpack",),
        ),
        AdviceRule(
            "health",
            lambda ctx: ctx.temperature_c < 10 or ctx.humidity_percent > 70,
            ("💊 Hand sanitizer",),
        ),
    ]


CLOTHING_TIER_RULES = create_clothing_tier_rules()
CLOTHING_CONDITION_RULES = create_clothing_condition_rules()
ITEM_RULES = create_item_rules()


def recommend_clothing(context: RuleContext) -> tuple[str, ...]:
    """Recommend clothing for the given conditions.

    Args:
        context: Conditions and scores to evaluate

    Returns:
        Distinct clothing advice in first-recommended order
    """
    clothing = AdviceList()

    tier = first_match(CLOTHING_TIER_RULES, context)
    if tier is not None:
        clothing.extend(tier.advice)

    apply_rules(CLOTHING_CONDITION_RULES, context, clothing)
    return clothing.to_tuple()


def recommend_items(context: RuleContext) -> tuple[str, ...]:
    """Recommend items to carry; always starts with the baseline items."""
    items = AdviceList(BASELINE_ITEMS)
    apply_rules(ITEM_RULES, context, items)
    return items.to_tuple()
