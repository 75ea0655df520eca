"""Rule tables for evaluating weather conditions into advice."""

from weather_advisor.rules.engine import (
    AdviceList,
    AdviceRule,
    RuleContext,
    apply_rules,
    first_match,
)

__all__ = [
    "AdviceList",
    "AdviceRule",
    "RuleContext",
    "apply_rules",
    "first_match",
]
