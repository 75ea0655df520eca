"""Ordered rule tables for turning weather conditions into advice.

Every advice cascade in the recommender is a list of `AdviceRule` objects
evaluated in a fixed order against a `RuleContext`. Two evaluation modes
exist:

- `apply_rules`: every matching rule contributes its advice (additive
  blocks such as "raining -> umbrella").
- `first_match`: only the first matching rule counts (tiers and the
  personalized tip cascade).

Rule order is therefore the only precedence mechanism, which keeps each
table auditable and testable on its own.

Example:
    ```python
    rules = [
        AdviceRule("rain", lambda ctx: ctx.is_raining, ("Umbrella",)),
        AdviceRule("hot", lambda ctx: ctx.temperature_c > 25, ("Water bottle",)),
    ]
    advice = AdviceList(["Phone"])
    apply_rules(rules, context, advice)
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass

from weather_advisor.models.recommendation import ScoreSet
from weather_advisor.models.weather import WeatherObservation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule predicate may look at.

    Condition flags are derived once from the observation's category when
    the context is built.
    """

    temperature_c: float
    humidity_percent: float
    wind_speed_ms: float
    pressure_hpa: float
    visibility_m: float
    is_raining: bool
    is_snowing: bool
    is_cloudy: bool
    clothing_weight: float
    activity_level: float
    comfort_index: float

    @classmethod
    def build(cls, observation: WeatherObservation, scores: ScoreSet) -> "RuleContext":
        """Create a context from an observation and its scores."""
        flags = observation.flags
        return cls(
            temperature_c=observation.temperature_c,
            humidity_percent=observation.humidity_percent,
            wind_speed_ms=observation.wind_speed_ms,
            pressure_hpa=observation.pressure_hpa,
            visibility_m=observation.visibility_m,
            is_raining=flags.is_raining,
            is_snowing=flags.is_snowing,
            is_cloudy=flags.is_cloudy,
            clothing_weight=scores.clothing_weight,
            activity_level=scores.activity_level,
            comfort_index=scores.comfort_index,
        )


@dataclass(frozen=True)
class AdviceRule:
    """A predicate paired with the advice it contributes.

    Attributes:
        name: Short identifier used in logs and tests
        when: Predicate over a RuleContext
        advice: Advice strings added when the predicate holds
    """

    name: str
    when: Callable[[RuleContext], bool]
    advice: tuple[str, ...] = ()

    def matches(self, context: RuleContext) -> bool:
        """Check if this rule applies to the given context."""
        return bool(self.when(context))


class AdviceList:
    """Insertion-ordered collection of distinct advice strings.

    Adding an entry that is already present is a no-op, so the first rule
    to mention an item decides its position.
    """

    def __init__(self, initial: Iterable[str] = ()):
        self._entries: dict[str, None] = {}
        self.extend(initial)

    def add(self, entry: str) -> None:
        """Add an entry unless already present."""
        self._entries.setdefault(entry, None)

    def extend(self, entries: Iterable[str]) -> None:
        """Add several entries in order."""
        for entry in entries:
            self.add(entry)

    def to_tuple(self) -> tuple[str, ...]:
        """Freeze the current contents."""
        return tuple(self._entries)

    def __contains__(self, entry: object) -> bool:
        return entry in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AdviceList({list(self._entries)!r})"


def apply_rules(
    rules: Sequence[AdviceRule],
    context: RuleContext,
    advice: AdviceList,
) -> list[str]:
    """Apply every matching rule, in order, to an advice list.

    Args:
        rules: Rules to evaluate
        context: Conditions to evaluate against
        advice: Collection receiving the advice of matching rules

    Returns:
        Names of the rules that fired
    """
    fired: list[str] = []
    for rule in rules:
        if rule.matches(context):
            advice.extend(rule.advice)
            fired.append(rule.name)

    logger.debug(f"Rules fired: {fired}")
    return fired


def first_match(
    rules: Sequence[AdviceRule],
    context: RuleContext,
) -> AdviceRule | None:
    """Return the first rule whose predicate holds, or None."""
    for rule in rules:
        if rule.matches(context):
            logger.debug(f"First matching rule: {rule.name}")
            return rule
    return None
