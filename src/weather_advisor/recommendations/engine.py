"""Recommendation assembly.

`predict` is the single entry point for collaborators: it scores an
observation, expands the scores into advice, and packages everything into
one immutable `RecommendationBundle`. It never raises. Any failure inside
scoring or expansion is logged and answered with the fallback bundle.

Example:
    ```python
    observation = normalize(payload)
    bundle = predict(observation)
    print(bundle.personalized_tip)
    ```

Callers that need to know whether the degraded path was taken use
`RecommendationEngine.evaluate`, which returns a `PredictionResult`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from weather_advisor.models.recommendation import (
    PredictionResult,
    PredictionSource,
    RecommendationBundle,
    ScoreSet,
)
from weather_advisor.models.weather import WeatherObservation
from weather_advisor.recommendations.activities import (
    personalized_tip,
    recommend_activities,
)
from weather_advisor.recommendations.fallback import fallback
from weather_advisor.recommendations.gear import recommend_clothing, recommend_items
from weather_advisor.recommendations.scoring import score_observation
from weather_advisor.rules.engine import RuleContext

logger = logging.getLogger(__name__)

Scorer = Callable[[WeatherObservation], ScoreSet]
Expander = Callable[[WeatherObservation, ScoreSet], RecommendationBundle]


class PredictionFailure(Exception):
    """Raised inside the engine when scoring or expansion fails.

    Never escapes `predict`; it is converted into a fallback result.
    """

    def __init__(self, message: str, stage: str):
        super().__init__(message)
        self.stage = stage


def expand(observation: WeatherObservation, scores: ScoreSet) -> RecommendationBundle:
    """Expand an observation and its scores into the full advice bundle."""
    context = RuleContext.build(observation, scores)
    return RecommendationBundle(
        scores=scores,
        clothing=recommend_clothing(context),
        items=recommend_items(context),
        activities=recommend_activities(context),
        personalized_tip=personalized_tip(context),
    )


@dataclass
class RecommendationEngine:
    """Runs scoring and expansion with a fallback safety net.

    Attributes:
        scorer: Computes the ScoreSet for an observation
        expander: Turns an observation plus scores into a bundle
    """

    scorer: Scorer = score_observation
    expander: Expander = expand

    def _run(self, observation: WeatherObservation) -> RecommendationBundle:
        try:
            scores = self.scorer(observation)
        except Exception as e:
            raise PredictionFailure(f"Scoring failed: {e}", stage="scoring") from e

        try:
            return self.expander(observation, scores)
        except Exception as e:
            raise PredictionFailure(f"Expansion failed: {e}", stage="expansion") from e

    def evaluate(self, observation: WeatherObservation) -> PredictionResult:
        """Produce recommendations, tagging which pipeline produced them."""
        try:
            bundle = self._run(observation)
        except PredictionFailure as e:
            logger.error(f"Prediction failed during {e.stage}, using fallback: {e}")
            return PredictionResult(
                source=PredictionSource.FALLBACK,
                bundle=fallback(observation),
                failure=str(e),
            )

        logger.debug(
            f"Prediction complete: clothing={bundle.scores.clothing_weight:.2f} "
            f"activity={bundle.scores.activity_level:.2f} "
            f"comfort={bundle.scores.comfort_index:.2f}"
        )
        return PredictionResult(source=PredictionSource.MODEL, bundle=bundle)

    def predict(self, observation: WeatherObservation) -> RecommendationBundle:
        """Produce recommendations; never raises."""
        return self.evaluate(observation).bundle


_default_engine = RecommendationEngine()


def predict(observation: WeatherObservation) -> RecommendationBundle:
    """Produce recommendations for an observation using the default engine."""
    return _default_engine.predict(observation)


async def predict_async(observation: WeatherObservation) -> RecommendationBundle:
    """Async-compatible wrapper around `predict`; runs synchronously."""
    return predict(observation)
