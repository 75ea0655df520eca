"""Recommendation models for weather-based advice."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScoreSet(BaseModel):
    """Derived scores summarizing an observation.

    The three scores are independent axes; no ordering between them is
    implied.
    """

    model_config = ConfigDict(frozen=True)

    clothing_weight: float = Field(
        ..., ge=0, le=1, description="How heavily to dress (0=minimal, 1=full winter)"
    )
    activity_level: float = Field(
        ..., ge=0, le=1, description="Suitability for outdoor activity"
    )
    comfort_index: float = Field(
        ..., ge=0, le=1, description="Overall perceived comfort"
    )


class ActivitySuggestions(BaseModel):
    """Activity suggestions split into independent lists."""

    model_config = ConfigDict(frozen=True)

    outdoor: tuple[str, ...] = Field(default=(), description="Outdoor activities")
    indoor: tuple[str, ...] = Field(default=(), description="Indoor activities")
    tips: tuple[str, ...] = Field(default=(), description="Short safety/comfort tips")

    def is_empty(self) -> bool:
        """Check if no list has any entry."""
        return not (self.outdoor or self.indoor or self.tips)


class RecommendationBundle(BaseModel):
    """The complete advice payload for one observation."""

    model_config = ConfigDict(frozen=True)

    scores: ScoreSet = Field(..., description="Derived scores")
    clothing: tuple[str, ...] = Field(
        default=(), description="Clothing advice, first-triggered order"
    )
    items: tuple[str, ...] = Field(
        default=(), description="Items to carry, first-triggered order"
    )
    activities: ActivitySuggestions = Field(
        default_factory=ActivitySuggestions, description="Activity suggestions"
    )
    personalized_tip: str = Field(..., min_length=1, description="One-line tip")

    @field_validator("clothing", "items")
    @classmethod
    def reject_duplicates(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Advice lists never repeat an entry."""
        if len(set(v)) != len(v):
            raise ValueError("advice entries must be distinct")
        return v


class PredictionSource(str, Enum):
    """Which pipeline produced a bundle."""

    MODEL = "model"
    FALLBACK = "fallback"


class PredictionResult(BaseModel):
    """A bundle tagged with the pipeline that produced it."""

    model_config = ConfigDict(frozen=True)

    source: PredictionSource = Field(..., description="Producing pipeline")
    bundle: RecommendationBundle = Field(..., description="The recommendations")
    failure: str | None = Field(
        default=None, description="Why the main pipeline failed, for fallbacks"
    )

    def is_fallback(self) -> bool:
        """Check if the degraded pipeline produced this result."""
        return self.source == PredictionSource.FALLBACK
