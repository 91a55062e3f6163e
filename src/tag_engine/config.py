"""Ranking engine tuning constants.

Plain pydantic model, no file or environment access: loading from
config/settings.yaml lives in ``src.common.config``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .models import PolarityFiltering

SPREAD_VARIANT: dict = {
    "apply_similarity_penalty": False,
    "polarity_filtering": PolarityFiltering.SPREAD,
    "score_epsilon": 0.1,
    "impact_epsilon": 1.0,
    "listing_epsilon": 50.0,
}

CAP_VARIANT: dict = {
    "apply_similarity_penalty": True,
    "polarity_filtering": PolarityFiltering.CAP,
}


class RankingConfig(BaseModel):
    """Tuning constants for the tag ranking engine.

    Defaults reproduce the similarity-penalty engine with the polarity
    cap. Use ``spread_variant()`` for the alternate engine.
    """

    model_config = ConfigDict(frozen=True)

    apply_similarity_penalty: bool = True
    polarity_filtering: PolarityFiltering = PolarityFiltering.CAP

    # (min similarity %, penalty), checked in order
    similarity_penalties: tuple[tuple[float, int], ...] = (
        (85.0, -6),
        (70.0, -4),
        (55.0, -2),
        (40.0, -1),
    )

    # Polarity cap
    max_total_tags: int = Field(default=150, ge=0)
    max_negative_tags: int = Field(default=10, ge=0)
    negative_min_listings: int = Field(default=200, ge=0)
    strong_negative_score: float = -8
    strong_negative_min_listings: int = Field(default=50, ge=0)
    polarity_score_epsilon: float = Field(default=1.0, ge=0)

    # Per-bucket negative spreading, None disables it
    max_negative_per_bucket: int | None = Field(default=2, ge=0)

    # Within-bucket tie-break thresholds
    score_epsilon: float = Field(default=0.5, ge=0)
    impact_epsilon: float = Field(default=5.0, ge=0)
    listing_epsilon: float = Field(default=100.0, ge=0)

    # Smart mode: True appends excluded tags last, False drops them
    demote_excluded: bool = True

    @classmethod
    def spread_variant(cls, **overrides) -> RankingConfig:
        """Engine variant without similarity penalty or polarity cap."""
        return cls(**{**SPREAD_VARIANT, **overrides})

    def with_variant(self, variant: str) -> RankingConfig:
        """Switch engine variant ("cap" or "spread"), keeping other settings."""
        update = SPREAD_VARIANT if variant == "spread" else CAP_VARIANT
        return self.model_validate({**self.model_dump(), **update})
