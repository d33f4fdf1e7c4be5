"""Scoring configuration — every weight, threshold and vocabulary used by the
appetite scorer, gathered in one immutable model.

The defaults reproduce the broker product's appetite heuristic:

- **industry fit** (30 pts) — sector match, catch-all acceptance, or mismatch
- **revenue alignment** (25 pts) — estimated premium against premium bounds
- **risk appetite** (20 pts) — client risk profile against underwriter appetite
- **geography** (15 pts) — home-market coverage
- **specialty bonus** (+10) and **exclusion penalty** (-20)

Each outcome carries two numbers: the 0-100 ``fit`` reported in the alignment
breakdown and the ``points`` added to the running match score.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from iris.config import Settings


class ScoreOutcome(BaseModel):
    """One branch of a sub-score: breakdown value plus points contributed."""

    model_config = ConfigDict(frozen=True)

    fit: int = Field(..., ge=0, le=100)
    points: int = Field(..., ge=0)


class ScoringConfig(BaseModel):
    """Tunable parameters for :class:`~iris.matching.appetite.AppetiteScorer`.

    The values are provisional business defaults; override them per market
    with :meth:`from_settings` or by constructing the model directly.
    """

    model_config = ConfigDict(frozen=True)

    # Industry fit
    industry_match: ScoreOutcome = ScoreOutcome(fit=95, points=30)
    industry_catch_all: ScoreOutcome = ScoreOutcome(fit=70, points=20)
    industry_mismatch: ScoreOutcome = ScoreOutcome(fit=30, points=0)
    industry_unknown: ScoreOutcome = ScoreOutcome(fit=60, points=15)
    catch_all_sectors: tuple[str, ...] = ("general commercial",)

    # Revenue / premium alignment
    premium_within_range: ScoreOutcome = ScoreOutcome(fit=90, points=25)
    premium_unconstrained: ScoreOutcome = ScoreOutcome(fit=70, points=15)
    premium_below_minimum: ScoreOutcome = ScoreOutcome(fit=40, points=0)
    premium_above_maximum: ScoreOutcome = ScoreOutcome(fit=50, points=0)
    revenue_band_premiums: tuple[tuple[str, float], ...] = (
        ("0-1m", 5_000),
        ("1-5m", 15_000),
        ("5-10m", 25_000),
        ("10-50m", 75_000),
        ("50m+", 150_000),
    )
    default_estimated_premium: float = 15_000
    currency_symbol: str = "£"

    # Risk appetite
    risk_aligned: ScoreOutcome = ScoreOutcome(fit=85, points=20)
    risk_misaligned: ScoreOutcome = ScoreOutcome(fit=50, points=10)
    risk_unknown: ScoreOutcome = ScoreOutcome(fit=60, points=10)
    risk_appetite_keywords: tuple[tuple[str, tuple[str, ...]], ...] = (
        ("low", ("conservative",)),
        ("medium", ("moderate", "balanced")),
        ("high", ("aggressive",)),
    )

    # Geography
    geography_covered: ScoreOutcome = ScoreOutcome(fit=90, points=15)
    geography_uncovered: ScoreOutcome = ScoreOutcome(fit=30, points=0)
    geography_unknown: ScoreOutcome = ScoreOutcome(fit=70, points=10)
    home_market_label: str = "UK market"
    home_market_synonyms: tuple[str, ...] = ("uk", "united kingdom", "england", "europe")

    # Adjustments
    exclusion_penalty: int = Field(default=20, ge=0)
    specialty_bonus: int = Field(default=10, ge=0)

    # Confidence tiers and submission approach
    high_confidence_threshold: int = 75
    medium_confidence_threshold: int = 50
    approach_tiers: tuple[tuple[int, str], ...] = (
        (80, "Priority submission - high appetite alignment"),
        (60, "Standard submission with sector expertise highlighted"),
        (40, "Careful submission - address potential concerns"),
    )
    fallback_approach: str = "Consider alternative markets - limited appetite fit"

    # Ranking
    strong_match_threshold: int = Field(default=60, ge=0, le=100)
    nearest_miss_limit: int = Field(default=3, ge=0)
    top_match_limit: Optional[int] = Field(default=None, ge=0)

    # Presentation caps
    max_reasons: int = 4
    max_concerns: int = 3
    explanation_max_length: int = 200

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ScoringConfig":
        """Build a config with the environment-level overrides applied."""
        return cls(
            home_market_label=settings.home_market_label,
            currency_symbol=settings.currency_symbol,
            strong_match_threshold=settings.strong_match_threshold,
            nearest_miss_limit=settings.nearest_miss_limit,
            top_match_limit=settings.top_match_limit,
        )

    def estimate_premium(self, revenue_band: str) -> float:
        """Map a revenue band to its estimated annual premium."""
        return dict(self.revenue_band_premiums).get(revenue_band, self.default_estimated_premium)

    def confidence_for(self, score: int) -> str:
        if score >= self.high_confidence_threshold:
            return "high"
        if score >= self.medium_confidence_threshold:
            return "medium"
        return "low"

    def approach_for(self, score: int) -> str:
        for threshold, approach in self.approach_tiers:
            if score >= threshold:
                return approach
        return self.fallback_approach

    def format_currency(self, amount: float) -> str:
        """Format *amount* with thousands separators, e.g. ``£15,000``."""
        if float(amount).is_integer():
            return f"{self.currency_symbol}{amount:,.0f}"
        return f"{self.currency_symbol}{amount:,.2f}"
