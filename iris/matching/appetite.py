"""Appetite scorer — produces a 0-100 match score between a client risk profile
and one underwriter's appetite record by combining industry fit, premium
alignment, risk appetite, geographic coverage, exclusions, and specialty focus.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Literal, Optional

from pydantic import BaseModel, Field

from iris.matching.profiles import AppetiteRecord, ClientProfile
from iris.matching.scoring_config import ScoreOutcome, ScoringConfig

if TYPE_CHECKING:
    from iris.matching.ranker import RankedMatches, UnderwriterRanker

logger = logging.getLogger("iris.matching.appetite")


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class AlignmentBreakdown(BaseModel):
    """Independent 0-100 sub-scores behind a match.

    The sub-scores describe how well each dimension fits; they are not the
    points added to ``match_score`` and need not sum to it.
    """

    industry_fit: int = Field(..., ge=0, le=100)
    revenue_alignment: int = Field(..., ge=0, le=100)
    risk_appetite_match: int = Field(..., ge=0, le=100)
    geographic_match: int = Field(..., ge=0, le=100)


class PremiumRange(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None


class MatchResult(BaseModel):
    """Scoring result for one underwriter.

    Attributes
    ----------
    underwriter_name:
        Copied from the appetite record.
    match_score:
        Clamped 0-100 composite score.
    confidence_level:
        ``high`` (>= 75), ``medium`` (>= 50) or ``low``.
    alignment_breakdown:
        The four dimension sub-scores.
    match_reasons:
        Up to four positive findings, in scoring order.
    concerns:
        Up to three negative findings, in scoring order.
    recommended_approach:
        Submission guidance chosen by score band.
    premium_range:
        The underwriter's premium bounds, copied through.
    estimated_premium:
        Premium estimate derived from the client's revenue band.
    explanation:
        One-line summary of the strongest reasons and the first concern.
    """

    underwriter_name: str
    underwriter_id: Optional[str] = None
    logo_url: Optional[str] = None
    match_score: int = Field(..., ge=0, le=100)
    confidence_level: Literal["high", "medium", "low"]
    alignment_breakdown: AlignmentBreakdown
    match_reasons: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    recommended_approach: str
    premium_range: PremiumRange = Field(default_factory=PremiumRange)
    estimated_premium: float
    explanation: str = ""


# ---------------------------------------------------------------------------
# AppetiteScorer
# ---------------------------------------------------------------------------


class AppetiteScorer:
    """Scores underwriter appetite for a client risk profile.

    The match score is an additive point total built from four dimensions
    plus two adjustments, then clamped to 0-100:

    - **industry fit** (30 pts) — target sectors against the client industry
    - **revenue alignment** (25 pts) — estimated premium against premium bounds
    - **risk appetite** (20 pts) — underwriter appetite against client risk
    - **geography** (15 pts) — coverage of the home market
    - **exclusion penalty** (-20) — client industry named in the exclusions
    - **specialty bonus** (+10) — client industry in the specialty focus

    Missing data never disqualifies a record: each dimension has a neutral
    branch for absent values.  The scorer holds no mutable state and performs
    no I/O, so one instance may be shared freely.

    Parameters
    ----------
    config:
        Scoring weights and vocabularies; defaults to :class:`ScoringConfig`.
    ranker:
        Optional pre-built :class:`~iris.matching.ranker.UnderwriterRanker`.
    """

    def __init__(
        self,
        config: ScoringConfig | None = None,
        ranker: "UnderwriterRanker | None" = None,
    ) -> None:
        self.config = config or ScoringConfig()
        if ranker is None:
            from iris.matching.ranker import UnderwriterRanker

            ranker = UnderwriterRanker(self.config)
        self.ranker = ranker

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def score(self, client: ClientProfile, record: AppetiteRecord) -> MatchResult:
        """Compute the match between *client* and a single appetite record."""
        cfg = self.config
        reasons: list[str] = []
        concerns: list[str] = []
        total = 0

        # 1. Industry fit
        industry = self._score_industry(client, record, reasons, concerns)
        total += industry.points

        # 2. Revenue / premium alignment
        estimated_premium = cfg.estimate_premium(client.revenue_band)
        revenue = self._score_revenue(estimated_premium, record, reasons, concerns)
        total += revenue.points

        # 3. Risk appetite
        risk = self._score_risk_appetite(client, record, reasons)
        total += risk.points

        # 4. Geography
        geography = self._score_geography(client, record, reasons, concerns)
        total += geography.points

        # 5. Exclusion penalty
        if client.industry and _any_contains(record.exclusions, client.industry):
            total -= cfg.exclusion_penalty
            concerns.append("Industry may be excluded")

        # 6. Specialty bonus
        if client.industry and _any_overlaps(record.specialty_focus, client.industry):
            total += cfg.specialty_bonus
            reasons.append("Specialty expertise in your industry")

        # 7. Clamp
        match_score = min(100, max(0, total))

        reasons = reasons[: cfg.max_reasons]
        concerns = concerns[: cfg.max_concerns]

        logger.debug(
            "Scored underwriter=%s raw=%d clamped=%d industry=%d revenue=%d risk=%d geo=%d",
            record.underwriter_name,
            total,
            match_score,
            industry.fit,
            revenue.fit,
            risk.fit,
            geography.fit,
        )

        return MatchResult(
            underwriter_name=record.underwriter_name,
            underwriter_id=record.underwriter_id,
            logo_url=record.logo_url,
            match_score=match_score,
            confidence_level=cfg.confidence_for(match_score),
            alignment_breakdown=AlignmentBreakdown(
                industry_fit=industry.fit,
                revenue_alignment=revenue.fit,
                risk_appetite_match=risk.fit,
                geographic_match=geography.fit,
            ),
            match_reasons=reasons,
            concerns=concerns,
            recommended_approach=cfg.approach_for(match_score),
            premium_range=PremiumRange(min=record.minimum_premium, max=record.maximum_premium),
            estimated_premium=estimated_premium,
            explanation=self._explain(match_score, reasons, concerns),
        )

    def score_all(
        self, client: ClientProfile, records: Iterable[AppetiteRecord]
    ) -> list[MatchResult]:
        """Score every record, preserving input order."""
        return [self.score(client, record) for record in records]

    def rank(
        self, client: ClientProfile, records: Iterable[AppetiteRecord]
    ) -> "RankedMatches":
        """Score every record and split the results into strong matches and
        nearest misses.  An empty collection yields two empty lists.
        """
        return self.ranker.rank_matches(self.score_all(client, records))

    # ------------------------------------------------------------------
    # Scoring components
    # ------------------------------------------------------------------

    def _score_industry(
        self,
        client: ClientProfile,
        record: AppetiteRecord,
        reasons: list[str],
        concerns: list[str],
    ) -> ScoreOutcome:
        """Score sector alignment (up to 30 pts)."""
        cfg = self.config
        if not record.target_sectors:
            return cfg.industry_unknown

        if client.industry and _any_overlaps(record.target_sectors, client.industry):
            reasons.append(f"Specializes in {client.industry} sector")
            return cfg.industry_match

        catch_all = {marker.lower() for marker in cfg.catch_all_sectors}
        if any(sector.lower() in catch_all for sector in record.target_sectors):
            reasons.append("Accepts general commercial risks")
            return cfg.industry_catch_all

        if not client.industry:
            # Unknown industry cannot be held against the underwriter
            return cfg.industry_unknown

        concerns.append(f"Limited experience in {client.industry} sector")
        return cfg.industry_mismatch

    def _score_revenue(
        self,
        estimated_premium: float,
        record: AppetiteRecord,
        reasons: list[str],
        concerns: list[str],
    ) -> ScoreOutcome:
        """Score the estimated premium against the premium bounds (up to 25 pts).

        A missing bound is unbounded on that side.
        """
        cfg = self.config
        minimum = record.minimum_premium
        maximum = record.maximum_premium

        if minimum is None and maximum is None:
            return cfg.premium_unconstrained

        if minimum is not None and estimated_premium < minimum:
            concerns.append(
                f"Estimated premium ({cfg.format_currency(estimated_premium)}) "
                f"below minimum ({cfg.format_currency(minimum)})"
            )
            return cfg.premium_below_minimum

        if maximum is not None and estimated_premium > maximum:
            concerns.append(
                f"Estimated premium ({cfg.format_currency(estimated_premium)}) "
                f"above maximum ({cfg.format_currency(maximum)})"
            )
            return cfg.premium_above_maximum

        reasons.append("Premium requirements align with appetite")
        return cfg.premium_within_range

    def _score_risk_appetite(
        self,
        client: ClientProfile,
        record: AppetiteRecord,
        reasons: list[str],
    ) -> ScoreOutcome:
        """Score risk appetite correlation (up to 20 pts)."""
        cfg = self.config
        if record.risk_appetite is None:
            return cfg.risk_unknown

        appetite = record.risk_appetite.lower()
        keywords = dict(cfg.risk_appetite_keywords).get(client.risk_profile or "", ())
        if any(keyword in appetite for keyword in keywords):
            reasons.append("Risk appetite alignment")
            return cfg.risk_aligned
        return cfg.risk_misaligned

    def _score_geography(
        self,
        client: ClientProfile,
        record: AppetiteRecord,
        reasons: list[str],
        concerns: list[str],
    ) -> ScoreOutcome:
        """Score home-market coverage (up to 15 pts)."""
        cfg = self.config
        if not record.geographic_coverage:
            return cfg.geography_unknown

        synonyms = {s.lower() for s in cfg.home_market_synonyms}
        covered = any(
            synonym in region.lower()
            for region in record.geographic_coverage
            for synonym in synonyms
        )
        if covered:
            reasons.append(f"Covers {cfg.home_market_label}")
            return cfg.geography_covered

        concerns.append(f"Limited {cfg.home_market_label} presence")
        return cfg.geography_uncovered

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _explain(self, score: int, reasons: list[str], concerns: list[str]) -> str:
        """Summarise a match in one line, capped at the configured length."""
        if reasons:
            explanation = "; ".join(reasons[:2])
            if concerns:
                explanation += f". Watch: {concerns[0]}"
        else:
            explanation = f"Score {score}/100."
            if concerns:
                explanation += " " + "; ".join(concerns[:2])
        return explanation[: self.config.explanation_max_length]


def _any_contains(entries: list[str], needle: str) -> bool:
    """True when any entry contains *needle* (case-insensitive)."""
    return any(needle in entry.lower() for entry in entries)


def _any_overlaps(entries: list[str], term: str) -> bool:
    """True when any entry contains *term* or is contained by it."""
    for entry in entries:
        lowered = entry.lower()
        if term in lowered or lowered in term:
            return True
    return False
