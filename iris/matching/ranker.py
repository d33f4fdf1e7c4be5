"""Underwriter ranker — splits scored matches into strong matches and nearest
misses and orders each group deterministically.

Ordering is by ``match_score`` descending, ties broken by underwriter name
ascending, so identical inputs always render in the same order.
"""

from __future__ import annotations

import logging
from collections import Counter

from pydantic import BaseModel, Field

from iris.matching.appetite import MatchResult
from iris.matching.scoring_config import ScoringConfig

logger = logging.getLogger("iris.matching.ranker")


class RankedMatches(BaseModel):
    """Ranked output of one matching run.

    Attributes
    ----------
    top_matches:
        Matches at or above the strong-match threshold, best first.
    nearest_misses:
        The best matches below the threshold, capped for display.
    total_evaluated:
        Number of appetite records scored.
    """

    top_matches: list[MatchResult] = Field(default_factory=list)
    nearest_misses: list[MatchResult] = Field(default_factory=list)
    total_evaluated: int = 0


class UnderwriterRanker:
    """Partitions and sorts :class:`MatchResult` lists.

    The ranker is stateless — call :meth:`rank_matches` with every scored
    match from a run and receive the two ordered groups back.
    """

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or ScoringConfig()

    def rank_matches(self, matches: list[MatchResult]) -> RankedMatches:
        """Partition *matches* at the strong-match threshold and sort each side.

        Parameters
        ----------
        matches:
            Unordered scored matches, one per appetite record.

        Returns
        -------
        RankedMatches
            ``top_matches`` (score >= threshold, capped by ``top_match_limit``
            when set) and ``nearest_misses`` (score < threshold, capped by
            ``nearest_miss_limit``).
        """
        if not matches:
            return RankedMatches()

        duplicates = [
            name for name, count in Counter(m.underwriter_name for m in matches).items() if count > 1
        ]
        if duplicates:
            logger.warning("Duplicate underwriter names in matching run: %s", ", ".join(sorted(duplicates)))

        threshold = self.config.strong_match_threshold
        ordered = self.sort_matches(matches)
        top = [m for m in ordered if m.match_score >= threshold]
        misses = [m for m in ordered if m.match_score < threshold]

        if self.config.top_match_limit is not None:
            top = top[: self.config.top_match_limit]
        misses = misses[: self.config.nearest_miss_limit]

        logger.info(
            "Ranked %d underwriters: %d strong matches, %d nearest misses (threshold=%d)",
            len(matches),
            len(top),
            len(misses),
            threshold,
        )
        return RankedMatches(
            top_matches=top,
            nearest_misses=misses,
            total_evaluated=len(matches),
        )

    @staticmethod
    def sort_matches(matches: list[MatchResult]) -> list[MatchResult]:
        """Return *matches* sorted by score descending, then name ascending."""
        return sorted(
            matches,
            key=lambda m: (-m.match_score, m.underwriter_name.casefold(), m.underwriter_name),
        )
