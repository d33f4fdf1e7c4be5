"""Iris matching package — underwriter appetite matching engine.

Exports the public API for appetite matching:

- :class:`AppetiteScorer` — scores one client against each appetite record
- :class:`UnderwriterRanker` — splits scored matches into strong matches and nearest misses
- :class:`ScoringConfig` — weights, thresholds and vocabularies used by the scorer
- :class:`ClientProfile` / :class:`AppetiteRecord` — sanitised scorer inputs
"""

from iris.matching.appetite import AlignmentBreakdown, AppetiteScorer, MatchResult, PremiumRange
from iris.matching.loader import AppetiteDataError, load_appetite_records, load_client_profile
from iris.matching.profiles import AppetiteRecord, ClientProfile
from iris.matching.ranker import RankedMatches, UnderwriterRanker
from iris.matching.scoring_config import ScoreOutcome, ScoringConfig

__all__ = [
    "AppetiteScorer",
    "UnderwriterRanker",
    "ScoringConfig",
    "ScoreOutcome",
    "ClientProfile",
    "AppetiteRecord",
    "MatchResult",
    "AlignmentBreakdown",
    "PremiumRange",
    "RankedMatches",
    "AppetiteDataError",
    "load_client_profile",
    "load_appetite_records",
]
