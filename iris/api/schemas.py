"""Pydantic schemas for the Iris API request/response models.

Request bodies accept raw stored rows so callers can forward database exports
unchanged; the routes convert them into sanitised matching models.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from iris.matching.appetite import MatchResult


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class MatchRequest(BaseModel):
    """Inbound body for ``POST /v1/match``.

    Attributes
    ----------
    client_profile:
        Client ``report_data`` object (``industry``, ``revenue_band``,
        ``risk_profile``, optional ``location`` / ``client_name``).
    appetite_records:
        Appetite rows, flat or nested under ``appetite_data``.
    """

    client_profile: dict[str, Any] = Field(default_factory=dict)
    appetite_records: list[dict[str, Any]] = Field(default_factory=list)


class ScoreRequest(BaseModel):
    """Inbound body for ``POST /v1/score``."""

    client_profile: dict[str, Any] = Field(default_factory=dict)
    appetite_record: dict[str, Any]


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class MatchResponse(BaseModel):
    top_matches: list[MatchResult] = Field(default_factory=list)
    nearest_misses: list[MatchResult] = Field(default_factory=list)
    total_evaluated: int = 0
    strong_match_threshold: int
    match_time_ms: float
    message: str | None = None


class HealthResponse(BaseModel):
    status: str
    version: str
