"""Iris FastAPI application — underwriter appetite matching API.

Endpoints
---------
POST  /v1/match            — rank underwriters for a client profile
POST  /v1/score            — score one underwriter for a client profile
GET   /v1/scoring-config   — active weights and thresholds
GET   /v1/health           — liveness check (no auth)

Authentication is via the ``X-API-Key`` header.  Rate limiting enforces a
configurable number of requests per window per API key using an in-memory
sliding window counter.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from typing import Any

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware

from iris import __version__
from iris.api.schemas import HealthResponse, MatchRequest, MatchResponse, ScoreRequest
from iris.config import settings
from iris.matching.appetite import AppetiteScorer, MatchResult
from iris.matching.profiles import AppetiteRecord, ClientProfile
from iris.matching.scoring_config import ScoringConfig

logger = logging.getLogger("iris.api")

# ---------------------------------------------------------------------------
# In-memory rate limiter
# ---------------------------------------------------------------------------

# Maps api_key → list of request timestamps (monotonic seconds)
_rate_limit_windows: dict[str, list[float]] = defaultdict(list)


def _check_rate_limit(api_key: str) -> None:
    """Enforce the per-key sliding window limit.

    Raises HTTP 429 when the limit is exceeded.
    """
    now = time.monotonic()
    cutoff = now - settings.rate_limit_window_seconds
    window = [t for t in _rate_limit_windows[api_key] if t > cutoff]
    _rate_limit_windows[api_key] = window
    if len(window) >= settings.rate_limit_max_requests:
        logger.warning("Rate limit exceeded for key=%s", api_key[:8])
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=(
                f"Rate limit exceeded: {settings.rate_limit_max_requests} requests "
                f"per {settings.rate_limit_window_seconds:g} seconds."
            ),
        )
    window.append(now)


# ---------------------------------------------------------------------------
# Application state
# ---------------------------------------------------------------------------

scoring_config = ScoringConfig.from_settings(settings)
scorer = AppetiteScorer(scoring_config)


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Iris Appetite Matching API",
    description=(
        "Deterministic, explainable matching of client risk profiles against "
        "underwriter appetite guides."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS — the broker frontend calls this service directly from the browser
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Middleware — request logging
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every inbound request with timing."""
    start = time.monotonic()
    response = await call_next(request)
    elapsed_ms = (time.monotonic() - start) * 1000
    logger.info(
        "%s %s → %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


# ---------------------------------------------------------------------------
# Auth dependency
# ---------------------------------------------------------------------------


async def require_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> str:
    """Validate the ``X-API-Key`` header and enforce rate limiting.

    Raises
    ------
    HTTPException
        403 if the key is invalid; 429 if rate limit is exceeded.
    """
    if x_api_key != settings.iris_api_key:
        logger.warning("Invalid API key attempt: %s...", x_api_key[:6])
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API key.",
        )
    _check_rate_limit(x_api_key)
    return x_api_key


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.post(
    "/v1/match",
    response_model=MatchResponse,
    summary="Rank underwriters for a client",
    tags=["Matching"],
)
async def match_client(
    body: MatchRequest,
    _key: str = Depends(require_api_key),
) -> MatchResponse:
    """Score the client against every supplied appetite record and return the
    strong matches and nearest misses.

    An empty record list is not an error: both groups come back empty with a
    message the frontend can show as its empty state.
    """
    t0 = time.monotonic()
    client = ClientProfile.from_report_data(body.client_profile)
    records = [AppetiteRecord.from_row(row) for row in body.appetite_records]

    ranked = scorer.rank(client, records)
    elapsed_ms = round((time.monotonic() - t0) * 1000, 1)

    message = None
    if not records:
        message = "No appetite guides available"
    elif not ranked.top_matches:
        message = "No strong appetite matches"

    return MatchResponse(
        top_matches=ranked.top_matches,
        nearest_misses=ranked.nearest_misses,
        total_evaluated=ranked.total_evaluated,
        strong_match_threshold=scoring_config.strong_match_threshold,
        match_time_ms=elapsed_ms,
        message=message,
    )


@app.post(
    "/v1/score",
    response_model=MatchResult,
    summary="Score one underwriter for a client",
    tags=["Matching"],
)
async def score_underwriter(
    body: ScoreRequest,
    _key: str = Depends(require_api_key),
) -> MatchResult:
    """Return the full match breakdown for a single appetite record."""
    client = ClientProfile.from_report_data(body.client_profile)
    record = AppetiteRecord.from_row(body.appetite_record)
    return scorer.score(client, record)


@app.get(
    "/v1/scoring-config",
    summary="Active scoring configuration",
    tags=["Matching"],
)
async def get_scoring_config(_key: str = Depends(require_api_key)) -> dict[str, Any]:
    """Return the weights, thresholds and vocabularies the scorer is using."""
    return scoring_config.model_dump(mode="json")


@app.get(
    "/v1/health",
    response_model=HealthResponse,
    summary="Liveness check",
    tags=["System"],
)
async def health() -> HealthResponse:
    return HealthResponse(status="healthy", version=__version__)
