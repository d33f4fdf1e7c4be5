"""Shared fixtures for the Iris test suite."""

from typing import Any

import pytest

from iris.matching import AppetiteRecord, AppetiteScorer, ClientProfile


def make_client(**overrides: Any) -> ClientProfile:
    """Technology client in the 1-5m band with a medium risk profile."""
    data: dict[str, Any] = {
        "client_name": "Acme Analytics Ltd",
        "industry": "technology",
        "revenue_band": "1-5m",
        "risk_profile": "medium",
    }
    data.update(overrides)
    return ClientProfile(**data)


def make_record(**overrides: Any) -> AppetiteRecord:
    """Appetite record that matches :func:`make_client` on every dimension."""
    data: dict[str, Any] = {
        "underwriter_name": "Hiscox",
        "target_sectors": ["Technology"],
        "minimum_premium": 10_000,
        "maximum_premium": 20_000,
        "risk_appetite": "moderate",
        "geographic_coverage": ["UK"],
        "exclusions": [],
    }
    data.update(overrides)
    return AppetiteRecord(**data)


@pytest.fixture
def scorer() -> AppetiteScorer:
    return AppetiteScorer()


@pytest.fixture
def client() -> ClientProfile:
    return make_client()


@pytest.fixture
def perfect_record() -> AppetiteRecord:
    return make_record()


@pytest.fixture
def empty_record() -> AppetiteRecord:
    return AppetiteRecord(underwriter_name="Blank Syndicate")
