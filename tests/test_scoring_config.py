"""Tests for ScoringConfig and its settings overrides."""

import pytest
from pydantic import ValidationError

from iris.config import Settings
from iris.matching import ScoringConfig


class TestScoringConfig:
    def test_documented_weights(self):
        config = ScoringConfig()

        assert config.industry_match.points == 30
        assert config.premium_within_range.points == 25
        assert config.risk_aligned.points == 20
        assert config.geography_covered.points == 15
        assert config.specialty_bonus == 10
        assert config.exclusion_penalty == 20
        assert config.strong_match_threshold == 60

    @pytest.mark.parametrize(
        "score, expected",
        [(100, "high"), (75, "high"), (74, "medium"), (50, "medium"), (49, "low"), (0, "low")],
    )
    def test_confidence_tiers(self, score, expected):
        assert ScoringConfig().confidence_for(score) == expected

    @pytest.mark.parametrize(
        "score, expected",
        [
            (80, "Priority submission - high appetite alignment"),
            (79, "Standard submission with sector expertise highlighted"),
            (60, "Standard submission with sector expertise highlighted"),
            (40, "Careful submission - address potential concerns"),
            (39, "Consider alternative markets - limited appetite fit"),
        ],
    )
    def test_approach_tiers(self, score, expected):
        assert ScoringConfig().approach_for(score) == expected

    def test_format_currency(self):
        config = ScoringConfig()
        assert config.format_currency(150_000) == "£150,000"
        assert config.format_currency(1234.5) == "£1,234.50"

    def test_is_immutable(self):
        config = ScoringConfig()
        with pytest.raises(ValidationError):
            config.strong_match_threshold = 10

    def test_lookup_tables_cannot_be_mutated_in_place(self):
        config = ScoringConfig()

        with pytest.raises(TypeError):
            config.revenue_band_premiums["1-5m"] = 1
        with pytest.raises(TypeError):
            config.risk_appetite_keywords["low"] = ("aggressive",)

        assert config.estimate_premium("1-5m") == 15_000

    def test_custom_revenue_band_premiums(self):
        config = ScoringConfig(revenue_band_premiums=(("1-5m", 20_000),))

        assert config.estimate_premium("1-5m") == 20_000
        assert config.estimate_premium("0-1m") == config.default_estimated_premium

    def test_rejects_out_of_range_fit(self):
        with pytest.raises(ValidationError):
            ScoringConfig(industry_match={"fit": 120, "points": 30})

    def test_from_settings(self):
        settings = Settings(
            home_market_label="Irish market",
            currency_symbol="€",
            strong_match_threshold=70,
            nearest_miss_limit=5,
            top_match_limit=10,
        )

        config = ScoringConfig.from_settings(settings)

        assert config.home_market_label == "Irish market"
        assert config.currency_symbol == "€"
        assert config.strong_match_threshold == 70
        assert config.nearest_miss_limit == 5
        assert config.top_match_limit == 10
        assert config.industry_match.points == 30

    def test_settings_read_environment(self, monkeypatch):
        monkeypatch.setenv("STRONG_MATCH_THRESHOLD", "65")
        monkeypatch.setenv("HOME_MARKET_LABEL", "EU market")

        config = ScoringConfig.from_settings(Settings())

        assert config.strong_match_threshold == 65
        assert config.home_market_label == "EU market"
