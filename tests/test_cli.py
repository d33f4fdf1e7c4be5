"""Tests for the Iris Typer CLI."""

import json
import logging

import pytest
from typer.testing import CliRunner

from iris import cli

runner = CliRunner()


@pytest.fixture
def client_file(tmp_path):
    path = tmp_path / "client.json"
    path.write_text(
        json.dumps(
            {
                "client_name": "Acme",
                "report_data": {"industry": "Technology", "revenue_band": "1-5m", "risk_profile": "medium"},
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def records_file(tmp_path):
    path = tmp_path / "records.json"
    path.write_text(
        json.dumps(
            [
                {
                    "underwriter_name": "Hiscox",
                    "target_sectors": ["Technology"],
                    "minimum_premium": 10000,
                    "maximum_premium": 20000,
                    "risk_appetite": "moderate",
                    "geographic_coverage": ["UK"],
                },
                {"underwriter_name": "Blank", "appetite_data": None},
                {"underwriter_name": "Builders", "target_sectors": ["Construction"], "geographic_coverage": ["Japan"]},
            ]
        ),
        encoding="utf-8",
    )
    return path


class TestMatchCommand:
    def test_json_output(self, client_file, records_file):
        result = runner.invoke(
            cli.app, ["match", "--client", str(client_file), "--records", str(records_file), "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [m["underwriter_name"] for m in data["top_matches"]] == ["Hiscox"]
        assert [m["underwriter_name"] for m in data["nearest_misses"]] == ["Blank", "Builders"]
        assert data["total_evaluated"] == 3

    def test_nearest_miss_option(self, client_file, records_file):
        result = runner.invoke(
            cli.app,
            ["match", "-c", str(client_file), "-r", str(records_file), "--nearest-misses", "1", "--json"],
        )

        assert result.exit_code == 0
        assert [m["underwriter_name"] for m in json.loads(result.stdout)["nearest_misses"]] == ["Blank"]

    def test_table_output(self, client_file, records_file):
        result = runner.invoke(cli.app, ["match", "-c", str(client_file), "-r", str(records_file)])

        assert result.exit_code == 0
        assert "Strong Matches" in result.stdout
        assert "Hiscox" in result.stdout
        assert "Nearest Misses" in result.stdout

    def test_missing_file_exits_with_error(self, tmp_path, records_file, caplog):
        with caplog.at_level(logging.ERROR, logger="iris.cli"):
            result = runner.invoke(
                cli.app, ["match", "-c", str(tmp_path / "absent.json"), "-r", str(records_file)]
            )

        assert result.exit_code == 1
        assert "CLI match command failed" in caplog.text
        assert "absent.json" in caplog.text


class TestScoreCommand:
    def test_scores_named_underwriter(self, client_file, records_file):
        result = runner.invoke(
            cli.app,
            ["score", "-c", str(client_file), "-r", str(records_file), "-u", "hiscox", "--json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["underwriter_name"] == "Hiscox"
        assert data["match_score"] == 90

    def test_unknown_underwriter(self, client_file, records_file, caplog):
        with caplog.at_level(logging.WARNING, logger="iris.cli"):
            result = runner.invoke(
                cli.app, ["score", "-c", str(client_file), "-r", str(records_file), "-u", "Nobody"]
            )

        assert result.exit_code == 1
        assert "Underwriter 'Nobody' not found" in caplog.text


class TestConfigCommand:
    def test_json_output(self):
        result = runner.invoke(cli.app, ["config", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["specialty_bonus"] == 10
        assert data["exclusion_penalty"] == 20
