"""Unit tests for the command line interface"""
import json

import pytest
from click.testing import CliRunner

from landingfix.cli import cli
from landingfix.exceptions import FetchError, GenerationError
from landingfix.normalizer import build_report


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.delenv("LANDINGFIX_MAX_ATTEMPTS", raising=False)
    monkeypatch.delenv("LANDINGFIX_PROVIDER", raising=False)
    monkeypatch.setattr("landingfix.cli.load_dotenv", lambda: None)
    return CliRunner()


@pytest.fixture
def sample_report(copywriting_output):
    report = build_report(copywriting_output, "copywriting", "other")
    report.benchmark = 60
    report.checklist_score = 80
    return report


class TestBenchmarkCommand:
    """Tests for `landingfix benchmark`"""

    def test_benchmark(self, runner):
        """Test the score is printed"""
        result = runner.invoke(cli, ["benchmark", "--focus", "seo", "--industry", "local", "-g", "Lead Generation"])
        assert result.exit_code == 0
        assert result.output.strip() == "64"

    def test_focus_label(self, runner):
        """Test focus labels are normalized"""
        result = runner.invoke(cli, ["benchmark", "--focus", "UX/UI", "--industry", "ecommerce"])
        assert result.output.strip() == "72"


class TestSchemaCommand:
    """Tests for `landingfix schema`"""

    def test_text(self, runner):
        """Test categories and elements are listed"""
        result = runner.invoke(cli, ["schema", "copywriting"])
        assert result.exit_code == 0
        assert "Copywriting Overview" in result.output
        assert "Main headline" in result.output

    def test_json(self, runner):
        """Test the JSON summary"""
        result = runner.invoke(cli, ["schema", "seo", "--json"])
        info = json.loads(result.output)
        assert info["total_categories"] == 4
        assert info["total_elements"] == 15

    def test_invalid_focus(self, runner):
        """Test an unknown focus is rejected"""
        result = runner.invoke(cli, ["schema", "blog"])
        assert result.exit_code != 0


class TestReportCommand:
    """Tests for `landingfix report`"""

    def test_json_output(self, runner, sample_report, monkeypatch):
        """Test the JSON payload"""
        calls = []

        def fake_generate(url, **kwargs):
            calls.append((url, kwargs))
            return sample_report

        monkeypatch.setattr("landingfix.cli.generate_report", fake_generate)
        result = runner.invoke(cli, ["report", "example.com", "--focus", "cta", "-g", "Sales", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert len(payload["report"]) == 4
        assert payload["benchmark"] == 60
        url, kwargs = calls[0]
        assert url == "example.com"
        assert kwargs["focus"] == "cta"
        assert kwargs["goals"] == ["Sales"]

    def test_console_output(self, runner, sample_report, monkeypatch):
        """Test the rich report renders"""
        monkeypatch.setattr("landingfix.cli.generate_report", lambda url, **kwargs: sample_report)
        result = runner.invoke(cli, ["report", "example.com", "--details"])

        assert result.exit_code == 0
        assert "Copywriting Overview" in result.output
        assert "Main headline" in result.output

    def test_generation_error(self, runner, monkeypatch):
        """Test generation failures exit with status 1"""
        def fail(url, **kwargs):
            raise GenerationError("AI did not return valid JSON after 2 attempts", ["attempt 1: no json"], 2)

        monkeypatch.setattr("landingfix.cli.generate_report", fail)
        result = runner.invoke(cli, ["report", "example.com"])

        assert result.exit_code == 1
        assert "after 2 attempts" in result.output
        assert "attempt 1: no json" in result.output

    def test_fetch_error(self, runner, monkeypatch):
        """Test fetch failures exit with status 1"""
        def fail(url, **kwargs):
            raise FetchError("HTTP 404 fetching https://example.com")

        monkeypatch.setattr("landingfix.cli.generate_report", fail)
        result = runner.invoke(cli, ["report", "example.com"])
        assert result.exit_code == 1
        assert "HTTP 404" in result.output


class TestSettingsErrors:
    """Tests for configuration errors at startup"""

    def test_invalid_env(self, runner, monkeypatch):
        """Test a bad environment value exits with status 1"""
        monkeypatch.setenv("LANDINGFIX_MAX_ATTEMPTS", "zero")
        result = runner.invoke(cli, ["benchmark"])
        assert result.exit_code == 1
        assert "LANDINGFIX_MAX_ATTEMPTS" in result.output

    def test_unknown_provider_from_env(self, runner, monkeypatch):
        """Test an unknown provider name exits with status 1"""
        monkeypatch.setenv("LANDINGFIX_PROVIDER", "mistral")
        result = runner.invoke(cli, ["report", "example.com"])
        assert result.exit_code == 1
        assert "Unknown provider" in result.output
