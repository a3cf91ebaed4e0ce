"""Unit tests for settings"""
import pytest

from landingfix.config import Settings, load_settings
from landingfix.exceptions import ConfigurationError

ENV_VARS = (
    "LANDINGFIX_PROVIDER",
    "LANDINGFIX_MODEL",
    "LANDINGFIX_MAX_ATTEMPTS",
    "LANDINGFIX_TIMEOUT",
    "LANDINGFIX_MAX_HTML_LENGTH",
    "LANDINGFIX_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestLoadSettings:
    """Tests for load_settings"""

    def test_defaults(self):
        """Test defaults without environment"""
        assert load_settings() == Settings()
        settings = load_settings()
        assert settings.provider == "openai"
        assert settings.model is None
        assert settings.max_attempts == 2
        assert settings.timeout == 30.0
        assert settings.max_html_length == 10000
        assert settings.log_level == "WARNING"

    def test_from_env(self, monkeypatch):
        """Test values are read and normalized"""
        monkeypatch.setenv("LANDINGFIX_PROVIDER", " Anthropic ")
        monkeypatch.setenv("LANDINGFIX_MODEL", "claude-3-5-haiku-latest")
        monkeypatch.setenv("LANDINGFIX_MAX_ATTEMPTS", "3")
        monkeypatch.setenv("LANDINGFIX_TIMEOUT", "12.5")
        monkeypatch.setenv("LANDINGFIX_MAX_HTML_LENGTH", "5000")
        monkeypatch.setenv("LANDINGFIX_LOG_LEVEL", "debug")

        settings = load_settings()

        assert settings.provider == "anthropic"
        assert settings.model == "claude-3-5-haiku-latest"
        assert settings.max_attempts == 3
        assert settings.timeout == 12.5
        assert settings.max_html_length == 5000
        assert settings.log_level == "DEBUG"

    def test_blank_number_uses_default(self, monkeypatch):
        """Test an empty value falls back to the default"""
        monkeypatch.setenv("LANDINGFIX_TIMEOUT", "  ")
        assert load_settings().timeout == 30.0

    def test_invalid_number(self, monkeypatch):
        """Test a non-numeric value raises"""
        monkeypatch.setenv("LANDINGFIX_MAX_ATTEMPTS", "two")
        with pytest.raises(ConfigurationError, match="LANDINGFIX_MAX_ATTEMPTS must be a number"):
            load_settings()

    def test_attempts_at_least_one(self, monkeypatch):
        """Test the attempt budget must be positive"""
        monkeypatch.setenv("LANDINGFIX_MAX_ATTEMPTS", "0")
        with pytest.raises(ConfigurationError, match="at least 1"):
            load_settings()
