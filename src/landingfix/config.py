"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class Settings:
    """Settings for report generation."""
    provider: str = "openai"
    model: Optional[str] = None
    max_attempts: int = 2
    timeout: float = 30.0
    max_html_length: int = 10000
    log_level: str = "WARNING"


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


def load_settings() -> Settings:
    """Build :class:`Settings` from ``LANDINGFIX_*`` environment variables."""
    max_attempts = _env_number("LANDINGFIX_MAX_ATTEMPTS", 2, int)
    if max_attempts < 1:
        raise ConfigurationError("LANDINGFIX_MAX_ATTEMPTS must be at least 1")

    return Settings(
        provider=os.getenv("LANDINGFIX_PROVIDER", "openai").strip().lower() or "openai",
        model=os.getenv("LANDINGFIX_MODEL", "").strip() or None,
        max_attempts=max_attempts,
        timeout=_env_number("LANDINGFIX_TIMEOUT", 30.0, float),
        max_html_length=_env_number("LANDINGFIX_MAX_HTML_LENGTH", 10000, int),
        log_level=os.getenv("LANDINGFIX_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
    )
