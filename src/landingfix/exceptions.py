"""Exceptions raised by landingfix."""


class LandingFixError(Exception):
    """Base class for all landingfix errors."""


class ConfigurationError(LandingFixError):
    """Missing or invalid configuration (API keys, env values)."""


class FetchError(LandingFixError):
    """The landing page could not be fetched."""


class MalformedOutputError(LandingFixError):
    """The AI output contains no parsable JSON."""


class GenerationError(LandingFixError):
    """No usable AI response was obtained within the attempt budget."""

    def __init__(self, message: str, errors: list[str] | None = None, attempts: int = 0):
        super().__init__(message)
        self.errors = errors or []
        self.attempts = attempts
