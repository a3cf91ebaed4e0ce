"""Generate a scored optimization report for a landing page."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .categories import focus_debug_info, normalize_focus_key
from .checklist import run_checklist
from .config import Settings, load_settings
from .exceptions import ConfigurationError, GenerationError, MalformedOutputError
from .fetcher import PageContent, fetch_page
from .models import Report
from .normalizer import build_report, parse_ai_output, validate_ai_output
from .prompts import generate_prompt, regeneration_suffix
from .providers import LLMProvider, get_provider
from .retry import Attempt, retry
from .scoring import ElementScorer, ScoringTables, calculate_benchmark, default_tables

logger = logging.getLogger(__name__)

FIRST_ATTEMPT_TEMPERATURE = 0.3
RETRY_TEMPERATURE = 0.1


@dataclass
class ReportRequest:
    """What the user asked to analyze."""
    url: str
    focus: str = "copywriting"
    industry: str = "other"
    goals: list[str] = field(default_factory=list)


class ReportGenerator:
    """Runs the AI analysis and turns its answer into a :class:`Report`."""

    def __init__(
        self,
        provider: LLMProvider,
        settings: Optional[Settings] = None,
        tables: Optional[ScoringTables] = None,
    ):
        self.provider = provider
        self.settings = settings or Settings()
        self.tables = tables or default_tables()
        self.scorer = ElementScorer(self.tables)

    def generate(self, request: ReportRequest, page: PageContent) -> Report:
        """Build a report for an already fetched page.

        Raises:
            GenerationError: if no attempt produced parsable JSON.
        """
        focus_key = normalize_focus_key(request.focus)
        logger.debug("Focus validation: %s", focus_debug_info(focus_key))

        benchmark = calculate_benchmark(focus_key, request.industry, request.goals, self.tables)
        checklist = run_checklist(page.html, request.industry)

        prompt = generate_prompt(
            request.url,
            focus_key,
            request.industry,
            request.goals,
            page.visible_text,
            page.main_content,
        )
        logger.debug("Prompt (first 500 chars): %s", prompt[:500])

        last_errors: list[str] = []

        def attempt(number: int) -> Attempt:
            text = prompt if number == 1 else prompt + regeneration_suffix(last_errors)
            temperature = FIRST_ATTEMPT_TEMPERATURE if number == 1 else RETRY_TEMPERATURE

            response = self.provider.complete(text, temperature=temperature)
            if response.error:
                return Attempt.failed(response.error)
            if not response.response:
                return Attempt.failed("Empty AI response")
            logger.debug("Raw AI output (first 500 chars): %s", response.response[:500])

            try:
                parsed = parse_ai_output(response.response)
            except MalformedOutputError as e:
                return Attempt.failed(str(e))

            validation = validate_ai_output(parsed, focus_key)
            if validation.warnings:
                logger.info("AI validation warnings: %s", validation.warnings)
            if validation.needs_regeneration:
                last_errors[:] = validation.errors
                return Attempt.regenerate(parsed, validation.errors)
            return Attempt.accepted(parsed)

        outcome = retry(attempt, self.settings.max_attempts)
        if not outcome.ok:
            raise GenerationError(
                f"AI did not return valid JSON after {outcome.attempts} attempts",
                errors=outcome.errors,
                attempts=outcome.attempts,
            )
        if outcome.regenerated:
            logger.warning("Using schema-mismatched AI output, repairing with defaults")

        report = build_report(outcome.value, focus_key, request.industry, request.goals, self.scorer)
        report.benchmark = benchmark
        report.checklist_score = checklist.score
        report.regenerated = outcome.regenerated
        return report


def generate_report(
    url: str,
    focus: str = "copywriting",
    industry: str = "other",
    goals: Optional[list[str]] = None,
    provider: Optional[LLMProvider] = None,
    settings: Optional[Settings] = None,
) -> Report:
    """Fetch a landing page and generate its report.

    Raises:
        ConfigurationError: if the provider has no API key.
        FetchError: if the page could not be fetched.
        GenerationError: if the AI never returned parsable JSON.
    """
    settings = settings or load_settings()
    provider = provider or get_provider(settings.provider, settings.model)
    if not provider.is_configured():
        raise ConfigurationError(f"{provider.name} is not configured, set {provider.env_var}")

    page = fetch_page(url, timeout=settings.timeout, max_html_length=settings.max_html_length)
    request = ReportRequest(url=page.url, focus=focus, industry=industry, goals=list(goals or []))
    return ReportGenerator(provider, settings).generate(request, page)
