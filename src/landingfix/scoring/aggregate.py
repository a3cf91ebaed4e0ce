"""Category and report totals."""

import logging
import re
from typing import Iterable, Optional

from ..models import CategoryResult, CategoryScores, ElementResult, ReportTotals

logger = logging.getLogger(__name__)

DEFAULT_TIMING_MINUTES = 45

BUCKET_MINUTES = (
    (("15-30 min",), 22),
    (("30-60 min",), 45),
    (("1-2 hours", "1-2 ore"), 90),
    (("3-6 hours", "3-6 ore"), 270),
)


def timing_to_minutes(timing: Optional[str]) -> int:
    """Representative minutes for a timing bucket or free-form duration."""
    if not timing:
        return DEFAULT_TIMING_MINUTES

    t = timing.lower()
    for labels, minutes in BUCKET_MINUTES:
        if any(label in t for label in labels):
            return minutes

    numbers = re.findall(r"\d+", t)
    if numbers:
        # "h" also matches "hours" and "ore" is Italian for hours
        if "h" in t or "ore" in t:
            return int(numbers[0]) * 60
        return int(numbers[0])
    return DEFAULT_TIMING_MINUTES


def format_timing(minutes: int) -> str:
    """Human-readable total time."""
    if minutes < 60:
        return f"{minutes} min"
    if minutes < 120:
        return "1-2 hours"
    if minutes < 240:
        return "2-4 hours"
    if minutes < 360:
        return "4-6 hours"
    return f"{minutes // 60}+ hours"


def calculate_category_scores(elements: Iterable[ElementResult]) -> CategoryScores:
    """Sum element metrics into category totals. No scaling is applied."""
    elements = list(elements)
    if not elements:
        return CategoryScores()

    optimization = 0
    impact = 0
    minutes = 0
    for el in elements:
        metrics = el.metrics
        optimization += metrics.optimization if metrics else 0
        impact += metrics.impact if metrics else 0
        minutes += timing_to_minutes(metrics.timing if metrics else None)

    logger.debug(
        "Category calculation: %d elements, optimization=%d impact=%d total=%d",
        len(elements), optimization, impact, optimization + impact,
    )
    return CategoryScores(
        optimization_score=optimization,
        impact_score=impact,
        timing_minutes=minutes,
    )


def calculate_final_totals(categories: Iterable[CategoryResult]) -> ReportTotals:
    """Sum category totals across the report.

    The result is deliberately not rescaled: it spans several categories,
    each bounded on its own, so it may exceed 100.
    """
    categories = list(categories)
    if not categories:
        return ReportTotals()

    optimization = sum(c.optimization_score for c in categories)
    impact = sum(c.impact_score for c in categories)
    minutes = sum(c.timing_minutes for c in categories)

    logger.debug(
        "Final totals (unscaled): optimization=%d impact=%d total=%d minutes=%d",
        optimization, impact, optimization + impact, minutes,
    )
    return ReportTotals(
        optimization_score_totale=optimization,
        impact_score_totale=impact,
        total_timing_minutes=minutes,
    )
