"""Context-dependent benchmark score."""

import logging
from typing import Iterable, Optional

from .tables import ScoringTables, default_tables, normalize_goal, normalize_industry

logger = logging.getLogger(__name__)

BENCHMARK_MIN = 50
BENCHMARK_MAX = 85


def calculate_benchmark(
    focus: str,
    industry: Optional[str],
    goals: Optional[Iterable[str]] = None,
    tables: Optional[ScoringTables] = None,
) -> int:
    """Target score for a focus area, industry and set of goals.

    Starts from the (focus, industry) base, adds the factor for each goal
    and clamps the result to [50, 85]. Unknown keys fall back to defaults.
    """
    tables = tables or default_tables()
    industry_key = normalize_industry(industry, tables)
    goals = list(goals or ())

    entry = tables.benchmarks.get(focus, {}).get(industry_key, tables.default_benchmark)
    score = entry.base
    for goal in goals:
        score += entry.factors.get(normalize_goal(goal, tables), 0)

    result = min(BENCHMARK_MAX, max(BENCHMARK_MIN, score))
    logger.debug("Benchmark for %s/%s/%s: %d", focus, industry_key, goals, result)
    return result
