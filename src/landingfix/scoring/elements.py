"""Per-element optimization, impact and timing scores."""

import logging
import math
from typing import Optional

from ..models import ElementMetrics
from .tables import ScoringTables, default_tables, normalize_industry

logger = logging.getLogger(__name__)

OPTIMIZATION_RANGE = (1, 6)
IMPACT_RANGE = (1, 4)
CONSTRAINT_LIMIT = 100

TIMING_BUCKETS = (
    (30, "15-30 min"),
    (60, "30-60 min"),
    (120, "1-2 hours"),
)
LONGEST_BUCKET = "3-6 hours"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: int, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return max(low, min(high, value))


def validate_constraint(optimization: int, impact: int) -> bool:
    """Check optimization + impact <= 100. Logs a warning when violated."""
    total = optimization + impact
    if total > CONSTRAINT_LIMIT:
        logger.warning(
            "Constraint violation: %d%% + %d%% = %d%% > %d%%",
            optimization, impact, total, CONSTRAINT_LIMIT,
        )
        return False
    return True


def enforce_constraint(optimization: int, impact: int) -> tuple[int, int]:
    """Rescale both values proportionally so their sum does not exceed 100.

    The raw 1-6 / 1-4 element scores are passed in as-is and treated as
    percentage points, so under the built-in tables this never rescales.
    """
    total = optimization + impact
    if total <= CONSTRAINT_LIMIT:
        return optimization, impact

    ratio = CONSTRAINT_LIMIT / total
    return round_half_up(optimization * ratio), round_half_up(impact * ratio)


def timing_bucket(minutes: int) -> str:
    """Display bucket for an estimated duration in minutes."""
    for limit, label in TIMING_BUCKETS:
        if minutes <= limit:
            return label
    return LONGEST_BUCKET


class ElementScorer:
    """Scores canonical elements from a set of :class:`ScoringTables`."""

    def __init__(self, tables: Optional[ScoringTables] = None):
        self.tables = tables or default_tables()

    def optimization(
        self,
        element: str,
        industry: str,
        category: str,
        focus_key: str,
        has_content: bool = False,
    ) -> int:
        """Current-state score, 1-6."""
        industry = normalize_industry(industry, self.tables)
        row = self.tables.optimization.get(focus_key, {}).get(element)
        base = self._pick(row, has_content, self.tables.default_optimization)
        adjustment = self.tables.optimization_adjustments.get(industry, {}).get(focus_key, 0)
        return _clamp(base + adjustment, OPTIMIZATION_RANGE)

    def impact(
        self,
        element: str,
        industry: str,
        category: str,
        focus_key: str,
        has_content: bool = False,
        optimization: Optional[int] = None,
    ) -> int:
        """Improvement potential, 1-4.

        ``optimization`` is accepted for callers that have it but does not
        bias the lookup.
        """
        industry = normalize_industry(industry, self.tables)
        row = self.tables.impact.get(focus_key, {}).get(element)
        base = self._pick(row, has_content, self.tables.default_impact)
        adjustment = self.tables.impact_adjustments.get(industry, {}).get(focus_key, 0)
        return _clamp(base + adjustment, IMPACT_RANGE)

    def timing_minutes(
        self,
        element: str,
        industry: str,
        category: str,
        focus_key: str,
        impact: int,
    ) -> int:
        """Estimated implementation time in minutes."""
        industry = normalize_industry(industry, self.tables)
        base = self.tables.timing_minutes.get(focus_key, {}).get(element, self.tables.default_timing_minutes)
        multiplier = self.tables.time_multipliers.get(industry, 1.0)

        # Tiers assume a percentage-scale impact; with 1-4 impacts only the
        # 0.9 tier is reachable.
        if impact >= 25:
            impact_multiplier = 1.2
        elif impact >= 15:
            impact_multiplier = 1.0
        else:
            impact_multiplier = 0.9

        return round_half_up(base * multiplier * impact_multiplier)

    def timing(
        self,
        element: str,
        industry: str,
        category: str,
        focus_key: str,
        impact: int,
    ) -> str:
        """Timing bucket such as ``"30-60 min"``."""
        return timing_bucket(self.timing_minutes(element, industry, category, focus_key, impact))

    def score(
        self,
        element: str,
        industry: str,
        category: str,
        focus_key: str,
        has_content: bool,
    ) -> ElementMetrics:
        """Full metrics for one element, with the 100-point constraint applied."""
        optimization = self.optimization(element, industry, category, focus_key, has_content)
        impact = self.impact(element, industry, category, focus_key, has_content, optimization)

        optimization, impact = enforce_constraint(optimization, impact)
        if not validate_constraint(optimization, impact):
            logger.error("Constraint still violated for %s after rescaling", element)

        return ElementMetrics(
            optimization=optimization,
            impact=impact,
            timing=self.timing(element, industry, category, focus_key, impact),
        )

    @staticmethod
    def _pick(row: Optional[tuple[int, int]], has_content: bool, default: int) -> int:
        if row is None:
            return default
        with_content, without_content = row
        return with_content if has_content else without_content
