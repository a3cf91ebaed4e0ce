"""Data models for landing page optimization reports."""

from dataclasses import dataclass, field
from typing import Any, Optional


NOT_FOUND = "Not found"


@dataclass
class ElementMetrics:
    """Scores for one element."""
    optimization: int  # 1-6 before constraint enforcement
    impact: int  # 1-4 before constraint enforcement
    timing: str  # one of the display buckets, e.g. "30-60 min"

    def to_dict(self) -> dict[str, Any]:
        return {
            "optimization": self.optimization,
            "impact": self.impact,
            "timing": self.timing,
        }


@dataclass
class ElementResult:
    """A canonical element after normalization and scoring."""
    element: str
    site_text: str = NOT_FOUND
    problem: str = ""
    solution: str = ""
    actions: list[str] = field(default_factory=list)
    metrics: Optional[ElementMetrics] = None

    @property
    def title(self) -> str:
        return self.element

    @property
    def has_content(self) -> bool:
        return has_site_content(self.site_text)

    def to_dict(self) -> dict[str, Any]:
        return {
            "element": self.element,
            "title": self.title,
            "siteText": self.site_text,
            "problem": self.problem,
            "solution": self.solution,
            "actions": list(self.actions),
            "metrics": self.metrics.to_dict() if self.metrics else None,
        }


@dataclass(frozen=True)
class CategoryScores:
    """Summed element scores for a category."""
    optimization_score: int = 0
    impact_score: int = 0
    timing_minutes: int = 0


@dataclass
class CategoryResult:
    """A canonical category with its resolved elements."""
    category: str
    elements: list[ElementResult] = field(default_factory=list)
    optimization_score: int = 0
    impact_score: int = 0
    timing_minutes: int = 0
    timing: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "elements": [e.to_dict() for e in self.elements],
            "optimizationScore": self.optimization_score,
            "impactScore": self.impact_score,
            "timingMinutes": self.timing_minutes,
            "timing": self.timing,
        }


@dataclass(frozen=True)
class ReportTotals:
    """Report-wide sums. Not rescaled, so they can exceed 100."""
    optimization_score_totale: int = 0
    impact_score_totale: int = 0
    total_timing_minutes: int = 0


@dataclass
class Report:
    """Complete report payload for the presentation layer."""
    categories: list[CategoryResult]
    totals: ReportTotals
    total_timing: str
    focus: str = "copywriting"
    benchmark: Optional[int] = None
    checklist_score: Optional[int] = None
    regenerated: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "report": [c.to_dict() for c in self.categories],
            "impactScoreTotale": self.totals.impact_score_totale,
            "optimizationScoreTotale": self.totals.optimization_score_totale,
            "totalTiming": self.total_timing,
            "focus": self.focus,
            "benchmark": self.benchmark,
            "checklistScore": self.checklist_score,
        }


def has_site_content(site_text: Any) -> bool:
    """True when site text is real extracted content rather than absence."""
    if not isinstance(site_text, str):
        return False
    return site_text != NOT_FOUND and site_text.strip() != ""
