"""Scoring for landing page elements, categories and reports."""

from .aggregate import calculate_category_scores, calculate_final_totals, format_timing, timing_to_minutes
from .benchmark import calculate_benchmark
from .elements import ElementScorer, enforce_constraint, validate_constraint
from .tables import ScoringTables, default_tables

__all__ = [
    "ElementScorer",
    "ScoringTables",
    "calculate_benchmark",
    "calculate_category_scores",
    "calculate_final_totals",
    "default_tables",
    "enforce_constraint",
    "format_timing",
    "timing_to_minutes",
    "validate_constraint",
]
