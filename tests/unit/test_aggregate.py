"""Unit tests for category and report totals"""
import pytest

from landingfix.models import CategoryResult, CategoryScores, ElementMetrics, ElementResult, ReportTotals
from landingfix.scoring import calculate_category_scores, calculate_final_totals, format_timing, timing_to_minutes


def _element(optimization, impact, timing):
    return ElementResult(element="x", metrics=ElementMetrics(optimization, impact, timing))


class TestTimingToMinutes:
    """Tests for timing_to_minutes"""

    @pytest.mark.parametrize("timing,expected", [
        ("15-30 min", 22),
        ("30-60 min", 45),
        ("1-2 hours", 90),
        ("3-6 hours", 270),
        ("1-2 ore", 90),
        ("3-6 ore", 270),
        ("2h", 120),
        ("2 hours", 120),
        ("40 min", 40),
        ("soon", 45),
        ("", 45),
        (None, 45),
    ])
    def test_conversion(self, timing, expected):
        """Test buckets, free-form durations and defaults"""
        assert timing_to_minutes(timing) == expected

    def test_case_insensitive(self):
        """Test bucket labels match regardless of case"""
        assert timing_to_minutes("1-2 HOURS") == 90


class TestFormatTiming:
    """Tests for format_timing"""

    @pytest.mark.parametrize("minutes,expected", [
        (0, "0 min"),
        (45, "45 min"),
        (59, "59 min"),
        (60, "1-2 hours"),
        (90, "1-2 hours"),
        (200, "2-4 hours"),
        (300, "4-6 hours"),
        (400, "6+ hours"),
        (900, "15+ hours"),
    ])
    def test_format(self, minutes, expected):
        """Test each display range"""
        assert format_timing(minutes) == expected


class TestCategoryScores:
    """Tests for calculate_category_scores"""

    def test_empty(self):
        """Test an empty category scores zero"""
        assert calculate_category_scores([]) == CategoryScores(0, 0, 0)

    def test_sums_without_scaling(self):
        """Test element metrics are summed as-is"""
        scores = calculate_category_scores([
            _element(5, 3, "15-30 min"),
            _element(2, 4, "1-2 hours"),
        ])
        assert scores == CategoryScores(optimization_score=7, impact_score=7, timing_minutes=112)

    def test_missing_metrics(self):
        """Test elements without metrics add nothing but default time"""
        scores = calculate_category_scores([ElementResult(element="x")])
        assert scores == CategoryScores(0, 0, 45)

    def test_idempotent(self):
        """Test repeated calls give the same result"""
        elements = [_element(4, 2, "30-60 min"), _element(3, 3, "3-6 hours")]
        assert calculate_category_scores(elements) == calculate_category_scores(elements)


class TestFinalTotals:
    """Tests for calculate_final_totals"""

    def test_empty(self):
        """Test no categories gives zero totals"""
        assert calculate_final_totals([]) == ReportTotals(0, 0, 0)

    def test_sums_categories(self):
        """Test totals are the sum of category totals"""
        totals = calculate_final_totals([
            CategoryResult("A", optimization_score=20, impact_score=12, timing_minutes=200),
            CategoryResult("B", optimization_score=30, impact_score=15, timing_minutes=100),
        ])
        assert totals == ReportTotals(50, 27, 300)

    def test_not_rescaled_over_100(self):
        """Test totals may exceed 100"""
        totals = calculate_final_totals([
            CategoryResult("A", optimization_score=60, impact_score=30),
            CategoryResult("B", optimization_score=50, impact_score=30),
        ])
        assert totals.optimization_score_totale == 110
        assert totals.optimization_score_totale + totals.impact_score_totale == 170
