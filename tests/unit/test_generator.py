"""Unit tests for report generation"""
import json

import pytest

from landingfix.config import Settings
from landingfix.exceptions import ConfigurationError, GenerationError
from landingfix.generator import RETRY_TEMPERATURE, ReportGenerator, ReportRequest, generate_report


@pytest.fixture
def request_():
    return ReportRequest(url="https://example.com", focus="copywriting", industry="other")


class TestReportGenerator:
    """Tests for ReportGenerator.generate"""

    def test_valid_first_attempt(self, make_provider, copywriting_json, request_, page):
        """Test a valid answer produces a full report in one call"""
        provider = make_provider([copywriting_json])
        report = ReportGenerator(provider).generate(request_, page)

        assert len(provider.calls) == 1
        assert provider.calls[0]["temperature"] == 0.3
        assert [c.category for c in report.categories][0] == "Copywriting Overview"
        assert len(report.categories) == 4
        assert report.benchmark == 60
        assert report.checklist_score == 80
        assert not report.regenerated

    def test_fenced_answer(self, make_provider, copywriting_json, request_, page):
        """Test an answer wrapped in prose and fences"""
        provider = make_provider([f"Here you go:\n```json\n{copywriting_json}\n```"])
        report = ReportGenerator(provider).generate(request_, page)
        assert report.categories[0].elements[0].site_text == "Some text from the page"

    def test_mismatch_regenerates(self, make_provider, copywriting_output, copywriting_json, request_, page):
        """Test a schema mismatch triggers a second, cooler attempt"""
        provider = make_provider([json.dumps(copywriting_output[:3]), copywriting_json])
        report = ReportGenerator(provider).generate(request_, page)

        assert len(provider.calls) == 2
        assert provider.calls[1]["temperature"] == RETRY_TEMPERATURE
        assert "Expected 4 categories for copywriting, got 3" in provider.calls[1]["prompt"]
        assert not report.regenerated

    def test_repeated_mismatch_is_repaired(self, make_provider, copywriting_output, request_, page):
        """Test the last mismatched answer is normalized when retries run out"""
        partial = json.dumps(copywriting_output[:3])
        provider = make_provider([partial, partial])
        report = ReportGenerator(provider).generate(request_, page)

        assert report.regenerated
        assert len(report.categories) == 4
        last = report.categories[3]
        assert last.category == "Persuasion, Trust & Badges"
        assert all(el.site_text == "Not found" for el in last.elements)

    def test_malformed_twice_raises(self, make_provider, request_, page):
        """Test unparsable answers on every attempt raise GenerationError"""
        provider = make_provider(["I cannot help with that", "Still no JSON"])
        with pytest.raises(GenerationError) as exc_info:
            ReportGenerator(provider).generate(request_, page)

        assert exc_info.value.attempts == 2
        assert len(exc_info.value.errors) == 2
        assert "after 2 attempts" in str(exc_info.value)

    def test_truncated_answer_raises(self, make_provider, copywriting_output, request_, page):
        """Test a cut-off answer on every attempt fails instead of building a default report"""
        truncated = json.dumps(copywriting_output)[:400]
        provider = make_provider([truncated, truncated])
        with pytest.raises(GenerationError) as exc_info:
            ReportGenerator(provider).generate(request_, page)
        assert exc_info.value.attempts == 2

    def test_mismatch_then_unparsable_raises(self, make_provider, copywriting_output, request_, page):
        """Test an unparsable final answer discards the earlier mismatched one"""
        provider = make_provider([json.dumps(copywriting_output[:3]), "no json here"])
        with pytest.raises(GenerationError) as exc_info:
            ReportGenerator(provider).generate(request_, page)

        assert len(provider.calls) == 2
        assert "attempt 1: Expected 4 categories for copywriting, got 3" in exc_info.value.errors

    def test_provider_error_then_success(self, make_provider, copywriting_json, request_, page):
        """Test a provider error uses up one attempt"""
        provider = make_provider([RuntimeError("HTTP 503"), copywriting_json])
        report = ReportGenerator(provider).generate(request_, page)
        assert len(provider.calls) == 2
        assert len(report.categories) == 4

    def test_empty_response_fails_attempt(self, make_provider, request_, page):
        """Test an empty answer counts as a failed attempt"""
        provider = make_provider(["", ""])
        with pytest.raises(GenerationError) as exc_info:
            ReportGenerator(provider).generate(request_, page)
        assert "attempt 1: Empty AI response" in exc_info.value.errors

    def test_single_attempt_budget(self, make_provider, copywriting_output, request_, page):
        """Test max_attempts=1 never regenerates"""
        provider = make_provider([json.dumps(copywriting_output[:2])])
        report = ReportGenerator(provider, Settings(max_attempts=1)).generate(request_, page)
        assert len(provider.calls) == 1
        assert report.regenerated

    def test_focus_label_and_goals(self, make_provider, make_ai_output, page):
        """Test the focus is normalized and goals reach the benchmark"""
        provider = make_provider([json.dumps(make_ai_output("seo"))])
        request = ReportRequest(url="https://example.com", focus="SEO", industry="local", goals=["Lead Generation"])
        report = ReportGenerator(provider).generate(request, page)
        assert report.focus == "seo"
        assert report.benchmark == 64
        assert report.categories[0].category == "SEO Overview"


class TestGenerateReport:
    """Tests for generate_report"""

    def test_unconfigured_provider(self, make_provider):
        """Test an unconfigured provider is rejected before fetching"""
        provider = make_provider([], configured=False)
        with pytest.raises(ConfigurationError, match="FAKE_API_KEY"):
            generate_report("https://example.com", provider=provider, settings=Settings())

    def test_fetches_then_generates(self, make_provider, copywriting_json, page, monkeypatch):
        """Test the fetched page feeds the generator"""
        fetched = []

        def fake_fetch(url, timeout, max_html_length):
            fetched.append((url, timeout, max_html_length))
            return page

        monkeypatch.setattr("landingfix.generator.fetch_page", fake_fetch)
        provider = make_provider([copywriting_json])
        report = generate_report("example.com", provider=provider, settings=Settings(timeout=5.0))

        assert fetched == [("example.com", 5.0, 10000)]
        assert report.checklist_score == 80
        assert "Buy now testimonials contact" in provider.calls[0]["prompt"]
