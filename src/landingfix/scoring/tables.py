"""Static scoring tables.

Element tables map an element name to a ``(with_content, without_content)``
pair. SEO rows are inverted on purpose: a page with no extractable meta
signals scores higher there.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_INDUSTRY = "other"
DEFAULT_GOAL = "leadGeneration"


@dataclass(frozen=True)
class BenchmarkEntry:
    base: int
    factors: dict[str, int] = field(default_factory=dict)


def _bench(base: int, lead: int, brand: int, sales: int) -> BenchmarkEntry:
    return BenchmarkEntry(base, {"leadGeneration": lead, "brandAwareness": brand, "sales": sales})


BENCHMARKS: dict[str, dict[str, BenchmarkEntry]] = {
    "copywriting": {
        "saas": _bench(65, 5, -3, 8),
        "ecommerce": _bench(60, -2, 3, 10),
        "services": _bench(62, 8, 2, 5),
        "coaching": _bench(63, 6, 4, 3),
        "local": _bench(58, 4, 6, 7),
        "health": _bench(61, 5, 3, 6),
        "other": _bench(60, 3, 3, 3),
    },
    "uxui": {
        "saas": _bench(68, 3, 5, 2),
        "ecommerce": _bench(72, -1, 7, 4),
        "services": _bench(65, 4, 3, 3),
        "coaching": _bench(64, 3, 5, 2),
        "local": _bench(63, 2, 4, 3),
        "health": _bench(66, 3, 2, 4),
        "other": _bench(65, 2, 2, 2),
    },
    "mobile": {
        "saas": _bench(62, 4, 2, 6),
        "ecommerce": _bench(58, 2, 4, 8),
        "services": _bench(60, 5, 3, 4),
        "coaching": _bench(61, 4, 4, 3),
        "local": _bench(59, 3, 5, 5),
        "health": _bench(60, 4, 3, 4),
        "other": _bench(60, 3, 3, 3),
    },
    "cta": {
        "saas": _bench(55, 8, 2, 10),
        "ecommerce": _bench(52, 5, 3, 12),
        "services": _bench(57, 7, 4, 8),
        "coaching": _bench(54, 6, 5, 7),
        "local": _bench(56, 5, 6, 6),
        "health": _bench(55, 6, 4, 7),
        "other": _bench(55, 5, 4, 6),
    },
    "seo": {
        "saas": _bench(63, 4, 6, 3),
        "ecommerce": _bench(61, 3, 5, 5),
        "services": _bench(59, 6, 4, 4),
        "coaching": _bench(60, 5, 5, 3),
        "local": _bench(57, 7, 3, 6),
        "health": _bench(62, 4, 4, 4),
        "other": _bench(60, 4, 4, 4),
    },
}

GOAL_ALIASES = {
    "Lead Generation": "leadGeneration",
    "Brand Awareness": "brandAwareness",
    "Sales": "sales",
    "User Engagement": "userEngagement",
    "My landing page is not converting": "sales",
}

OPTIMIZATION_SCORES: dict[str, dict[str, tuple[int, int]]] = {
    "copywriting": {
        "General clarity & tone": (4, 2),
        "Value proposition clarity": (3, 2),
        "Consistency with audience": (5, 3),
        "Main headline": (5, 2),
        "Subheadline": (4, 2),
        "Section titles": (4, 3),
        "Hero image": (3, 1),
        "Intro video": (2, 1),
        "Paragraphs & explanations": (4, 2),
        "Microcopy (forms/buttons)": (3, 1),
        "CTA text": (2, 1),
        "Lead capture form": (3, 1),
        "Social proof & testimonials": (4, 1),
        "Trust signals": (4, 2),
        "Objection handling": (3, 1),
        "Trust badges": (5, 4),
    },
    "uxui": {
        "First impression": (3, 2),
        "Visual hierarchy": (4, 3),
        "Consistency": (5, 4),
        "Section organization": (4, 3),
        "Whitespace usage": (5, 4),
        "Content grouping": (4, 3),
        "Images & icons": (4, 3),
        "Video elements": (3, 2),
        "Trust badges": (5, 4),
        "Imagery/icons": (4, 3),
        "Color contrast": (4, 3),
        "Security badges": (5, 4),
        "Menu clarity": (4, 3),
        "Link visibility": (4, 3),
        "Keyboard navigation": (3, 2),
        "Contact form": (3, 2),
    },
    "mobile": {
        "Mobile-first impression": (3, 2),
        "Responsiveness": (2, 1),
        "Touch usability": (3, 2),
        "Font size": (4, 3),
        "Spacing": (5, 4),
        "Content stacking": (4, 3),
        "Mobile images": (4, 3),
        "Mobile video": (3, 2),
        "Button size": (4, 3),
        "Touch targets": (4, 3),
        "Mobile load speed": (2, 1),
        "Mobile forms": (3, 2),
        "Menu usability": (4, 3),
        "Sticky elements": (5, 4),
        "Tap feedback": (4, 3),
        "Mobile badges": (6, 5),
    },
    "cta": {
        "CTA visibility": (2, 1),
        "CTA relevance": (3, 2),
        "CTA frequency": (4, 3),
        "Button style": (4, 3),
        "Color contrast": (4, 3),
        "Size & shape": (4, 3),
        "CTA icons": (5, 4),
        "CTA video": (4, 3),
        "Clarity of text": (2, 1),
        "Action verbs": (3, 2),
        "Urgency or scarcity": (4, 3),
        "CTA form": (3, 2),
        "Above the fold": (2, 1),
        "End-of-section CTAs": (4, 3),
        "Logical flow": (3, 2),
        "CTA badges": (5, 4),
    },
    "seo": {
        "SEO basics": (2, 4),
        "Indexability": (3, 4),
        "Meta tags presence": (2, 3),
        "H1/H2 structure": (2, 4),
        "Alt text for images": (2, 3),
        "Internal links": (2, 3),
        "Video SEO": (2, 3),
        "Page speed": (4, 4),
        "Mobile-friendliness": (3, 4),
        "Schema markup": (2, 3),
        "Image optimization": (2, 3),
        "Keyword usage": (2, 4),
        "Content depth": (2, 3),
        "Duplicate content": (1, 2),
        "SEO forms": (2, 3),
    },
}

IMPACT_SCORES: dict[str, dict[str, tuple[int, int]]] = {
    "copywriting": {
        "General clarity & tone": (2, 4),
        "Value proposition clarity": (3, 4),
        "Consistency with audience": (2, 3),
        "Main headline": (3, 4),
        "Subheadline": (2, 3),
        "Section titles": (2, 3),
        "Hero image": (2, 3),
        "Intro video": (2, 3),
        "Paragraphs & explanations": (2, 3),
        "Microcopy (forms/buttons)": (3, 3),
        "CTA text": (4, 4),
        "Lead capture form": (3, 3),
        "Social proof & testimonials": (3, 4),
        "Trust signals": (2, 3),
        "Objection handling": (2, 3),
        "Trust badges": (1, 2),
    },
    "uxui": {
        "First impression": (4, 4),
        "Visual hierarchy": (3, 3),
        "Consistency": (2, 3),
        "Section organization": (3, 3),
        "Whitespace usage": (2, 2),
        "Content grouping": (2, 3),
        "Images & icons": (2, 3),
        "Video elements": (3, 4),
        "Trust badges": (1, 2),
        "Imagery/icons": (2, 3),
        "Color contrast": (2, 3),
        "Security badges": (1, 2),
        "Menu clarity": (3, 3),
        "Link visibility": (2, 3),
        "Keyboard navigation": (2, 3),
        "Contact form": (3, 4),
    },
    "mobile": {
        "Mobile-first impression": (4, 4),
        "Responsiveness": (4, 4),
        "Touch usability": (3, 4),
        "Font size": (2, 3),
        "Spacing": (1, 2),
        "Content stacking": (2, 4),
        "Mobile images": (2, 3),
        "Mobile video": (2, 3),
        "Button size": (2, 3),
        "Touch targets": (2, 3),
        "Mobile load speed": (4, 4),
        "Mobile forms": (3, 4),
        "Menu usability": (3, 3),
        "Sticky elements": (1, 2),
        "Tap feedback": (2, 3),
        "Mobile badges": (1, 1),
    },
    "cta": {
        "CTA visibility": (4, 4),
        "CTA relevance": (3, 4),
        "CTA frequency": (2, 3),
        "Button style": (2, 3),
        "Color contrast": (2, 3),
        "Size & shape": (2, 3),
        "CTA icons": (1, 2),
        "CTA video": (2, 3),
        "Clarity of text": (4, 4),
        "Action verbs": (3, 4),
        "Urgency or scarcity": (2, 3),
        "CTA form": (3, 4),
        "Above the fold": (4, 4),
        "End-of-section CTAs": (2, 3),
        "Logical flow": (3, 4),
        "CTA badges": (1, 2),
    },
    "seo": {
        "SEO basics": (2, 4),
        "Indexability": (3, 4),
        "Meta tags presence": (2, 3),
        "H1/H2 structure": (2, 4),
        "Alt text for images": (2, 3),
        "Internal links": (2, 3),
        "Video SEO": (2, 3),
        "Page speed": (4, 4),
        "Mobile-friendliness": (3, 4),
        "Schema markup": (2, 3),
        "Image optimization": (2, 3),
        "Keyword usage": (2, 4),
        "Content depth": (2, 3),
        "Duplicate content": (1, 2),
        "SEO forms": (2, 3),
    },
}

# industry -> focus -> adjustment in [-1, +1]
OPTIMIZATION_ADJUSTMENTS: dict[str, dict[str, int]] = {
    "saas": {"copywriting": 0, "uxui": 1, "mobile": 0, "cta": -1, "seo": 0},
    "ecommerce": {"copywriting": 0, "uxui": 0, "mobile": -1, "cta": -1, "seo": 0},
    "services": {"copywriting": -1, "uxui": 1, "mobile": 0, "cta": 0, "seo": 0},
    "coaching": {"copywriting": -1, "uxui": 0, "mobile": 0, "cta": -1, "seo": 0},
    "local": {"copywriting": 0, "uxui": 0, "mobile": 0, "cta": 0, "seo": -1},
    "health": {"copywriting": 0, "uxui": 0, "mobile": 0, "cta": 0, "seo": 0},
    "other": {"copywriting": 0, "uxui": 0, "mobile": 0, "cta": 0, "seo": 0},
}

IMPACT_ADJUSTMENTS: dict[str, dict[str, int]] = {
    "saas": {"copywriting": 1, "uxui": 0, "mobile": 0, "cta": 1, "seo": 0},
    "ecommerce": {"copywriting": 0, "uxui": 1, "mobile": 1, "cta": 1, "seo": 0},
    "services": {"copywriting": 1, "uxui": 0, "mobile": 0, "cta": 1, "seo": 1},
    "coaching": {"copywriting": 1, "uxui": 0, "mobile": 0, "cta": 1, "seo": 0},
    "local": {"copywriting": 0, "uxui": 0, "mobile": 1, "cta": 0, "seo": 1},
    "health": {"copywriting": 1, "uxui": 0, "mobile": 0, "cta": 1, "seo": 1},
    "other": {"copywriting": 0, "uxui": 0, "mobile": 0, "cta": 0, "seo": 0},
}

# Base implementation time in minutes
TIMING_MINUTES: dict[str, dict[str, int]] = {
    "copywriting": {
        "General clarity & tone": 45,
        "Value proposition clarity": 60,
        "Consistency with audience": 30,
        "Main headline": 30,
        "Subheadline": 20,
        "Section titles": 25,
        "Hero image": 40,
        "Intro video": 120,
        "Paragraphs & explanations": 50,
        "Microcopy (forms/buttons)": 20,
        "CTA text": 25,
        "Lead capture form": 35,
        "Social proof & testimonials": 60,
        "Trust signals": 30,
        "Objection handling": 45,
        "Trust badges": 15,
    },
    "uxui": {
        "First impression": 90,
        "Visual hierarchy": 60,
        "Consistency": 45,
        "Section organization": 75,
        "Whitespace usage": 30,
        "Content grouping": 45,
        "Images & icons": 40,
        "Video elements": 60,
        "Trust badges": 20,
        "Imagery/icons": 35,
        "Color contrast": 25,
        "Security badges": 15,
        "Menu clarity": 45,
        "Link visibility": 30,
        "Keyboard navigation": 60,
        "Contact form": 50,
    },
    "mobile": {
        "Mobile-first impression": 120,
        "Responsiveness": 180,
        "Touch usability": 90,
        "Font size": 30,
        "Spacing": 45,
        "Content stacking": 60,
        "Mobile images": 40,
        "Mobile video": 75,
        "Button size": 25,
        "Touch targets": 35,
        "Mobile load speed": 120,
        "Mobile forms": 60,
        "Menu usability": 45,
        "Sticky elements": 30,
        "Tap feedback": 40,
        "Mobile badges": 20,
    },
    "cta": {
        "CTA visibility": 30,
        "CTA relevance": 45,
        "CTA frequency": 60,
        "Button style": 25,
        "Color contrast": 20,
        "Size & shape": 25,
        "CTA icons": 30,
        "CTA video": 90,
        "Clarity of text": 25,
        "Action verbs": 20,
        "Urgency or scarcity": 35,
        "CTA form": 45,
        "Above the fold": 30,
        "End-of-section CTAs": 40,
        "Logical flow": 75,
        "CTA badges": 20,
    },
    "seo": {
        "SEO basics": 60,
        "Indexability": 45,
        "Meta tags presence": 30,
        "H1/H2 structure": 40,
        "Alt text for images": 50,
        "Internal links": 60,
        "Video SEO": 75,
        "Page speed": 120,
        "Mobile-friendliness": 90,
        "Schema markup": 75,
        "Image optimization": 60,
        "Keyword usage": 45,
        "Content depth": 180,
        "Duplicate content": 30,
        "SEO forms": 35,
    },
}

INDUSTRY_TIME_MULTIPLIERS = {
    "saas": 1.2,
    "ecommerce": 1.1,
    "services": 1.0,
    "coaching": 0.9,
    "local": 0.8,
    "health": 1.3,
    "other": 1.0,
}


@dataclass(frozen=True)
class ScoringTables:
    """Read-only lookup tables used by every scorer.

    Build once at startup with :func:`default_tables` and pass it in;
    tests can construct their own instance with substitute tables.
    """
    benchmarks: dict[str, dict[str, BenchmarkEntry]] = field(default_factory=lambda: BENCHMARKS)
    goal_aliases: dict[str, str] = field(default_factory=lambda: GOAL_ALIASES)
    optimization: dict[str, dict[str, tuple[int, int]]] = field(default_factory=lambda: OPTIMIZATION_SCORES)
    impact: dict[str, dict[str, tuple[int, int]]] = field(default_factory=lambda: IMPACT_SCORES)
    optimization_adjustments: dict[str, dict[str, int]] = field(default_factory=lambda: OPTIMIZATION_ADJUSTMENTS)
    impact_adjustments: dict[str, dict[str, int]] = field(default_factory=lambda: IMPACT_ADJUSTMENTS)
    timing_minutes: dict[str, dict[str, int]] = field(default_factory=lambda: TIMING_MINUTES)
    time_multipliers: dict[str, float] = field(default_factory=lambda: INDUSTRY_TIME_MULTIPLIERS)
    default_benchmark: BenchmarkEntry = BenchmarkEntry(60)
    default_optimization: int = 3
    default_impact: int = 3
    default_timing_minutes: int = 45

    @property
    def industries(self) -> tuple[str, ...]:
        return tuple(self.optimization_adjustments)


@lru_cache(maxsize=None)
def default_tables() -> ScoringTables:
    """The built-in tables, constructed once per process."""
    return ScoringTables()


def normalize_industry(industry: Optional[str], tables: ScoringTables) -> str:
    """Return a known industry key, or ``other``."""
    key = (industry or "").strip().lower()
    if key in tables.industries:
        return key
    if key:
        logger.warning("Unknown industry %r, using %r", industry, DEFAULT_INDUSTRY)
    return DEFAULT_INDUSTRY


def normalize_goal(goal: str, tables: ScoringTables) -> str:
    """Map a goal label to its internal key, or ``leadGeneration``."""
    key = tables.goal_aliases.get(goal)
    if key is None:
        logger.warning("Unknown goal %r, using %r", goal, DEFAULT_GOAL)
        return DEFAULT_GOAL
    return key
