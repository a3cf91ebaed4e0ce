"""Canonical categories and elements for each focus area.

All AI output is reconciled against this structure. Category order is
significant: the AI response is matched to it by index.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_FOCUS = "copywriting"


@dataclass(frozen=True)
class CategorySpec:
    """A canonical category within a focus area."""
    category: str
    elements: tuple[str, ...]
    focus_hint: str


FOCUS_CATEGORIES: dict[str, tuple[CategorySpec, ...]] = {
    "copywriting": (
        CategorySpec(
            "Copywriting Overview",
            ("General clarity & tone", "Value proposition clarity", "Consistency with audience"),
            "copywriting analysis of tone, value props, and audience",
        ),
        CategorySpec(
            "Headlines, Subheadlines & Visuals",
            ("Main headline", "Subheadline", "Section titles", "Hero image", "Intro video"),
            "copywriting analysis of headlines, subheads, and visual content",
        ),
        CategorySpec(
            "Body, CTA Copy & Forms",
            ("Paragraphs & explanations", "Microcopy (forms/buttons)", "CTA text", "Lead capture form"),
            "copywriting analysis of body text, CTAs, and form copy",
        ),
        CategorySpec(
            "Persuasion, Trust & Badges",
            ("Social proof & testimonials", "Trust signals", "Objection handling", "Trust badges"),
            "copywriting analysis of persuasion elements and trust building",
        ),
    ),
    "uxui": (
        CategorySpec(
            "UX/UI Overview",
            ("First impression", "Visual hierarchy", "Consistency"),
            "UX/UI analysis of overall user experience and visual design",
        ),
        CategorySpec(
            "Layout, Structure & Media",
            ("Section organization", "Whitespace usage", "Content grouping", "Images & icons", "Video elements"),
            "UX/UI analysis of layout, structure, and media elements",
        ),
        CategorySpec(
            "Trust, Visual Elements & Badges",
            ("Trust badges", "Imagery/icons", "Color contrast", "Security badges"),
            "UX/UI analysis of trust indicators and visual elements",
        ),
        CategorySpec(
            "Navigation, Accessibility & Forms",
            ("Menu clarity", "Link visibility", "Keyboard navigation", "Contact form"),
            "UX/UI analysis of navigation, accessibility, and form design",
        ),
    ),
    "mobile": (
        CategorySpec(
            "Mobile Overview",
            ("Mobile-first impression", "Responsiveness", "Touch usability"),
            "mobile optimization analysis of overall mobile experience",
        ),
        CategorySpec(
            "Layout, Readability & Media",
            ("Font size", "Spacing", "Content stacking", "Mobile images", "Mobile video"),
            "mobile optimization analysis of layout, readability, and media",
        ),
        CategorySpec(
            "Buttons, Forms & Performance",
            ("Button size", "Touch targets", "Mobile load speed", "Mobile forms"),
            "mobile optimization analysis of interactive elements and performance",
        ),
        CategorySpec(
            "Mobile Navigation & Sticky Elements",
            ("Menu usability", "Sticky elements", "Tap feedback", "Mobile badges"),
            "mobile optimization analysis of navigation and sticky elements",
        ),
    ),
    "cta": (
        CategorySpec(
            "CTA Overview",
            ("CTA visibility", "CTA relevance", "CTA frequency"),
            "CTA optimization analysis of visibility, relevance, and frequency",
        ),
        CategorySpec(
            "CTA Design & Media",
            ("Button style", "Color contrast", "Size & shape", "CTA icons", "CTA video"),
            "CTA optimization analysis of design and visual elements",
        ),
        CategorySpec(
            "CTA Messaging & Forms",
            ("Clarity of text", "Action verbs", "Urgency or scarcity", "CTA form"),
            "CTA optimization analysis of messaging and form integration",
        ),
        CategorySpec(
            "CTA Placement, Flow & Badges",
            ("Above the fold", "End-of-section CTAs", "Logical flow", "CTA badges"),
            "CTA optimization analysis of placement, flow, and trust elements",
        ),
    ),
    "seo": (
        CategorySpec(
            "SEO Overview",
            ("SEO basics", "Indexability", "Meta tags presence"),
            "SEO analysis of basic optimization, indexing, and meta elements",
        ),
        CategorySpec(
            "On-page Elements & Media",
            ("H1/H2 structure", "Alt text for images", "Internal links", "Video SEO"),
            "SEO analysis of on-page elements, media optimization, and linking",
        ),
        CategorySpec(
            "Technical SEO & Performance",
            ("Page speed", "Mobile-friendliness", "Schema markup", "Image optimization"),
            "SEO analysis of technical performance, mobile optimization, and structured data",
        ),
        CategorySpec(
            "Content Optimization & Forms",
            ("Keyword usage", "Content depth", "Duplicate content", "SEO forms"),
            "SEO analysis of content optimization, keyword strategy, and form optimization",
        ),
    ),
}

FOCUS_SYNONYMS = {
    "copy writing": "copywriting",
    "ux/ui": "uxui",
    "ux-ui": "uxui",
    "ux ui": "uxui",
    "ux": "uxui",
    "ui": "uxui",
}


def _fold(value: str) -> str:
    return re.sub(r"[^a-z0-9]", "", value.lower())


def normalize_focus_key(focus: str | None) -> str:
    """Map a user-supplied focus label to a canonical focus key."""
    if not focus:
        return DEFAULT_FOCUS

    key = _fold(focus)
    if key in FOCUS_CATEGORIES:
        return key

    for variant, canonical in FOCUS_SYNONYMS.items():
        if key == _fold(variant):
            return canonical

    logger.warning("Unknown focus %r, falling back to %s", focus, DEFAULT_FOCUS)
    return DEFAULT_FOCUS


def is_focus_valid(focus_key: str) -> bool:
    return focus_key in FOCUS_CATEGORIES


def get_expected_structure(focus_key: str) -> list[CategorySpec]:
    """Ordered canonical categories for a focus key (empty if unknown)."""
    return list(FOCUS_CATEGORIES.get(focus_key, ()))


def get_canonical_structure(focus: str | None) -> list[CategorySpec]:
    """Canonical categories for any focus label, defaulting to copywriting."""
    return get_expected_structure(normalize_focus_key(focus))


def focus_debug_info(focus_key: str) -> dict[str, Any]:
    """Summary of a focus area's structure for diagnostics."""
    if not is_focus_valid(focus_key):
        return {"error": f"Invalid focus: {focus_key}"}

    cats = FOCUS_CATEGORIES[focus_key]
    return {
        "focus": focus_key,
        "total_categories": len(cats),
        "total_elements": sum(len(c.elements) for c in cats),
        "categories": [
            {
                "name": c.category,
                "element_count": len(c.elements),
                "elements": list(c.elements),
            }
            for c in cats
        ],
    }
