"""Objective, non-AI checklist of industry best practices."""

import re
from dataclasses import dataclass, field

from .scoring.elements import round_half_up


@dataclass(frozen=True)
class ChecklistItem:
    label: str
    pattern: re.Pattern

    def test(self, html: str) -> bool:
        return bool(self.pattern.search(html))


@dataclass
class ChecklistResult:
    """Which checklist items a page passes."""
    industry: str
    items: list[tuple[str, bool]] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for _, ok in self.items if ok)

    @property
    def score(self) -> int:
        """Percentage of items passed, 0-100."""
        if not self.items:
            return 0
        return round_half_up(self.passed / len(self.items) * 100)


def _item(label: str, pattern: str) -> ChecklistItem:
    return ChecklistItem(label, re.compile(pattern, re.IGNORECASE))


INDUSTRY_CHECKLISTS: dict[str, tuple[ChecklistItem, ...]] = {
    "saas": (
        _item("Demo/Trial present", r"demo|trial"),
        _item("Visible pricing", r"pricing|price"),
        _item("Testimonials/reviews", r"testimonials|reviews"),
        _item("Clear CTA", r"sign\s?up|try|buy|start"),
        _item("Security/trust badges", r"guarantee|secure|trust|reliable"),
    ),
    "ecommerce": (
        _item("Product images", r"<img[^>]+product|product"),
        _item("Reviews", r"reviews|stars|rating"),
        _item("Clear shipping info", r"shipping|delivery"),
        _item("Visible price", r"price|€|\$"),
        _item("Purchase CTA", r"buy|add to cart|purchase"),
    ),
    "services": (
        _item("Service description", r"services|what we do|offer"),
        _item("Contact form", r"form|contact|request"),
        _item("Testimonials", r"testimonials|reviews"),
        _item("Clear CTA", r"book|request|contact"),
        _item("Visible hours/contact", r"hours|phone|email"),
    ),
    "coaching": (
        _item("Coach photo", r"coach|trainer|about"),
        _item("Testimonials", r"testimonials|reviews"),
        _item("Method description", r"method|how it works|approach"),
        _item("Booking CTA", r"book|discover|contact"),
        _item("Discovery call", r"call|session|meeting"),
    ),
    "local": (
        _item("Address/map", r"address|map|where"),
        _item("Opening hours", r"hours|open|close"),
        _item("Reviews", r"reviews|testimonials"),
        _item("Visible phone", r"tel:|phone|call"),
        _item("Contact form", r"form|contact|request"),
    ),
    "health": (
        _item("Staff presentation", r"staff|team|doctor|physician"),
        _item("Services/therapies", r"services|therapies|treatments"),
        _item("Reviews", r"reviews|testimonials"),
        _item("Booking/contact", r"book|contact|request"),
        _item("Hours/address", r"hours|address|where"),
    ),
    "other": (
        _item("Clear headline", r"<h1|headline|title"),
        _item("Visible CTA", r"cta|sign\s?up|buy|try|contact"),
        _item("Testimonials", r"testimonials|reviews"),
        _item("Offer description", r"offer|services|what"),
        _item("Contacts", r"contact|phone|email"),
    ),
}


def run_checklist(html: str, industry: str | None) -> ChecklistResult:
    """Run the checklist for an industry against raw page HTML."""
    key = (industry or "").strip().lower()
    if key not in INDUSTRY_CHECKLISTS:
        key = "other"

    result = ChecklistResult(industry=key)
    for item in INDUSTRY_CHECKLISTS[key]:
        result.items.append((item.label, item.test(html or "")))
    return result
