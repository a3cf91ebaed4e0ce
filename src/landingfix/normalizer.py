"""Reconcile free-form AI output with the canonical report structure.

The AI is asked for ``[{category, elements: [{element, siteText, problem,
solution, actions}]}]`` but may wrap it in prose or code fences, rename
fields, send elements as a mapping, or skip and rename things. Everything
here degrades gracefully: the output always has exactly the canonical
categories and elements, in canonical order, each fully scored.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Union

from .categories import CategorySpec, get_expected_structure, normalize_focus_key
from .exceptions import MalformedOutputError
from .models import NOT_FOUND, CategoryResult, ElementResult, Report, has_site_content
from .scoring import ElementScorer, calculate_category_scores, calculate_final_totals, format_timing
from .scoring.tables import normalize_industry

logger = logging.getLogger(__name__)

NO_DATA = "no data"
DEFAULT_GOAL_LABEL = "My landing page is not converting"

TOOL_LINKS = {
    "hemingway": "Use Hemingway Editor (hemingwayapp.com)",
    "grammarly": "Use Grammarly (grammarly.com)",
    "canva": "Use Canva Pro (canva.com/pro)",
    "hotjar": "Use Hotjar (hotjar.com)",
    "optimizely": "Use Optimizely (optimizely.com)",
    "typeform": "Use Typeform (typeform.com)",
}
MEASUREMENT_SUFFIX = " - Track results using analytics and adjust based on performance data"

FOCUS_ACTIONS: dict[str, dict[str, tuple[str, ...]]] = {
    "seo": {
        "SEO basics": (
            "Audit current SEO using SEMrush Site Audit tool - focus on technical and content issues",
            "Optimize title tag and meta description using Yoast SEO plugin guidelines",
            "Submit sitemap to Google Search Console and monitor indexing status",
        ),
        "H1/H2 structure": (
            "Research {industry} best practices for {element} using industry reports and competitor analysis",
            "Implement improvements to {element} based on conversion rate optimization principles",
            "Measure performance using analytics tools and iterate based on data",
        ),
        "Alt text for images": (
            "Research {industry} best practices for {element} using industry reports and competitor analysis",
            "Implement improvements to {element} based on conversion rate optimization principles",
            "Measure performance using analytics tools and iterate based on data",
        ),
    },
    "uxui": {
        "Visual hierarchy": (
            "Create wireframes using Figma to plan information architecture and visual flow",
            "Use the squint test - blur your page and see what stands out first, adjust accordingly",
            "Test user attention flow using Hotjar heatmaps and optimize high-attention areas",
        ),
    },
}

GOAL_ACTIONS: dict[str, tuple[str, ...]] = {
    DEFAULT_GOAL_LABEL: (
        "Use UserTesting.com to get feedback on your {element} from real {industry} prospects",
        "Implement changes to {element} focusing on conversion optimization best practices",
        "Track improvements using Google Analytics goals and A/B testing",
    ),
}

GENERIC_ACTIONS = (
    "Research {industry} best practices for {element} using industry reports and competitor analysis",
    "Implement improvements to {element} based on conversion rate optimization principles",
    "Measure performance using analytics tools and iterate based on data",
)


# --- JSON extraction ---

_FENCE_OPEN = re.compile(r"^```[a-zA-Z]*\s*")
_FENCE_CLOSE = re.compile(r"\s*```\s*$")


def _strip_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE_OPEN.sub("", text)
        text = _FENCE_CLOSE.sub("", text)
    return text.strip()


def _balanced_span(text: str, start: int, open_ch: str, close_ch: str) -> Optional[str]:
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def extract_json_candidates(text: str) -> Iterator[str]:
    """Yield top-level balanced ``[...]`` spans, then top-level ``{...}`` spans.

    Brackets nested inside a span are never candidates on their own, so a
    truncated or broken answer cannot be rescued by one of its inner lists.
    """
    text = _strip_fences(text or "")
    arrays: list[str] = []
    objects: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch not in "[{":
            i += 1
            continue
        span = _balanced_span(text, i, ch, "]" if ch == "[" else "}")
        if span is None:
            # unclosed, so everything after it is nested
            break
        (arrays if ch == "[" else objects).append(span)
        i += len(span)
    yield from arrays
    yield from objects


def parse_ai_output(text: str) -> Any:
    """Parse the first JSON array or object found in AI output.

    Raises:
        MalformedOutputError: if no candidate span is valid JSON.
    """
    for candidate in extract_json_candidates(text):
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    preview = (text or "")[:200]
    raise MalformedOutputError(f"AI output contains no valid JSON: {preview!r}")


# --- Validation ---

@dataclass
class ValidationResult:
    """Outcome of checking AI output against the canonical structure."""
    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    needs_regeneration: bool = False

    def fail(self, message: str) -> None:
        self.errors.append(message)
        self.is_valid = False
        self.needs_regeneration = True


def _element_name(el: Any) -> Optional[str]:
    if isinstance(el, str):
        return el
    if isinstance(el, dict):
        name = el.get("element") or el.get("name")
        return str(name) if name else None
    return None


def validate_ai_output(parsed: Any, focus_key: str) -> ValidationResult:
    """Check category count, names and element names, index by index."""
    focus_key = normalize_focus_key(focus_key)
    expected = get_expected_structure(focus_key)
    result = ValidationResult()

    if not isinstance(parsed, list):
        result.fail("AI output is not an array")
        return result

    if len(parsed) != len(expected):
        result.fail(f"Expected {len(expected)} categories for {focus_key}, got {len(parsed)}")

    for index, cat in enumerate(expected):
        ai_cat = parsed[index] if index < len(parsed) else None
        if not isinstance(ai_cat, dict):
            result.fail(f'Missing category at index {index}: "{cat.category}"')
            continue

        if ai_cat.get("category") != cat.category:
            result.fail(f'Category {index}: expected "{cat.category}", got "{ai_cat.get("category")}"')

        elements = ai_cat.get("elements")
        if not isinstance(elements, list):
            result.fail(f'Category "{cat.category}" elements is not an array')
            continue

        names = [_element_name(el) for el in elements]
        missing = [name for name in cat.elements if name not in names]
        if missing:
            result.fail(f'Category "{cat.category}" missing required elements: {", ".join(missing)}')

        extra = [name for name in names if name and name not in cat.elements]
        if extra:
            result.warnings.append(f'Category "{cat.category}" has unexpected elements: {", ".join(extra)}')

    return result


# --- Element ingestion ---

@dataclass
class ElementRecord:
    """One AI-provided element in a single internal shape."""
    name: Optional[str]
    site_text: Any = None
    problem: Any = None
    solution: Any = None
    actions: Any = None


@dataclass(frozen=True)
class ArrayForm:
    """Elements sent as a list of records."""
    items: list


@dataclass(frozen=True)
class MapForm:
    """Elements sent as ``{element name: record or site text}``."""
    entries: dict


RawElements = Union[ArrayForm, MapForm]


def classify_elements(raw: Any) -> Optional[RawElements]:
    if isinstance(raw, list):
        return ArrayForm(raw)
    if isinstance(raw, dict):
        return MapForm(raw)
    return None


def _record_from_entry(key: Any, value: Any) -> ElementRecord:
    if isinstance(value, dict):
        return _record_from_dict({"element": key, **value})
    return ElementRecord(name=str(key), site_text=value)


def _record_from_dict(data: dict) -> ElementRecord:
    name = data.get("element")
    if not name:
        name = data.get("name")
    if not name and data:
        # {"Main headline": {...}} inside an array
        key, value = next(iter(data.items()))
        return _record_from_entry(key, value)
    return ElementRecord(
        name=str(name) if name else None,
        site_text=data.get("siteText"),
        problem=data.get("problem"),
        solution=data.get("solution"),
        actions=data.get("actions"),
    )


def ingest_elements(raw: Any) -> list[ElementRecord]:
    """Normalize whatever the AI sent as ``elements`` into records."""
    form = classify_elements(raw)
    records: list[ElementRecord] = []

    if isinstance(form, MapForm):
        for key, value in form.entries.items():
            records.append(_record_from_entry(key, value))
    elif isinstance(form, ArrayForm):
        for item in form.items:
            if isinstance(item, dict):
                records.append(_record_from_dict(item))
            elif isinstance(item, str):
                records.append(ElementRecord(name=item))
    return records


def match_elements(canonical: tuple[str, ...], records: list[ElementRecord]) -> list[Optional[ElementRecord]]:
    """Assign AI records to canonical element slots.

    Slots are resolved in canonical order: an exact case-insensitive match,
    else a fuzzy match on the first word. Each record fills at most one
    slot, so an earlier slot can take a record whose name is an exact
    match for a later one.
    """
    pool: dict[str, ElementRecord] = {}
    for record in records:
        if record.name:
            pool[record.name.strip().lower()] = record

    matched: list[Optional[ElementRecord]] = []
    for name in canonical:
        lowered = name.lower()
        key = lowered if lowered in pool else None
        if key is None:
            first = lowered.split(" ")[0]
            key = next(
                (k for k in pool if first in k or k.split(" ")[0] in lowered),
                None,
            )
        matched.append(pool.pop(key) if key is not None else None)
    return matched


# --- Fallback content ---

def is_no_data(value: Any) -> bool:
    """True for missing, empty or "no data" values."""
    if value is None:
        return True
    if isinstance(value, str):
        stripped = value.strip()
        return stripped == "" or stripped.lower() == NO_DATA
    if isinstance(value, list) and len(value) == 1 and isinstance(value[0], str):
        return value[0].strip().lower() == NO_DATA
    return False


def _goals_text(goals: list[str], sep: str = " and ") -> str:
    return sep.join(goals) if goals else "conversion"


def fallback_problem(element: str, category: str, industry: str, goals: list[str]) -> str:
    return (
        f"Analysis needed for {element} in {category}. This element requires optimization "
        f"for {industry} businesses focusing on {_goals_text(goals)} goals."
    )


def fallback_solution(element: str, category: str, industry: str, goals: list[str]) -> str:
    return (
        f"Strategic improvement needed for {element}. Implement {industry}-specific "
        f"best practices to enhance {_goals_text(goals)} performance."
    )


def fallback_actions(element: str, industry: str, focus_key: str, goals: list[str]) -> list[str]:
    """Three deterministic actions for an element the AI left empty."""
    templates = FOCUS_ACTIONS.get(focus_key, {}).get(element)
    if templates is None:
        primary_goal = goals[0] if goals else DEFAULT_GOAL_LABEL
        templates = GOAL_ACTIONS.get(primary_goal, GENERIC_ACTIONS)
    return [t.format(element=element, industry=industry) for t in templates]


def enhance_actions_with_tools(actions: list[str]) -> list[str]:
    """Expand known tool names and make sure each action is measurable."""
    enhanced = []
    for action in actions:
        for tool, replacement in TOOL_LINKS.items():
            if tool in action.lower():
                action = re.sub(tool, replacement, action, flags=re.IGNORECASE)
        # case-sensitive: "Measure ..." still gets the suffix
        if "measure" not in action and "track" not in action:
            action += MEASUREMENT_SUFFIX
        enhanced.append(action)
    return enhanced


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return " ".join(str(v) for v in value)
    return str(value)


# --- Reconciliation ---

def resolve_element(
    name: str,
    record: Optional[ElementRecord],
    cat: CategorySpec,
    focus_key: str,
    industry: str,
    goals: list[str],
    scorer: ElementScorer,
) -> ElementResult:
    """Build a scored element for one canonical slot."""
    if record is None:
        logger.debug("No AI data for element %r in %r", name, cat.category)
        record = ElementRecord(name=name, site_text=NOT_FOUND)

    site_text = NOT_FOUND if record.site_text is None else _as_text(record.site_text)
    result = ElementResult(element=name, site_text=site_text)
    result.metrics = scorer.score(name, industry, cat.category, focus_key, has_site_content(site_text))

    if is_no_data(record.problem):
        result.problem = fallback_problem(name, cat.category, industry, goals)
    else:
        result.problem = _as_text(record.problem)

    if is_no_data(record.solution):
        result.solution = fallback_solution(name, cat.category, industry, goals)
    else:
        result.solution = _as_text(record.solution)

    actions = record.actions
    if not is_no_data(actions) and isinstance(actions, list):
        actions = [str(a) for a in actions if str(a).strip()]
    if is_no_data(actions) or not isinstance(actions, list) or not actions:
        result.actions = fallback_actions(name, industry, focus_key, goals)
    else:
        result.actions = enhance_actions_with_tools(actions)

    return result


def normalize_report(
    parsed: Any,
    focus_key: str,
    industry: Optional[str],
    goals: Optional[list[str]] = None,
    scorer: Optional[ElementScorer] = None,
) -> list[CategoryResult]:
    """Force parsed AI output into the canonical categories and score it."""
    focus_key = normalize_focus_key(focus_key)
    scorer = scorer or ElementScorer()
    goals = list(goals or [])
    industry_key = normalize_industry(industry, scorer.tables)

    if isinstance(parsed, dict):
        parsed = [parsed]
    ai_cats = parsed if isinstance(parsed, list) else []

    categories = []
    for index, cat in enumerate(get_expected_structure(focus_key)):
        ai_cat = ai_cats[index] if index < len(ai_cats) else {}
        raw_elements = ai_cat.get("elements") if isinstance(ai_cat, dict) else None
        records = ingest_elements(raw_elements)
        matched = match_elements(cat.elements, records)

        logger.debug(
            "Element mapping for %r: %d AI elements, %d matched of %d",
            cat.category, len(records), sum(1 for m in matched if m), len(cat.elements),
        )

        elements = [
            resolve_element(name, record, cat, focus_key, industry_key, goals, scorer)
            for name, record in zip(cat.elements, matched)
        ]
        scores = calculate_category_scores(elements)
        categories.append(CategoryResult(
            category=cat.category,
            elements=elements,
            optimization_score=scores.optimization_score,
            impact_score=scores.impact_score,
            timing_minutes=scores.timing_minutes,
            timing=format_timing(scores.timing_minutes),
        ))
    return categories


def build_report(
    parsed: Any,
    focus_key: str,
    industry: Optional[str],
    goals: Optional[list[str]] = None,
    scorer: Optional[ElementScorer] = None,
) -> Report:
    """Normalize AI output and add report-wide totals."""
    focus_key = normalize_focus_key(focus_key)
    categories = normalize_report(parsed, focus_key, industry, goals, scorer)
    totals = calculate_final_totals(categories)
    return Report(
        categories=categories,
        totals=totals,
        total_timing=format_timing(totals.total_timing_minutes),
        focus=focus_key,
    )
