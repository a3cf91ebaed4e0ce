"""Prompt templates for landing page analysis."""

import json
import logging
from typing import Optional

from .categories import DEFAULT_FOCUS, get_expected_structure

logger = logging.getLogger(__name__)

MAX_VISIBLE_TEXT = 3000
MAX_MAIN_CONTENT = 1500


def build_structure_example(focus_key: str) -> list[dict]:
    """The exact JSON skeleton the AI must fill in."""
    return [
        {
            "category": cat.category,
            "elements": [
                {
                    "element": element,
                    "siteText": "ACTUAL text from page or 'Not found'",
                    "problem": f"SPECIFIC {focus_key} problem with {element}",
                    "solution": f"DETAILED {focus_key} solution for {element}",
                    "actions": [
                        f"{focus_key}-specific action {n} for {element}" for n in (1, 2, 3)
                    ],
                }
                for element in cat.elements
            ],
        }
        for cat in get_expected_structure(focus_key)
    ]


def generate_prompt(
    url: str,
    focus_key: str,
    industry: str,
    goals: Optional[list[str]],
    visible_text: str,
    main_content: str,
) -> str:
    """Build the analysis prompt for a page.

    The prompt embeds the canonical categories and elements so the AI
    answers in the exact shape the normalizer expects.
    """
    structure = get_expected_structure(focus_key)
    if not structure:
        logger.error("No structure for focus %r, falling back to %s", focus_key, DEFAULT_FOCUS)
        focus_key = DEFAULT_FOCUS
        structure = get_expected_structure(focus_key)

    focus = focus_key.upper()
    goals = goals or []
    goals_and = " and ".join(goals) or "conversion"
    goals_slash = "/".join(goals) or "conversion"

    category_list = "\n".join(
        f'{i}. EXACTLY "{cat.category}" with elements: {", ".join(cat.elements)}'
        for i, cat in enumerate(structure, 1)
    )
    category_names = ", ".join(f'"{cat.category}"' for cat in structure)
    skeleton = json.dumps(build_structure_example(focus_key), indent=2)

    return f"""You are an expert {focus} conversion specialist analyzing a {industry} landing page at {url}.

**CRITICAL INSTRUCTIONS - READ CAREFULLY:**
1. You MUST analyze the page for {focus} optimization
2. You MUST use the EXACT category and element names specified below
3. NEVER change category names or element names
4. Focus your analysis on {focus_key} best practices and optimization
5. Extract real text from the page content provided
6. Provide {focus_key}-specific problems, solutions, and actions

**MANDATORY CATEGORIES AND ELEMENTS FOR {focus} FOCUS:**
YOU MUST USE EXACTLY THESE NAMES - NO VARIATIONS ALLOWED:

{category_list}

**{focus} ANALYSIS REQUIREMENTS:**
- Identify {focus_key}-specific problems in the current implementation
- Include {focus_key} tools and methodologies in your actions
- Address {industry} industry needs for {goals_and} goals

**EXACT JSON STRUCTURE YOU MUST RETURN:**
{skeleton}

**CONTENT TO ANALYZE:**
{(visible_text or "")[:MAX_VISIBLE_TEXT]}

**MAIN CONTENT:**
{(main_content or "")[:MAX_MAIN_CONTENT]}

For each element, provide:

**PROBLEM**: the specific {focus_key} issue with this element, referencing the actual content found on the page
**SOLUTION**: a detailed {focus_key}-focused fix, specific to {industry} and {goals_slash} goals
**ACTIONS**: 3 specific steps
- Action 1: {focus_key}-specific tool recommendation with exact usage
- Action 2: {focus_key} improvement with implementation steps
- Action 3: {focus_key} testing/measurement strategy with specific metrics

If an element is not present on the page, set siteText to "Not found".

**VALIDATION RULES:**
- Category names MUST match exactly: {category_names}
- Element names MUST match exactly within each category
- Provide {industry}-specific {focus_key} recommendations

Return ONLY the JSON array with the exact structure shown above - no explanatory text."""


def regeneration_suffix(errors: list[str]) -> str:
    """Extra instructions appended after a schema mismatch."""
    issues = "\n".join(f"- {e}" for e in errors) or "- structure did not match"
    return f"""

Previous output did not match the required structure:
{issues}
Regenerate the complete JSON array with every category and element name exactly as listed.
No text outside JSON."""
