"""Pytest configuration and shared fixtures"""
import json

import pytest

from landingfix.categories import get_expected_structure
from landingfix.fetcher import PageContent
from landingfix.providers import LLMResponse
from landingfix.scoring import ElementScorer


class FakeProvider:
    """Returns queued responses instead of calling an LLM."""

    name = "Fake"
    model = "fake-1"
    env_var = "FAKE_API_KEY"

    def __init__(self, responses, configured=True):
        self.responses = list(responses)
        self.configured = configured
        self.calls = []

    def is_configured(self):
        return self.configured

    def complete(self, prompt, temperature=0.3):
        self.calls.append({"prompt": prompt, "temperature": temperature})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            return LLMResponse(self.name, self.model, prompt, "", 0, error=str(item))
        return LLMResponse(self.name, self.model, prompt, item, 5)


def build_ai_output(focus_key, site_text="Some text from the page"):
    """A well-formed AI answer for every canonical element of a focus."""
    return [
        {
            "category": cat.category,
            "elements": [
                {
                    "element": element,
                    "siteText": site_text,
                    "problem": f"{element} is vague",
                    "solution": f"Rewrite {element}",
                    "actions": [
                        f"Draft three variants of {element}",
                        f"Review {element} with the team",
                        f"Measure {element} click-through",
                    ],
                }
                for element in cat.elements
            ],
        }
        for cat in get_expected_structure(focus_key)
    ]


@pytest.fixture
def scorer():
    return ElementScorer()


@pytest.fixture
def make_ai_output():
    return build_ai_output


@pytest.fixture
def make_provider():
    return FakeProvider


@pytest.fixture
def copywriting_output():
    return build_ai_output("copywriting")


@pytest.fixture
def copywriting_json(copywriting_output):
    return json.dumps(copywriting_output)


@pytest.fixture
def page():
    return PageContent(
        url="https://example.com",
        html="<html><body><h1>Buy now</h1><p>testimonials</p><a>contact</a></body></html>",
        title="Example",
        h1=["Buy now"],
        visible_text="Buy now testimonials contact",
        main_content="Buy now testimonials contact",
    )
