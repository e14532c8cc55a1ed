"""Pytest configuration and shared fixtures for the bbrender test suite."""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from bbrender import BBCodeParser

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests")


@pytest.fixture
def basic_rules() -> list[dict]:
    """Provide a small HTML rule set used across tests.

    Returns
    -------
    list of dict
        Rule definitions for b, i, url, color, quote, list, * and text.

    """
    return [
        {"template": "[b]$content[/b]", "render": "<b>$content</b>"},
        {"template": "[i]$content[/i]", "render": "<i>$content</i>"},
        {"template": "[url=$href]$text[/url]", "render": '<a href="$href">$text</a>'},
        {"template": "[color=$color]$content[/color]", "render": '<span style="color:$color">$content</span>'},
        {"template": "[quote]$content[/quote]", "render": "<blockquote>$content</blockquote>"},
        {"template": "[list]$items[/list]", "render": "<ul>$items</ul>"},
        {"template": "[*]$item", "render": "<li>$item</li>"},
        {"template": "[text]$content[/text]", "render": "<p>$content</p>"},
    ]


@pytest.fixture
def parser(basic_rules) -> BBCodeParser:
    """Create a parser configured with ``basic_rules``."""
    return BBCodeParser(basic_rules)
