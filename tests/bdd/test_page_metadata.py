"""Behaviour tests for head metadata replacement.

Usage
-----
Run ``pytest tests/bdd/test_page_metadata.py -v``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from wedding_pages.metadata import MANAGED_ATTR, PageMetadata, emit_metadata

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "page_metadata.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


def _metadata(name: str) -> PageMetadata:
    return PageMetadata(
        title=f"Page {name}",
        description=f"About {name}",
        image=f"/{name}.png",
        url=f"https://example.com/{name.lower()}",
        structured_data={"@type": "Event", "name": name},
    )


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps."""
    return {}


@given("an empty HTML document")
def given_document(scenario_state: ScenarioState) -> None:
    scenario_state["document"] = BeautifulSoup(
        "<html><head><title>Base</title></head><body></body></html>", "html.parser"
    )


@when(parsers.parse('metadata for page "{name}" is emitted'))
def when_emit(scenario_state: ScenarioState, name: str) -> None:
    emit_metadata(scenario_state["document"], _metadata(name))


@then(parsers.parse('the head holds only the metadata for page "{name}"'))
def then_only(scenario_state: ScenarioState, name: str) -> None:
    head = scenario_state["document"].head
    titles = [title.get_text() for title in head.find_all("title")]
    assert titles == [f"Page {name}"], f"expected a single title, got {titles!r}"
    managed = head.find_all(attrs={MANAGED_ATTR: True})
    contents = " ".join(
        str(tag.get("content") or tag.get("href") or tag.get_text()) for tag in managed
    )
    assert "Page A" not in contents and "About A" not in contents
    assert "/A.png" not in contents
    og_urls = head.find_all("meta", attrs={"property": "og:url"})
    assert [tag["content"] for tag in og_urls] == [
        f"https://example.com/{name.lower()}"
    ]
    scripts = head.find_all("script", type="application/ld+json")
    assert len(scripts) == 1, "expected exactly one structured data block"
