"""Behaviour tests for rendering a site with pytest-bdd.

These scenarios build a throwaway site under ``tmp_path`` containing a
``templates`` directory of layouts and pages that extend them, run
:class:`treeline.builder.TreelineBuilder`, and inspect the pages written back
in place. The feature file ``render_pages.feature`` drives the scenarios.

Usage
-----
Run ``pytest tests/bdd/test_render_pages.py -v`` after installing the test
extra (``pip install -e .[test]``). No network access is required.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from bs4.element import Comment
from pytest_bdd import given, parsers, scenarios, then, when

from treeline.builder import TreelineBuilder
from treeline.config import BuildConfig
from treeline.errors import TreelineError

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "render_pages.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state(tmp_path: Path) -> ScenarioState:
    """Share the site directory and results across steps."""
    (tmp_path / "templates").mkdir()
    return {"site": tmp_path, "layouts": {}}


@given(parsers.parse('a layout "{name}" with an include gap "{gap}"'))
def given_layout(scenario_state: ScenarioState, name: str, gap: str) -> None:
    """Write a full-document layout with one include gap."""
    source = (
        "<!DOCTYPE html>\n"
        f"<html><body><main><!--treeline:includes:{gap}--></main></body></html>\n"
    )
    path = typ.cast("Path", scenario_state["site"]) / "templates" / f"{name}.html"
    path.write_text(source, encoding="utf-8")
    scenario_state["layouts"][name] = source


@given(
    parsers.parse(
        'a page "{name}" extending "{layout}" with content "{content}" for "{fragment}"'
    )
)
def given_page(
    scenario_state: ScenarioState,
    name: str,
    layout: str,
    content: str,
    fragment: str,
) -> None:
    """Write a page that extends ``layout`` and supplies one fragment."""
    path = typ.cast("Path", scenario_state["site"]) / f"{name}.html"
    path.write_text(
        f"<!--treeline:extends:{layout}-->\n"
        f'<template data-treeline-contents="{fragment}">{content}</template>\n',
        encoding="utf-8",
    )


def _builder(scenario_state: ScenarioState) -> TreelineBuilder:
    return TreelineBuilder(BuildConfig(build_dir=typ.cast("Path", scenario_state["site"])))


@when("I build the site")
def when_build(scenario_state: ScenarioState) -> None:
    """Render every page of the site."""
    scenario_state["written"] = _builder(scenario_state).run()


@when("I try to build the site")
def when_try_build(scenario_state: ScenarioState) -> None:
    """Render the site, recording the error instead of raising it."""
    with pytest.raises(TreelineError) as excinfo:
        _builder(scenario_state).run()
    scenario_state["error"] = excinfo.value


@then(parsers.parse('the page "{name}" has "{content}" right after the "{gap}" gap'))
def then_content_after_gap(
    scenario_state: ScenarioState, name: str, content: str, gap: str
) -> None:
    """The fragment's text directly follows the gap comment."""
    path = typ.cast("Path", scenario_state["site"]) / f"{name}.html"
    assert path.resolve() in scenario_state["written"]
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    marker = f"treeline:includes:{gap}"
    comment = soup.find(string=lambda s: isinstance(s, Comment) and marker in s)
    assert comment is not None, f"Expected the '{gap}' gap to be kept"
    assert str(comment.next_sibling) == content


@then(parsers.parse('the layout "{name}" is unchanged'))
def then_layout_unchanged(scenario_state: ScenarioState, name: str) -> None:
    """Layouts are never written back."""
    path = typ.cast("Path", scenario_state["site"]) / "templates" / f"{name}.html"
    assert path.read_text(encoding="utf-8") == scenario_state["layouts"][name]


@then(parsers.parse('the build fails naming "{label}" and "{reference}"'))
def then_build_fails(scenario_state: ScenarioState, label: str, reference: str) -> None:
    """The error message identifies the page and what it referenced."""
    message = str(scenario_state["error"])
    assert f"'{label}'" in message
    assert f"'{reference}'" in message
