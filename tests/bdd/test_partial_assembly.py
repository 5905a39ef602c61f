"""Behaviour tests for rendering with deferred substitution and assembling.

These pytest-bdd scenarios render the same page tree twice, once with every
template command resolved on the spot and once in partial mode followed by the
directory-level assembly pass, and compare the written files. The feature file
``partial_assembly.feature`` drives the scenarios.

Usage
-----
Run ``pytest tests/bdd/test_partial_assembly.py -v``. Output is written below
pytest's ``tmp_path``; nothing else is touched.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from docset_html.config import RendererConfig
from docset_html.model import (
    ContentPage,
    Group,
    Header,
    PageNode,
    Reference,
    ReferenceLink,
    Style,
    Text,
)
from docset_html.renderer.site import SiteRenderer
from docset_html.templating.assembly import assemble_directory

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "partial_assembly.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]

PROJECT_NAME = "Demo <Docs>"
CROSS_MODULE = Reference("other", "Thing")


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _render(root: PageNode, output_dir: Path, *, partial: bool) -> None:
    config = RendererConfig(
        module_name=PROJECT_NAME,
        delay_template_substitution=partial,
        output_dir=output_dir,
    )
    SiteRenderer(config).render(root)


@given("a documentation tree with an unresolved cross-module reference")
def given_tree(scenario_state: ScenarioState) -> None:
    """Build a module page with one leaf page linking outside the tree."""
    leaf = ContentPage(
        name="Widget",
        dri=(Reference("lib", "Widget"),),
        content=Group(
            children=(
                Header(level=1, children=(Text(text="Widget"),)),
                Group(
                    styles=(Style.PARAGRAPH,),
                    children=(
                        Text(text="Backed by "),
                        ReferenceLink(address=CROSS_MODULE, children=(Text(text="Thing"),)),
                    ),
                ),
            )
        ),
    )
    module = ContentPage(
        name="lib",
        content=Group(children=(Header(children=(Text(text="lib"),)),)),
        children=(leaf,),
    )
    scenario_state["root"] = PageNode(name="root", children=(module,))


@when("the site is rendered immediately")
def when_rendered_immediately(scenario_state: ScenarioState, tmp_path: Path) -> None:
    output_dir = tmp_path / "immediate"
    _render(scenario_state["root"], output_dir, partial=False)
    scenario_state["immediate"] = output_dir


@when("the site is rendered partially and assembled")
def when_rendered_partially(scenario_state: ScenarioState, tmp_path: Path) -> None:
    output_dir = tmp_path / "partial"
    _render(scenario_state["root"], output_dir, partial=True)
    assemble_directory(output_dir, project_name=PROJECT_NAME)
    scenario_state["partial"] = output_dir


@when("the site is rendered partially and assembled with a link index")
def when_rendered_with_links(scenario_state: ScenarioState, tmp_path: Path) -> None:
    output_dir = tmp_path / "linked"
    _render(scenario_state["root"], output_dir, partial=True)
    assemble_directory(
        output_dir,
        project_name=PROJECT_NAME,
        link_index={str(CROSS_MODULE): "other/thing.html"},
    )
    scenario_state["partial"] = output_dir


@then("every assembled page matches its immediately rendered page")
def then_pages_match(scenario_state: ScenarioState) -> None:
    immediate: Path = scenario_state["immediate"]
    partial: Path = scenario_state["partial"]
    expected = sorted(path.relative_to(immediate) for path in immediate.rglob("*.html"))
    actual = sorted(path.relative_to(partial) for path in partial.rglob("*.html"))
    assert actual == expected
    assert expected, "expected at least one rendered page"
    for relative in expected:
        assert (partial / relative).read_text(encoding="utf-8") == (
            immediate / relative
        ).read_text(encoding="utf-8"), f"{relative} differs after assembly"


@then("no command manifests remain")
def then_no_manifests(scenario_state: ScenarioState) -> None:
    partial: Path = scenario_state["partial"]
    assert list(partial.rglob("*.commands.json")) == []


@then("the cross-module reference links to the indexed page")
def then_link_resolved(scenario_state: ScenarioState) -> None:
    partial: Path = scenario_state["partial"]
    html = (partial / "lib" / "widget.html").read_text(encoding="utf-8")
    soup = BeautifulSoup(html, "html.parser")
    link = soup.select_one("p.paragraph a")
    assert link is not None
    assert link["href"] == "../other/thing.html"
    assert link.get_text() == "Thing"
    assert soup.select_one("[data-unresolved-link]") is None
