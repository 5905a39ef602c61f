"""Shared fixtures for docset_html tests."""

from __future__ import annotations

import typing as typ

import pytest

from docset_html.location import DefaultLocationProvider
from docset_html.logger import reset_logger
from docset_html.model import ContentPage, Group, PageNode, SourceSet
from docset_html.renderer.dispatcher import ContentDispatcher
from docset_html.renderer.highlighting import CodeHighlighter
from docset_html.renderer.models import RenderContext
from docset_html.renderer.tabs import DefaultTabSortingStrategy
from docset_html.templating.emitter import make_emitter

if typ.TYPE_CHECKING:
    from docset_html.location import LocationProvider
    from docset_html.renderer.tabs import TabSortingStrategy


@pytest.fixture(autouse=True)
def _reset_logging() -> typ.Iterator[None]:
    """Keep the package logger propagating to ``caplog`` between tests."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def jvm() -> SourceSet:
    return SourceSet("lib", "jvm", platform="jvm")


@pytest.fixture
def js() -> SourceSet:
    return SourceSet("lib", "js", platform="js")


@pytest.fixture
def native() -> SourceSet:
    return SourceSet("lib", "native", platform="native")


class ContextFactory(typ.Protocol):
    def __call__(
        self,
        page: ContentPage | None = None,
        *,
        partial: bool = False,
        render_bubbles: bool = False,
        location: LocationProvider | None = None,
        tab_strategy: TabSortingStrategy | None = None,
    ) -> RenderContext: ...


@pytest.fixture
def make_context() -> ContextFactory:
    """Return a factory building a render context for a single page."""

    def _build(
        page: ContentPage | None = None,
        *,
        partial: bool = False,
        render_bubbles: bool = False,
        location: LocationProvider | None = None,
        tab_strategy: TabSortingStrategy | None = None,
    ) -> RenderContext:
        page = page or ContentPage(name="Widget", content=Group())
        if location is None:
            location = DefaultLocationProvider(PageNode(name="root", children=(page,)))
        return RenderContext(
            page=page,
            location=location,
            emitter=make_emitter(partial=partial),
            highlighter=CodeHighlighter(),
            tab_strategy=tab_strategy or DefaultTabSortingStrategy(),
            render_bubbles=render_bubbles,
            partial=partial,
        )

    return _build


@pytest.fixture
def dispatcher(make_context: ContextFactory) -> ContentDispatcher:
    """Return a dispatcher for an immediate-mode page without bubbles."""
    return ContentDispatcher(make_context())
