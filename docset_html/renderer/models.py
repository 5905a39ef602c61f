"""Shared dataclasses passed through the rendering pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from docset_html.location import LocationProvider
    from docset_html.model.pages import ContentPage, PageNode
    from docset_html.renderer.highlighting import CodeHighlighter
    from docset_html.renderer.tabs import TabSortingStrategy
    from docset_html.templating.commands import TemplateCommand
    from docset_html.templating.emitter import CommandEmitter


@dc.dataclass(frozen=True, slots=True)
class RenderContext:
    """Everything the dispatcher needs to render one page.

    Attributes
    ----------
    page : ContentPage
        Page being rendered; its kind selects the table row layout.
    location : LocationProvider
        Read-only path lookups shared by all pages.
    emitter : CommandEmitter
        Per-page command sink in immediate or partial mode.
    highlighter : CodeHighlighter
        Pygments wrapper for plain-text code blocks.
    tab_strategy : TabSortingStrategy
        Ordering of section tabs.
    render_bubbles : bool
        Run-wide flag enabling filter buttons, bookmarks and platform tags.
    partial : bool
        Whether commands are deferred to an assembly pass.
    """

    page: ContentPage
    location: LocationProvider
    emitter: CommandEmitter
    highlighter: CodeHighlighter
    tab_strategy: TabSortingStrategy
    render_bubbles: bool = False
    partial: bool = False


@dc.dataclass(slots=True)
class RenderedPage:
    """Output of rendering one page.

    Attributes
    ----------
    page : PageNode
        The page that was rendered.
    path : str
        Root-relative output path without extension.
    html : str
        Complete markup document.
    commands : list[TemplateCommand]
        Distinct commands left in ``html`` for the assembly pass; empty in
        immediate mode.
    """

    page: PageNode
    path: str
    html: str
    commands: list[TemplateCommand] = dc.field(default_factory=list)


__all__ = ["RenderContext", "RenderedPage"]
