"""Navigation tree of pages produced for one documentation run."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docset_html.model.nodes import ContentNode, Reference


class RenderingStrategy(enum.StrEnum):
    """How the site renderer treats a page."""

    CONTENT = "content"
    WRITE = "write"
    DO_NOTHING = "do-nothing"


class PageKind(enum.StrEnum):
    """Layout family a content page belongs to; drives table row rendering."""

    CONTENT = "content"
    MODULE = "module"
    MULTIMODULE_ROOT = "multimodule-root"


@dc.dataclass(frozen=True, slots=True, eq=False, kw_only=True)
class PageNode:
    """A node of the page tree.

    Pages compare by identity so they can key location lookups even when two
    pages share a name.
    """

    name: str
    children: tuple[PageNode, ...] = ()
    strategy: RenderingStrategy = RenderingStrategy.CONTENT


@dc.dataclass(frozen=True, slots=True, eq=False, kw_only=True)
class ContentPage(PageNode):
    """A page whose body is a content tree rendered by the dispatcher.

    Attributes
    ----------
    content : ContentNode
        Root of the page's content tree.
    dri : tuple[Reference, ...]
        Declarations documented by the page; used to resolve references.
    embedded_resources : tuple[str, ...]
        Page-specific stylesheet, script or image addresses for the head.
    kind : PageKind
        Layout family used when rendering tables.
    """

    content: ContentNode
    dri: tuple[Reference, ...] = ()
    embedded_resources: tuple[str, ...] = ()
    kind: PageKind = PageKind.CONTENT

    @property
    def page_id(self) -> str:
        """Return the identifier stored in the ``pageIds`` attribute."""
        if self.dri:
            return str(self.dri[0])
        return self.name


@dc.dataclass(frozen=True, slots=True, eq=False, kw_only=True)
class RendererSpecificPage(PageNode):
    """A page written out verbatim, such as a generated script or redirect."""

    text: str = ""
    strategy: RenderingStrategy = RenderingStrategy.WRITE


def walk_pages(root: PageNode) -> cabc.Iterator[PageNode]:
    """Yield ``root`` and every descendant page, pre-order."""
    yield root
    for child in root.children:
        yield from walk_pages(child)


__all__ = [
    "ContentPage",
    "PageKind",
    "PageNode",
    "RendererSpecificPage",
    "RenderingStrategy",
    "walk_pages",
]
