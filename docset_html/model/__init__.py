"""Immutable content and page model consumed by the renderer."""

from __future__ import annotations

from .nodes import (
    DCI,
    EMPTY_EXTRAS,
    AnchorHint,
    AnyContentNode,
    CodeBlock,
    CodeInline,
    CompositeNode,
    ContentNode,
    DivergentGroup,
    DivergentInstance,
    EmbeddedResource,
    ExternalLink,
    Group,
    Header,
    LineBreak,
    Link,
    ListBlock,
    NodeExtras,
    PlatformHinted,
    Reference,
    ReferenceLink,
    Table,
    Text,
    child_nodes,
    with_descendants,
)
from .pages import (
    ContentPage,
    PageKind,
    PageNode,
    RendererSpecificPage,
    RenderingStrategy,
    walk_pages,
)
from .source_sets import SourceSet, sorted_source_sets, source_set_filters
from .styles import ContentKind, Style, StyleTag, TokenStyle

__all__ = [
    "DCI",
    "EMPTY_EXTRAS",
    "AnchorHint",
    "AnyContentNode",
    "CodeBlock",
    "CodeInline",
    "CompositeNode",
    "ContentKind",
    "ContentNode",
    "ContentPage",
    "DivergentGroup",
    "DivergentInstance",
    "EmbeddedResource",
    "ExternalLink",
    "Group",
    "Header",
    "LineBreak",
    "Link",
    "ListBlock",
    "NodeExtras",
    "PageKind",
    "PageNode",
    "PlatformHinted",
    "Reference",
    "ReferenceLink",
    "RendererSpecificPage",
    "RenderingStrategy",
    "SourceSet",
    "Style",
    "StyleTag",
    "Table",
    "Text",
    "TokenStyle",
    "child_nodes",
    "sorted_source_sets",
    "source_set_filters",
    "walk_pages",
]
