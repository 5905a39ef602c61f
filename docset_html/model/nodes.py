"""Immutable content tree handed to the renderer.

The node set is closed: the dispatcher matches on these classes exhaustively,
and anything else reaching it is logged as an unknown node. Every node carries
a :class:`DCI` (declaration references plus semantic kind), the source sets it
applies to, an ordered tuple of style flags, and a typed :class:`NodeExtras`
side channel.

Example
-------
>>> from docset_html.model import ContentKind, DCI, SourceSet, Text, Group
>>> jvm = SourceSet("lib", "jvm", platform="jvm")
>>> leaf = Text(text="hello", dci=DCI(kind=ContentKind.MAIN), source_sets=frozenset({jvm}))
>>> group = Group(children=(leaf,), dci=DCI(kind=ContentKind.MAIN), source_sets=frozenset({jvm}))
>>> [type(node).__name__ for node in with_descendants(group)]
['Group', 'Text']
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from docset_html.model.styles import ContentKind, StyleTag

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docset_html.model.source_sets import SourceSet
    from docset_html.templating.commands import TemplateCommand


@dc.dataclass(frozen=True, slots=True)
class Reference:
    """Identity of a documented declaration (package, class path, member)."""

    package: str | None = None
    class_names: str | None = None
    member: str | None = None
    target: str | None = None

    def __str__(self) -> str:
        parts = (self.package, self.class_names, self.member, self.target)
        return "/".join(part or "" for part in parts)

    @classmethod
    def parse(cls, value: str) -> Reference:
        """Build a reference from its ``package/classes/member/target`` form."""
        parts = [*value.split("/", 3), "", "", "", ""][:4]
        package, class_names, member, target = (part or None for part in parts)
        return cls(package, class_names, member, target)


@dc.dataclass(frozen=True, slots=True)
class DCI:
    """Declaration references a node documents plus its semantic kind."""

    dri: tuple[Reference, ...] = ()
    kind: ContentKind = ContentKind.MAIN


@dc.dataclass(frozen=True, slots=True)
class AnchorHint:
    """Request that a node be wrapped in a linkable anchor element."""

    anchor_name: str
    content_kind: ContentKind


@dc.dataclass(frozen=True, slots=True)
class NodeExtras:
    """Typed optional attributes attached to a node.

    Attributes
    ----------
    html_attributes : tuple[tuple[str, str], ...]
        Markup attributes rendered in insertion order.
    anchor : AnchorHint | None
        Anchor request resolved through the location provider.
    insert_template : TemplateCommand | None
        Command emitted in place of the node's content.
    html_content : bool
        Whether a text node holds trusted raw HTML.
    """

    html_attributes: tuple[tuple[str, str], ...] = ()
    anchor: AnchorHint | None = None
    insert_template: TemplateCommand | None = None
    html_content: bool = False


EMPTY_EXTRAS = NodeExtras()


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class ContentNode:
    """Fields shared by every node of the content tree."""

    dci: DCI = DCI()
    source_sets: frozenset[SourceSet] = frozenset()
    styles: tuple[StyleTag, ...] = ()
    extra: NodeExtras = EMPTY_EXTRAS

    def has_style(self, style: StyleTag) -> bool:
        """Return whether ``style`` is among the node's style flags."""
        return style in self.styles

    @property
    def css_classes(self) -> str:
        """Return the node's styles as a space-separated class list."""
        return " ".join(str(style) for style in self.styles)


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class Text(ContentNode):
    text: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class LineBreak(ContentNode):
    pass


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class EmbeddedResource(ContentNode):
    address: str
    alt_text: str = ""


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class CompositeNode(ContentNode):
    """A node that owns an ordered sequence of child nodes."""

    children: tuple[ContentNode, ...] = ()


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class Group(CompositeNode):
    pass


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class Header(CompositeNode):
    level: int = 1


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class CodeBlock(CompositeNode):
    language: str = ""


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class CodeInline(CompositeNode):
    language: str = ""


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class ListBlock(CompositeNode):
    ordered: bool = False


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class Table(CompositeNode):
    """Rows are the ``children`` groups; ``header`` holds the header rows."""

    header: tuple[Group, ...] = ()


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class Link(CompositeNode):
    """Base for links; the children are the displayed content."""


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class ReferenceLink(Link):
    """Link to a documented declaration, resolved by the location provider."""

    address: Reference


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class ExternalLink(Link):
    address: str


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class DivergentInstance(ContentNode):
    """One variant's version of a divergent node, split into three zones."""

    divergent: ContentNode
    before: ContentNode | None = None
    after: ContentNode | None = None


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class DivergentGroup(CompositeNode):
    """Instances whose rendering differs per source set.

    When ``implicitly_source_set_hinted`` is set the instances are merged into
    variant tabs by the deduplication engine; otherwise each instance renders
    on its own, in document order.
    """

    children: tuple[DivergentInstance, ...] = ()
    implicitly_source_set_hinted: bool = True


@dc.dataclass(frozen=True, slots=True, kw_only=True)
class PlatformHinted(ContentNode):
    """The same inner content shown once per applicable source set."""

    inner: ContentNode


AnyContentNode = typ.Union[
    Text,
    LineBreak,
    EmbeddedResource,
    Group,
    Header,
    CodeBlock,
    CodeInline,
    ListBlock,
    Table,
    ReferenceLink,
    ExternalLink,
    DivergentInstance,
    DivergentGroup,
    PlatformHinted,
]


def child_nodes(node: ContentNode) -> list[ContentNode]:
    """Return every direct child of ``node``, including zone and header nodes."""
    match node:
        case Table(header=header, children=children):
            return [*header, *children]
        case CompositeNode(children=children):
            return list(children)
        case DivergentInstance(before=before, divergent=divergent, after=after):
            return [zone for zone in (before, divergent, after) if zone is not None]
        case PlatformHinted(inner=inner):
            return [inner]
        case _:
            return []


def with_descendants(node: ContentNode) -> cabc.Iterator[ContentNode]:
    """Yield ``node`` followed by all of its descendants, depth first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(child_nodes(current)))


__all__ = [
    "DCI",
    "EMPTY_EXTRAS",
    "AnchorHint",
    "AnyContentNode",
    "CodeBlock",
    "CodeInline",
    "CompositeNode",
    "ContentNode",
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
    "PlatformHinted",
    "Reference",
    "ReferenceLink",
    "Table",
    "Text",
    "child_nodes",
    "with_descendants",
]
