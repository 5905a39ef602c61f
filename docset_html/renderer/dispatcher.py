"""Map content nodes to HTML fragments.

:class:`ContentDispatcher` walks a page's content tree depth first and returns
markup strings. It never raises for malformed input: unknown node types and
unsupported resources are logged and render as empty fragments, unresolved
references render as marked spans (or deferred commands in partial mode).

Every ``render`` call takes an optional source set restriction. A node renders
only when the restriction is empty or shares a source set with the node; the
variant engine uses single-source-set restrictions to render each variant on
its own.

Group precedence, first match wins:

1. ``TABBED_CONTENT`` style: section tab bar plus body.
2. Explicit HTML attributes: generic ``div`` carrying them.
3. Symbol kind: ``div.symbol``, with a copy button when monospaced.
4. Wrapping styles and kinds: breakable-after, breakable, span, brief
   comment, cover, paragraph, block.
5. Anchor hint: anchor element followed by the children.
6. Inserted template command: emitted in place of the group.
7. Otherwise the children are rendered without a wrapper.
"""

from __future__ import annotations

import typing as typ

from docset_html._constants import DEFAULT_CODE_LANGUAGE, PLATFORM_CLASSES
from docset_html.logger import get_logger
from docset_html.model.nodes import (
    CodeBlock,
    CodeInline,
    CompositeNode,
    DivergentGroup,
    DivergentInstance,
    EmbeddedResource,
    ExternalLink,
    Group,
    Header,
    LineBreak,
    Link,
    ListBlock,
    PlatformHinted,
    ReferenceLink,
    Table,
    Text,
)
from docset_html.model.pages import PageKind
from docset_html.model.source_sets import SourceSet, source_set_filters
from docset_html.model.styles import ContentKind, Style, TokenStyle
from docset_html.renderer.assets import is_image
from docset_html.renderer.markup import (
    breakable_text,
    element,
    join_classes,
    text,
    void,
)
from docset_html.renderer.tabs import sort_tabs
from docset_html.renderer.variants import RenderedVariantGroup, VariantDeduplicator
from docset_html.templating.commands import ResolveLink

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docset_html.model.nodes import ContentNode, NodeExtras
    from docset_html.model.styles import StyleTag
    from docset_html.renderer.models import RenderContext

    Restriction = frozenset[SourceSet] | None

logger = get_logger()

_TEXT_TAGS = {
    Style.BOLD: "b",
    Style.ITALIC: "i",
    Style.STRIKETHROUGH: "strike",
    Style.STRONG: "strong",
}


def applies(node: ContentNode, restriction: Restriction) -> bool:
    """Return whether ``node`` renders under ``restriction``."""
    return not restriction or not node.source_sets.isdisjoint(restriction)


def platform_class(source_set: SourceSet) -> str:
    """Return the CSS class for the source set's platform family, if any."""
    return PLATFORM_CLASSES.get(source_set.platform, "")


def copied_popup(message: str, extra_classes: str = "") -> str:
    return element(
        "div",
        element("span", classes="copy-popup-icon") + element("span", text(message)),
        classes=join_classes("copy-popup-wrapper", extra_classes),
    )


def copy_button() -> str:
    """Return the copy-to-clipboard affordance shown on code and symbols."""
    return element(
        "span",
        element("span", classes="copy-icon")
        + copied_popup("Content copied to clipboard", "popup-to-left"),
        classes="top-right-position",
    )


def anchor_copy_button(pointing_to: str) -> str:
    return element(
        "span",
        element("span", classes="anchor-icon", attributes=[("pointing-to", pointing_to)])
        + copied_popup("Link copied to clipboard"),
        classes="anchor-wrapper",
    )


def anchor_element(anchor: str, label: str, source_sets: str) -> str:
    """Return the empty anchor element exposing ``anchor`` as a link target."""
    return element(
        "a",
        attributes=[
            ("data-name", anchor),
            ("anchor-label", label),
            ("id", anchor),
            ("data-filterable-set", source_sets),
        ],
    )


class ContentDispatcher:
    """Render content nodes for one page.

    Parameters
    ----------
    context : RenderContext
        Page, collaborators and run-wide flags for this render.
    """

    def __init__(self, context: RenderContext) -> None:
        self.context = context
        self.variants = VariantDeduplicator(self.render)

    def render(self, node: ContentNode, restriction: Restriction = None) -> str:
        """Return the markup for ``node`` under ``restriction``."""
        if not applies(node, restriction):
            return ""
        match node:
            case Text():
                return self._text(node)
            case LineBreak():
                return void("br")
            case Header():
                return self._header(node, restriction)
            case CodeBlock():
                return self._code_block(node)
            case CodeInline():
                return self._code_inline(node)
            case ReferenceLink():
                return self._reference_link(node, restriction)
            case ExternalLink():
                content = self._children(node, restriction)
                return element("a", content, attributes=[("href", node.address)])
            case ListBlock():
                return self._list(node, restriction)
            case Table():
                return self._table(node, restriction)
            case DivergentGroup():
                return self._divergent(node, restriction)
            case DivergentInstance():
                return "".join(
                    self.render(zone, restriction)
                    for zone in (node.before, node.divergent, node.after)
                    if zone is not None
                )
            case PlatformHinted():
                tabs = self.variants.platform_hinted_tabs(node, restriction)
                return self._platform_dependent(tabs, node.extra, node.styles)
            case EmbeddedResource():
                return self._resource(node)
            case Group():
                return self._group(node, restriction)
            case _:
                logger.error("Unknown content node type: %r", node)
                return ""

    def render_children(
        self, nodes: cabc.Iterable[ContentNode], restriction: Restriction = None
    ) -> str:
        return "".join(self.render(child, restriction) for child in nodes)

    def _children(self, node: CompositeNode, restriction: Restriction) -> str:
        return self.render_children(node.children, restriction)

    # Groups

    def _group(self, node: Group, restriction: Restriction) -> str:  # noqa: PLR0911
        classes = node.css_classes
        kind = node.dci.kind
        if node.has_style(Style.TABBED_CONTENT):
            return self._tabbed(node, restriction)
        if node.extra.html_attributes:
            content = self._children(node, restriction)
            return element("div", content, attributes=node.extra.html_attributes)
        if kind is ContentKind.SYMBOL:
            content = self._children(node, restriction)
            if node.has_style(Style.MONOSPACE):
                content += copy_button()
            return element("div", content, classes=join_classes("symbol", classes))
        if node.has_style(Style.BREAKABLE_AFTER):
            return element("span", self._children(node, restriction)) + void("wbr")
        if node.has_style(Style.BREAKABLE):
            return element(
                "span", self._children(node, restriction), classes="breakable-word"
            )
        if node.has_style(Style.SPAN):
            return element("span", self._children(node, restriction))
        if kind is ContentKind.BRIEF_COMMENT:
            content = self._children(node, restriction)
            return element("div", content, classes=join_classes("brief", classes))
        if kind is ContentKind.COVER:
            content = self._children(node, restriction)
            return element("div", content, classes=join_classes("cover", classes))
        if node.has_style(Style.PARAGRAPH):
            return element("p", self._children(node, restriction), classes=classes)
        if node.has_style(Style.BLOCK):
            return element("div", self._children(node, restriction), classes=classes)
        if node.extra.anchor is not None:
            return self._anchor(node) + self._children(node, restriction)
        if node.extra.insert_template is not None:
            return self.context.emitter.emit(node.extra.insert_template)
        return self._children(node, restriction)

    def _tabbed(self, node: Group, restriction: Restriction) -> str:
        labels: dict[str, None] = {}
        for child in node.children:
            if isinstance(child, Header):
                labels.update(dict.fromkeys(_header_texts(child)))
        for child in node.children:
            if isinstance(child, CompositeNode):
                for grandchild in child.children:
                    if isinstance(grandchild, Header):
                        labels.update(dict.fromkeys(_header_texts(grandchild)))
        ordered = sort_tabs(self.context.tab_strategy, list(labels))
        buttons = "".join(
            element(
                "button",
                text(label),
                classes="section-tab",
                attributes=[("data-active", index == 0), ("data-togglable", label)],
            )
            for index, label in enumerate(ordered)
        )
        bar = element(
            "div",
            buttons,
            classes="tabs-section",
            attributes=[("tabs-section", "tabs-section")],
        )
        body = element(
            "div", self._children(node, restriction), classes="tabs-section-body"
        )
        return element("div", bar + body, classes=node.css_classes)

    def _anchor_id(self, node: ContentNode) -> str | None:
        hint = node.extra.anchor
        if hint is None:
            return None
        return self.context.location.anchor_for(
            node.dci.dri, hint.content_kind, node.source_sets
        )

    def _anchor(self, node: ContentNode) -> str:
        hint = node.extra.anchor
        anchor = self._anchor_id(node)
        if hint is None or anchor is None:
            return ""
        return anchor_element(anchor, hint.anchor_name, source_set_filters(node.source_sets))

    # Text and code

    def _text(self, node: Text) -> str:
        if node.extra.html_content:
            return node.text
        styles = [style for style in node.styles if style is not Style.INDENTED]
        if node.has_style(Style.ROW_TITLE) or node.has_style(Style.COVER):
            content = breakable_text(node.text)
        else:
            content = text(node.text)
        for style in reversed(styles):
            content = _apply_text_style(style, content)
        prefix = "&nbsp;" if node.has_style(Style.INDENTED) else ""
        return prefix + content

    def _header(self, node: Header, restriction: Restriction) -> str:
        level = min(max(node.level, 1), 6)
        return element(
            f"h{level}", self._children(node, restriction), classes=node.css_classes
        )

    def _code_block(self, node: CodeBlock) -> str:
        language = node.language or DEFAULT_CODE_LANGUAGE
        plain = _plain_code(node)
        if plain is not None:
            body = self.context.highlighter.code_block(plain, language)
        else:
            classes = join_classes(node.css_classes, Style.BLOCK, f"lang-{language}")
            code = element(
                "code",
                self.render_children(node.children),
                classes=classes,
                attributes=[("theme", "idea")],
            )
            body = element("pre", code)
        if not node.has_style(Style.RUNNABLE_SAMPLE):
            body += copy_button()
        return element("div", body, classes="sample-container")

    def _code_inline(self, node: CodeInline) -> str:
        language = node.language or DEFAULT_CODE_LANGUAGE
        classes = join_classes(node.css_classes, f"lang-{language}")
        return element("code", self.render_children(node.children), classes=classes)

    # Links and resources

    def _reference_link(self, node: ReferenceLink, restriction: Restriction) -> str:
        content = self._children(node, restriction)
        path = self.context.location.resolve_reference(
            node.address, node.source_sets, self.context.page
        )
        if path is not None:
            return element("a", content, attributes=[("href", path)])
        if self.context.partial:
            logger.debug("Deferring link to %s", node.address)
        else:
            logger.warning(
                "Cannot resolve path for %s from %s", node.address, self.context.page.name
            )
        return self.context.emitter.emit(ResolveLink(target=str(node.address)), content)

    def _resource(self, node: EmbeddedResource) -> str:
        if is_image(node.address):
            return void("img", [("src", node.address), ("alt", node.alt_text)])
        logger.error("Unrecognized resource type: %s", node.address)
        return ""

    # Lists and tables

    def _list(self, node: ListBlock, restriction: Restriction) -> str:
        items = "".join(
            self.render(child, restriction)
            if isinstance(child, ListBlock)
            else element("li", self.render(child, restriction))
            for child in node.children
            if applies(child, restriction)
        )
        return element("ol" if node.ordered else "ul", items)

    def _table(self, node: Table, restriction: Restriction) -> str:
        if node.has_style(Style.COMMENT_TABLE):
            return self._default_table(node, restriction)
        rows = "".join(
            self._row(row, restriction) for row in node.children if isinstance(row, Group)
        )
        return element(
            "div", rows, classes="table", attributes=node.extra.html_attributes
        )

    def _default_table(self, node: Table, restriction: Restriction) -> str:
        def cells(row: CompositeNode, tag: str) -> str:
            return "".join(
                element(tag, self.render(cell, restriction)) for cell in row.children
            )

        head = "".join(element("tr", cells(row, "th")) for row in node.header)
        body = "".join(
            element("tr", cells(row, "td"))
            for row in node.children
            if isinstance(row, CompositeNode)
        )
        return element("table", element("thead", head) + element("tbody", body))

    def _row(self, row: Group, restriction: Restriction) -> str:
        to_render = [child for child in row.children if applies(child, restriction)]
        if not to_render:
            return ""
        anchor = self._anchor_id(row)
        match self.context.page.kind:
            case PageKind.MULTIMODULE_ROOT:
                content = element(
                    "div",
                    self._row_header_link(to_render, restriction, anchor, "w-100")
                    + element("div", self._row_brief(to_render, restriction)),
                    classes=join_classes("main-subrow", row.css_classes),
                )
                return self._anchor(row) + element("div", content, classes="table-row")
            case PageKind.MODULE:
                tags = ""
                if ContentKind.should_be_platform_tagged(row.dci.kind):
                    tags = self._platform_tags(row, "no-gutters")
                subrow = element(
                    "div",
                    self._row_header_link(to_render, restriction, anchor)
                    + element("div", tags, classes="pull-right"),
                    classes=join_classes("main-subrow", row.css_classes),
                )
                brief = element("div", self._row_brief(to_render, restriction))
                return self._anchor(row) + element(
                    "div",
                    element("div", subrow + brief),
                    classes="table-row",
                    attributes=_filtering_attributes(row),
                )
            case _:
                rest = [
                    child
                    for child in to_render
                    if not isinstance(child, Link) and not child.has_style(Style.ROW_TITLE)
                ]
                title = ""
                if rest:
                    title = element(
                        "div", self.render_children(rest, restriction), classes="title"
                    )
                subrow = element(
                    "div",
                    self._row_header_link(to_render, restriction, anchor)
                    + element("div", title),
                    classes=join_classes("main-subrow keyValue", row.css_classes),
                )
                return self._anchor(row) + element(
                    "div",
                    subrow,
                    classes="table-row",
                    attributes=_filtering_attributes(row),
                )

    def _row_header_link(
        self,
        to_render: list[ContentNode],
        restriction: Restriction,
        anchor: str | None,
        classes: str = "",
    ) -> str:
        linked = [
            child
            for child in to_render
            if isinstance(child, Link) or child.has_style(Style.ROW_TITLE)
        ]
        if not linked:
            return ""
        spans = []
        for child in linked:
            content = self.render(child, restriction)
            if isinstance(child, Link) and anchor:
                content += anchor_copy_button(anchor)
            spans.append(element("span", content, classes="inline-flex"))
        return element("div", "".join(spans), classes=classes)

    def _row_brief(self, to_render: list[ContentNode], restriction: Restriction) -> str:
        return "".join(
            element(
                "span",
                self.render(child, restriction),
                classes="brief-comment" if child.dci.kind is ContentKind.COMMENT else None,
            )
            for child in to_render
            if not isinstance(child, Link)
        )

    def _platform_tags(self, node: ContentNode, extra_classes: str = "") -> str:
        if not self.context.render_bubbles:
            return ""
        tags = "".join(
            element(
                "div",
                text(source_set.name),
                classes=join_classes("platform-tag", platform_class(source_set)),
            )
            for source_set in sorted(node.source_sets, key=lambda item: item.name)
        )
        return element("div", tags, classes=join_classes("platform-tags", extra_classes))

    # Variants

    def _divergent(self, node: DivergentGroup, restriction: Restriction) -> str:
        if node.implicitly_source_set_hinted:
            tabs = self.variants.divergent_tabs(node, restriction)
            return self._platform_dependent(tabs)
        parts = []
        for instance in node.children:
            own = instance.source_sets
            if restriction:
                own = own & restriction
                if not own:
                    continue
            parts.append(self.render(instance.divergent, own))
        return "".join(parts)

    def _platform_dependent(
        self,
        tabs: list[RenderedVariantGroup],
        extra: NodeExtras | None = None,
        styles: cabc.Sequence[StyleTag] = (),
    ) -> str:
        if not tabs:
            return ""
        with_tabs = self.context.render_bubbles
        bookmarks = ""
        if with_tabs:
            buttons = "".join(
                element(
                    "button",
                    text(tab.label),
                    classes=join_classes(
                        "platform-bookmark", platform_class(tab.ordered_source_sets[0])
                    ),
                    attributes=[
                        ("data-filterable-current", tab.ids),
                        ("data-filterable-set", tab.ids),
                        ("data-active", index == 0),
                        ("data-toggle", tab.ids),
                    ],
                )
                for index, tab in enumerate(tabs)
            )
            bookmarks = element(
                "div",
                buttons,
                classes="platform-bookmarks-row",
                attributes=[("data-toggle-list", "data-toggle-list")],
            )
        bodies = "".join(
            element(
                "div",
                tab.html,
                classes="content sourceset-dependent-content",
                attributes=[("data-active", index == 0), ("data-togglable", tab.ids)],
            )
            for index, tab in enumerate(tabs)
        )
        attributes = [
            ("data-platform-hinted", "data-platform-hinted"),
            *(extra.html_attributes if extra is not None else ()),
        ]
        classes = join_classes(
            "platform-hinted",
            [str(style) for style in styles],
            "with-platform-tabs" if with_tabs else "",
        )
        return element("div", bookmarks + bodies, classes=classes, attributes=attributes)


def _header_texts(header: Header) -> list[str]:
    return [child.text for child in header.children if isinstance(child, Text)]


def _apply_text_style(style: StyleTag, content: str) -> str:
    if isinstance(style, TokenStyle):
        return element("span", content, classes=f"token {style}")
    tag = _TEXT_TAGS.get(style)
    return element(tag, content) if tag else content


def _plain_code(node: CodeBlock) -> str | None:
    """Return the block's source when it holds only unstyled text and breaks."""
    lines: list[str] = []
    for child in node.children:
        match child:
            case LineBreak():
                lines.append("\n")
            case Text(styles=()) if not child.extra.html_content:
                lines.append(child.text)
            case _:
                return None
    return "".join(lines)


def _filtering_attributes(node: ContentNode) -> list[tuple[str, str]]:
    ids = source_set_filters(node.source_sets)
    return [("data-filterable-current", ids), ("data-filterable-set", ids)]


__all__ = ["ContentDispatcher", "applies", "copy_button", "platform_class"]
