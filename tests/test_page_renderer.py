"""Tests for document assembly around dispatched page content."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from docset_html._constants import PATH_TO_ROOT_PATTERN, PROJECT_NAME_PATTERN
from docset_html.config import RendererConfig
from docset_html.location import DefaultLocationProvider
from docset_html.model import (
    ContentPage,
    Group,
    PageNode,
    Reference,
    ReferenceLink,
    RendererSpecificPage,
    RenderingStrategy,
    SourceSet,
    Text,
)
from docset_html.renderer.page_renderer import HtmlPageRenderer
from docset_html.templating.commands import NavigationInclude, ReplaceVersions, ResolveLink
from docset_html.templating.substitution import SubstitutionContext, substitute


def _content() -> Group:
    return Group(
        children=(
            Text(text="Hello"),
            ReferenceLink(address=Reference("other", "Missing"), children=(Text(text="M"),)),
        )
    )


@pytest.fixture
def tree() -> tuple[PageNode, ContentPage]:
    """Return a three-level tree: root, a module page and a leaf page."""
    leaf = ContentPage(name="Widget", content=_content(), dri=(Reference("lib", "Widget"),))
    module = ContentPage(name="lib", content=Group(), children=(leaf,))
    root = PageNode(name="root", children=(module,))
    return root, leaf


def _renderer(root: PageNode, **overrides: object) -> HtmlPageRenderer:
    config = RendererConfig(module_name="Demo & Co", **overrides)  # type: ignore[arg-type]
    return HtmlPageRenderer(config, DefaultLocationProvider(root), year=2024)


class TestBreadcrumbs:
    def test_chain_of_k_pages_has_k_minus_one_separators(
        self, tree: tuple[PageNode, ContentPage]
    ) -> None:
        root, leaf = tree
        soup = BeautifulSoup(_renderer(root).breadcrumbs(leaf), "html.parser")
        trail = soup.select_one("div.breadcrumbs")
        assert trail is not None
        assert trail.get_text() == "root/lib/Widget"
        assert [link["href"] for link in trail.select("a")] == [
            "../index.html",
            "index.html",
            "widget.html",
        ]

    def test_single_page_has_no_separator(self) -> None:
        page = ContentPage(name="Solo", content=Group())
        renderer = _renderer(page)
        assert renderer.breadcrumbs(page) == '<div class="breadcrumbs"></div>'

    def test_write_pages_are_dropped_and_placeholders_are_text(self) -> None:
        leaf = ContentPage(name="Widget", content=Group())
        placeholder = PageNode(
            name="group", strategy=RenderingStrategy.DO_NOTHING, children=(leaf,)
        )
        scripts = RendererSpecificPage(name="scripts", children=(placeholder,))
        root = PageNode(name="root", children=(scripts,))
        soup = BeautifulSoup(_renderer(root).breadcrumbs(leaf), "html.parser")
        trail = soup.select_one("div.breadcrumbs")
        assert trail is not None
        assert trail.get_text() == "root/group/Widget"
        assert [link.get_text() for link in trail.select("a")] == ["root", "Widget"]

    def test_renderer_specific_pages_are_dropped_whatever_their_strategy(self) -> None:
        leaf = ContentPage(name="Widget", content=Group())
        redirect = RendererSpecificPage(
            name="redirect", strategy=RenderingStrategy.DO_NOTHING, children=(leaf,)
        )
        root = PageNode(name="root", children=(redirect,))
        soup = BeautifulSoup(_renderer(root).breadcrumbs(leaf), "html.parser")
        trail = soup.select_one("div.breadcrumbs")
        assert trail is not None
        assert trail.get_text() == "root/Widget"
        assert "redirect" not in str(trail)

    def test_separators_sit_between_entries_when_names_contain_slashes(self) -> None:
        leaf = ContentPage(name="a/b", content=Group())
        module = ContentPage(name="io/net", content=Group(), children=(leaf,))
        root = PageNode(name="root", children=(module,))
        soup = BeautifulSoup(_renderer(root).breadcrumbs(leaf), "html.parser")
        trail = soup.select_one("div.breadcrumbs")
        assert trail is not None
        assert [link.get_text() for link in trail.select("a")] == ["root", "io/net", "a/b"]
        separators = [child for child in trail.children if isinstance(child, str)]
        assert separators == ["/", "/"]

    def test_unresolved_ancestor_is_marked(self, tree: tuple[PageNode, ContentPage]) -> None:
        root, leaf = tree
        renderer = _renderer(root)
        stranger = ContentPage(name="Stranger", content=Group())
        html = renderer._breadcrumb(stranger, leaf)
        assert html == '<span data-unresolved-link="Stranger">Stranger</span>'


class TestFooter:
    def test_default_footer(self, tree: tuple[PageNode, ContentPage]) -> None:
        root, leaf = tree
        soup = BeautifulSoup(_renderer(root).render_page(leaf, render_bubbles=False).html, "html.parser")
        footer = soup.select_one("div.footer")
        assert footer is not None
        assert "© 2024 Copyright" in footer.get_text()
        assert footer.select_one("a[href='https://github.com/Kotlin/dokka']") is not None

    def test_markdown_footer(self, tree: tuple[PageNode, ContentPage]) -> None:
        root, leaf = tree
        renderer = _renderer(root, footer_message="Built by **us**")
        soup = BeautifulSoup(renderer.render_page(leaf, render_bubbles=False).html, "html.parser")
        footer = soup.select_one("div.footer")
        assert footer is not None
        assert footer.select_one("strong").get_text() == "us"


def test_immediate_page_is_self_contained(tree: tuple[PageNode, ContentPage]) -> None:
    root, leaf = tree
    rendered = _renderer(root).render_page(leaf, render_bubbles=False)
    assert rendered.path == "lib/widget"
    assert rendered.commands == []
    assert PATH_TO_ROOT_PATTERN not in rendered.html
    assert PROJECT_NAME_PATTERN not in rendered.html
    assert "docset-command" not in rendered.html
    soup = BeautifulSoup(rendered.html, "html.parser")
    assert soup.select_one("link[rel='icon']")["href"] == "../images/logo-icon.svg"
    assert soup.select_one(".library-name a")["href"] == "../index.html"
    assert soup.select_one(".library-name span").get_text() == "Demo & Co"
    assert soup.select_one("#content")["pageids"] == "Demo & Co::lib/Widget//"
    assert soup.select_one("[data-unresolved-link='other/Missing//']").get_text() == "M"


def test_partial_page_keeps_tokens_and_lists_commands(
    tree: tuple[PageNode, ContentPage],
) -> None:
    root, leaf = tree
    rendered = _renderer(root, delay_template_substitution=True).render_page(
        leaf, render_bubbles=False
    )
    assert PATH_TO_ROOT_PATTERN in rendered.html
    assert PROJECT_NAME_PATTERN in rendered.html
    assert ResolveLink(target="other/Missing//") in rendered.commands
    assert ReplaceVersions(current_path="lib/widget.html") in rendered.commands
    assert NavigationInclude() in rendered.commands


def test_partial_render_substituted_matches_immediate_render(
    tree: tuple[PageNode, ContentPage],
) -> None:
    root, leaf = tree
    immediate = _renderer(root).render_page(leaf, render_bubbles=False)
    partial = _renderer(root, delay_template_substitution=True).render_page(
        leaf, render_bubbles=False
    )
    context = SubstitutionContext(path_to_root="../", project_name="Demo & Co")
    assembled = substitute(partial.html, context, partial.commands)
    assert assembled == immediate.html
    assert substitute(assembled, context) == assembled


def test_nested_deferred_links_round_trip() -> None:
    nested = ReferenceLink(
        address=Reference("other", "X"),
        children=(
            Text(text="see "),
            ReferenceLink(address=Reference("other", "Y"), children=(Text(text="y"),)),
        ),
    )
    leaf = ContentPage(name="Widget", content=Group(children=(nested,)))
    root = PageNode(name="root", children=(leaf,))
    immediate = _renderer(root).render_page(leaf, render_bubbles=False)
    partial = _renderer(root, delay_template_substitution=True).render_page(
        leaf, render_bubbles=False
    )
    context = SubstitutionContext(path_to_root="", project_name="Demo & Co")
    assert substitute(partial.html, context, partial.commands) == immediate.html
    soup = BeautifulSoup(immediate.html, "html.parser")
    outer = soup.select_one("[data-unresolved-link='other/X//']")
    assert outer is not None
    assert outer.select_one("[data-unresolved-link='other/Y//']").get_text() == "y"


def test_head_resources_are_classified(tree: tuple[PageNode, ContentPage]) -> None:
    root, leaf = tree
    renderer = _renderer(
        root,
        custom_assets=[
            "styles/style.css",
            "scripts/main.js",
            "https://cdn.example.com/x.js",
            "images/logo.png",
            "<meta name='robots' content='noindex'>",
        ],
    )
    soup = BeautifulSoup(renderer.render_page(leaf, render_bubbles=False).html, "html.parser")
    head = soup.head
    assert head is not None
    assert head.select_one("link[rel='stylesheet']")["href"] == "../styles/style.css"
    main = head.select_one("script[src='../scripts/main.js']")
    assert main is not None
    assert main.has_attr("defer")
    assert not main.has_attr("async")
    remote = head.select_one("script[src='https://cdn.example.com/x.js']")
    assert remote is not None
    assert remote.has_attr("async")
    assert head.select_one("link[href='../images/logo.png']") is not None
    assert head.select_one("meta[name='robots']") is not None


def test_filter_buttons_follow_bubble_flag(jvm: SourceSet, js: SourceSet) -> None:
    content = Group(
        source_sets=frozenset({jvm, js}),
        children=(Text(text="x", source_sets=frozenset({jvm, js})),),
    )
    page = ContentPage(name="Widget", content=content)
    renderer = _renderer(PageNode(name="root", children=(page,)))

    with_bubbles = BeautifulSoup(
        renderer.render_page(page, render_bubbles=True).html, "html.parser"
    )
    buttons = with_bubbles.select("#filter-section button.platform-selector")
    assert [button["data-filter"] for button in buttons] == ["lib/js", "lib/jvm"]

    without = BeautifulSoup(
        renderer.render_page(page, render_bubbles=False).html, "html.parser"
    )
    assert without.select_one("#filter-section") is None
