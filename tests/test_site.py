"""Tests for rendering a whole page tree."""

from __future__ import annotations

import typing as typ

import pytest

from docset_html.config import RendererConfig
from docset_html.model import (
    ContentPage,
    Group,
    PageNode,
    RendererSpecificPage,
    RenderingStrategy,
    SourceSet,
    Text,
)
from docset_html.renderer.site import (
    FileSystemOutputWriter,
    SiteRenderer,
    should_render_source_set_bubbles,
)
from docset_html.templating.commands import decode_manifest

if typ.TYPE_CHECKING:
    from pathlib import Path


class MemoryWriter:
    """Collects written files keyed by ``path + extension``."""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}

    def write(self, path: str, text: str, extension: str) -> None:
        self.files[f"{path}{extension}"] = text


def _page(name: str, *source_sets: SourceSet, children: tuple[PageNode, ...] = ()) -> ContentPage:
    scope = frozenset(source_sets)
    content = Group(source_sets=scope, children=(Text(text=name, source_sets=scope),))
    return ContentPage(name=name, content=content, children=children)


@pytest.fixture
def site(jvm: SourceSet) -> PageNode:
    leaf = _page("Widget", jvm)
    module = _page("lib", jvm, children=(leaf,))
    script = RendererSpecificPage(name="navigation.js", text="// nav")
    placeholder = PageNode(name="hidden", strategy=RenderingStrategy.DO_NOTHING)
    return PageNode(name="root", children=(module, script, placeholder))


def test_bubbles_need_more_than_one_source_set(
    site: PageNode, jvm: SourceSet, js: SourceSet
) -> None:
    assert should_render_source_set_bubbles(site) is False
    mixed = PageNode(name="root", children=(_page("a", jvm), _page("b", js)))
    assert should_render_source_set_bubbles(mixed) is True


def test_immediate_render_writes_pages_and_verbatim_files(site: PageNode) -> None:
    writer = MemoryWriter()
    rendered = SiteRenderer(RendererConfig(), writer=writer).render(site)

    assert [page.path for page in rendered] == ["lib/index", "lib/widget"]
    assert set(writer.files) == {"lib/index.html", "lib/widget.html", "navigation.js"}
    assert writer.files["navigation.js"] == "// nav"


def test_partial_render_writes_manifests(site: PageNode) -> None:
    writer = MemoryWriter()
    config = RendererConfig(delay_template_substitution=True)
    rendered = SiteRenderer(config, writer=writer).render(site)

    manifest = decode_manifest(writer.files["lib/widget.commands.json"])
    assert manifest == rendered[1].commands
    assert "lib/index.commands.json" in writer.files


def test_thread_pool_matches_sequential_output(site: PageNode) -> None:
    sequential = MemoryWriter()
    pooled = MemoryWriter()
    SiteRenderer(RendererConfig(), writer=sequential).render(site)
    SiteRenderer(RendererConfig(max_workers=4), writer=pooled).render(site)
    assert pooled.files == sequential.files


def test_file_system_writer_creates_directories(tmp_path: Path) -> None:
    writer = FileSystemOutputWriter(tmp_path)
    writer.write("lib/deep/page", "<p></p>", ".html")
    assert (tmp_path / "lib" / "deep" / "page.html").read_text(encoding="utf-8") == "<p></p>"
