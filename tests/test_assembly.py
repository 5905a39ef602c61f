"""Tests for assembling partially rendered output directories."""

from __future__ import annotations

import typing as typ

import pytest

from docset_html._constants import PATH_TO_ROOT_PATTERN, PROJECT_NAME_PATTERN
from docset_html.templating.assembly import (
    ManifestError,
    assemble_directory,
    assemble_page,
    page_for_manifest,
    path_to_root_for,
)
from docset_html.templating.commands import (
    NavigationInclude,
    PathToRootSubstitution,
    ResolveLink,
    decode_manifest,
    encode_manifest,
)
from docset_html.templating.emitter import command_element

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write_page(
    output_dir: Path, relative: str, markup: str, commands: list[typ.Any]
) -> tuple[Path, Path]:
    page = output_dir / f"{relative}.html"
    page.parent.mkdir(parents=True, exist_ok=True)
    page.write_text(markup, encoding="utf-8")
    manifest = output_dir / f"{relative}.commands.json"
    manifest.write_bytes(encode_manifest(commands))
    return page, manifest


def _markup(target: str) -> str:
    return (
        f'<a href="{PATH_TO_ROOT_PATTERN}index.html">{PROJECT_NAME_PATTERN}</a>'
        + command_element(ResolveLink(target=target), "Target")
        + command_element(NavigationInclude())
    )


def test_page_and_root_paths(tmp_path: Path) -> None:
    manifest = tmp_path / "lib" / "widget.commands.json"
    assert page_for_manifest(manifest) == tmp_path / "lib" / "widget.html"
    assert path_to_root_for(tmp_path / "index.html", tmp_path) == ""
    assert path_to_root_for(tmp_path / "lib" / "a" / "b.html", tmp_path) == "../../"


def test_assemble_page_resolves_everything(tmp_path: Path) -> None:
    commands = [PathToRootSubstitution(default="../"), ResolveLink(target="other/T//")]
    page, manifest = _write_page(tmp_path, "lib/widget", _markup("other/T//"), commands)

    result = assemble_page(
        manifest,
        tmp_path,
        project_name="Demo",
        link_index={"other/T//": "other/t.html"},
        navigation_html="<nav></nav>",
    )

    assert result == page
    assert page.read_text(encoding="utf-8") == (
        '<a href="../index.html">Demo</a><a href="../other/t.html">Target</a><nav></nav>'
    )
    assert not manifest.exists()


def test_keep_deferred_rewrites_manifest_with_remaining_links(tmp_path: Path) -> None:
    commands = [ResolveLink(target="later//"), NavigationInclude()]
    page, manifest = _write_page(tmp_path, "index", _markup("later//"), commands)

    assemble_page(manifest, tmp_path, project_name="Demo", keep_deferred=True)

    markup = page.read_text(encoding="utf-8")
    assert 'data-target="later//"' in markup
    assert PATH_TO_ROOT_PATTERN not in markup
    assert decode_manifest(manifest.read_bytes()) == [ResolveLink(target="later//")]


def test_unresolved_link_without_keep_deferred_becomes_span(tmp_path: Path) -> None:
    page, manifest = _write_page(
        tmp_path, "index", _markup("gone//"), [ResolveLink(target="gone//")]
    )
    assemble_page(manifest, tmp_path, project_name="Demo")
    assert '<span data-unresolved-link="gone//">Target</span>' in page.read_text(
        encoding="utf-8"
    )
    assert not manifest.exists()


def test_invalid_manifest_raises(tmp_path: Path) -> None:
    page, manifest = _write_page(tmp_path, "index", "<p></p>", [])
    manifest.write_text('[{"kind": "teleport"}]', encoding="utf-8")
    with pytest.raises(ManifestError, match="Invalid command manifest"):
        assemble_page(manifest, tmp_path, project_name="Demo")
    assert page.read_text(encoding="utf-8") == "<p></p>"


def test_orphan_manifest_raises(tmp_path: Path) -> None:
    manifest = tmp_path / "lost.commands.json"
    manifest.write_bytes(encode_manifest([]))
    with pytest.raises(ManifestError, match="has no page"):
        assemble_page(manifest, tmp_path, project_name="Demo")


def test_assemble_directory_processes_every_manifest(tmp_path: Path) -> None:
    first, _ = _write_page(tmp_path, "index", _markup("a//"), [])
    second, _ = _write_page(tmp_path, "lib/widget", _markup("b//"), [])
    untouched = tmp_path / "scripts" / "main.js"
    untouched.parent.mkdir()
    untouched.write_text(PATH_TO_ROOT_PATTERN, encoding="utf-8")

    written = assemble_directory(
        tmp_path, project_name="Demo", link_index={"a//": "a.html", "b//": "b.html"}
    )

    assert written == [first, second]
    assert 'href="../b.html"' in second.read_text(encoding="utf-8")
    assert untouched.read_text(encoding="utf-8") == PATH_TO_ROOT_PATTERN
    assert list(tmp_path.rglob("*.commands.json")) == []


def test_assemble_directory_requires_existing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Output directory not found"):
        assemble_directory(tmp_path / "missing", project_name="Demo")
