"""Stitch independently rendered partial output into a finished site.

Each page written in partial mode sits next to a ``<page>.commands.json``
manifest listing the commands its markup still carries. Assembly rewrites every
such page once the final layout is known: path-to-root from the page's depth,
the project name, cross-module links from a reference index, the version
selector and the navigation menu.

Example
-------
>>> from pathlib import Path
>>> assemble_directory(Path("public"), project_name="demo")  # doctest: +SKIP
[PosixPath('public/index.html'), ...]
"""

from __future__ import annotations

import typing as typ

import msgspec

from docset_html._constants import COMMAND_MANIFEST_EXTENSION, HTML_EXTENSION
from docset_html.logger import get_logger
from docset_html.templating.commands import (
    TEXT_COMMANDS,
    ResolveLink,
    decode_manifest,
    encode_manifest,
)
from docset_html.templating.substitution import (
    SubstitutionContext,
    TemplateSubstitutor,
    deferred_commands,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = get_logger()


class ManifestError(ValueError):
    """Raised when a command manifest is unreadable or has no page beside it."""


def page_for_manifest(manifest: Path) -> Path:
    """Return the markup file a manifest belongs to."""
    stem = manifest.name.removesuffix(COMMAND_MANIFEST_EXTENSION)
    return manifest.with_name(f"{stem}{HTML_EXTENSION}")


def path_to_root_for(page: Path, output_dir: Path) -> str:
    """Return the relative prefix leading from ``page`` back to ``output_dir``."""
    depth = len(page.relative_to(output_dir).parts) - 1
    return "../" * depth


def assemble_page(
    manifest: Path,
    output_dir: Path,
    *,
    project_name: str,
    link_index: cabc.Mapping[str, str] | None = None,
    versions: cabc.Sequence[str] = (),
    navigation_html: str = "",
    keep_deferred: bool = False,
) -> Path:
    """Resolve the commands of one partially rendered page in place.

    Parameters
    ----------
    manifest : Path
        The page's ``.commands.json`` manifest.
    output_dir : Path
        Root of the rendered site; used to compute the path to root.
    project_name : str
        Name substituted for project-name tokens.
    link_index : Mapping[str, str], optional
        Reference target to root-relative path.
    versions : Sequence[str]
        Available versions, current first; empty leaves no selector.
    navigation_html : str
        Markup injected for navigation commands.
    keep_deferred : bool
        Keep links the index cannot resolve as commands (and keep their
        manifest) instead of rendering them as unresolved spans.

    Returns
    -------
    Path
        The rewritten page.

    Raises
    ------
    ManifestError
        If the manifest cannot be decoded or its page is missing.
    """
    page = page_for_manifest(manifest)
    if not page.is_file():
        msg = f"Manifest {manifest} has no page at {page}"
        raise ManifestError(msg)
    try:
        commands = decode_manifest(manifest.read_bytes())
    except msgspec.DecodeError as exc:
        msg = f"Invalid command manifest {manifest}: {exc}"
        raise ManifestError(msg) from exc

    index = link_index or {}
    context = SubstitutionContext(
        path_to_root=path_to_root_for(page, output_dir),
        project_name=project_name,
        link_resolver=index.get,
        versions=versions,
        navigation_html=navigation_html,
        partial=keep_deferred,
    )
    text_commands = [command for command in commands if isinstance(command, TEXT_COMMANDS)]
    substitutor = TemplateSubstitutor(context, text_commands)
    markup = substitutor.substitute(page.read_text(encoding="utf-8"))
    page.write_text(markup, encoding="utf-8")

    remaining = [
        command for command in deferred_commands(markup) if isinstance(command, ResolveLink)
    ]
    if remaining:
        manifest.write_bytes(encode_manifest(remaining))
        logger.info("Assembled %s with %d deferred link(s)", page, len(remaining))
    else:
        manifest.unlink()
        logger.info("Assembled %s", page)
    return page


def assemble_directory(
    output_dir: Path,
    *,
    project_name: str,
    link_index: cabc.Mapping[str, str] | None = None,
    versions: cabc.Sequence[str] = (),
    navigation_html: str = "",
    keep_deferred: bool = False,
) -> list[Path]:
    """Assemble every partially rendered page below ``output_dir``.

    Returns
    -------
    list[Path]
        Rewritten pages in sorted manifest order.

    Raises
    ------
    FileNotFoundError
        If ``output_dir`` does not exist.
    ManifestError
        If any manifest is malformed or orphaned.
    """
    if not output_dir.is_dir():
        msg = f"Output directory not found: {output_dir}"
        raise FileNotFoundError(msg)
    manifests = sorted(output_dir.rglob(f"*{COMMAND_MANIFEST_EXTENSION}"))
    logger.debug("Found %d command manifest(s) under %s", len(manifests), output_dir)
    return [
        assemble_page(
            manifest,
            output_dir,
            project_name=project_name,
            link_index=link_index,
            versions=versions,
            navigation_html=navigation_html,
            keep_deferred=keep_deferred,
        )
        for manifest in manifests
    ]


__all__ = [
    "ManifestError",
    "assemble_directory",
    "assemble_page",
    "page_for_manifest",
    "path_to_root_for",
]
