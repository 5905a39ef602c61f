"""Placeholder instructions resolved either at emission time or in a later pass.

Commands are ``msgspec`` structs tagged by ``kind`` so a page's manifest can be
written and read back as plain JSON by the assembly stage.

Example
-------
>>> import msgspec
>>> payload = msgspec.json.encode([ResolveLink(target="kotlin/String///")])
>>> payload
b'[{"kind":"resolve-link","target":"kotlin/String///"}]'
>>> decode_manifest(payload)
[ResolveLink(target='kotlin/String///')]
"""

from __future__ import annotations

import typing as typ

import msgspec

from docset_html._constants import PATH_TO_ROOT_PATTERN, PROJECT_NAME_PATTERN


class PathToRootSubstitution(
    msgspec.Struct, frozen=True, tag_field="kind", tag="path-to-root"
):
    """Replace ``pattern`` with the relative prefix leading to the site root."""

    pattern: str = PATH_TO_ROOT_PATTERN
    default: str = ""


class ProjectNameSubstitution(
    msgspec.Struct, frozen=True, tag_field="kind", tag="project-name"
):
    """Replace ``pattern`` with the (HTML-escaped) project name."""

    pattern: str = PROJECT_NAME_PATTERN
    default: str = ""


class ResolveLink(msgspec.Struct, frozen=True, tag_field="kind", tag="resolve-link"):
    """Turn a cross-module reference into a link once its path is known."""

    target: str


class ReplaceVersions(
    msgspec.Struct, frozen=True, tag_field="kind", tag="replace-versions"
):
    """Insert the version selector for the page at ``current_path``."""

    current_path: str = ""


class NavigationInclude(
    msgspec.Struct, frozen=True, tag_field="kind", tag="navigation"
):
    """Insert the site navigation menu."""


TemplateCommand = typ.Union[
    PathToRootSubstitution,
    ProjectNameSubstitution,
    ResolveLink,
    ReplaceVersions,
    NavigationInclude,
]

TEXT_COMMANDS = (PathToRootSubstitution, ProjectNameSubstitution)

_encoder = msgspec.json.Encoder()
_decoder = msgspec.json.Decoder(list[TemplateCommand])


def encode_manifest(commands: typ.Iterable[TemplateCommand]) -> bytes:
    """Serialize ``commands`` into the JSON manifest format."""
    return _encoder.encode(list(commands))


def decode_manifest(payload: bytes | str) -> list[TemplateCommand]:
    """Parse a JSON manifest back into command structs.

    Raises
    ------
    msgspec.ValidationError
        If an entry has an unknown ``kind`` or malformed fields.
    msgspec.DecodeError
        If ``payload`` is not valid JSON.
    """
    return _decoder.decode(payload)


__all__ = [
    "TEXT_COMMANDS",
    "NavigationInclude",
    "PathToRootSubstitution",
    "ProjectNameSubstitution",
    "ReplaceVersions",
    "ResolveLink",
    "TemplateCommand",
    "decode_manifest",
    "encode_manifest",
]
