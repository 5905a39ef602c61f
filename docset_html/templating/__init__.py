"""Template commands, their emitters, and the deferred substitution pass."""

from __future__ import annotations

from .assembly import ManifestError, assemble_directory, assemble_page
from .commands import (
    NavigationInclude,
    PathToRootSubstitution,
    ProjectNameSubstitution,
    ReplaceVersions,
    ResolveLink,
    TemplateCommand,
    decode_manifest,
    encode_manifest,
)
from .emitter import CommandEmitter, ImmediateEmitter, PartialEmitter, make_emitter
from .substitution import SubstitutionContext, TemplateSubstitutor, substitute

__all__ = [
    "CommandEmitter",
    "ImmediateEmitter",
    "ManifestError",
    "NavigationInclude",
    "PartialEmitter",
    "PathToRootSubstitution",
    "ProjectNameSubstitution",
    "ReplaceVersions",
    "ResolveLink",
    "SubstitutionContext",
    "TemplateCommand",
    "TemplateSubstitutor",
    "assemble_directory",
    "assemble_page",
    "decode_manifest",
    "encode_manifest",
    "make_emitter",
    "substitute",
]
