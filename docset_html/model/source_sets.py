"""Build-target variants ("source sets") a declaration may be documented for."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(frozen=True, slots=True)
class SourceSet:
    """One target build configuration, e.g. the ``jvm`` half of a library.

    Attributes
    ----------
    scope_id : str
        Identifier of the module the source set belongs to.
    name : str
        Display name shown on tabs and filter buttons.
    platform : str
        Platform family (``common``, ``jvm``, ``js``, ``native``, ``wasm``);
        only used for a small fixed styling lookup.
    depends_on : frozenset[str]
        ``source_set_id`` values of the source sets this one builds upon.
    """

    scope_id: str
    name: str
    platform: str = "common"
    depends_on: frozenset[str] = frozenset()

    @property
    def source_set_id(self) -> str:
        """Return the identifier used in ``data-filter``/``data-toggle`` markup."""
        return f"{self.scope_id}/{self.name}"

    @property
    def comparable_key(self) -> tuple[str, str]:
        """Return the stable ordering key for tabs and filter buttons."""
        return (self.scope_id, self.name)


def sorted_source_sets(source_sets: cabc.Iterable[SourceSet]) -> list[SourceSet]:
    """Return ``source_sets`` ordered by :attr:`SourceSet.comparable_key`."""
    return sorted(source_sets, key=lambda source_set: source_set.comparable_key)


def source_set_filters(source_sets: cabc.Iterable[SourceSet]) -> str:
    """Return the space-separated ids used by ``data-filterable-*`` attributes."""
    return " ".join(
        source_set.source_set_id for source_set in sorted_source_sets(source_sets)
    )


__all__ = ["SourceSet", "sorted_source_sets", "source_set_filters"]
