"""Resolve pages and declaration references to relative output paths.

The renderer only depends on the :class:`LocationProvider` protocol; the
:class:`DefaultLocationProvider` lays pages out as a directory tree where a page
with children owns a directory and is written to its ``index`` file.

Example
-------
>>> from docset_html.model import ContentPage, Group, PageNode
>>> leaf = ContentPage(name="Widget", content=Group())
>>> root = PageNode(name="root", children=(leaf,))
>>> provider = DefaultLocationProvider(root)
>>> provider.page_path(leaf), provider.path_to_root(leaf)
('widget', '')
"""

from __future__ import annotations

import posixpath
import re
import typing as typ

from docset_html._constants import HTML_EXTENSION
from docset_html.model.pages import ContentPage, PageNode, walk_pages

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docset_html.model.nodes import Reference
    from docset_html.model.source_sets import SourceSet
    from docset_html.model.styles import ContentKind

_SLUG_PATTERN = re.compile(r"[^a-z0-9_.]+")


class LocationProvider(typ.Protocol):
    """Read-only lookup service shared by every page render."""

    def resolve_page(
        self,
        to: PageNode,
        from_page: PageNode | None = None,
        *,
        skip_extension: bool = False,
    ) -> str | None:
        """Return the path to ``to`` relative to ``from_page`` (or the root)."""
        ...

    def resolve_reference(
        self,
        reference: Reference,
        source_sets: cabc.Iterable[SourceSet] = (),
        from_page: PageNode | None = None,
    ) -> str | None:
        """Return the path documenting ``reference`` or ``None`` if unknown."""
        ...

    def ancestors(self, page: PageNode) -> list[PageNode]:
        """Return ``page`` followed by its parents, ending at the root page."""
        ...

    def path_to_root(self, page: PageNode) -> str:
        """Return the relative prefix leading from ``page`` to the site root."""
        ...

    def anchor_for(
        self,
        dri: cabc.Iterable[Reference],
        kind: ContentKind,
        source_sets: cabc.Iterable[SourceSet],
    ) -> str:
        """Return a stable element id for the given declarations and kind."""
        ...


def slugify(name: str) -> str:
    """Return a file-system friendly form of a page name.

    Examples
    --------
    >>> slugify("Kotlin Stdlib")
    'kotlin-stdlib'
    >>> slugify("<init>")
    '-init-'
    """
    return _SLUG_PATTERN.sub("-", name.lower()) or "-"


class DefaultLocationProvider:
    """Directory-tree layout over an immutable page tree."""

    def __init__(self, root: PageNode) -> None:
        self.root = root
        self._parents: dict[PageNode, PageNode] = {}
        self._paths: dict[PageNode, str] = {}
        self._references: dict[str, PageNode] = {}
        self._assign(root, ())
        for page in walk_pages(root):
            if isinstance(page, ContentPage):
                for reference in page.dri:
                    self._references.setdefault(str(reference), page)

    def _assign(self, page: PageNode, directory: tuple[str, ...]) -> None:
        if page is self.root:
            own_directory: tuple[str, ...] = ()
            self._paths[page] = "index"
        elif page.children:
            own_directory = (*directory, slugify(page.name))
            self._paths[page] = "/".join((*own_directory, "index"))
        else:
            own_directory = directory
            self._paths[page] = "/".join((*directory, slugify(page.name)))
        for child in page.children:
            self._parents[child] = page
            self._assign(child, own_directory)

    def page_path(self, page: PageNode) -> str:
        """Return the root-relative path of ``page`` without extension.

        Raises
        ------
        KeyError
            If ``page`` is not part of the tree this provider was built for.
        """
        return self._paths[page]

    def resolve_page(
        self,
        to: PageNode,
        from_page: PageNode | None = None,
        *,
        skip_extension: bool = False,
    ) -> str | None:
        target = self._paths.get(to)
        if target is None:
            return None
        if from_page is not None and from_page in self._paths:
            start = posixpath.dirname(self._paths[from_page]) or "."
            target = posixpath.relpath(target, start)
        return target if skip_extension else f"{target}{HTML_EXTENSION}"

    def resolve_reference(
        self,
        reference: Reference,
        source_sets: cabc.Iterable[SourceSet] = (),
        from_page: PageNode | None = None,
    ) -> str | None:
        page = self._references.get(str(reference))
        if page is None:
            return None
        return self.resolve_page(page, from_page)

    def ancestors(self, page: PageNode) -> list[PageNode]:
        chain = [page]
        while chain[-1] in self._parents:
            chain.append(self._parents[chain[-1]])
        return chain

    def path_to_root(self, page: PageNode) -> str:
        path = self._paths.get(page, "")
        return "../" * path.count("/")

    def anchor_for(
        self,
        dri: cabc.Iterable[Reference],
        kind: ContentKind,
        source_sets: cabc.Iterable[SourceSet],
    ) -> str:
        references = ",".join(str(reference) for reference in dri)
        ids = ",".join(sorted(source_set.source_set_id for source_set in source_sets))
        return f"{references}/{kind}/{ids}"


__all__ = ["DefaultLocationProvider", "LocationProvider", "slugify"]
