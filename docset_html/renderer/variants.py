"""Collapse per-source-set renderings into the fewest variant tabs.

A divergent group repeats the same declaration once per source set. Rendering
each source set on its own and showing one tab per source set would duplicate
everything the variants share, so the engine renders every variant's zones
independently and merges variants that present the same surrounding content:

1. For every instance and each of its source sets, render ``before``,
   ``divergent`` and ``after`` restricted to that single source set.
2. Per source set, group the renderings by the pair ``(before, after)`` in
   first-seen order. Each pair is one row of that source set's tab body.
3. Source sets with the same sequence of rows share one tab. A row renders
   ``before`` once, every distinct ``divergent`` fragment of the tab's source
   sets in first-seen order, then ``after``. A row without an ``after`` zone
   that is not the last row ends with a line break, and main-kind content
   adds a further break between rows.
4. Tabs are ordered by the smallest ``comparable_key`` of their source sets, so
   the order never depends on upstream iteration order.

Every source set appears in at most one tab.

Example
-------
>>> from docset_html.model import SourceSet
>>> jvm, js = SourceSet("lib", "jvm"), SourceSet("lib", "js")
>>> [group.label for group in merge_identical([(jvm, "<p>x</p>"), (js, "<p>x</p>")])]
['js, jvm']
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from docset_html.logger import get_logger
from docset_html.model.source_sets import SourceSet, sorted_source_sets, source_set_filters
from docset_html.model.styles import ContentKind

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docset_html.model.nodes import ContentNode, DivergentGroup, PlatformHinted

    Restriction = frozenset[SourceSet] | None
    RenderFn = cabc.Callable[[ContentNode, Restriction], str]

logger = get_logger()

LINE_BREAK = "<br>"


@dc.dataclass(frozen=True, slots=True)
class RenderedVariantGroup:
    """One tab body and the source sets it stands for.

    Attributes
    ----------
    html : str
        Rendered tab content.
    source_sets : frozenset[SourceSet]
        Every source set whose rendering is represented by ``html``.
    """

    html: str
    source_sets: frozenset[SourceSet]

    @property
    def ordered_source_sets(self) -> list[SourceSet]:
        return sorted_source_sets(self.source_sets)

    @property
    def sort_key(self) -> tuple[str, str]:
        """Return the key tabs are ordered by."""
        return self.ordered_source_sets[0].comparable_key

    @property
    def ids(self) -> str:
        """Return the space-separated source set ids used by toggles."""
        return source_set_filters(self.source_sets)

    @property
    def label(self) -> str:
        """Return the tab caption."""
        return ", ".join(source_set.name for source_set in self.ordered_source_sets)

    @property
    def platform(self) -> str:
        """Return the platform family of the first source set in tab order."""
        return self.ordered_source_sets[0].platform


def order_tabs(groups: cabc.Iterable[RenderedVariantGroup]) -> list[RenderedVariantGroup]:
    """Return ``groups`` sorted by :attr:`RenderedVariantGroup.sort_key`."""
    return sorted(groups, key=lambda group: group.sort_key)


def merge_identical(
    renderings: cabc.Iterable[tuple[SourceSet, str]],
) -> list[RenderedVariantGroup]:
    """Merge source sets whose renderings are byte-identical.

    Groups keep first-seen order; use :func:`order_tabs` for display order.
    """
    merged: dict[str, set[SourceSet]] = {}
    for source_set, html in renderings:
        merged.setdefault(html, set()).add(source_set)
    return [
        RenderedVariantGroup(html=html, source_sets=frozenset(source_sets))
        for html, source_sets in merged.items()
    ]


Surroundings = tuple[str, str]


@dc.dataclass(slots=True)
class _SurroundingGroup:
    before: str
    after: str
    fragments: dict[str, None] = dc.field(default_factory=dict)

    def body(self, *, last: bool, main_kind: bool) -> str:
        parts = [self.before, *self.fragments]
        if self.after:
            parts.append(self.after)
        elif not last:
            parts.append(LINE_BREAK)
        if main_kind and not last:
            parts.append(LINE_BREAK)
        return "".join(parts)


@dc.dataclass(slots=True)
class _VariantTab:
    rows: dict[Surroundings, _SurroundingGroup]
    source_sets: set[SourceSet] = dc.field(default_factory=set)

    @classmethod
    def for_rows(cls, keys: cabc.Iterable[Surroundings]) -> _VariantTab:
        return cls({key: _SurroundingGroup(*key) for key in keys})

    def body(self, *, main_kind: bool) -> str:
        rows = list(self.rows.values())
        return "".join(
            row.body(last=index == len(rows) - 1, main_kind=main_kind)
            for index, row in enumerate(rows)
        )


class VariantDeduplicator:
    """Build variant tabs for divergent and platform-hinted content.

    Parameters
    ----------
    render : Callable[[ContentNode, frozenset[SourceSet] | None], str]
        Renders a node under a source set restriction; supplied by the
        dispatcher so zones are rendered with the full rule set.
    """

    def __init__(self, render: RenderFn) -> None:
        self._render = render

    def _zone(self, node: ContentNode | None, restriction: frozenset[SourceSet]) -> str:
        return "" if node is None else self._render(node, restriction)

    def divergent_tabs(
        self, group: DivergentGroup, restriction: Restriction = None
    ) -> list[RenderedVariantGroup]:
        """Return the tabs for an implicitly hinted divergent group."""
        rows: dict[SourceSet, dict[Surroundings, None]] = {}
        fragments: list[tuple[SourceSet, Surroundings, str]] = []
        for instance in group.children:
            for source_set in sorted_source_sets(instance.source_sets):
                if restriction and source_set not in restriction:
                    continue
                only = frozenset({source_set})
                divergent = self._zone(instance.divergent, only)
                if not divergent:
                    continue
                key = (self._zone(instance.before, only), self._zone(instance.after, only))
                rows.setdefault(source_set, {}).setdefault(key, None)
                fragments.append((source_set, key, divergent))

        tabs: dict[tuple[Surroundings, ...], _VariantTab] = {}
        tab_of: dict[SourceSet, _VariantTab] = {}
        for source_set, keys in rows.items():
            tab = tabs.setdefault(tuple(keys), _VariantTab.for_rows(keys))
            tab.source_sets.add(source_set)
            tab_of[source_set] = tab
        for source_set, key, divergent in fragments:
            tab_of[source_set].rows[key].fragments.setdefault(divergent, None)

        main_kind = group.dci.kind is ContentKind.MAIN
        logger.debug(
            "Divergent group collapsed %d instance(s) into %d tab(s)",
            len(group.children),
            len(tabs),
        )
        return order_tabs(
            RenderedVariantGroup(
                html=tab.body(main_kind=main_kind),
                source_sets=frozenset(tab.source_sets),
            )
            for tab in tabs.values()
        )

    def platform_hinted_tabs(
        self, node: PlatformHinted, restriction: Restriction = None
    ) -> list[RenderedVariantGroup]:
        """Return one tab per distinct rendering of ``node.inner``."""
        renderings = [
            (source_set, self._render(node.inner, frozenset({source_set})))
            for source_set in sorted_source_sets(node.source_sets)
            if not restriction or source_set in restriction
        ]
        return order_tabs(merge_identical(renderings))


__all__ = [
    "RenderedVariantGroup",
    "VariantDeduplicator",
    "merge_identical",
    "order_tabs",
]
