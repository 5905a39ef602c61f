"""Ordering of section tabs in ``TabbedContent`` groups."""

from __future__ import annotations

import typing as typ

from docset_html._constants import DEFAULT_TAB_ORDER
from docset_html.logger import get_logger

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = get_logger()


class TabSortingStrategy(typ.Protocol):
    """Pluggable ordering of tab labels.

    Implementations must return exactly as many labels as they are given.
    """

    def sort(self, tabs: cabc.Sequence[str]) -> list[str]:
        """Return ``tabs`` in display order."""
        ...


class DefaultTabSortingStrategy:
    """Place known section names first, in a fixed order, then the rest.

    Examples
    --------
    >>> DefaultTabSortingStrategy().sort(["Samples", "Properties", "Types"])
    ['Types', 'Properties', 'Samples']
    """

    def __init__(self, order: cabc.Sequence[str] = DEFAULT_TAB_ORDER) -> None:
        self._rank = {name: index for index, name in enumerate(order)}

    def sort(self, tabs: cabc.Sequence[str]) -> list[str]:
        unknown = len(self._rank)
        return sorted(tabs, key=lambda label: self._rank.get(label, unknown))


def sort_tabs(strategy: TabSortingStrategy, tabs: cabc.Sequence[str]) -> list[str]:
    """Apply ``strategy`` and warn when it changes the number of tabs.

    The strategy's result is used even when the count differs.
    """
    ordered = list(strategy.sort(tabs))
    if len(ordered) != len(tabs):
        logger.warning(
            "Tab sorting strategy has changed number of tabs from %d to %d",
            len(tabs),
            len(ordered),
        )
    return ordered


__all__ = ["DefaultTabSortingStrategy", "TabSortingStrategy", "sort_tabs"]
