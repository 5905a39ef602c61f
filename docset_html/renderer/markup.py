"""Small string builders for HTML elements.

The dispatcher assembles fragments as plain strings; these helpers keep the
escaping rules in one place. Attribute values of ``None`` are skipped and
``True`` renders a bare attribute, so optional markup reads naturally at the
call site.

Examples
--------
>>> element("div", "x", classes="brief", attributes=[("data-active", True)])
'<div class="brief" data-active>x</div>'
>>> void("img", [("src", "a.png"), ("alt", None)])
'<img src="a.png">'
"""

from __future__ import annotations

import re
import typing as typ
from html import escape

if typ.TYPE_CHECKING:
    import collections.abc as cabc

AttributeValue = str | bool | None
Attributes = typ.Iterable[tuple[str, AttributeValue]]

_CAMEL_HUMP = re.compile(r"(?<=[a-z])(?=[A-Z])")
_LONG_SEGMENT = 10


def render_attributes(attributes: Attributes) -> str:
    """Return ``attributes`` as a leading-space attribute string."""
    parts: list[str] = []
    for name, value in attributes:
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{escape(value, quote=True)}"')
    return "".join(parts)


def _with_classes(
    classes: str | None, attributes: Attributes
) -> list[tuple[str, AttributeValue]]:
    head: list[tuple[str, AttributeValue]] = []
    if classes:
        head.append(("class", classes.strip()))
    return [*head, *attributes]


def element(
    tag: str,
    content: str = "",
    *,
    classes: str | None = None,
    attributes: Attributes = (),
) -> str:
    """Return ``<tag ...>content</tag>``; ``content`` is trusted markup."""
    attrs = render_attributes(_with_classes(classes, attributes))
    return f"<{tag}{attrs}>{content}</{tag}>"


def void(tag: str, attributes: Attributes = (), *, classes: str | None = None) -> str:
    """Return a void element such as ``<br>`` or ``<img ...>``."""
    return f"<{tag}{render_attributes(_with_classes(classes, attributes))}>"


def text(value: str) -> str:
    """Return ``value`` escaped for use as element content."""
    return escape(value, quote=False)


def join_classes(*groups: str | cabc.Iterable[str]) -> str:
    """Join class names, skipping empty entries.

    >>> join_classes("symbol", ["monospace", ""], "")
    'symbol monospace'
    """
    names: list[str] = []
    for group in groups:
        if isinstance(group, str):
            names.extend(group.split())
        else:
            names.extend(name for name in group if name)
    return " ".join(names)


def _join_with_breaks(pieces: list[str], *, has_last_element: bool) -> str:
    out: list[str] = []
    for index, piece in enumerate(pieces):
        out.append(text(piece))
        if index != len(pieces) - 1 or not has_last_element:
            out.append("<wbr>")
    return "".join(out)


def breakable_after_capitals(name: str, *, has_last_element: bool = False) -> str:
    """Allow line breaks before each camel-case hump of ``name``.

    >>> breakable_after_capitals("getValueOrNull", has_last_element=True)
    'get<wbr>Value<wbr>Or<wbr>Null'
    """
    if " " in name:
        words = name.split(" ")
        return " ".join(breakable_text(word) for word in words)
    return _join_with_breaks(_CAMEL_HUMP.split(name), has_last_element=has_last_element)


def _breakable_segment(segment: str, *, last: bool) -> str:
    out = element("span", text(segment)) if segment.strip() else ""
    return out if last else f"{out}<wbr>"


def breakable_dot_separated(name: str) -> str:
    """Allow line breaks after each dot of a qualified name.

    >>> breakable_dot_separated("kotlin.text")
    '<span>kotlin.</span><wbr><span>text</span>'
    """
    phrases = name.split(".")
    out: list[str] = []
    for index, phrase in enumerate(phrases):
        last = index == len(phrases) - 1
        segment = phrase if last else f"{phrase}."
        if len(phrase) > _LONG_SEGMENT:
            out.append(breakable_after_capitals(segment, has_last_element=last))
        else:
            out.append(_breakable_segment(segment, last=last))
    return "".join(out)


def breakable_text(name: str) -> str:
    """Return ``name`` with ``<wbr>`` hints suited to identifiers."""
    if "." in name:
        return breakable_dot_separated(name)
    return breakable_after_capitals(name, has_last_element=True)


__all__ = [
    "AttributeValue",
    "Attributes",
    "breakable_text",
    "element",
    "join_classes",
    "render_attributes",
    "text",
    "void",
]
