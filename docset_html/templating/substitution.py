"""Single linear pass that resolves deferred commands in finished markup.

Every rule is a ``(pattern, handler)`` pair; the patterns are combined into one
alternation and the markup is scanned once from left to right, so each token
is visited once and in document order. An element marker extends to its
balanced closing tag, so markers may nest, and its inner markup is substituted
before the marker itself. Substituted values never contain a token, which
makes the pass idempotent.

Example
-------
>>> context = SubstitutionContext(path_to_root="../", project_name="Demo")
>>> substitutor = TemplateSubstitutor(context)
>>> substitutor.substitute('<a href="###docset-path-to-root###index.html">x</a>')
'<a href="../index.html">x</a>'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import html
import re

from docset_html._constants import COMMAND_TAG
from docset_html.logger import get_logger
from docset_html.templating.commands import (
    TEXT_COMMANDS,
    NavigationInclude,
    PathToRootSubstitution,
    ProjectNameSubstitution,
    ReplaceVersions,
    ResolveLink,
    TemplateCommand,
)
from docset_html.templating.emitter import command_element, text_value, unresolved_link

logger = get_logger()

MARKER_PATTERN = rf'<{COMMAND_TAG} data-kind="(?P<kind>[a-z-]+)"(?P<attrs>[^>]*)>'
CLOSING_TAG = f"</{COMMAND_TAG}>"
_MARKER_TAGS = re.compile(rf"<{COMMAND_TAG}[\s>]|{re.escape(CLOSING_TAG)}")
_ATTRIBUTE_PATTERN = re.compile(r'([a-z-]+)="([^"]*)"')
_ELEMENT_RULE = "element"

LinkResolver = cabc.Callable[[str], str | None]
Handler = cabc.Callable[[re.Match[str]], str]


@dc.dataclass(slots=True)
class SubstitutionContext:
    """Values known once the final output layout is fixed.

    Attributes
    ----------
    path_to_root : str
        Relative prefix from the page being rewritten to the site root.
    project_name : str
        Display name substituted for the project-name token.
    link_resolver : Callable[[str], str | None], optional
        Maps a reference target to a root-relative path.
    versions : Sequence[str]
        Available documentation versions; the first one is current.
    navigation_html : str
        Markup injected for navigation commands.
    partial : bool
        Keep commands that still cannot be resolved instead of falling back.
    """

    path_to_root: str = ""
    project_name: str = ""
    link_resolver: LinkResolver | None = None
    versions: cabc.Sequence[str] = ()
    navigation_html: str = ""
    partial: bool = False


def render_version_selector(
    versions: cabc.Sequence[str], current_path: str, path_to_root: str
) -> str:
    """Return the dropdown listing ``versions`` with links to ``current_path``.

    Examples
    --------
    >>> render_version_selector(["2.0", "1.0"], "index.html", "")
    '<div class="versions-dropdown"><button class="versions-dropdown-button">2.0</button><div class="versions-dropdown-data"><a href="../2.0/index.html">2.0</a><a href="../1.0/index.html">1.0</a></div></div>'
    """
    links = "".join(
        f'<a href="{html.escape(f"{path_to_root}../{version}/{current_path}", quote=True)}">'
        f"{html.escape(version)}</a>"
        for version in versions
    )
    return (
        '<div class="versions-dropdown">'
        f'<button class="versions-dropdown-button">{html.escape(versions[0])}</button>'
        f'<div class="versions-dropdown-data">{links}</div>'
        "</div>"
    )


def parse_command_attributes(raw: str) -> dict[str, str]:
    """Return the ``data-*`` attributes of a command marker, unescaped."""
    return {name: html.unescape(value) for name, value in _ATTRIBUTE_PATTERN.findall(raw)}


def closing_tag(markup: str, start: int) -> re.Match[str] | None:
    """Return the closing tag balancing a marker opened just before ``start``.

    Examples
    --------
    >>> markup = '<docset-command data-kind="navigation"><docset-command>'
    >>> closing_tag(markup + "</docset-command></docset-command>", 39).start()
    72
    """
    depth = 1
    for tag in _MARKER_TAGS.finditer(markup, start):
        depth += -1 if tag.group(0) == CLOSING_TAG else 1
        if depth == 0:
            return tag
    return None


def deferred_commands(markup: str) -> list[TemplateCommand]:
    """Return the element commands still present in ``markup``, deduplicated."""
    found: dict[TemplateCommand, None] = {}
    for marker in re.finditer(MARKER_PATTERN, markup):
        attrs = parse_command_attributes(marker["attrs"])
        match marker["kind"]:
            case "resolve-link":
                found.setdefault(ResolveLink(target=attrs.get("data-target", "")), None)
            case "replace-versions":
                found.setdefault(ReplaceVersions(current_path=attrs.get("data-path", "")), None)
            case "navigation":
                found.setdefault(NavigationInclude(), None)
            case _:
                continue
    return list(found)


class TemplateSubstitutor:
    """Resolve pattern tokens and command markers in one pass."""

    def __init__(
        self,
        context: SubstitutionContext,
        text_commands: cabc.Iterable[TemplateCommand] = (),
    ) -> None:
        self.context = context
        self._rules: dict[str, tuple[str, Handler]] = {}
        commands = [PathToRootSubstitution(), ProjectNameSubstitution(), *text_commands]
        for command in commands:
            if isinstance(command, TEXT_COMMANDS):
                self._add_text_rule(command)
        alternatives = [
            f"(?P<{name}>{pattern})" for name, (pattern, _) in self._rules.items()
        ]
        alternatives.append(f"(?P<{_ELEMENT_RULE}>{MARKER_PATTERN})")
        self._pattern = re.compile("|".join(alternatives))

    def _add_text_rule(
        self, command: PathToRootSubstitution | ProjectNameSubstitution
    ) -> None:
        if isinstance(command, PathToRootSubstitution):
            value = text_value(command, self.context.path_to_root)
        else:
            value = text_value(command, self.context.project_name)
        pattern = re.escape(command.pattern)
        if any(known == pattern for known, _ in self._rules.values()):
            return
        self._rules[f"text{len(self._rules)}"] = (pattern, lambda _marker: value)

    def substitute(self, markup: str) -> str:
        """Return ``markup`` with every known token and marker resolved."""
        parts: list[str] = []
        position = 0
        while True:
            marker = self._pattern.search(markup, position)
            if marker is None:
                break
            parts.append(markup[position : marker.start()])
            position = marker.end()
            if marker.group(_ELEMENT_RULE) is None:
                parts.append(self._dispatch(marker))
                continue
            closing = closing_tag(markup, position)
            if closing is None:
                logger.warning("Unterminated %s marker left in place", COMMAND_TAG)
                parts.append(marker.group(0))
                continue
            parts.append(self._replace_element(marker, markup[position : closing.start()]))
            position = closing.end()
        parts.append(markup[position:])
        return "".join(parts)

    def _dispatch(self, marker: re.Match[str]) -> str:
        for name, (_, handler) in self._rules.items():
            if marker.group(name) is not None:
                return handler(marker)
        return marker.group(0)  # pragma: no cover - every alternative is named

    def _replace_element(self, marker: re.Match[str], body: str) -> str:
        kind = marker["kind"]
        attrs = parse_command_attributes(marker["attrs"])
        inner = self.substitute(body)
        match kind:
            case "resolve-link":
                return self._resolve_link(attrs.get("data-target", ""), inner)
            case "replace-versions":
                return self._replace_versions(attrs.get("data-path", ""), inner)
            case "navigation":
                if self.context.navigation_html:
                    return self.context.navigation_html
                if self.context.partial:
                    return command_element(NavigationInclude(), inner)
                return ""
            case _:
                logger.warning("Unknown template command kind %r left in place", kind)
                return f"{marker.group(0)}{inner}{CLOSING_TAG}"

    def _resolve_link(self, target: str, inner: str) -> str:
        resolver = self.context.link_resolver
        path = resolver(target) if resolver is not None else None
        if path is not None:
            href = html.escape(f"{self.context.path_to_root}{path}", quote=True)
            return f'<a href="{href}">{inner}</a>'
        if self.context.partial:
            return command_element(ResolveLink(target=target), inner)
        logger.warning("Cannot resolve link target %s", target)
        return unresolved_link(target, inner)

    def _replace_versions(self, current_path: str, inner: str) -> str:
        if self.context.versions:
            return render_version_selector(
                self.context.versions, current_path, self.context.path_to_root
            )
        if self.context.partial:
            return command_element(ReplaceVersions(current_path=current_path), inner)
        return ""


def substitute(
    markup: str,
    context: SubstitutionContext,
    text_commands: cabc.Iterable[TemplateCommand] = (),
) -> str:
    """Run one substitution pass over ``markup`` with ``context``."""
    return TemplateSubstitutor(context, text_commands).substitute(markup)


__all__ = [
    "CLOSING_TAG",
    "MARKER_PATTERN",
    "SubstitutionContext",
    "TemplateSubstitutor",
    "closing_tag",
    "deferred_commands",
    "parse_command_attributes",
    "render_version_selector",
    "substitute",
]
