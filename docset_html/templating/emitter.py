"""Emit template commands into page markup.

Two emitters share one ``emit(command, inner)`` call shape so the page
renderer never branches on the operating mode:

* :class:`ImmediateEmitter` resolves every command on the spot with the value
  the command carries, producing a finished document.
* :class:`PartialEmitter` leaves pattern tokens in the text, wraps element
  commands in ``<docset-command>`` markers, and records each distinct command
  for the page's manifest.
"""

from __future__ import annotations

import typing as typ
from html import escape

from docset_html._constants import COMMAND_TAG
from docset_html.templating.commands import (
    NavigationInclude,
    PathToRootSubstitution,
    ProjectNameSubstitution,
    ReplaceVersions,
    ResolveLink,
    TemplateCommand,
)


class CommandEmitter(typ.Protocol):
    """Per-page sink for template commands."""

    @property
    def commands(self) -> list[TemplateCommand]:
        """Return the distinct commands recorded so far, in emission order."""
        ...

    def emit(self, command: TemplateCommand, inner: str = "") -> str:
        """Return the markup standing for ``command`` around ``inner``."""
        ...


def text_value(command: PathToRootSubstitution | ProjectNameSubstitution, value: str) -> str:
    """Return the markup-safe replacement for a text command's pattern."""
    if isinstance(command, ProjectNameSubstitution):
        return escape(value, quote=True)
    return value


def unresolved_link(target: str, inner: str) -> str:
    """Return the span marking a reference no location could be found for."""
    return f'<span data-unresolved-link="{escape(target, quote=True)}">{inner}</span>'


def command_element(command: TemplateCommand, inner: str = "") -> str:
    """Return the ``<docset-command>`` marker for an element command.

    Examples
    --------
    >>> command_element(ResolveLink(target="a/B///"), "B")
    '<docset-command data-kind="resolve-link" data-target="a/B///">B</docset-command>'
    >>> command_element(NavigationInclude())
    '<docset-command data-kind="navigation"></docset-command>'
    """
    match command:
        case ResolveLink(target=target):
            attrs = f' data-kind="resolve-link" data-target="{escape(target, quote=True)}"'
        case ReplaceVersions(current_path=current_path):
            attrs = (
                f' data-kind="replace-versions" '
                f'data-path="{escape(current_path, quote=True)}"'
            )
        case NavigationInclude():
            attrs = ' data-kind="navigation"'
        case _:
            msg = f"{type(command).__name__} is not an element command"
            raise TypeError(msg)
    return f"<{COMMAND_TAG}{attrs}>{inner}</{COMMAND_TAG}>"


class ImmediateEmitter:
    """Resolve commands at emission time using their carried defaults."""

    def __init__(self) -> None:
        self._commands: dict[TemplateCommand, None] = {}

    @property
    def commands(self) -> list[TemplateCommand]:
        return list(self._commands)

    def emit(self, command: TemplateCommand, inner: str = "") -> str:
        self._commands.setdefault(command, None)
        match command:
            case PathToRootSubstitution() | ProjectNameSubstitution():
                return inner.replace(command.pattern, text_value(command, command.default))
            case ResolveLink(target=target):
                return unresolved_link(target, inner)
            case _:
                return ""


class PartialEmitter:
    """Leave commands in the markup for a later substitution pass."""

    def __init__(self) -> None:
        self._commands: dict[TemplateCommand, None] = {}

    @property
    def commands(self) -> list[TemplateCommand]:
        return list(self._commands)

    def emit(self, command: TemplateCommand, inner: str = "") -> str:
        self._commands.setdefault(command, None)
        if isinstance(command, PathToRootSubstitution | ProjectNameSubstitution):
            return inner
        return command_element(command, inner)


def make_emitter(*, partial: bool) -> CommandEmitter:
    """Return a fresh emitter for one page in the requested mode."""
    return PartialEmitter() if partial else ImmediateEmitter()


__all__ = [
    "CommandEmitter",
    "ImmediateEmitter",
    "PartialEmitter",
    "command_element",
    "make_emitter",
    "text_value",
    "unresolved_link",
]
