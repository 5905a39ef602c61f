"""Style flags and semantic kinds attached to content nodes.

Enum values double as the CSS class names the dispatcher emits, so a node
styled ``(Style.BOLD, Style.BLOCK)`` renders with ``class="bold block"``.
"""

from __future__ import annotations

import enum


class Style(enum.StrEnum):
    """Presentation flags a content node may carry."""

    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    STRONG = "strong"
    INDENTED = "indented"
    MONOSPACE = "monospace"
    BLOCK = "block"
    PARAGRAPH = "paragraph"
    SPAN = "span"
    BREAKABLE = "breakable"
    BREAKABLE_AFTER = "breakableafter"
    COVER = "cover"
    TABBED_CONTENT = "tabbedcontent"
    ROW_TITLE = "rowtitle"
    RUNNABLE_SAMPLE = "runnablesample"
    COMMENT_TABLE = "commenttable"


class TokenStyle(enum.StrEnum):
    """Syntax token flags used inside signatures and code."""

    KEYWORD = "keyword"
    PUNCTUATION = "punctuation"
    FUNCTION = "function"
    OPERATOR = "operator"
    ANNOTATION = "annotation"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    CONSTANT = "constant"
    BUILTIN = "builtin"


StyleTag = Style | TokenStyle


class ContentKind(enum.StrEnum):
    """Semantic category of a node, used for CSS classing and row layout."""

    MAIN = "main"
    SYMBOL = "symbol"
    BRIEF_COMMENT = "brief"
    COVER = "cover"
    COMMENT = "comment"
    SAMPLE = "sample"
    SOURCE = "source"
    CONSTRUCTORS = "constructors"
    FUNCTIONS = "functions"
    PROPERTIES = "properties"
    CLASSLIKES = "classlikes"
    PACKAGES = "packages"
    MODULES = "modules"
    TYPE_ALIASES = "typealiases"
    INHERITORS = "inheritors"
    EXTENSIONS = "extensions"
    PARAMETERS = "parameters"
    EMPTY = "empty"

    @staticmethod
    def should_be_platform_tagged(kind: ContentKind) -> bool:
        """Return whether rows of ``kind`` show per-platform tag bubbles."""
        return kind in _PLATFORM_TAGGED


_PLATFORM_TAGGED = frozenset(
    {
        ContentKind.CONSTRUCTORS,
        ContentKind.FUNCTIONS,
        ContentKind.PROPERTIES,
        ContentKind.CLASSLIKES,
        ContentKind.PACKAGES,
        ContentKind.SOURCE,
        ContentKind.TYPE_ALIASES,
        ContentKind.INHERITORS,
        ContentKind.EXTENSIONS,
    }
)


__all__ = ["ContentKind", "Style", "StyleTag", "TokenStyle"]
