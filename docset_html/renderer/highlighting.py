"""Pygments highlighting for code samples and Markdown for footer text."""

from __future__ import annotations

import re
from html import escape

from markdown import Markdown
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from docset_html.logger import get_logger

CSS_CLASS = "codehilite"
CODEHILITE_OPEN_TAG = re.compile(rf'<div class="{CSS_CLASS}">')
FALLBACK_LEXER = "text"

logger = get_logger()


class CodeHighlighter:
    """Highlight code blocks with one Pygments style shared by a whole site."""

    def __init__(self, pygments_style: str = "default") -> None:
        """Create a highlighter.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style; also used for the emitted stylesheet.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass=CSS_CLASS)

    @property
    def stylesheet(self) -> str:
        """Return the CSS rules for highlighted blocks."""
        return self._formatter.get_style_defs(f".{CSS_CLASS}")

    def code_block(self, code: str, language: str) -> str:
        """Return ``code`` highlighted for ``language`` with ``data-language`` set.

        Unknown languages fall back to plain text and are logged at debug
        level.
        """
        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound:
            logger.debug("No lexer for %r, highlighting as plain text", language)
            lexer = get_lexer_by_name(FALLBACK_LEXER)
        highlighted = highlight(code, lexer, self._formatter)
        safe_lang = escape(language, quote=True)
        opening = f'<div class="{CSS_CLASS}" data-language="{safe_lang}">'
        return CODEHILITE_OPEN_TAG.sub(lambda _match: opening, highlighted, 1)

    @staticmethod
    def markdown(source: str) -> str:
        """Render a short Markdown snippet; inline HTML passes through."""
        if not source.strip():
            return ""
        md = Markdown(extensions=["sane_lists"])
        return md.convert(source)


__all__ = ["CodeHighlighter"]
