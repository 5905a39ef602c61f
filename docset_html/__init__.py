"""HTML rendering for Dokka-style documentation page trees.

This package turns a tree of content pages into HTML documents and exposes the
``docset-html`` CLI used to assemble output rendered with deferred template
substitution.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docset_html import main
>>> main()  # doctest: +SKIP
>>> from docset_html import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
