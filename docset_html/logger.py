"""Logging configuration for docset_html.

Every module logs through the single ``docset_html`` logger returned by
:func:`get_logger`. Rendering never raises for recoverable anomalies (unknown
nodes, unresolved links, tab sorting mismatches, unsupported resources); they
are reported here instead, so the verbosity chosen on the command line decides
how much of that diagnosis reaches the user.
"""

from __future__ import annotations

import logging
import sys
import typing as typ

LOGGER_NAME = "docset_html"

VERBOSITY_ERRORS = 0
VERBOSITY_WARNINGS = 1
VERBOSITY_INFO = 2
VERBOSITY_DEBUG = 3

_LEVELS = {
    VERBOSITY_ERRORS: logging.ERROR,
    VERBOSITY_WARNINGS: logging.WARNING,
    VERBOSITY_INFO: logging.INFO,
    VERBOSITY_DEBUG: logging.DEBUG,
}


def get_logger() -> logging.Logger:
    """Return the shared docset_html logger."""
    return logging.getLogger(LOGGER_NAME)


def setup_logger(verbosity: int, stream: typ.TextIO | None = None) -> None:
    """Configure the docset_html logger for the requested verbosity.

    Can be called multiple times to reconfigure the logger.

    Parameters
    ----------
    verbosity : int
        ``0`` errors only, ``1`` warnings, ``2`` info, ``3`` debug. Values
        above three are treated as debug.
    stream : TextIO, optional
        Output stream; defaults to ``sys.stderr``.
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_LEVELS.get(min(verbosity, VERBOSITY_DEBUG), logging.ERROR))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Reset the logger to its unconfigured state (used by tests)."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


__all__ = [
    "LOGGER_NAME",
    "VERBOSITY_DEBUG",
    "VERBOSITY_ERRORS",
    "VERBOSITY_INFO",
    "VERBOSITY_WARNINGS",
    "get_logger",
    "reset_logger",
    "setup_logger",
]
