"""Load and validate renderer configuration for docset_html builds.

This subpackage parses a YAML file (``docset.yaml`` by convention) with
``ruamel.yaml`` and produces a :class:`RendererConfig` that the site renderer
and the assembly command consume. The primary entry point is
:func:`load_renderer_config`.

Examples
--------
>>> from pathlib import Path
>>> from docset_html.config import load_renderer_config
>>> config = load_renderer_config(Path("docset.yaml"))  # doctest: +SKIP
>>> config.delay_template_substitution  # doctest: +SKIP
True
"""

from .loader import build_renderer_config, load_renderer_config
from .models import RendererConfig, RendererConfigError

__all__ = [
    "RendererConfig",
    "RendererConfigError",
    "build_renderer_config",
    "load_renderer_config",
]
