"""Load renderer configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _optional_str,
    _require_bool,
    _require_positive_int,
    _require_str,
    _str_list,
)
from .models import RendererConfig, RendererConfigError

_KNOWN_FIELDS = frozenset(
    {
        "module_name",
        "footer_message",
        "delay_template_substitution",
        "custom_assets",
        "pygments_style",
        "tab_order",
        "max_workers",
        "output_dir",
    }
)


def load_renderer_config(path: Path) -> RendererConfig:
    """Load the YAML file describing how a documentation set is rendered.

    Settings are read from a top-level ``renderer`` mapping when present,
    otherwise from the top level itself. Missing keys keep the
    :class:`RendererConfig` defaults.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file.

    Returns
    -------
    RendererConfig
        Parsed renderer options.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the document (or its ``renderer`` section) is not a mapping.
    RendererConfigError
        If a key is unknown or a value has the wrong type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_renderer_config(Path("docset.yaml"))  # doctest: +SKIP
    >>> config.module_name  # doctest: +SKIP
    'kotlinx-coroutines'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    section = raw.get("renderer", raw)
    if not isinstance(section, dict):
        msg = "The 'renderer' section must be a mapping."
        raise TypeError(msg)
    return build_renderer_config(section)


def build_renderer_config(payload: typ.Mapping[str, typ.Any]) -> RendererConfig:
    """Build a :class:`RendererConfig` from an already parsed mapping."""
    unknown = sorted(set(payload) - _KNOWN_FIELDS)
    if unknown:
        msg = f"Unknown renderer option(s): {', '.join(map(str, unknown))}."
        raise RendererConfigError(msg)

    base = RendererConfig()
    module_name = _optional_str(payload.get("module_name")) or base.module_name
    footer_message = _require_str(
        payload.get("footer_message", base.footer_message), "footer_message"
    )
    delay = _require_bool(
        payload.get("delay_template_substitution", base.delay_template_substitution),
        "delay_template_substitution",
    )
    pygments_style = _optional_str(payload.get("pygments_style")) or base.pygments_style
    tab_order = (
        _str_list(payload["tab_order"], "tab_order")
        if "tab_order" in payload
        else base.tab_order
    )
    max_workers = _require_positive_int(
        payload.get("max_workers", base.max_workers), "max_workers"
    )
    output_dir = Path(
        _optional_str(payload.get("output_dir")) or str(base.output_dir)
    )

    return RendererConfig(
        module_name=module_name,
        footer_message=footer_message,
        delay_template_substitution=delay,
        custom_assets=_str_list(payload.get("custom_assets"), "custom_assets"),
        pygments_style=pygments_style,
        tab_order=tab_order,
        max_workers=max_workers,
        output_dir=output_dir,
    )


__all__ = ["build_renderer_config", "load_renderer_config"]
