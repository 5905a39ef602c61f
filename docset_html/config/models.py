"""Typed dataclasses describing renderer configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from docset_html._constants import DEFAULT_TAB_ORDER


class RendererConfigError(ValueError):
    """Raised when the renderer configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class RendererConfig:
    """Options shared by every page of one documentation run.

    Attributes
    ----------
    module_name : str
        Project name shown in the logo link and the ``pageIds`` attribute.
    footer_message : str
        Markdown rendered in the footer; empty selects the default notice.
    delay_template_substitution : bool
        Render in partial mode, leaving template commands for assembly.
    custom_assets : list[str]
        Stylesheets, scripts, images or raw head snippets added to every page.
    pygments_style : str
        Pygments style used for code blocks and the inline stylesheet.
    tab_order : list[str]
        Section tab names placed first, in this order.
    max_workers : int
        Pages rendered concurrently; ``1`` renders sequentially.
    output_dir : Path
        Directory the site is written to.
    """

    module_name: str = "root"
    footer_message: str = ""
    delay_template_substitution: bool = False
    custom_assets: list[str] = dc.field(default_factory=list)
    pygments_style: str = "default"
    tab_order: list[str] = dc.field(default_factory=lambda: list(DEFAULT_TAB_ORDER))
    max_workers: int = 1
    output_dir: Path = dc.field(default_factory=lambda: Path("public"))


__all__ = ["RendererConfig", "RendererConfigError"]
