"""Render a whole page tree and write the results.

The bubble flag is computed once from the full tree before any page renders
and then passed to every page call; pages share nothing else that changes, so
they can be rendered on a thread pool.
"""

from __future__ import annotations

import typing as typ
from concurrent.futures import ThreadPoolExecutor

from docset_html._constants import COMMAND_MANIFEST_EXTENSION, HTML_EXTENSION
from docset_html.location import DefaultLocationProvider
from docset_html.logger import get_logger
from docset_html.model.nodes import with_descendants
from docset_html.model.pages import (
    ContentPage,
    RendererSpecificPage,
    RenderingStrategy,
    walk_pages,
)
from docset_html.renderer.page_renderer import HtmlPageRenderer
from docset_html.templating.commands import encode_manifest

if typ.TYPE_CHECKING:
    from pathlib import Path

    from docset_html.config import RendererConfig
    from docset_html.location import LocationProvider
    from docset_html.model.pages import PageNode
    from docset_html.renderer.models import RenderedPage
    from docset_html.renderer.tabs import TabSortingStrategy

logger = get_logger()


class OutputWriter(typ.Protocol):
    """Destination for rendered files."""

    def write(self, path: str, text: str, extension: str) -> None:
        """Store ``text`` at the root-relative ``path`` plus ``extension``."""
        ...


class FileSystemOutputWriter:
    """Write UTF-8 files below a root directory, creating parents as needed."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def write(self, path: str, text: str, extension: str) -> None:
        target = self.root / f"{path}{extension}"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")


def should_render_source_set_bubbles(root: PageNode) -> bool:
    """Return whether the tree documents more than one distinct source set."""
    seen = set()
    for page in walk_pages(root):
        if not isinstance(page, ContentPage):
            continue
        for node in with_descendants(page.content):
            seen.update(node.source_sets)
            if len(seen) > 1:
                return True
    return False


class SiteRenderer:
    """Render every page of a tree through an :class:`OutputWriter`.

    Parameters
    ----------
    config : RendererConfig
        Run-wide rendering options.
    writer : OutputWriter, optional
        Destination; defaults to the file system below ``config.output_dir``.
    location_factory : Callable[[PageNode], LocationProvider], optional
        Builds the location provider for a tree; defaults to
        :class:`DefaultLocationProvider`.
    tab_strategy : TabSortingStrategy, optional
        Section tab ordering passed to the page renderer.
    """

    def __init__(
        self,
        config: RendererConfig,
        *,
        writer: OutputWriter | None = None,
        location_factory: typ.Callable[[PageNode], LocationProvider] | None = None,
        tab_strategy: TabSortingStrategy | None = None,
    ) -> None:
        self.config = config
        self.writer = writer or FileSystemOutputWriter(config.output_dir)
        self.location_factory = location_factory or DefaultLocationProvider
        self.tab_strategy = tab_strategy

    def render(self, root: PageNode) -> list[RenderedPage]:
        """Render and write every page below ``root``.

        Returns
        -------
        list[RenderedPage]
            Rendered content pages in tree order.
        """
        location = self.location_factory(root)
        render_bubbles = should_render_source_set_bubbles(root)
        page_renderer = HtmlPageRenderer(
            self.config, location, tab_strategy=self.tab_strategy
        )
        content_pages: list[ContentPage] = []
        for page in walk_pages(root):
            match page:
                case ContentPage():
                    content_pages.append(page)
                case RendererSpecificPage(strategy=RenderingStrategy.WRITE):
                    path = location.resolve_page(page, skip_extension=True)
                    self.writer.write(path or page.name, page.text, "")
                case _:
                    logger.debug("Skipping page %s", page.name)

        def render_one(page: ContentPage) -> RenderedPage:
            return page_renderer.render_page(page, render_bubbles=render_bubbles)

        if self.config.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                rendered = list(pool.map(render_one, content_pages))
        else:
            rendered = [render_one(page) for page in content_pages]

        for result in rendered:
            self.writer.write(result.path, result.html, HTML_EXTENSION)
            if self.config.delay_template_substitution:
                self.writer.write(
                    result.path,
                    encode_manifest(result.commands).decode("utf-8"),
                    COMMAND_MANIFEST_EXTENSION,
                )
        logger.info(
            "Rendered %d page(s)%s",
            len(rendered),
            " in partial mode" if self.config.delay_template_substitution else "",
        )
        return rendered


__all__ = [
    "FileSystemOutputWriter",
    "OutputWriter",
    "SiteRenderer",
    "should_render_source_set_bubbles",
]
