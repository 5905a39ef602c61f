"""Render one content page into a complete HTML document.

:class:`HtmlPageRenderer` combines the dispatcher output for a page's content
tree with the document shell in ``templates/page.jinja``: head resources,
logo, version selector, filter buttons, breadcrumbs and footer. Values the
renderer cannot know for sure (path to root, project name, versions,
navigation) are emitted as template commands, so the same call produces a
finished page in immediate mode or a page plus command list in partial mode.

Example
-------
>>> from docset_html.config import RendererConfig
>>> from docset_html.location import DefaultLocationProvider
>>> from docset_html.model import ContentPage, Group, PageNode
>>> page = ContentPage(name="Widget", content=Group())
>>> location = DefaultLocationProvider(PageNode(name="root", children=(page,)))
>>> renderer = HtmlPageRenderer(RendererConfig(module_name="demo"), location)
>>> rendered = renderer.render_page(page, render_bubbles=False)  # doctest: +SKIP
>>> rendered.path  # doctest: +SKIP
'widget'
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from docset_html._constants import (
    ATTRIBUTION_URL,
    LOGO_ICON,
    MAIN_SCRIPT,
    PATH_TO_ROOT_PATTERN,
    PROJECT_NAME_PATTERN,
)
from docset_html.logger import get_logger
from docset_html.model.nodes import with_descendants
from docset_html.model.pages import RendererSpecificPage, RenderingStrategy
from docset_html.model.source_sets import sorted_source_sets
from docset_html.renderer.assets import ResourceKind, classify_resource, is_absolute
from docset_html.renderer.dispatcher import ContentDispatcher, platform_class
from docset_html.renderer.highlighting import CodeHighlighter
from docset_html.renderer.markup import element, join_classes, text, void
from docset_html.renderer.models import RenderContext, RenderedPage
from docset_html.renderer.tabs import DefaultTabSortingStrategy, TabSortingStrategy
from docset_html.templating.commands import (
    NavigationInclude,
    PathToRootSubstitution,
    ProjectNameSubstitution,
    ReplaceVersions,
)
from docset_html.templating.emitter import CommandEmitter, make_emitter

if typ.TYPE_CHECKING:
    from docset_html.config import RendererConfig
    from docset_html.location import LocationProvider
    from docset_html.model.pages import ContentPage, PageNode

logger = get_logger()

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


class HtmlPageRenderer:
    """Turn :class:`ContentPage` objects into HTML documents."""

    def __init__(
        self,
        config: RendererConfig,
        location: LocationProvider,
        *,
        templates_dir: Path | None = None,
        tab_strategy: TabSortingStrategy | None = None,
        year: int | None = None,
    ) -> None:
        """Initialize the renderer with configuration and collaborators.

        Parameters
        ----------
        config : RendererConfig
            Run-wide rendering options.
        location : LocationProvider
            Path lookups for links, breadcrumbs and the path to root.
        templates_dir : Path, optional
            Directory containing ``page.jinja``; defaults to the package
            templates.
        tab_strategy : TabSortingStrategy, optional
            Section tab ordering; defaults to ``config.tab_order``.
        year : int, optional
            Year shown in the default footer; defaults to the current year.
        """
        self.config = config
        self.location = location
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.tab_strategy = tab_strategy or DefaultTabSortingStrategy(config.tab_order)
        self.highlighter = CodeHighlighter(config.pygments_style)
        self.year = year or dt.datetime.now(dt.UTC).year
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("page.jinja")

    @property
    def partial(self) -> bool:
        return self.config.delay_template_substitution

    def render_page(self, page: ContentPage, *, render_bubbles: bool) -> RenderedPage:
        """Render ``page`` into a document.

        Parameters
        ----------
        page : ContentPage
            The page to render.
        render_bubbles : bool
            Run-wide flag computed before any page is rendered; enables
            filter buttons, platform bookmarks and platform tags.

        Returns
        -------
        RenderedPage
            Markup plus, in partial mode, the commands it still carries.
        """
        emitter = make_emitter(partial=self.partial)
        context = RenderContext(
            page=page,
            location=self.location,
            emitter=emitter,
            highlighter=self.highlighter,
            tab_strategy=self.tab_strategy,
            render_bubbles=render_bubbles,
            partial=self.partial,
        )
        content = ContentDispatcher(context).render(page.content)
        path_to_root = self.location.path_to_root(page)
        resources = [*self.config.custom_assets, *page.embedded_resources]
        html = self.template.render(
            title=page.name,
            head_resources=self._head_resources(resources, emitter, path_to_root),
            pygments_css=self.highlighter.stylesheet,
            logo=self._logo(emitter, path_to_root),
            versions=emitter.emit(
                ReplaceVersions(current_path=self.location.resolve_page(page) or "")
            ),
            filter_buttons=self._filter_buttons(page) if render_bubbles else "",
            navigation=emitter.emit(NavigationInclude()),
            breadcrumbs=self.breadcrumbs(page),
            content=content,
            page_ids=f"{self.config.module_name}::{page.page_id}",
            footer=self._footer(),
            attribution_url=ATTRIBUTION_URL,
        )
        path = self.location.resolve_page(page, skip_extension=True) or page.name
        logger.debug("Rendered page %s", path)
        commands = emitter.commands if self.partial else []
        return RenderedPage(page=page, path=path, html=html, commands=commands)

    def _to_root(self, emitter: CommandEmitter, path_to_root: str, markup: str) -> str:
        command = PathToRootSubstitution(pattern=PATH_TO_ROOT_PATTERN, default=path_to_root)
        return emitter.emit(command, markup)

    def _head_resources(
        self, resources: list[str], emitter: CommandEmitter, path_to_root: str
    ) -> list[str]:
        root = PATH_TO_ROOT_PATTERN
        head = [
            self._to_root(
                emitter,
                path_to_root,
                void(
                    "link",
                    [("href", f"{root}{LOGO_ICON}"), ("rel", "icon"), ("type", "image/svg")],
                ),
            ),
            self._to_root(
                emitter,
                path_to_root,
                element("script", f'var pathToRoot = "{root}";'),
            ),
        ]
        for resource in resources:
            head.append(self._head_resource(resource, emitter, path_to_root))
        return head

    def _head_resource(
        self, resource: str, emitter: CommandEmitter, path_to_root: str
    ) -> str:
        kind = classify_resource(resource)
        absolute = is_absolute(resource)
        href = resource if absolute else f"{PATH_TO_ROOT_PATTERN}{resource}"
        match kind:
            case ResourceKind.STYLESHEET:
                markup = void("link", [("rel", "stylesheet"), ("href", href)])
            case ResourceKind.SCRIPT:
                deferred = not absolute and resource == MAIN_SCRIPT
                markup = element(
                    "script",
                    attributes=[
                        ("type", "text/javascript"),
                        ("src", href),
                        ("defer", deferred),
                        ("async", not deferred),
                    ],
                )
            case ResourceKind.IMAGE:
                markup = void("link", [("href", href)])
            case _:
                return resource
        if absolute:
            return markup
        return self._to_root(emitter, path_to_root, markup)

    def _logo(self, emitter: CommandEmitter, path_to_root: str) -> str:
        name = emitter.emit(
            ProjectNameSubstitution(
                pattern=PROJECT_NAME_PATTERN, default=self.config.module_name
            ),
            element("span", PROJECT_NAME_PATTERN),
        )
        link = element(
            "a", name, attributes=[("href", f"{PATH_TO_ROOT_PATTERN}index.html")]
        )
        return self._to_root(emitter, path_to_root, link)

    def _filter_buttons(self, page: ContentPage) -> str:
        source_sets = {
            source_set
            for node in with_descendants(page.content)
            for source_set in node.source_sets
        }
        buttons = "".join(
            element(
                "button",
                text(source_set.name),
                classes=join_classes(
                    "platform-tag platform-selector", platform_class(source_set)
                ),
                attributes=[
                    ("data-active", True),
                    ("data-filter", source_set.source_set_id),
                ],
            )
            for source_set in sorted_source_sets(source_sets)
        )
        return element(
            "div", buttons, classes="filter-section", attributes=[("id", "filter-section")]
        )

    def breadcrumbs(self, page: PageNode) -> str:
        """Return the breadcrumb trail from the root page down to ``page``.

        Renderer-specific pages are skipped whatever their strategy;
        ``do-nothing`` pages appear as plain text. A trail of a single page
        renders no entries.
        """
        trail = [
            node
            for node in reversed(self.location.ancestors(page))
            if not isinstance(node, RendererSpecificPage)
        ]
        entries = ""
        if len(trail) > 1:
            entries = "/".join(self._breadcrumb(node, page) for node in trail)
        return element("div", entries, classes="breadcrumbs")

    def _breadcrumb(self, node: PageNode, page: PageNode) -> str:
        if node.strategy is RenderingStrategy.DO_NOTHING:
            return text(node.name)
        path = self.location.resolve_page(node, page)
        if path is None:
            return element(
                "span", text(node.name), attributes=[("data-unresolved-link", node.name)]
            )
        return element("a", text(node.name), attributes=[("href", path)])

    def _footer(self) -> str:
        if self.config.footer_message:
            return self.highlighter.markdown(self.config.footer_message)
        return f"© {self.year} Copyright"


__all__ = ["DEFAULT_TEMPLATES_DIR", "HtmlPageRenderer"]
