"""Dispatch, variant deduplication and page assembly for docset_html."""

from .dispatcher import ContentDispatcher
from .highlighting import CodeHighlighter
from .models import RenderContext, RenderedPage
from .page_renderer import HtmlPageRenderer
from .site import (
    FileSystemOutputWriter,
    OutputWriter,
    SiteRenderer,
    should_render_source_set_bubbles,
)
from .tabs import DefaultTabSortingStrategy, TabSortingStrategy, sort_tabs
from .variants import RenderedVariantGroup, VariantDeduplicator

__all__ = [
    "CodeHighlighter",
    "ContentDispatcher",
    "DefaultTabSortingStrategy",
    "FileSystemOutputWriter",
    "HtmlPageRenderer",
    "OutputWriter",
    "RenderContext",
    "RenderedPage",
    "RenderedVariantGroup",
    "SiteRenderer",
    "TabSortingStrategy",
    "VariantDeduplicator",
    "should_render_source_set_bubbles",
    "sort_tabs",
]
