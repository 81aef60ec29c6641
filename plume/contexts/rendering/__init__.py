"""
Rendering Context

Responsibilities:
- Renders articles and the index page through the Jinja2 theme
- Writes the RSS and Atom feeds
- Orchestrates complete site builds (build_site)

Owns: Output directory layout, theme templates
Never: Parses markdown sources directly (uses the content context)
"""

from plume.contexts.rendering.exceptions import PageRenderError
from plume.contexts.rendering.feeds import render_atom, render_rss, write_feeds
from plume.contexts.rendering.page_renderer import (
    relative_root,
    render_article_page,
    render_index_page,
    write_page,
)
from plume.contexts.rendering.site_builder import BuildResult, build_site
from plume.contexts.rendering.template_registry import TemplateRegistry

__all__ = [
    "BuildResult",
    "build_site",
    "TemplateRegistry",
    "PageRenderError",
    "relative_root",
    "render_article_page",
    "render_index_page",
    "write_page",
    "render_rss",
    "render_atom",
    "write_feeds",
]
