"""
Page Renderer

Renders articles and the index page through the theme templates and writes
them into the output directory.
"""

from pathlib import Path, PurePosixPath
from typing import List

from jinja2 import TemplateError

from plume.contexts.content.article import Article
from plume.contexts.rendering.exceptions import PageRenderError
from plume.contexts.rendering.template_registry import TemplateRegistry
from plume.utils.site_config import SiteConfig

ARTICLE_TEMPLATE = "article.html.jinja"
INDEX_TEMPLATE = "index.html.jinja"
INDEX_URL = "index.html"


def relative_root(url: str) -> str:
    """
    Relative prefix from a page back to the site root.

    Pages link to each other relatively so the output works both from a
    bucket and from the local preview server.

    Example:
        >>> relative_root("posts/2015/hello.html")
        '../../'
    """
    depth = len(PurePosixPath(url).parts) - 1
    return "../" * depth


def render_template(registry: TemplateRegistry, template_name: str, page: str, **context) -> str:
    try:
        template = registry.get_template(template_name)
        return template.render(**context)
    except TemplateError as e:
        raise PageRenderError(
            "Failed to render page",
            page=page,
            template_path=registry.get_template_path(template_name),
            original_error=e,
        ) from e


def render_article_page(
    article: Article, registry: TemplateRegistry, site: SiteConfig, style_css: str
) -> str:
    """
    Render a full HTML page for an article.

    Args:
        article: Article to render
        registry: Template registry for the active theme
        site: Site configuration (available to templates as `site`)
        style_css: Stylesheet inlined into the page

    Returns:
        HTML document

    Raises:
        PageRenderError: If the template is missing or fails to render
    """
    return render_template(
        registry,
        ARTICLE_TEMPLATE,
        article.url,
        article=article,
        site=site,
        style_css=style_css,
        root=relative_root(article.url),
    )


def render_index_page(
    articles: List[Article], registry: TemplateRegistry, site: SiteConfig, style_css: str
) -> str:
    """Render the index page listing the given (already sorted) articles."""
    return render_template(
        registry,
        INDEX_TEMPLATE,
        INDEX_URL,
        articles=articles,
        site=site,
        style_css=style_css,
        root="",
    )


def write_page(output_dir: Path, url: str, html: str) -> Path:
    """
    Write a rendered page to output_dir/url, creating parent directories.

    Returns:
        Path of the written file
    """
    destination = output_dir / url
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(html, encoding="utf-8")
    return destination
