"""
Feed Generation

Writes the RSS 2.0 and Atom feeds for the newest published articles.

Both feeds hold at most `max_feed_entries` entries. Entry links are absolute:
the site URL joined with the article URL.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from plume.contexts.content.article import Article, published_articles
from plume.contexts.rendering.logger import _log_warning
from plume.contexts.rendering.page_renderer import render_template, write_page
from plume.contexts.rendering.template_registry import TemplateRegistry
from plume.utils.site_config import SiteConfig
from plume.utils.text_processing import join_url
from plume.utils.timestamp import to_rfc2822, to_rfc3339

RSS_TEMPLATE = "rss.xml.jinja"
ATOM_TEMPLATE = "atom.xml.jinja"


def _feed_articles(site: SiteConfig, articles: Iterable[Article]) -> List[Article]:
    return published_articles(articles)[: site.max_feed_entries]


def render_rss(
    site: SiteConfig,
    articles: Iterable[Article],
    registry: TemplateRegistry,
    build_time: Optional[datetime] = None,
) -> str:
    """
    Render the RSS 2.0 feed.

    Args:
        site: Site configuration
        articles: Candidate articles (drafts and undated articles are ignored)
        registry: Template registry for the active theme
        build_time: Channel lastBuildDate (default: now)

    Returns:
        RSS document
    """
    build_time = build_time or datetime.now(timezone.utc)
    items = [
        {
            "title": article.title,
            "url": join_url(site.siteurl, article.url),
            "summary": article.summary,
            "pub_date": to_rfc2822(article.timestamp),
        }
        for article in _feed_articles(site, articles)
    ]
    return render_template(
        registry,
        RSS_TEMPLATE,
        site.feed_all_rss,
        site=site,
        items=items,
        last_build_date=to_rfc2822(build_time),
    )


def render_atom(
    site: SiteConfig,
    articles: Iterable[Article],
    registry: TemplateRegistry,
    build_time: Optional[datetime] = None,
) -> str:
    """Render the Atom feed (same entries as the RSS feed)."""
    build_time = build_time or datetime.now(timezone.utc)
    entries = [
        {
            "title": article.title,
            "url": join_url(site.siteurl, article.url),
            "summary": article.summary,
            "updated": to_rfc3339(article.timestamp),
        }
        for article in _feed_articles(site, articles)
    ]
    return render_template(
        registry,
        ATOM_TEMPLATE,
        site.feed_all_atom,
        site=site,
        entries=entries,
        updated=to_rfc3339(build_time),
    )


def write_feeds(
    site: SiteConfig,
    articles: Iterable[Article],
    output_dir: Path,
    registry: TemplateRegistry,
    build_time: Optional[datetime] = None,
) -> List[Path]:
    """
    Write both feeds into the output directory.

    Returns:
        Paths of the written feeds (RSS first, then Atom)
    """
    articles = list(articles)
    build_time = build_time or datetime.now(timezone.utc)

    if not site.siteurl:
        _log_warning("siteurl is not set; feed links will be relative to the site root")

    rss_path = write_page(
        output_dir, site.feed_all_rss, render_rss(site, articles, registry, build_time)
    )
    atom_path = write_page(
        output_dir, site.feed_all_atom, render_atom(site, articles, registry, build_time)
    )
    return [rss_path, atom_path]
