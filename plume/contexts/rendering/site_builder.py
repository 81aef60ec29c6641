"""
Site Builder

Builds the complete static site from a content directory:

    1. Clears and recreates the output directory
    2. Renders every non-draft markdown source to output/<path>.html
    3. Copies static files (images, downloads, ...) unchanged
    4. Writes index.html (unless a source already produced it)
    5. Writes the RSS and Atom feeds
    6. Optionally writes the GitHub language stats script
"""

import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import httpx

from plume.contexts.content.article import build_article, is_draft, published_articles
from plume.contexts.content.exceptions import MetadataError
from plume.contexts.content.logger import log_sources_discovered
from plume.contexts.content.markdown_renderer import MarkdownRenderer
from plume.contexts.content.source_reader import iter_static_files, read_source_files
from plume.contexts.rendering.exceptions import PageRenderError
from plume.contexts.rendering.feeds import write_feeds
from plume.contexts.rendering.logger import (
    _log_debug,
    _log_error,
    _log_info,
    _log_warning,
    log_build_result,
    log_build_start,
    setup_build_logger,
)
from plume.contexts.rendering.page_renderer import (
    INDEX_URL,
    render_article_page,
    render_index_page,
    write_page,
)
from plume.contexts.rendering.template_registry import TemplateRegistry
from plume.contexts.stats.github_languages import write_language_stats
from plume.utils.event_logging import LOGS_PATH, log_site_event
from plume.utils.site_config import SiteConfig
from plume.utils.timestamp import now


@dataclass
class BuildResult:
    """
    Result of a site build.

    Attributes:
        success: Whether the build completed
        output_dir: Directory the site was written to
        pages_written: Number of article pages written (index not included)
        drafts_skipped: Number of sources skipped because of `status: draft`
        static_files_copied: Number of static files copied
        feeds: Paths of the written feeds
        index_path: Path of the generated index page (None if a source provided it)
        stats_path: Path of the language stats script (None if not requested)
        errors: Error messages (empty on success)
        time_s: Build duration in seconds
        log_dir: Session log directory
    """

    success: bool
    output_dir: Path
    pages_written: int = 0
    drafts_skipped: int = 0
    static_files_copied: int = 0
    feeds: List[Path] = field(default_factory=list)
    index_path: Optional[Path] = None
    stats_path: Optional[Path] = None
    errors: List[str] = field(default_factory=list)
    time_s: float = 0.0
    log_dir: Optional[Path] = None


def prepare_output_dir(output_dir: Path) -> None:
    """Remove the output directory (if present) and recreate it empty."""
    if output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True)


def copy_static_files(input_dir: Path, output_dir: Path) -> int:
    """
    Copy every static file from the content directory into the output.

    Returns:
        Number of files copied
    """
    count = 0
    for relative in iter_static_files(input_dir):
        destination = output_dir / relative
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(input_dir / relative, destination)
        count += 1
    _log_debug(f"Copied {count} static files")
    return count


def _render_site(
    input_dir: Path,
    output_dir: Path,
    config: SiteConfig,
    github_stats: bool,
    result: BuildResult,
) -> None:
    registry = TemplateRegistry(config.theme_dir)
    style_css = registry.read_stylesheet()
    renderer = MarkdownRenderer()

    sources = read_source_files(input_dir)
    static_files = list(iter_static_files(input_dir))
    log_sources_discovered(input_dir, len(sources), len(static_files))

    prepare_output_dir(output_dir)

    articles = []
    for source in sources:
        if is_draft(source):
            _log_debug(f"Skipping draft: {source.path}")
            result.drafts_skipped += 1
            continue

        article = build_article(source, renderer)
        html = render_article_page(article, registry, config, style_css)
        write_page(output_dir, article.url, html)
        _log_debug(f"Wrote {article.url}")
        articles.append(article)

    result.pages_written = len(articles)
    result.static_files_copied = copy_static_files(input_dir, output_dir)

    if any(article.url == INDEX_URL for article in articles):
        _log_warning(f"A source already produced {INDEX_URL}; not generating the index page")
    else:
        index_html = render_index_page(published_articles(articles), registry, config, style_css)
        result.index_path = write_page(output_dir, INDEX_URL, index_html)

    result.feeds = write_feeds(config, articles, output_dir, registry)

    if github_stats:
        result.stats_path = write_language_stats(config, output_dir)
        _log_info(f"Language stats written to {result.stats_path}")


def build_site(
    input_dir: Path,
    output_dir: Path,
    config: Optional[SiteConfig] = None,
    github_stats: bool = False,
    log_dir: Optional[Path] = None,
    verbose: bool = False,
) -> BuildResult:
    """
    Build the site with logging and event tracking.

    Orchestration function: sets up a timestamped log session, records
    start/completion/failure in the site event log (Tier 2 logging), and
    turns content and render errors into a failed BuildResult.

    Args:
        input_dir: Content directory with markdown sources and static files
        output_dir: Output directory (removed and recreated)
        config: Site configuration (default: SiteConfig defaults)
        github_stats: Also write the GitHub language stats script
        log_dir: Session log directory (default: LOGS_PATH/build_<timestamp>)
        verbose: Log every error instead of the first few

    Returns:
        BuildResult with counts, written paths, and errors
    """
    input_dir = Path(input_dir).resolve()
    output_dir = Path(output_dir).resolve()
    config = config or SiteConfig()

    if not input_dir.is_dir():
        return BuildResult(
            success=False,
            output_dir=output_dir,
            errors=[f"Input directory not found: {input_dir}"],
        )

    if output_dir == input_dir or output_dir in input_dir.parents:
        return BuildResult(
            success=False,
            output_dir=output_dir,
            errors=[f"Output directory must not contain the input directory: {output_dir}"],
        )

    # Rendered pages would be picked up again as static files
    if input_dir in output_dir.parents:
        return BuildResult(
            success=False,
            output_dir=output_dir,
            errors=[f"Output directory must not be inside the input directory: {output_dir}"],
        )

    if log_dir is None:
        log_dir = LOGS_PATH / f"build_{now()}"
    log_dir = Path(log_dir)

    setup_build_logger(log_dir, input_dir, output_dir)
    log_build_start(input_dir, output_dir, config.siteurl)

    log_site_event(
        event_type="build_started",
        source="rendering",
        input_dir=str(input_dir),
        output_dir=str(output_dir),
    )

    result = BuildResult(success=True, output_dir=output_dir, log_dir=log_dir)
    start_time = time.time()

    try:
        _render_site(input_dir, output_dir, config, github_stats, result)
    except (MetadataError, PageRenderError, OSError, ValueError, httpx.HTTPError) as e:
        result.success = False
        result.errors.append(str(e))

    result.time_s = time.time() - start_time

    log_build_result(result, result.time_s, verbose=verbose)

    if result.success:
        log_site_event(
            event_type="build_completed",
            source="rendering",
            output_dir=str(output_dir),
            build_time_s=round(result.time_s, 2),
            pages_written=result.pages_written,
            drafts_skipped=result.drafts_skipped,
            static_files_copied=result.static_files_copied,
        )
    else:
        _log_error(f"Build logs kept in {log_dir}")
        log_site_event(
            event_type="build_failed",
            source="rendering",
            output_dir=str(output_dir),
            build_time_s=round(result.time_s, 2),
            errors=result.errors[:5],
        )

    return result
