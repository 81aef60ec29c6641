"""
Article Model

Turns a parsed SourceFile into a renderable Article: title, URL, HTML
content, summary, timestamp, and publication status.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from plume.contexts.content.exceptions import MetadataError
from plume.contexts.content.logger import _log_warning
from plume.contexts.content.markdown_renderer import MarkdownRenderer
from plume.contexts.content.source_reader import SourceFile
from plume.utils.text_processing import first_paragraph
from plume.utils.timestamp import parse_article_date

STATUS_PUBLISHED = "published"
STATUS_DRAFT = "draft"


@dataclass
class Article:
    """
    A rendered article.

    Attributes:
        title: Article title from metadata
        url: Site-relative URL of the rendered page (e.g., "posts/hello.html")
        content: Rendered HTML body
        summary: HTML summary (summary metadata, or first paragraph of content)
        timestamp: Publication time, naive and interpreted as UTC (None if undated)
        status: Publication status ("published" or "draft")
        metadata: Raw metadata header
        source_path: Source file the article was built from
    """

    title: str
    url: str
    content: str
    summary: str = ""
    timestamp: Optional[datetime] = None
    status: str = STATUS_PUBLISHED
    metadata: Dict[str, str] = field(default_factory=dict)
    source_path: Optional[Path] = None

    @property
    def is_draft(self) -> bool:
        return self.status == STATUS_DRAFT

    @property
    def is_published(self) -> bool:
        """Published articles are dated and not drafts; only these are listed and syndicated."""
        return self.timestamp is not None and not self.is_draft


def is_draft(source: SourceFile) -> bool:
    """True if the source is marked `status: draft`."""
    return source.metadata.get("status") == STATUS_DRAFT


def build_article(source: SourceFile, renderer: Optional[MarkdownRenderer] = None) -> Article:
    """
    Build an Article from a parsed source.

    Args:
        source: Parsed markdown source
        renderer: Markdown renderer to reuse (default: a new one)

    Returns:
        Article with rendered content and summary

    Raises:
        MetadataError: If the title is missing or the date cannot be parsed
    """
    renderer = renderer or MarkdownRenderer()

    title = source.metadata.get("title")
    if title is None:
        raise MetadataError("Must have title!", source_path=source.source_path)

    timestamp = None
    raw_date = source.metadata.get("date")
    if raw_date is not None:
        timestamp = parse_article_date(raw_date)
        if timestamp is None:
            raise MetadataError(
                f"Unrecognized date format: {raw_date!r}",
                source_path=source.source_path,
                line=f"date: {raw_date}",
            )

    content = renderer.render(source.markdown)

    raw_summary = source.metadata.get("summary")
    if raw_summary:
        summary = renderer.render(raw_summary)
    else:
        summary = first_paragraph(content) or ""
        if not summary and timestamp is not None:
            _log_warning(f"{source.path}: no summary metadata and no paragraph to summarize")

    return Article(
        title=title,
        url=f"{source.path.as_posix()}.html",
        content=content,
        summary=summary,
        timestamp=timestamp,
        status=source.metadata.get("status", STATUS_PUBLISHED),
        metadata=dict(source.metadata),
        source_path=source.source_path,
    )


def published_articles(articles: Iterable[Article]) -> List[Article]:
    """Dated, non-draft articles, newest first."""
    published = [article for article in articles if article.is_published]
    return sorted(published, key=lambda article: article.timestamp, reverse=True)
