"""
Content Context

Responsibilities:
- Discovers markdown sources and static files in the content directory
- Parses metadata headers
- Renders markdown to HTML (tables, math, bottom footnotes, link markers)
- Builds Article objects

Owns: Source format, markdown dialect, article model
Never: Writes to the output directory
"""

from plume.contexts.content.article import (
    Article,
    build_article,
    is_draft,
    published_articles,
)
from plume.contexts.content.exceptions import MetadataError
from plume.contexts.content.markdown_renderer import MarkdownRenderer, render_markdown
from plume.contexts.content.source_reader import (
    SourceFile,
    iter_static_files,
    parse_source_text,
    read_source_files,
)

__all__ = [
    # Sources
    "SourceFile",
    "parse_source_text",
    "read_source_files",
    "iter_static_files",
    # Markdown
    "MarkdownRenderer",
    "render_markdown",
    # Articles
    "Article",
    "build_article",
    "is_draft",
    "published_articles",
    "MetadataError",
]
