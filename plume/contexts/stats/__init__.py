"""
Stats Context

Responsibilities:
- Collects language byte counts from the GitHub API
- Renders them as a JavaScript snippet served with the site

Owns: GitHub API access
Never: Renders pages or feeds
"""

from plume.contexts.stats.github_languages import (
    fetch_bytes_per_language,
    format_languages_js,
    write_language_stats,
)

__all__ = [
    "fetch_bytes_per_language",
    "format_languages_js",
    "write_language_stats",
]
