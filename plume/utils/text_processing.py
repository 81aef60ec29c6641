"""
Text processing utilities for rendered HTML and URLs.
"""

import re
from pathlib import PurePosixPath
from typing import Optional

FIRST_PARAGRAPH_PATTERN = re.compile(r"<p>(.*?)</p>", re.DOTALL)


def first_paragraph(html: str) -> Optional[str]:
    """
    Extract the first paragraph element of an HTML fragment.

    Args:
        html: Rendered HTML

    Returns:
        The first <p>...</p> element including its tags, or None if there is none

    Example:
        >>> first_paragraph("<h1>Title</h1>\\n<p>Intro <em>text</em></p><p>More</p>")
        '<p>Intro <em>text</em></p>'
    """
    match = FIRST_PARAGRAPH_PATTERN.search(html)
    return match.group(0) if match else None


def join_url(base: str, path: str) -> str:
    """
    Join a site URL and a relative path with exactly one slash.

    Example:
        >>> join_url("https://example.com/", "/posts/hello.html")
        'https://example.com/posts/hello.html'
    """
    if not base:
        return "/" + path.lstrip("/")
    return base.rstrip("/") + "/" + path.lstrip("/")


def is_hidden(relative_path: PurePosixPath) -> bool:
    """True if any component of the path starts with a dot (e.g., .DS_Store, .git/)."""
    return any(part.startswith(".") for part in relative_path.parts)
