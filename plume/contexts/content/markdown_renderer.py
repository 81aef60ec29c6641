"""
Markdown Renderer

Converts markdown bodies to HTML with Python-Markdown. Enabled features:
tables, fenced code, math, link markers, and bottom footnotes.
"""

from typing import List, Optional

import markdown

from plume.contexts.content.extensions import LinkMarkerExtension, MathExtension
from plume.contexts.content.footnotes import BottomFootnoteExtension

BUILTIN_EXTENSIONS = ["tables", "fenced_code"]


class MarkdownRenderer:
    """
    Reusable markdown converter.

    One Markdown instance is kept and reset between documents, so footnote
    numbering and other per-document state never leak across articles.
    """

    def __init__(self, extra_extensions: Optional[List] = None):
        extensions = BUILTIN_EXTENSIONS + [
            MathExtension(),
            LinkMarkerExtension(),
            BottomFootnoteExtension(),
        ]
        if extra_extensions:
            extensions.extend(extra_extensions)

        self.md = markdown.Markdown(extensions=extensions, output_format="html")

    def render(self, text: str) -> str:
        """
        Render a markdown document to an HTML fragment.

        Args:
            text: Markdown source

        Returns:
            HTML string (no surrounding <html>/<body>)
        """
        self.md.reset()
        return self.md.convert(text)


def render_markdown(text: str) -> str:
    """Render markdown with a fresh renderer (convenience for one-off conversions)."""
    return MarkdownRenderer().render(text)
