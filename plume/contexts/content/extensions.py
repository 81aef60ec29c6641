"""
Markdown Extensions

Small Python-Markdown extensions used by the site renderer:
- MathExtension: $inline$ and $$display$$ math as classed spans
- LinkMarkerExtension: strips the leading "!" archive marker from link targets
"""

import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.treeprocessors import Treeprocessor
from markdown.util import AtomicString

DISPLAY_MATH_PATTERN = r"(?<!\\)\$\$(.+?)\$\$"
# Opening $ not followed by whitespace, closing $ not preceded by whitespace or followed by a digit
INLINE_MATH_PATTERN = r"(?<![\\$])\$(?![\s$])(.+?)(?<![\s\\])\$(?![$\d])"

LINK_MARKER = "!"


class MathInlineProcessor(InlineProcessor):
    """Wrap math source in a span; the source itself is never parsed as markdown."""

    def __init__(self, pattern, md, display: bool = False):
        super().__init__(pattern, md)
        self.display = display

    def handleMatch(self, m, data):
        span = etree.Element("span")
        span.set("class", "math math-display" if self.display else "math math-inline")
        span.text = AtomicString(m.group(1))
        return span, m.start(0), m.end(0)


class MathExtension(Extension):
    """Render `$x$` as <span class="math math-inline"> and `$$x$$` as <span class="math math-display">."""

    def extendMarkdown(self, md):
        # \$ renders as a literal dollar
        if "$" not in md.ESCAPED_CHARS:
            md.ESCAPED_CHARS.append("$")
        # Below backticks (190) so code spans keep their dollars, above escapes (180)
        md.inlinePatterns.register(
            MathInlineProcessor(DISPLAY_MATH_PATTERN, md, display=True), "math_display", 186
        )
        md.inlinePatterns.register(
            MathInlineProcessor(INLINE_MATH_PATTERN, md, display=False), "math_inline", 185
        )


class LinkMarkerTreeprocessor(Treeprocessor):
    """Remove leading archive markers from every link target."""

    def run(self, root):
        for link in root.iter("a"):
            href = link.get("href")
            if href and href.startswith(LINK_MARKER):
                link.set("href", href.lstrip(LINK_MARKER))


class LinkMarkerExtension(Extension):
    """
    Links may be written as `[text](!https://example.com)` to mark them for
    archiving. Archiving is not implemented; the marker is dropped so the link
    points at the live URL.
    """

    def extendMarkdown(self, md):
        md.treeprocessors.register(LinkMarkerTreeprocessor(md), "link_marker", 16)
