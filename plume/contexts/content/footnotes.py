"""
Bottom Footnotes

Python-Markdown extension rendering footnotes as bottom-notes, in the style of
GitHub comments.

Markdown:

    test [^1] [^2]

    [^2]: second used, first defined
    [^1]: test

HTML:

    <p>test <sup class="footnote-reference" id="fr-1-1"><a href="#fn-1">[1]</a></sup>
    <sup class="footnote-reference" id="fr-2-1"><a href="#fn-2">[2]</a></sup></p>
    <hr>
    <ol class="footnotes-list">
    <li id="fn-1">
    <p>test <a href="#fr-1-1">↩</a></p>
    </li>
    <li id="fn-2">
    <p>second used, first defined <a href="#fr-2-1">↩</a></p>
    </li>
    </ol>

Footnotes are numbered and listed by order of first reference, not by the
order of their definitions. Unreferenced definitions are omitted. Backrefs go
into the final paragraph of a definition when it ends with one, otherwise
after its last block.

Processing happens in three steps:
1. A block processor replaces each definition with a marked container, in place.
2. An inline processor turns references to defined names into marked <sup> elements.
3. After inline processing, a tree processor walks the document in order,
   numbers the references, lifts the definitions out, and appends the list.
"""

import re
import xml.etree.ElementTree as etree

from markdown.blockprocessors import BlockProcessor
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.treeprocessors import Treeprocessor

FOOTNOTE_REFERENCE_PATTERN = r"\[\^([^\]\s]+)\]"

# Marker attributes, removed again by the tree processor
REFERENCE_ATTRIBUTE = "data-footnote-reference"
DEFINITION_ATTRIBUTE = "data-footnote-definition"


class BottomFootnoteExtension(Extension):
    """Registers the bottom-footnote processors and tracks defined names per document."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.defined_names = set()

    def extendMarkdown(self, md):
        md.registerExtension(self)
        # Above the link reference processor (15), which would claim "[^1]: ..."
        md.parser.blockprocessors.register(
            FootnoteDefinitionProcessor(md.parser, self), "bottom_footnote_definition", 17
        )
        # Above reference links (170)
        md.inlinePatterns.register(
            FootnoteReferenceProcessor(FOOTNOTE_REFERENCE_PATTERN, md, self),
            "bottom_footnote_reference",
            175,
        )
        # After inline (20), before prettify (10)
        md.treeprocessors.register(BottomFootnoteTreeprocessor(md), "bottom_footnotes", 15)

    def reset(self):
        self.defined_names = set()


class FootnoteDefinitionProcessor(BlockProcessor):
    """Replace `[^name]: text` definitions (plus indented continuation blocks) with marked containers."""

    RE = re.compile(r"^[ ]{0,3}\[\^([^\]\s]+)\]:[ ]*(.*)$", re.MULTILINE)

    def __init__(self, parser, footnotes: BottomFootnoteExtension):
        super().__init__(parser)
        self.footnotes = footnotes

    def test(self, parent, block):
        return True

    def run(self, parent, blocks):
        block = blocks.pop(0)
        match = self.RE.search(block)
        if not match:
            blocks.insert(0, block)
            return False

        before = block[: match.start()].rstrip("\n")
        if before:
            self.parser.parseBlocks(parent, [before])

        name = match.group(1)
        remainder = block[match.end():]

        # Another definition later in the same block ends this one
        following = self.RE.search(remainder)
        if following:
            blocks.insert(0, remainder[following.start():])
            remainder = remainder[: following.start()]

        lines = [match.group(2)]
        lines.extend(_strip_indent(line) for line in remainder.split("\n")[1:])
        body = ["\n".join(lines).rstrip("\n")]

        if not following:
            while blocks and blocks[0].startswith(("    ", "\t")):
                indented, rest = self.detab(blocks.pop(0))
                body.append(indented)
                if rest:
                    blocks.insert(0, rest)
                    break

        if name in self.footnotes.defined_names:
            # First definition wins
            return True

        self.footnotes.defined_names.add(name)
        container = etree.SubElement(parent, "div")
        container.set(DEFINITION_ATTRIBUTE, name)
        self.parser.parseChunk(container, "\n\n".join(body))
        return True


class FootnoteReferenceProcessor(InlineProcessor):
    """Mark `[^name]` references; references to undefined names stay literal text."""

    def __init__(self, pattern, md, footnotes: BottomFootnoteExtension):
        super().__init__(pattern, md)
        self.footnotes = footnotes

    def handleMatch(self, m, data):
        name = m.group(1)
        if name not in self.footnotes.defined_names:
            return None, None, None

        reference = etree.Element("sup")
        reference.set(REFERENCE_ATTRIBUTE, name)
        return reference, m.start(0), m.end(0)


class BottomFootnoteTreeprocessor(Treeprocessor):
    """Number references in document order and move used definitions to the bottom list."""

    def run(self, root):
        parents = {child: parent for parent in root.iter() for child in parent}
        # name -> [number, usage count]
        numbers = {}
        definitions = {}

        for element in list(root.iter()):
            name = element.attrib.pop(REFERENCE_ATTRIBUTE, None)
            if name is not None:
                _number_reference(element, name, numbers)
                continue

            name = element.attrib.pop(DEFINITION_ATTRIBUTE, None)
            if name is not None:
                parents[element].remove(element)
                definitions.setdefault(name, element)

        used = sorted(
            (number, name) for name, (number, _) in numbers.items() if name in definitions
        )
        if not used:
            return

        etree.SubElement(root, "hr")
        footnote_list = etree.SubElement(root, "ol")
        footnote_list.set("class", "footnotes-list")

        for _, name in used:
            definition = definitions[name]
            item = etree.SubElement(footnote_list, "li")
            item.set("id", f"fn-{name}")
            item.text = definition.text
            item.extend(list(definition))
            _append_backrefs(item, name, numbers[name][1])


def _number_reference(reference: etree.Element, name: str, numbers: dict) -> None:
    entry = numbers.setdefault(name, [len(numbers) + 1, 0])
    entry[1] += 1
    number, usage = entry

    reference.set("class", "footnote-reference")
    reference.set("id", f"fr-{name}-{usage}")
    link = etree.SubElement(reference, "a")
    link.set("href", f"#fn-{name}")
    link.text = f"[{number}]"


def _append_backrefs(item: etree.Element, name: str, usage_count: int) -> None:
    target = item
    if len(item) and item[-1].tag == "p":
        target = item[-1]

    for usage in range(1, usage_count + 1):
        _append_text(target, " ")
        backref = etree.SubElement(target, "a")
        backref.set("href", f"#fr-{name}-{usage}")
        backref.text = "↩" if usage == 1 else f"↩{usage}"


def _append_text(element: etree.Element, text: str) -> None:
    """Append text after the last child of element (or to its text if childless)."""
    if len(element):
        last = element[-1]
        last.tail = (last.tail or "") + text
    else:
        element.text = (element.text or "") + text


def _strip_indent(line: str) -> str:
    if line.startswith("\t"):
        return line[1:]
    return line[4:] if line.startswith("    ") else line.lstrip(" ")
