"""
Source Reader

Discovers markdown sources under the content directory and splits each one
into its metadata header and markdown body.

Source file format:

    title: Hello World
    date: 2015-03-21 12:00
    status: draft

    Markdown body starts after the first blank line.
"""

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Dict, Iterator, List, Tuple

from plume.contexts.content.exceptions import MetadataError
from plume.contexts.content.logger import _log_debug
from plume.utils.text_processing import is_hidden

MARKDOWN_SUFFIXES = {".md", ".markdown"}
METADATA_SEPARATOR = ": "


@dataclass
class SourceFile:
    """
    A markdown source split into metadata and body.

    Attributes:
        path: Path relative to the root of the website, without extension
        markdown: Markdown contents of the file (everything after the header)
        metadata: Header fields, keys kept verbatim
        source_path: Filesystem path the source was read from
    """

    path: PurePosixPath
    markdown: str
    metadata: Dict[str, str] = field(default_factory=dict)
    source_path: Path = None


def parse_source_text(text: str, source_path: Path = None) -> Tuple[Dict[str, str], str]:
    """
    Split source text into its metadata header and markdown body.

    The header ends at the first blank line. Every header line must be a
    `key: value` pair and the header must contain a `title` key.

    Args:
        text: Full contents of the source file
        source_path: Source location, used in error messages

    Returns:
        (metadata, markdown) tuple

    Raises:
        MetadataError: If the header is missing, malformed, or has no title
    """
    text = text.replace("\r\n", "\n")

    header, separator, markdown = text.partition("\n\n")
    if not separator:
        raise MetadataError("Must have metadata!", source_path=source_path)

    metadata = {}
    for line in header.split("\n"):
        key, separator, value = line.partition(METADATA_SEPARATOR)
        if not separator:
            raise MetadataError(
                "Metadata must be : delimited", source_path=source_path, line=line
            )
        metadata[key] = value

    if "title" not in metadata:
        raise MetadataError("Must have title!", source_path=source_path)

    return metadata, markdown


def read_source_file(source_path: Path, prefix: PurePosixPath = PurePosixPath()) -> SourceFile:
    """Read and parse a single markdown source located under `prefix`."""
    text = source_path.read_text(encoding="utf-8")
    metadata, markdown = parse_source_text(text, source_path)
    _log_debug(f"Read {source_path.name}: {len(metadata)} metadata fields")
    return SourceFile(
        path=prefix / source_path.stem,
        markdown=markdown,
        metadata=metadata,
        source_path=source_path,
    )


def read_source_files(current: Path, prefix: PurePosixPath = PurePosixPath()) -> List[SourceFile]:
    """
    Recursively read all markdown sources below a directory.

    Directories extend the prefix, so `content/posts/hello.md` read from
    `content/` yields a SourceFile with path `posts/hello`. Entries are visited
    in sorted order; hidden files and directories are skipped.

    Args:
        current: Directory to scan
        prefix: Site-relative path of `current`

    Returns:
        List of parsed SourceFile objects

    Raises:
        MetadataError: If any source has an invalid metadata header
    """
    files = []

    for entry in sorted(current.iterdir()):
        if entry.name.startswith("."):
            continue
        if entry.is_dir():
            files.extend(read_source_files(entry, prefix / entry.name))
        elif entry.suffix in MARKDOWN_SUFFIXES:
            files.append(read_source_file(entry, prefix))

    return files


def iter_static_files(root: Path) -> Iterator[PurePosixPath]:
    """
    Yield every non-markdown, non-hidden file below root, relative to root.

    These files (images, downloads, etc.) are copied to the output unchanged.
    """
    for path in sorted(root.rglob("*")):
        if not path.is_file() or path.suffix in MARKDOWN_SUFFIXES:
            continue
        relative = PurePosixPath(path.relative_to(root).as_posix())
        if is_hidden(relative):
            continue
        yield relative
