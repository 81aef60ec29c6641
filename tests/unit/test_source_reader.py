"""Unit tests for source discovery and metadata parsing."""

from pathlib import PurePosixPath

import pytest

from plume.contexts.content.exceptions import MetadataError
from plume.contexts.content.source_reader import (
    iter_static_files,
    parse_source_text,
    read_source_files,
)


@pytest.mark.unit
def test_parse_source_text_splits_header_and_body():
    """Test splitting metadata header and markdown body."""
    metadata, markdown = parse_source_text(
        "title: Hello\ndate: 2015-03-21\n\n# Heading\n\nBody text.\n"
    )

    assert metadata == {"title": "Hello", "date": "2015-03-21"}
    assert markdown == "# Heading\n\nBody text.\n"


@pytest.mark.unit
def test_parse_source_text_keeps_colons_in_values():
    """Test metadata values containing colons."""
    metadata, _ = parse_source_text("title: Rust: a retrospective\n\nbody")
    assert metadata["title"] == "Rust: a retrospective"


@pytest.mark.unit
def test_parse_source_text_normalizes_crlf():
    """Test CRLF line ending normalization."""
    metadata, markdown = parse_source_text("title: Hello\r\n\r\nBody\r\n")
    assert metadata == {"title": "Hello"}
    assert markdown == "Body\n"


@pytest.mark.unit
def test_parse_source_text_requires_metadata():
    """Test that a source without a header raises MetadataError."""
    with pytest.raises(MetadataError, match="Must have metadata!"):
        parse_source_text("title: Hello\nno blank line follows")


@pytest.mark.unit
def test_parse_source_text_rejects_malformed_line():
    """Test that a malformed header line raises MetadataError."""
    with pytest.raises(MetadataError, match="Metadata must be : delimited") as exc_info:
        parse_source_text("title: Hello\njust some words\n\nbody")

    assert exc_info.value.line == "just some words"


@pytest.mark.unit
def test_parse_source_text_requires_title():
    """Test that a header without a title raises MetadataError."""
    with pytest.raises(MetadataError, match="Must have title!"):
        parse_source_text("date: 2015-03-21\n\nbody")


@pytest.mark.unit
def test_metadata_error_mentions_source(tmp_path):
    """Test that MetadataError names the source file."""
    source = tmp_path / "broken.md"
    error = MetadataError("Must have title!", source_path=source)
    assert str(source) in str(error)


@pytest.mark.unit
def test_read_source_files_walks_subdirectories(content_dir):
    """Test recursive source discovery."""
    sources = read_source_files(content_dir)
    paths = [source.path for source in sources]

    assert paths == [
        PurePosixPath("about"),
        PurePosixPath("hello"),
        PurePosixPath("posts/second"),
        PurePosixPath("posts/wip"),
    ]


@pytest.mark.unit
def test_read_source_files_records_source_path(content_dir):
    """Test that sources keep their filesystem path."""
    sources = {source.path.as_posix(): source for source in read_source_files(content_dir)}

    second = sources["posts/second"]
    assert second.source_path == content_dir / "posts" / "second.markdown"
    assert second.metadata["summary"] == "A *short* summary"
    assert second.markdown.startswith("Body with a note")


@pytest.mark.unit
def test_read_source_files_propagates_metadata_errors(tmp_path):
    """Test that metadata errors are raised from discovery."""
    (tmp_path / "bad.md").write_text("no header at all", encoding="utf-8")

    with pytest.raises(MetadataError):
        read_source_files(tmp_path)


@pytest.mark.unit
def test_iter_static_files_skips_markdown_and_hidden(content_dir):
    """Test static file discovery."""
    assert list(iter_static_files(content_dir)) == [PurePosixPath("images/logo.png")]
