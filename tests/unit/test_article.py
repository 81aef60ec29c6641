"""Unit tests for building articles from parsed sources."""

from datetime import datetime
from pathlib import PurePosixPath

import pytest

from plume.contexts.content.article import (
    Article,
    build_article,
    is_draft,
    published_articles,
)
from plume.contexts.content.exceptions import MetadataError
from plume.contexts.content.source_reader import SourceFile


def make_source(path="posts/hello", markdown="Body text.", **metadata):
    metadata.setdefault("title", "Hello")
    return SourceFile(path=PurePosixPath(path), markdown=markdown, metadata=metadata)


@pytest.mark.unit
def test_build_article_basic_fields():
    """Test Article fields built from a source file."""
    article = build_article(make_source(date="2015-03-21 12:00"))

    assert article.title == "Hello"
    assert article.url == "posts/hello.html"
    assert article.content == "<p>Body text.</p>"
    assert article.timestamp == datetime(2015, 3, 21, 12, 0)
    assert article.is_published


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2015-03-21 12:34:56", datetime(2015, 3, 21, 12, 34, 56)),
        ("2015-03-21 12:34", datetime(2015, 3, 21, 12, 34)),
        ("2015-03-21", datetime(2015, 3, 21)),
        ("2015-03-21T14:00:00+02:00", datetime(2015, 3, 21, 12, 0)),
    ],
)
def test_build_article_date_formats(raw, expected):
    """Test the accepted article date formats."""
    assert build_article(make_source(date=raw)).timestamp == expected


@pytest.mark.unit
def test_build_article_rejects_unknown_date():
    """Test that an unparseable date raises MetadataError."""
    with pytest.raises(MetadataError, match="Unrecognized date format"):
        build_article(make_source(date="March 21st"))


@pytest.mark.unit
def test_build_article_requires_title():
    """Test that a source without a title raises MetadataError."""
    source = SourceFile(path=PurePosixPath("x"), markdown="", metadata={})
    with pytest.raises(MetadataError, match="Must have title!"):
        build_article(source)


@pytest.mark.unit
def test_summary_defaults_to_first_paragraph():
    """Test that the summary defaults to the first rendered paragraph."""
    article = build_article(make_source(markdown="# Heading\n\nIntro *here*.\n\nMore."))
    assert article.summary == "<p>Intro <em>here</em>.</p>"


@pytest.mark.unit
def test_summary_metadata_is_rendered():
    """Test that summary metadata is rendered as markdown."""
    article = build_article(make_source(summary="A **bold** claim"))
    assert article.summary == "<p>A <strong>bold</strong> claim</p>"


@pytest.mark.unit
def test_summary_empty_without_paragraphs():
    """Test that the summary is empty when the body has no paragraph."""
    article = build_article(make_source(markdown="# Only a heading"))
    assert article.summary == ""


@pytest.mark.unit
def test_undated_article_is_not_published():
    """Test that undated articles are left out of listings."""
    article = build_article(make_source())

    assert article.timestamp is None
    assert not article.is_published


@pytest.mark.unit
def test_is_draft():
    """Test draft detection from the status header."""
    assert is_draft(make_source(status="draft"))
    assert not is_draft(make_source(status="published"))
    assert not is_draft(make_source())


@pytest.mark.unit
def test_published_articles_newest_first():
    """Test published article ordering."""
    old = Article(title="Old", url="old.html", content="", timestamp=datetime(2014, 1, 1))
    new = Article(title="New", url="new.html", content="", timestamp=datetime(2016, 1, 1))
    draft = Article(
        title="Draft", url="d.html", content="", timestamp=datetime(2017, 1, 1), status="draft"
    )
    page = Article(title="About", url="about.html", content="")

    assert published_articles([old, draft, new, page]) == [new, old]
