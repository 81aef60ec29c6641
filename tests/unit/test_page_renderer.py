"""Unit tests for page rendering."""

from datetime import datetime

import pytest

from plume.contexts.content.article import Article
from plume.contexts.rendering.exceptions import PageRenderError
from plume.contexts.rendering.page_renderer import (
    relative_root,
    render_article_page,
    render_index_page,
    write_page,
)
from plume.contexts.rendering.template_registry import TemplateRegistry


@pytest.fixture
def article():
    return Article(
        title="Hello <World>",
        url="posts/hello.html",
        content="<p>Body <em>text</em></p>",
        summary="<p>Body</p>",
        timestamp=datetime(2015, 3, 21, 12, 0),
    )


@pytest.mark.unit
@pytest.mark.parametrize(
    "url, expected",
    [("index.html", ""), ("posts/hello.html", "../"), ("a/b/c.html", "../../")],
)
def test_relative_root(url, expected):
    """Test relative root paths for nested pages."""
    assert relative_root(url) == expected


@pytest.mark.unit
def test_article_page_structure(article, site_config):
    """Test the rendered article page."""
    html = render_article_page(article, TemplateRegistry(), site_config, "body { color: red; }")

    assert html.startswith("<!DOCTYPE html>")
    assert "<html lang='us'>" in html
    assert "body { color: red; }" in html
    assert "<title>Hello &lt;World&gt;</title>" in html
    assert "<p>Body <em>text</em></p>" in html
    assert "<time datetime='2015-03-21T12:00:00'>2015-03-21</time>" in html
    assert "href='../index.html'" in html
    assert "href='../feeds/all.atom.xml'" in html


@pytest.mark.unit
def test_undated_article_has_no_time(site_config):
    """Test that undated articles render without a time element."""
    page = Article(title="About", url="about.html", content="<p>Me</p>")
    html = render_article_page(page, TemplateRegistry(), site_config, "")
    assert "<time" not in html


@pytest.mark.unit
def test_index_page_lists_articles(article, site_config):
    """Test the rendered index page."""
    html = render_index_page([article], TemplateRegistry(), site_config, "")

    assert "<title>Test Site</title>" in html
    assert "href='posts/hello.html'" in html
    assert "<div class='summary'><p>Body</p></div>" in html


@pytest.mark.unit
def test_missing_template_raises_page_render_error(article, site_config, tmp_path):
    """Test PageRenderError for a missing template."""
    with pytest.raises(PageRenderError) as exc_info:
        render_article_page(article, TemplateRegistry(tmp_path), site_config, "")

    assert exc_info.value.page == "posts/hello.html"
    assert exc_info.value.template_path == tmp_path / "article.html.jinja"


@pytest.mark.unit
def test_write_page_creates_parents(tmp_path):
    """Test that write_page creates parent directories."""
    path = write_page(tmp_path, "a/b/page.html", "<p>x</p>")

    assert path == tmp_path / "a" / "b" / "page.html"
    assert path.read_text(encoding="utf-8") == "<p>x</p>"
