"""Integration tests for the preview server."""

import pytest
from fastapi.testclient import TestClient

from plume.contexts.publishing.preview import create_preview_app
from plume.contexts.rendering.site_builder import build_site


@pytest.fixture
def client(content_dir, tmp_path, site_config):
    output = tmp_path / "output"
    result = build_site(content_dir, output, site_config)
    assert result.success, result.errors
    return TestClient(create_preview_app(output))


@pytest.mark.integration
def test_root_serves_index(client):
    """Test that / serves index.html."""
    response = client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Hello World" in response.text


@pytest.mark.integration
def test_article_and_static_files(client):
    """Test serving article pages and static files."""
    assert "Second Post" in client.get("/posts/second.html").text
    assert client.get("/images/logo.png").content == b"\x89PNG\r\n"


@pytest.mark.integration
def test_feed_is_served(client):
    """Test that feeds are served."""
    response = client.get("/feeds/all.atom.xml")

    assert response.status_code == 200
    assert "<feed" in response.text


@pytest.mark.integration
def test_missing_page_is_404(client):
    """Test 404 for a missing page."""
    assert client.get("/nope.html").status_code == 404


@pytest.mark.integration
def test_missing_output_dir(tmp_path):
    """Test that previewing a missing directory raises ValueError."""
    with pytest.raises(ValueError, match="Output directory not found"):
        create_preview_app(tmp_path / "missing")
