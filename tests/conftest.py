"""Shared fixtures: sample content trees and isolated log/event locations."""

from pathlib import Path

import pytest
from loguru import logger

from plume.utils.site_config import SiteConfig


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    """Send session logs and the site event log into the test's tmp_path."""
    logs_path = tmp_path / "logs"
    events_file = logs_path / "site_events.log"

    monkeypatch.setattr("plume.utils.event_logging.SITE_EVENTS_FILE", events_file)
    monkeypatch.setattr("plume.contexts.rendering.site_builder.LOGS_PATH", logs_path)
    monkeypatch.setattr("plume.contexts.publishing.uploader.LOGS_PATH", logs_path)

    yield events_file

    # Drop sinks that point into tmp_path or at pytest's captured stdout
    logger.remove()


def write_source(path: Path, header: str, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{header}\n\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path) -> Path:
    """
    A small site:

        content/
            about.md                 (undated page)
            hello.md                 (2015-03-21)
            posts/second.markdown    (2015-04-02, with summary and footnote)
            posts/wip.md             (draft)
            images/logo.png
            .hidden/secret.txt
    """
    root = tmp_path / "content"

    write_source(root / "about.md", "title: About", "I write things.")
    write_source(
        root / "hello.md",
        "title: Hello World\ndate: 2015-03-21 12:00",
        "First paragraph of **hello**.\n\nSecond paragraph.",
    )
    write_source(
        root / "posts" / "second.markdown",
        "title: Second Post\ndate: 2015-04-02\nsummary: A *short* summary",
        "Body with a note[^n].\n\n[^n]: The note.",
    )
    write_source(
        root / "posts" / "wip.md",
        "title: Work in Progress\ndate: 2015-05-01\nstatus: draft",
        "Not ready.",
    )

    (root / "images").mkdir()
    (root / "images" / "logo.png").write_bytes(b"\x89PNG\r\n")
    (root / ".hidden").mkdir()
    (root / ".hidden" / "secret.txt").write_text("hidden", encoding="utf-8")

    return root


@pytest.fixture
def site_config() -> SiteConfig:
    return SiteConfig(
        sitename="Test Site",
        author="Jane Doe",
        siteurl="https://blog.example.com",
        max_feed_entries=10,
    )
