"""Unit tests for the site event log (Tier 2 logging)."""

import json

import pytest

from plume.utils.event_logging import get_recent_events, log_site_event, read_events


@pytest.mark.unit
def test_log_site_event_appends_json_line(tmp_path):
    """Test that each event is appended as one JSON line."""
    events_file = tmp_path / "events.log"

    event = log_site_event("build_started", "rendering", events_file=events_file, pages=3)

    lines = events_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0]) == event
    assert event["event_type"] == "build_started"
    assert event["source"] == "rendering"
    assert event["pages"] == 3
    assert "timestamp" in event


@pytest.mark.unit
def test_default_events_file_is_used(isolated_logs):
    """Test writing to the default events file."""
    log_site_event("upload_started", "publishing")
    assert [e["event_type"] for e in read_events()] == ["upload_started"]
    assert isolated_logs.exists()


@pytest.mark.unit
def test_non_json_values_are_stringified(tmp_path):
    """Test that Path values are stringified."""
    events_file = tmp_path / "events.log"
    log_site_event("build_completed", "rendering", events_file=events_file, output_dir=tmp_path)

    assert read_events(events_file)[0]["output_dir"] == str(tmp_path)


@pytest.mark.unit
def test_read_events_skips_malformed_lines(tmp_path):
    """Test that malformed lines are skipped when reading events."""
    events_file = tmp_path / "events.log"
    events_file.write_text('{"event_type": "a"}\nnot json\n{"event_type": "b"}\n')

    assert [e["event_type"] for e in read_events(events_file)] == ["a", "b"]


@pytest.mark.unit
def test_read_events_missing_file(tmp_path):
    """Test reading a missing event log."""
    assert read_events(tmp_path / "missing.log") == []


@pytest.mark.unit
def test_get_recent_events_filters(tmp_path):
    """Test event type and source filters."""
    events_file = tmp_path / "events.log"
    for i in range(5):
        log_site_event("build_completed", "rendering", events_file=events_file, i=i)
        log_site_event("upload_completed", "publishing", events_file=events_file, i=i)

    recent = get_recent_events(2, event_type="build_completed", events_file=events_file)
    assert [e["i"] for e in recent] == [3, 4]

    publishing = get_recent_events(10, source="publishing", events_file=events_file)
    assert len(publishing) == 5
    assert all(e["event_type"] == "upload_completed" for e in publishing)
