"""Unit tests for timestamp helpers."""

from datetime import datetime, timedelta

import pytest

from plume.utils.timestamp import (
    format_timestamp,
    parse_article_date,
    to_rfc2822,
    to_rfc3339,
)


@pytest.mark.unit
def test_parse_article_date_strips_whitespace():
    """Test date parsing with surrounding whitespace."""
    assert parse_article_date("  2015-03-21 ") == datetime(2015, 3, 21)


@pytest.mark.unit
def test_parse_article_date_unparseable():
    """Test that unparseable dates return None."""
    assert parse_article_date("yesterday") is None


@pytest.mark.unit
def test_rfc2822_treats_naive_as_utc():
    """Test RFC 2822 formatting of naive datetimes."""
    assert to_rfc2822(datetime(2015, 3, 21, 12, 0)) == "Sat, 21 Mar 2015 12:00:00 +0000"


@pytest.mark.unit
def test_rfc3339_treats_naive_as_utc():
    """Test RFC 3339 formatting of naive datetimes."""
    assert to_rfc3339(datetime(2015, 3, 21, 12, 0)) == "2015-03-21T12:00:00+00:00"


@pytest.mark.unit
def test_format_timestamp_absolute():
    """Test absolute timestamp formatting."""
    assert format_timestamp("2025-11-13T18:45:40.572549") == "2025-11-13 18:45:40"


@pytest.mark.unit
def test_format_timestamp_relative():
    """Test relative timestamp formatting."""
    two_hours_ago = (datetime.now() - timedelta(hours=2, minutes=1)).isoformat()
    assert format_timestamp(two_hours_ago, relative=True) == "2h ago"


@pytest.mark.unit
def test_format_timestamp_invalid_returns_input():
    """Test that invalid timestamps are returned unchanged."""
    assert format_timestamp("not a timestamp") == "not a timestamp"
