"""Timestamp formatting utilities."""

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional

# Accepted formats for the `date` metadata field, tried in order
ARTICLE_DATE_FORMATS = [
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
]


def now() -> str:
    """Compact local timestamp for directory names (e.g., "20251114_123456")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """ISO 8601 local timestamp with microseconds, used in the event log."""
    return datetime.now().isoformat()


def parse_article_date(value: str) -> Optional[datetime]:
    """
    Parse an article `date` metadata value into a naive datetime.

    Tries ARTICLE_DATE_FORMATS first, then ISO 8601. Timezone-aware values
    are converted to UTC and made naive, since article timestamps are always
    interpreted as UTC.

    Args:
        value: Raw metadata value (e.g., "2015-03-21 12:00")

    Returns:
        Parsed datetime, or None if no format matches
    """
    value = value.strip()
    for fmt in ARTICLE_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def as_utc(dt: datetime) -> datetime:
    """Attach UTC to a naive datetime (aware datetimes are converted)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_rfc2822(dt: datetime) -> str:
    """Format as RFC 2822 in UTC, as used by RSS (e.g., "Sat, 21 Mar 2015 12:00:00 +0000")."""
    return format_datetime(as_utc(dt))


def to_rfc3339(dt: datetime) -> str:
    """Format as RFC 3339 in UTC, as used by Atom (e.g., "2015-03-21T12:00:00+00:00")."""
    return as_utc(dt).isoformat()


def format_timestamp(iso_timestamp: str, relative: bool = False) -> str:
    """
    Format ISO 8601 timestamp to readable format.

    Args:
        iso_timestamp: ISO 8601 formatted timestamp string
        relative: If True, show relative time (e.g., "2h ago")
                 If False, show absolute time (e.g., "2025-11-13 18:45:40")

    Returns:
        Human-readable timestamp

    Examples:
        format_timestamp("2025-11-13T18:45:40.572549")
        # "2025-11-13 18:45:40"

        format_timestamp("2025-11-13T18:45:40.572549", relative=True)
        # "2h ago"
    """
    try:
        dt = datetime.fromisoformat(iso_timestamp)

        if relative:
            return _format_relative_time(dt)
        else:
            return dt.strftime("%Y-%m-%d %H:%M:%S")

    except (ValueError, AttributeError, TypeError):
        # Return original if parsing fails
        return iso_timestamp


def _format_relative_time(dt: datetime) -> str:
    """
    Format datetime as relative time in compact format (e.g., "2h ago").

    - Seconds: "30s ago"
    - Minutes: "15m ago"
    - Hours: "2h ago"
    - Days: "5d ago"
    """
    diff = datetime.now() - dt

    if diff.total_seconds() < 0:
        diff = -diff
        suffix = "from now"
    else:
        suffix = "ago"

    seconds = int(diff.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = diff.days

    if seconds < 60:
        return f"{seconds}s {suffix}"
    elif minutes < 60:
        return f"{minutes}m {suffix}"
    elif hours < 24:
        return f"{hours}h {suffix}"
    else:
        return f"{days}d {suffix}"
