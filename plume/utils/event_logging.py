"""
Site event logging utilities for PLUME (Tier 2 logging).

Provides uniform interfaces for logging build and publish events to
site_events.log. This is the cross-context record of what happened to the
site, in JSON Lines format (one JSON object per line).

For detailed within-context logging (Tier 1), use plume.utils.logger instead.

Usage:
    from plume.utils.event_logging import log_site_event, get_recent_events

    log_site_event(
        event_type="build_completed",
        source="rendering",
        pages_written=42,
    )

    events = get_recent_events(5, event_type="upload_completed")
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from plume.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("PLUME_LOGS_PATH", "outs/logs"))
SITE_EVENTS_FILE = Path(os.getenv("PLUME_EVENTS_FILE", str(LOGS_PATH / "site_events.log")))


def log_site_event(
    event_type: str, source: str, events_file: Optional[Path] = None, **extra_fields
) -> dict:
    """
    Append an event to the site event log.

    Args:
        event_type: Type of event (e.g., "build_started", "upload_pass_completed")
        source: Event source (e.g., "rendering", "publishing", "cli")
        events_file: Log file to append to (default: SITE_EVENTS_FILE)
        **extra_fields: Additional event-specific fields (must be JSON serializable)

    Returns:
        The event dict that was written

    Example:
        log_site_event(
            event_type="upload_pass_completed",
            source="publishing",
            sync_pass="css",
            returncode=0,
        )
    """
    events_file = Path(events_file) if events_file is not None else SITE_EVENTS_FILE
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "source": source,
        **extra_fields,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event, default=str) + "\n")

    return event


def read_events(events_file: Optional[Path] = None) -> list[dict]:
    """Read all events from the log, skipping malformed lines."""
    events_file = Path(events_file) if events_file is not None else SITE_EVENTS_FILE
    if not events_file.exists():
        return []

    events = []
    with open(events_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                continue
    return events


def get_recent_events(
    n: int = 10,
    event_type: Optional[str] = None,
    source: Optional[str] = None,
    events_file: Optional[Path] = None,
) -> list[dict]:
    """
    Get the last n events from the site event log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        event_type: Filter to only events of this type (optional)
        source: Filter to only events from this source (optional)
        events_file: Log file to read (default: SITE_EVENTS_FILE)

    Returns:
        List of event dicts (most recent last)
    """
    events = read_events(events_file)

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    if source:
        events = [e for e in events if e.get("source") == source]

    return events[-n:] if len(events) > n else events
