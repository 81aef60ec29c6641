#!/usr/bin/env python3
"""
View recent site events from site_events.log.

Provides filtered access to the event log with options to filter by
event type and source context.
"""

import json
import sys
from typing import Optional

import typer

from plume.utils.event_logging import SITE_EVENTS_FILE, get_recent_events
from plume.utils.timestamp import format_timestamp

app = typer.Typer(
    add_completion=False,
    help="View recent site events",
)

# Event types shown by the history command
HISTORY_EVENTS = {
    "build_completed",
    "build_failed",
    "upload_completed",
    "upload_failed",
}


@app.command()
def main(
    n: int = typer.Option(10, "--num", "-n", help="Number of recent events to show"),
    event_type: Optional[str] = typer.Option(
        None, "--event-type", "-e", help="Filter to events of this type"
    ),
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Filter to events from this context (rendering, publishing)"
    ),
    compact: bool = typer.Option(
        False, "--compact", "-c", help="Print one event per line (no pretty formatting)"
    ),
):
    """
    Show the last n events from the site event log.

    Examples:\n

        $ python scripts/tail_log.py                          # Last 10 events

        $ python scripts/tail_log.py --num 20                 # Last 20 events

        $ python scripts/tail_log.py -e build_failed          # Last 10 failed builds

        $ python scripts/tail_log.py -s publishing -n 5       # Last 5 upload events

        $ python scripts/tail_log.py -n 20 --compact          # Compact output (one line per event)
    """
    events = get_recent_events(n=n, event_type=event_type, source=source)

    if not events:
        typer.secho(f"No events found in {SITE_EVENTS_FILE}", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    # Show filter info if filters applied (skip header in compact mode)
    if not compact:
        filters = []
        if event_type:
            filters.append(f"type={event_type}")
        if source:
            filters.append(f"source={source}")

        if filters:
            typer.secho(
                f"\nShowing last {len(events)} event(s) [{', '.join(filters)}]:",
                fg=typer.colors.BLUE,
            )
        else:
            typer.secho(f"\nShowing last {len(events)} event(s):", fg=typer.colors.BLUE)

        typer.echo("")

    for event in events:
        if compact:
            typer.echo(json.dumps(event))
        else:
            typer.echo(json.dumps(event, indent=2))
            typer.echo("")


@app.command()
def history(
    n: int = typer.Option(10, "--num", "-n", help="Number of builds and uploads to show"),
    relative: bool = typer.Option(
        False, "--relative", "-r", help="Show relative timestamps (e.g., '2 hours ago')"
    ),
):
    """
    Show a timeline of finished builds and uploads, oldest first.

    Examples:\n

        $ python scripts/tail_log.py history                # Last 10 builds and uploads

        $ python scripts/tail_log.py history --relative     # With relative timestamps
    """
    events = [e for e in get_recent_events(n=9999) if e.get("event_type") in HISTORY_EVENTS]
    events = events[-n:]

    if not events:
        typer.secho("No finished builds or uploads found", fg=typer.colors.YELLOW)
        return

    typer.secho("\nSite history", bold=True)
    typer.echo("")

    for event in events:
        when = format_timestamp(event["timestamp"], relative=relative)
        succeeded = event["event_type"].endswith("_completed")
        color = typer.colors.GREEN if succeeded else typer.colors.RED

        if event["event_type"].startswith("build"):
            detail = f"{event.get('pages_written', '?')} pages" if succeeded else "failed"
            label = f"build   {detail}"
        else:
            detail = f"s3://{event.get('bucket', '?')}"
            label = f"upload  {detail}" + ("" if succeeded else " failed")

        typer.echo(f"  {when:<24}", nl=False)
        typer.secho(label, fg=color)

    typer.echo("")


if __name__ == "__main__":
    # Default to 'main' command if no command specified
    # This allows: python tail_log.py -n 20 (instead of: python tail_log.py main -n 20)
    if len(sys.argv) == 1 or (len(sys.argv) > 1 and sys.argv[1].startswith("-")):
        sys.argv.insert(1, "main")
    app()
