"""CLI entry point for caldav2cli."""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import typer
from dotenv import load_dotenv

from caldav2cli import __version__
from caldav2cli.dav import (
    CalDAVClient,
    check_connection,
    create_event,
    delete_event,
    format_error_for_user,
    list_calendars,
    list_events_json,
    validate_calendar_url,
    validate_create_params,
    validate_list_params,
    validate_recurrence,
    validate_uid,
)

app = typer.Typer(help="CalDAV calendar tools")


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        typer.echo(f"caldav2cli version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Log requests and fallback decisions to stderr.",
    ),
):
    """Query and edit calendars on a CalDAV server."""
    load_dotenv()
    _configure_logging(verbose)


@app.command("list-events")
def cmd_list_events(
    calendar_url: str = typer.Option(
        ...,
        "--calendar-url",
        "-c",
        help="URL of the calendar to search (use list-calendars to get available URLs).",
    ),
    start: str = typer.Option(
        ...,
        "--start",
        help="Start of the range (YYYY, YYYY-MM, YYYY-MM-DD or ISO 8601 datetime).",
    ),
    end: str = typer.Option(
        ...,
        "--end",
        help="End of the range (YYYY, YYYY-MM, YYYY-MM-DD or ISO 8601 datetime).",
    ),
):
    """List events overlapping a date range as JSON."""
    try:
        params = validate_list_params(calendar_url, start, end)
        client = CalDAVClient()
    except Exception as exc:
        typer.secho(format_error_for_user(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(list_events_json(client, params.calendar_url, params.start, params.end))


@app.command("create-event")
def cmd_create_event(
    calendar_url: str = typer.Option(..., "--calendar-url", "-c", help="URL of the calendar to add the event to."),
    summary: str = typer.Option(..., "--summary", "-s", help="Event summary."),
    start: str = typer.Option(..., "--start", help="Event start (ISO 8601 datetime)."),
    end: str = typer.Option(..., "--end", help="Event end (ISO 8601 datetime)."),
    freq: Optional[str] = typer.Option(None, "--freq", help="Recurrence frequency (DAILY, WEEKLY, MONTHLY, YEARLY)."),
    interval: Optional[int] = typer.Option(None, "--interval", help="Recurrence interval."),
    count: Optional[int] = typer.Option(None, "--count", help="Number of occurrences."),
    until: Optional[str] = typer.Option(None, "--until", help="Repeat until (ISO 8601 datetime)."),
    byday: Optional[str] = typer.Option(None, "--byday", help="Comma separated weekdays, e.g. MO,WE."),
    bymonthday: Optional[str] = typer.Option(None, "--bymonthday", help="Comma separated days of month."),
    bymonth: Optional[str] = typer.Option(None, "--bymonth", help="Comma separated months (1-12)."),
):
    """Create an event in the calendar specified by its URL."""
    try:
        recurrence = validate_recurrence(freq, interval, count, until, byday, bymonthday, bymonth)
        params = validate_create_params(calendar_url, summary, start, end, recurrence)
        client = CalDAVClient()
        uid = create_event(
            client,
            params.calendar_url,
            params.summary,
            params.start,
            params.end,
            recurrence=params.recurrence,
        )
    except Exception as exc:
        typer.secho(f"Error creating event: {format_error_for_user(exc)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(uid)


@app.command("delete-event")
def cmd_delete_event(
    calendar_url: str = typer.Option(..., "--calendar-url", "-c", help="URL of the calendar containing the event."),
    uid: str = typer.Option(..., "--uid", help="UID of the event to delete (from list-events)."),
):
    """Delete a calendar event by its UID."""
    try:
        validated_url = validate_calendar_url(calendar_url)
        validated_uid = validate_uid(uid)
        client = CalDAVClient()
        delete_event(client, validated_url, validated_uid)
    except Exception as exc:
        typer.secho(f"Error deleting event: {format_error_for_user(exc)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo("✅ Event deleted successfully")


@app.command("list-calendars")
def cmd_list_calendars():
    """List all calendars returning both name and URL."""
    try:
        client = CalDAVClient()
        calendars = list_calendars(client)
    except Exception as exc:
        typer.secho(f"Error listing calendars: {format_error_for_user(exc)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps([{"name": info.name, "url": info.url} for info in calendars], ensure_ascii=False))


@app.command("check")
def cmd_check():
    """Test the connection by listing the server root."""
    try:
        client = CalDAVClient()
        entries = check_connection(client)
    except Exception as exc:
        typer.secho(f"CalDAV connection failed: {format_error_for_user(exc)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(f"✅ Connected to {client.base_url} ({len(entries)} items)")


def cli():
    """Entry point for the CLI."""
    app()
