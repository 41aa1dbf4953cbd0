"""Event retrieval with REPORT first and WebDAV listing fallbacks."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from .client import CalDAVClient
from .constants import ICS_EXTENSION, NO_TITLE
from .dates import DateRange, local_instant, normalize_date_range
from .discovery import CollectionEntry, fetch_object, list_recursive, list_shallow
from .errors import CalDAVError
from .outcomes import RetrievalReport
from .parser import CalendarEvent, parse_calendar_object
from .report import query_range

logger = logging.getLogger(__name__)

Strategy = Callable[[CalDAVClient, str, DateRange, RetrievalReport], list[CalendarEvent]]


@dataclass(frozen=True)
class RetrievalResult:
    events: list[CalendarEvent]
    strategy: Optional[str]
    date_range: DateRange
    report: RetrievalReport


def overlaps(event: CalendarEvent, date_range: DateRange) -> bool:
    """Half-open overlap: touching boundaries do not match."""
    start = local_instant(event.start)
    end = local_instant(event.end)
    if start is None or end is None or not date_range.usable:
        return False
    return start < date_range.end and end > date_range.start


def _range_query(
    client: CalDAVClient,
    collection_path: str,
    date_range: DateRange,
    report: RetrievalReport,
) -> list[CalendarEvent]:
    # The server already applied the time-range filter.
    events: list[CalendarEvent] = []
    for blob in query_range(client, collection_path, date_range, report):
        events.extend(parse_calendar_object(blob))
    return events


def _events_from_entries(
    client: CalDAVClient,
    entries: Iterable[CollectionEntry],
    date_range: DateRange,
    report: RetrievalReport,
) -> list[CalendarEvent]:
    events: list[CalendarEvent] = []
    for entry in entries:
        if entry.is_directory or not entry.path.endswith(ICS_EXTENSION):
            continue
        try:
            text = fetch_object(client, entry.path)
        except CalDAVError as exc:
            logger.debug("Error reading file %s: %s", entry.path, exc)
            report.skipped("fetch", entry.path, exc)
            continue
        report.succeeded("fetch", entry.path)

        parsed = parse_calendar_object(text)
        matching = [event for event in parsed if overlaps(event, date_range)]
        logger.debug("Parsed %d events from %s, %d in range", len(parsed), entry.path, len(matching))
        events.extend(matching)
    return events


def _directory_listing(
    client: CalDAVClient,
    collection_path: str,
    date_range: DateRange,
    report: RetrievalReport,
) -> list[CalendarEvent]:
    entries = list_shallow(client, collection_path)
    report.succeeded("list", collection_path)
    return _events_from_entries(client, entries, date_range, report)


def _recursive_listing(
    client: CalDAVClient,
    collection_path: str,
    date_range: DateRange,
    report: RetrievalReport,
) -> list[CalendarEvent]:
    entries = list_recursive(client, collection_path, report=report)
    return _events_from_entries(client, entries, date_range, report)


STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("range-query", _range_query),
    ("directory-listing", _directory_listing),
    ("recursive-listing", _recursive_listing),
)


def retrieve_events(
    client: CalDAVClient,
    collection_path: str,
    start: str,
    end: str,
    strategies: Sequence[tuple[str, Strategy]] = STRATEGIES,
) -> RetrievalResult:
    """Try each strategy in order and stop at the first one that finds events.

    A strategy that fails counts as finding nothing; the failure is kept on
    the result's report.
    """
    date_range = normalize_date_range(start, end)
    logger.debug("Listing events in %s from %s to %s", collection_path, date_range.start_text, date_range.end_text)
    report = RetrievalReport()

    for name, attempt in strategies:
        logger.debug("Trying %s", name)
        try:
            events = attempt(client, collection_path, date_range, report)
        except CalDAVError as exc:
            logger.debug("%s failed: %s", name, exc)
            report.skipped("strategy", name, exc)
            continue
        if events:
            logger.debug("%s found %d events", name, len(events))
            return RetrievalResult(events=events, strategy=name, date_range=date_range, report=report)

    return RetrievalResult(events=[], strategy=None, date_range=date_range, report=report)


def event_to_dict(event: CalendarEvent) -> dict[str, str]:
    return {
        "summary": event.summary or NO_TITLE,
        "start": event.start_raw,
        "end": event.end_raw,
        "uid": event.uid,
        "description": event.description or "",
        "location": event.location or "",
    }


def list_events_json(client: CalDAVClient, collection_path: str, start: str, end: str) -> str:
    """Return the matching events as a JSON array, or an error message. Never raises."""
    try:
        result = retrieve_events(client, collection_path, start, end)
        data = [event_to_dict(event) for event in result.events]
    except Exception as exc:
        logger.debug("Error in list-events: %s", exc)
        return f"Error listing events: {exc}"

    logger.debug("Returning %d events total", len(data))
    return json.dumps(data, indent=2)
