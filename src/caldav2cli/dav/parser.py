"""Tolerant VEVENT extraction from calendar-object text."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .dates import parse_caldav_date


@dataclass(frozen=True)
class CalendarEvent:
    uid: str
    summary: str
    start_raw: str
    end_raw: str
    start: Optional[datetime]
    end: Optional[datetime]
    description: str = ""
    location: str = ""


def _date_value(line: str) -> str:
    # DTSTART;TZID=Europe/Berlin:20250910T090000 -> 20250910T090000
    parts = line.split(":")
    return parts[1] if len(parts) > 1 else ""


def parse_calendar_object(text: str) -> list[CalendarEvent]:
    """Return the VEVENTs in ``text`` that carry a non-empty SUMMARY.

    Only SUMMARY, DTSTART, DTEND, UID, DESCRIPTION and LOCATION are read.
    Blocks without a summary are skipped.
    """
    events: list[CalendarEvent] = []
    current: Optional[dict[str, str]] = None

    for line in text.split("\n"):
        trimmed = line.strip()

        if trimmed == "BEGIN:VEVENT":
            current = {}
            continue
        if trimmed == "END:VEVENT":
            if current is not None and current.get("summary"):
                events.append(_build_event(current))
            current = None
            continue
        if current is None:
            continue

        if trimmed.startswith("SUMMARY:"):
            current["summary"] = trimmed[len("SUMMARY:"):]
        elif trimmed.startswith(("DTSTART:", "DTSTART;")):
            current["start"] = _date_value(trimmed)
        elif trimmed.startswith(("DTEND:", "DTEND;")):
            current["end"] = _date_value(trimmed)
        elif trimmed.startswith("UID:"):
            current["uid"] = trimmed[len("UID:"):]
        elif trimmed.startswith("DESCRIPTION:"):
            current["description"] = trimmed[len("DESCRIPTION:"):]
        elif trimmed.startswith("LOCATION:"):
            current["location"] = trimmed[len("LOCATION:"):]

    return events


def _build_event(fields: dict[str, str]) -> CalendarEvent:
    start_raw = fields.get("start", "")
    end_raw = fields.get("end", "")
    return CalendarEvent(
        uid=fields.get("uid", ""),
        summary=fields["summary"],
        start_raw=start_raw,
        end_raw=end_raw,
        start=parse_caldav_date(start_raw) if start_raw else None,
        end=parse_caldav_date(end_raw) if end_raw else None,
        description=fields.get("description", ""),
        location=fields.get("location", ""),
    )
