"""Validation and parsing helpers for CalDAV CLI."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .constants import RECURRENCE_FREQUENCIES
from .dates import normalize_end, normalize_start, parse_instant
from .errors import CalDAVValidationError
from .writer import RecurrenceRule

_BYDAY_RE = re.compile(r"^[+-]?\d{0,2}(MO|TU|WE|TH|FR|SA|SU)$")


@dataclass(frozen=True)
class EventListParams:
    calendar_url: str
    start: str
    end: str


@dataclass(frozen=True)
class EventCreateParams:
    calendar_url: str
    summary: str
    start: datetime
    end: datetime
    recurrence: Optional[RecurrenceRule]


def validate_calendar_url(calendar_url: str) -> str:
    cleaned = (calendar_url or "").strip()
    if not cleaned:
        raise CalDAVValidationError("Calendar URL is required", field="calendar_url")
    return cleaned


def validate_summary(summary: str) -> str:
    if not summary:
        raise CalDAVValidationError("Summary is required", field="summary")
    return summary


def validate_uid(uid: str) -> str:
    if not uid:
        raise CalDAVValidationError("UID is required", field="uid")
    return uid


def validate_date_string(value: str, field: str, is_end: bool = False) -> str:
    """Accept YYYY, YYYY-MM, YYYY-MM-DD or a full ISO 8601 timestamp."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise CalDAVValidationError("Date value is required", field=field)
    normalized = normalize_end(cleaned) if is_end else normalize_start(cleaned)
    if parse_instant(normalized) is None:
        raise CalDAVValidationError("Invalid date string", field=field, value=value)
    return cleaned


def parse_event_datetime(value: str, field: str) -> datetime:
    cleaned = (value or "").strip()
    if "T" not in cleaned:
        raise CalDAVValidationError(
            "Invalid datetime format. Use ISO 8601 (e.g. 2025-09-10T09:00:00Z)",
            field=field,
            value=value,
        )
    parsed = parse_instant(cleaned)
    if parsed is None:
        raise CalDAVValidationError(
            "Invalid datetime format. Use ISO 8601 (e.g. 2025-09-10T09:00:00Z)",
            field=field,
            value=value,
        )
    return parsed


def _split_list(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _int_list(value: Optional[str], field: str, low: int, high: int) -> tuple[int, ...]:
    numbers: list[int] = []
    for item in _split_list(value):
        try:
            number = int(item)
        except ValueError as exc:
            raise CalDAVValidationError(f"{field} must be a comma separated list of integers", field=field, value=value) from exc
        if number == 0 or not low <= number <= high:
            raise CalDAVValidationError(f"{field} values must be between {low} and {high}", field=field, value=number)
        numbers.append(number)
    return tuple(numbers)


def validate_recurrence(
    freq: Optional[str],
    interval: Optional[int] = None,
    count: Optional[int] = None,
    until: Optional[str] = None,
    byday: Optional[str] = None,
    bymonthday: Optional[str] = None,
    bymonth: Optional[str] = None,
) -> Optional[RecurrenceRule]:
    if not any([freq, interval, count, until, byday, bymonthday, bymonth]):
        return None

    normalized_freq = freq.strip().upper() if freq else None
    if normalized_freq is not None and normalized_freq not in RECURRENCE_FREQUENCIES:
        raise CalDAVValidationError(
            f"Frequency must be one of: {', '.join(RECURRENCE_FREQUENCIES)}",
            field="freq",
            value=freq,
        )
    if interval is not None and interval < 1:
        raise CalDAVValidationError("Interval must be a positive integer", field="interval", value=interval)
    if count is not None and count < 1:
        raise CalDAVValidationError("Count must be a positive integer", field="count", value=count)

    parsed_until = parse_event_datetime(until, field="until") if until else None

    days = tuple(day.upper() for day in _split_list(byday))
    for day in days:
        if not _BYDAY_RE.match(day):
            raise CalDAVValidationError("Invalid BYDAY value (use MO, TU, ... or 1MO, -1FR)", field="byday", value=day)

    return RecurrenceRule(
        freq=normalized_freq,
        interval=interval,
        count=count,
        until=parsed_until,
        byday=days,
        bymonthday=_int_list(bymonthday, "bymonthday", -31, 31),
        bymonth=_int_list(bymonth, "bymonth", 1, 12),
    )


def validate_list_params(calendar_url: str, start: str, end: str) -> EventListParams:
    return EventListParams(
        calendar_url=validate_calendar_url(calendar_url),
        start=validate_date_string(start, field="start"),
        end=validate_date_string(end, field="end", is_end=True),
    )


def validate_create_params(
    calendar_url: str,
    summary: str,
    start: str,
    end: str,
    recurrence: Optional[RecurrenceRule] = None,
) -> EventCreateParams:
    parsed_start = parse_event_datetime(start, field="start")
    parsed_end = parse_event_datetime(end, field="end")
    if parsed_end < parsed_start:
        raise CalDAVValidationError("End time must not be before start time", field="end")
    return EventCreateParams(
        calendar_url=validate_calendar_url(calendar_url),
        summary=validate_summary(summary),
        start=parsed_start,
        end=parsed_end,
        recurrence=recurrence,
    )
