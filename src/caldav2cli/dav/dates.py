"""Date range normalization and CalDAV date helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

_YEAR_RE = re.compile(r"^\d{4}$")
_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")
_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class DateRange:
    """A normalized query window.

    ``start_text``/``end_text`` keep the expanded strings; ``start``/``end``
    are the parsed UTC instants, or ``None`` when the text was not a date.
    """

    start_text: str
    end_text: str
    start: Optional[datetime]
    end: Optional[datetime]

    @property
    def usable(self) -> bool:
        return self.start is not None and self.end is not None


def normalize_start(value: str) -> str:
    if not value:
        return value
    if _YEAR_RE.match(value):
        return f"{value}-01-01T00:00:00Z"
    if _MONTH_RE.match(value):
        return f"{value}-01T00:00:00Z"
    if _DAY_RE.match(value):
        return f"{value}T00:00:00Z"
    return value


def normalize_end(value: str) -> str:
    if not value:
        return value
    if _YEAR_RE.match(value):
        return f"{value}-12-31T23:59:59Z"
    if _MONTH_RE.match(value):
        last_day = _last_day_of_month(int(value[:4]), int(value[5:7]))
        if last_day is None:
            return value
        return f"{value}-{last_day:02d}T23:59:59Z"
    if _DAY_RE.match(value):
        return f"{value}T23:59:59Z"
    return value


def normalize_date_range(start: str, end: str) -> DateRange:
    start_text = normalize_start(start)
    end_text = normalize_end(end)
    return DateRange(
        start_text=start_text,
        end_text=end_text,
        start=parse_instant(start_text),
        end=parse_instant(end_text),
    )


def parse_instant(value: str) -> Optional[datetime]:
    """Parse an ISO 8601 string into a UTC instant; offset-less values are local time."""
    if not value:
        return None
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return local_instant(parsed)


def local_instant(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return value.astimezone(timezone.utc)
    except (OverflowError, ValueError, OSError):
        return None


def format_caldav_date(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def parse_caldav_date(value: str) -> Optional[datetime]:
    """Best-effort parse of ``YYYYMMDDTHHMMSS[Z]`` or ``YYYYMMDD``.

    The result is naive (local time); any trailing ``Z`` or offset is ignored.
    Out-of-range components roll over instead of failing, so ``20251301``
    becomes 2026-01-01. Non-numeric components give ``None``.
    """
    text = value.strip()
    try:
        year = int(text[0:4])
        month = int(text[4:6])
        day = int(text[6:8])
        if "T" in text:
            hour = int(text[9:11])
            minute = int(text[11:13])
            second = int(text[13:15])
        else:
            hour = minute = second = 0
    except ValueError:
        return None
    return _rolled_datetime(year, month, day, hour, minute, second)


def _rolled_datetime(year: int, month: int, day: int, hour: int, minute: int, second: int) -> Optional[datetime]:
    month_index = month - 1
    try:
        first_of_month = datetime(year + month_index // 12, month_index % 12 + 1, 1)
        return first_of_month + timedelta(days=day - 1, hours=hour, minutes=minute, seconds=second)
    except (OverflowError, ValueError):
        return None


def _last_day_of_month(year: int, month: int) -> Optional[int]:
    # Day zero of the following month.
    following = _rolled_datetime(year, month + 1, 1, 0, 0, 0)
    if following is None:
        return None
    try:
        return (following - timedelta(days=1)).day
    except OverflowError:
        return None
