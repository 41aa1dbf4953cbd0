"""Create and delete single events on a CalDAV collection."""

from __future__ import annotations

import logging
import random
import string
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from icalendar import Calendar, Event

from .client import CalDAVClient
from .constants import ICS_CONTENT_TYPE, ICS_EXTENSION, PROD_ID, UID_DOMAIN
from .errors import CalDAVError

logger = logging.getLogger(__name__)

_UID_ALPHABET = string.ascii_lowercase + string.digits


@dataclass(frozen=True)
class RecurrenceRule:
    freq: Optional[str] = None
    interval: Optional[int] = None
    count: Optional[int] = None
    until: Optional[datetime] = None
    byday: tuple[str, ...] = ()
    bymonthday: tuple[int, ...] = ()
    bymonth: tuple[int, ...] = ()

    def to_ical(self) -> dict[str, Any]:
        rule: dict[str, Any] = {}
        if self.freq:
            rule["FREQ"] = self.freq
        if self.interval:
            rule["INTERVAL"] = self.interval
        if self.count:
            rule["COUNT"] = self.count
        if self.until:
            rule["UNTIL"] = self.until.astimezone(timezone.utc)
        if self.byday:
            rule["BYDAY"] = list(self.byday)
        if self.bymonthday:
            rule["BYMONTHDAY"] = list(self.bymonthday)
        if self.bymonth:
            rule["BYMONTH"] = list(self.bymonth)
        return rule


def generate_uid() -> str:
    suffix = "".join(random.choices(_UID_ALPHABET, k=9))
    return f"{int(time.time() * 1000)}-{suffix}@{UID_DOMAIN}"


def event_path(calendar_url: str, uid: str) -> str:
    filename = f"{uid}{ICS_EXTENSION}"
    if calendar_url.endswith("/"):
        return f"{calendar_url}{filename}"
    return f"{calendar_url}/{filename}"


def build_event_ics(
    summary: str,
    start: datetime,
    end: datetime,
    uid: str,
    recurrence: Optional[RecurrenceRule] = None,
    now: Optional[datetime] = None,
) -> str:
    calendar = Calendar()
    calendar.add("version", "2.0")
    calendar.add("prodid", PROD_ID)

    event = Event()
    event.add("uid", uid)
    event.add("dtstamp", (now or datetime.now(tz=timezone.utc)).astimezone(timezone.utc))
    event.add("dtstart", start.astimezone(timezone.utc))
    event.add("dtend", end.astimezone(timezone.utc))
    event.add("summary", summary)
    if recurrence is not None:
        rule = recurrence.to_ical()
        if rule:
            event.add("rrule", rule)

    calendar.add_component(event)
    return calendar.to_ical().decode("utf-8")


def create_event(
    client: CalDAVClient,
    calendar_url: str,
    summary: str,
    start: datetime,
    end: datetime,
    recurrence: Optional[RecurrenceRule] = None,
) -> str:
    """PUT a new event into ``calendar_url`` and return its UID.

    If the first PUT is refused, the collection is created when missing and
    the PUT is retried once without ``If-None-Match``.
    """
    uid = generate_uid()
    content = build_event_ics(summary, start, end, uid, recurrence=recurrence)
    path = event_path(calendar_url, uid)
    logger.debug("Creating event %s at %s", uid, path)

    try:
        client.put(path, content, headers={"Content-Type": ICS_CONTENT_TYPE, "If-None-Match": "*"})
    except CalDAVError as exc:
        logger.debug("PUT failed, trying alternative method: %s", exc)
        if not client.exists(calendar_url):
            logger.debug("Calendar collection %s does not exist, creating it", calendar_url)
            client.mkcol(calendar_url)
        client.put(path, content, headers={"Content-Type": ICS_CONTENT_TYPE})

    return uid


def delete_event(client: CalDAVClient, calendar_url: str, uid: str) -> None:
    path = event_path(calendar_url, uid)
    logger.debug("Deleting event %s", path)
    client.delete(path)
