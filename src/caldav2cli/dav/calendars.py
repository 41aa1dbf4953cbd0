"""Calendar collection discovery under /calendars and /principals."""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass

from .client import CalDAVClient
from .constants import CALENDARS_ROOT, EXCLUDED_COLLECTIONS, PRINCIPALS_ROOT
from .discovery import CollectionEntry, list_shallow
from .errors import CalDAVError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarInfo:
    name: str
    url: str


def _basename(path: str) -> str:
    return posixpath.basename(path.rstrip("/"))


def _strip_root(path: str, root: str) -> str:
    return path.replace(f"{root}/", "")


def _directories(entries: list[CollectionEntry]) -> list[CollectionEntry]:
    return [entry for entry in entries if entry.is_directory]


def _calendar_home(client: CalDAVClient) -> list[CalendarInfo]:
    found: list[CalendarInfo] = []
    try:
        top_level = _directories(list_shallow(client, CALENDARS_ROOT))
    except CalDAVError as exc:
        logger.debug("Error accessing %s: %s", CALENDARS_ROOT, exc)
        return found

    for directory in top_level:
        try:
            nested = list_shallow(client, directory.path)
        except CalDAVError as exc:
            logger.debug("Error accessing %s: %s", directory.path, exc)
            continue
        for entry in nested:
            name = _basename(entry.path)
            if entry.is_directory and "." not in entry.path and name not in EXCLUDED_COLLECTIONS:
                found.append(CalendarInfo(name=f"📅 {name}", url=entry.path))

    for directory in top_level:
        found.append(CalendarInfo(name=f"📅 {_strip_root(directory.path, CALENDARS_ROOT)} (Root)", url=directory.path))
    return found


def _principals(client: CalDAVClient) -> list[CalendarInfo]:
    found: list[CalendarInfo] = []
    try:
        principals = _directories(list_shallow(client, PRINCIPALS_ROOT))
    except CalDAVError as exc:
        logger.debug("Error accessing %s: %s", PRINCIPALS_ROOT, exc)
        return found

    for principal in principals:
        try:
            user_entries = list_shallow(client, principal.path)
        except CalDAVError as exc:
            logger.debug("Error accessing %s: %s", principal.path, exc)
            continue
        for entry in user_entries:
            name = _basename(entry.path)
            if entry.is_directory and name not in EXCLUDED_COLLECTIONS:
                found.append(CalendarInfo(name=f"👤 {name} (in {principal.path})", url=entry.path))

    for principal in principals:
        found.append(
            CalendarInfo(name=f"👤 {_strip_root(principal.path, PRINCIPALS_ROOT)} (Principal)", url=principal.path)
        )
    return found


def list_calendars(client: CalDAVClient) -> list[CalendarInfo]:
    """Collect candidate calendar collections; the first entry per URL wins."""
    unique: dict[str, CalendarInfo] = {}
    for calendar in [*_calendar_home(client), *_principals(client)]:
        unique.setdefault(calendar.url, calendar)
    return list(unique.values())


def check_connection(client: CalDAVClient) -> list[CollectionEntry]:
    entries = list_shallow(client, "/")
    logger.debug("Connection successful, found %d items", len(entries))
    return entries
