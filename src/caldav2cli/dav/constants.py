"""Constants for CalDAV integration."""

from __future__ import annotations

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_AUTH_TYPE = "digest"
AUTH_TYPES = {"digest", "basic"}

DEFAULT_HEADERS = {
    "User-Agent": "caldav2cli",
}

DAV_NAMESPACE = "DAV:"
CALDAV_NAMESPACE = "urn:ietf:params:xml:ns:caldav"

ICS_EXTENSION = ".ics"
ICS_CONTENT_TYPE = "text/calendar; charset=utf-8"
XML_CONTENT_TYPE = "application/xml; charset=utf-8"

PROD_ID = "-//caldav2cli//CalDAV Client//EN"
UID_DOMAIN = "caldav2cli"

DIRECTORY_ESCAPE_MARKER = ".."
MAX_RECURSION_DEPTH = 8

EXCLUDED_COLLECTIONS = {"inbox", "outbox"}
CALENDARS_ROOT = "/calendars"
PRINCIPALS_ROOT = "/principals"

RECURRENCE_FREQUENCIES = ("DAILY", "WEEKLY", "MONTHLY", "YEARLY")

NO_TITLE = "No title"

REPORT_TEMPLATE = """<?xml version="1.0" encoding="utf-8" ?>
<C:calendar-query xmlns:D="DAV:" xmlns:C="urn:ietf:params:xml:ns:caldav">
  <D:prop>
    <D:getetag />
    <C:calendar-data />
  </D:prop>
  <C:filter>
    <C:comp-filter name="VCALENDAR">
      <C:comp-filter name="VEVENT">
        <C:time-range start="{start}" end="{end}"/>
      </C:comp-filter>
    </C:comp-filter>
  </C:filter>
</C:calendar-query>"""

PROPFIND_BODY = """<?xml version="1.0" encoding="utf-8" ?>
<D:propfind xmlns:D="DAV:">
  <D:prop>
    <D:resourcetype />
    <D:getcontenttype />
    <D:getetag />
  </D:prop>
</D:propfind>"""
