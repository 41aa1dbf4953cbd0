"""CalDAV REPORT (calendar-query) for a time range."""

from __future__ import annotations

import html
import logging
import re
from typing import Optional

from .client import CalDAVClient
from .constants import REPORT_TEMPLATE
from .dates import DateRange, format_caldav_date
from .errors import CalDAVError
from .outcomes import RetrievalReport

logger = logging.getLogger(__name__)

_CALENDAR_DATA_RE = re.compile(
    r"<(?:[\w.-]+:)?calendar-data\b[^>]*(?<!/)>(.*?)</(?:[\w.-]+:)?calendar-data\s*>",
    re.IGNORECASE | re.DOTALL,
)
_CDATA_RE = re.compile(r"^<!\[CDATA\[(.*)\]\]>$", re.DOTALL)


def build_report_body(date_range: DateRange) -> str:
    if not date_range.usable:
        raise CalDAVError("Date range cannot be used for a calendar query", details={"range": date_range})
    return REPORT_TEMPLATE.format(
        start=format_caldav_date(date_range.start),
        end=format_caldav_date(date_range.end),
    )


def extract_calendar_data(body: str) -> list[str]:
    blobs: list[str] = []
    for match in _CALENDAR_DATA_RE.finditer(body):
        inner = match.group(1).strip()
        cdata = _CDATA_RE.match(inner)
        inner = (cdata.group(1) if cdata else html.unescape(inner)).strip()
        if inner:
            blobs.append(inner)
    return blobs


def query_range(
    client: CalDAVClient,
    collection_path: str,
    date_range: DateRange,
    report: Optional[RetrievalReport] = None,
) -> list[str]:
    """Run a calendar-query REPORT and return the calendar-data payloads.

    Never raises; failures are logged, recorded on ``report`` and give ``[]``.
    """
    try:
        body = build_report_body(date_range)
        logger.debug("REPORT %s for %s .. %s", collection_path, date_range.start_text, date_range.end_text)
        response_text = client.report(collection_path, body)
    except Exception as exc:
        logger.debug("CalDAV REPORT failed for %s: %s", collection_path, exc)
        if report is not None:
            report.skipped("report", collection_path, exc)
        return []

    blobs = extract_calendar_data(response_text)
    logger.debug("REPORT returned %d calendar-data entries", len(blobs))
    if report is not None:
        report.succeeded("report", collection_path)
    return blobs
