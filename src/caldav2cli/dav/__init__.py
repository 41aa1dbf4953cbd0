"""CalDAV event retrieval and write helpers."""

from .calendars import CalendarInfo, check_connection, list_calendars
from .client import CalDAVClient, DAVResponse
from .config import CalDAVConfig, load_config
from .dates import DateRange, format_caldav_date, normalize_date_range, parse_caldav_date
from .discovery import CollectionEntry, fetch_object, list_recursive, list_shallow
from .errors import (
    CalDAVAPIError,
    CalDAVConfigError,
    CalDAVError,
    CalDAVNetworkError,
    CalDAVTimeoutError,
    CalDAVValidationError,
    format_error_for_user,
)
from .events import RetrievalResult, event_to_dict, list_events_json, overlaps, retrieve_events
from .outcomes import ItemOutcome, RetrievalReport
from .parser import CalendarEvent, parse_calendar_object
from .report import build_report_body, extract_calendar_data, query_range
from .validators import (
    EventCreateParams,
    EventListParams,
    validate_calendar_url,
    validate_create_params,
    validate_list_params,
    validate_recurrence,
    validate_uid,
)
from .writer import RecurrenceRule, build_event_ics, create_event, delete_event

__all__ = [
    "CalDAVClient",
    "DAVResponse",
    "CalDAVConfig",
    "load_config",
    "CalendarInfo",
    "check_connection",
    "list_calendars",
    "DateRange",
    "format_caldav_date",
    "normalize_date_range",
    "parse_caldav_date",
    "CollectionEntry",
    "fetch_object",
    "list_recursive",
    "list_shallow",
    "CalDAVError",
    "CalDAVAPIError",
    "CalDAVConfigError",
    "CalDAVNetworkError",
    "CalDAVTimeoutError",
    "CalDAVValidationError",
    "format_error_for_user",
    "RetrievalResult",
    "event_to_dict",
    "list_events_json",
    "overlaps",
    "retrieve_events",
    "ItemOutcome",
    "RetrievalReport",
    "CalendarEvent",
    "parse_calendar_object",
    "build_report_body",
    "extract_calendar_data",
    "query_range",
    "EventCreateParams",
    "EventListParams",
    "validate_calendar_url",
    "validate_create_params",
    "validate_list_params",
    "validate_recurrence",
    "validate_uid",
    "RecurrenceRule",
    "build_event_ics",
    "create_event",
    "delete_event",
]
