"""Tests for caldav2cli/dav/validators.py"""

from datetime import datetime, timezone

import pytest

from caldav2cli.dav.errors import CalDAVValidationError
from caldav2cli.dav.validators import (
    validate_calendar_url,
    validate_create_params,
    validate_date_string,
    validate_list_params,
    validate_recurrence,
    validate_uid,
)


class TestDateStrings:
    @pytest.mark.parametrize("value", ["2025", "2025-02", "2025-02-28", "2025-09-10T09:00:00Z", "2025-09-10T09:00:00+02:00"])
    def test_accepts_partial_and_full_dates(self, value):
        assert validate_date_string(value, field="start") == value

    @pytest.mark.parametrize("value", ["", "tomorrow", "2025-13", "2025-02-30"])
    def test_rejects_unparseable(self, value):
        with pytest.raises(CalDAVValidationError):
            validate_date_string(value, field="start")

    def test_list_params(self):
        params = validate_list_params(" /cal/ ", "2025", "2025-12")

        assert (params.calendar_url, params.start, params.end) == ("/cal/", "2025", "2025-12")


class TestRequiredFields:
    def test_calendar_url_required(self):
        with pytest.raises(CalDAVValidationError):
            validate_calendar_url("  ")

    def test_uid_required(self):
        with pytest.raises(CalDAVValidationError):
            validate_uid("")


class TestCreateParams:
    def test_parses_datetimes(self):
        params = validate_create_params("/cal", "Standup", "2025-09-10T09:00:00Z", "2025-09-10T09:30:00Z")

        assert params.start == datetime(2025, 9, 10, 9, 0, tzinfo=timezone.utc)
        assert params.end == datetime(2025, 9, 10, 9, 30, tzinfo=timezone.utc)
        assert params.recurrence is None

    def test_requires_time_component(self):
        with pytest.raises(CalDAVValidationError):
            validate_create_params("/cal", "Standup", "2025-09-10", "2025-09-10T09:30:00Z")

    def test_end_before_start(self):
        with pytest.raises(CalDAVValidationError) as exc_info:
            validate_create_params("/cal", "Standup", "2025-09-10T10:00:00Z", "2025-09-10T09:30:00Z")

        assert exc_info.value.field == "end"

    def test_summary_required(self):
        with pytest.raises(CalDAVValidationError):
            validate_create_params("/cal", "", "2025-09-10T09:00:00Z", "2025-09-10T09:30:00Z")


class TestRecurrence:
    def test_no_options_means_no_rule(self):
        assert validate_recurrence(None) is None

    def test_full_rule(self):
        rule = validate_recurrence("weekly", 2, 10, "2025-12-31T00:00:00Z", "mo, we", "1,-1", "1,6")

        assert rule.freq == "WEEKLY"
        assert rule.interval == 2
        assert rule.count == 10
        assert rule.until == datetime(2025, 12, 31, tzinfo=timezone.utc)
        assert rule.byday == ("MO", "WE")
        assert rule.bymonthday == (1, -1)
        assert rule.bymonth == (1, 6)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"freq": "HOURLY"},
            {"freq": "DAILY", "interval": 0},
            {"freq": "DAILY", "count": -1},
            {"freq": "WEEKLY", "byday": "XX"},
            {"freq": "MONTHLY", "bymonthday": "0"},
            {"freq": "YEARLY", "bymonth": "13"},
            {"freq": "YEARLY", "bymonth": "may"},
            {"freq": "DAILY", "until": "2025-12-31"},
        ],
    )
    def test_invalid_rules(self, kwargs):
        with pytest.raises(CalDAVValidationError):
            validate_recurrence(**kwargs)
