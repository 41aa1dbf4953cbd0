"""Tests for caldav2cli/dav/report.py"""

from unittest.mock import patch

import pytest

from caldav2cli.dav.client import CalDAVClient
from caldav2cli.dav.dates import normalize_date_range
from caldav2cli.dav.errors import CalDAVAPIError, CalDAVError, CalDAVNetworkError
from caldav2cli.dav.outcomes import RetrievalReport
from caldav2cli.dav.report import build_report_body, extract_calendar_data, query_range
from tests.fakes import FakeClient, report_response, vevent


class TestBuildReportBody:
    def test_time_range_uses_compact_utc(self):
        body = build_report_body(normalize_date_range("2025", "2025"))

        assert '<C:time-range start="20250101T000000Z" end="20251231T235959Z"/>' in body
        assert '<C:comp-filter name="VCALENDAR">' in body
        assert '<C:comp-filter name="VEVENT">' in body
        assert "<D:getetag />" in body
        assert "<C:calendar-data />" in body
        assert 'xmlns:C="urn:ietf:params:xml:ns:caldav"' in body

    def test_unusable_range_raises(self):
        with pytest.raises(CalDAVError):
            build_report_body(normalize_date_range("soon", "2025"))


class TestExtractCalendarData:
    """calendar-data payloads are cut out of the raw multistatus body."""

    def test_extracts_each_payload(self):
        body = report_response(vevent("a", "A", "20250910T090000Z", "20250910T100000Z"), "  ")
        body += "<C:calendar-data>" + vevent("b", "B", "20250911T090000Z", "20250911T100000Z") + "</C:calendar-data>"

        blobs = extract_calendar_data(body)

        assert len(blobs) == 2
        assert blobs[0].startswith("BEGIN:VCALENDAR")
        assert "UID:b" in blobs[1]

    def test_other_namespace_prefix_and_attributes(self):
        body = '<cal:calendar-data content-type="text/calendar">BEGIN:VCALENDAR\nEND:VCALENDAR</cal:calendar-data>'

        assert extract_calendar_data(body) == ["BEGIN:VCALENDAR\nEND:VCALENDAR"]

    def test_entities_are_unescaped(self):
        body = "<C:calendar-data>SUMMARY:Tom &amp; Jerry&#13;\n</C:calendar-data>"

        assert extract_calendar_data(body) == ["SUMMARY:Tom & Jerry"]

    def test_cdata_section(self):
        body = "<C:calendar-data><![CDATA[SUMMARY:a <b>]]></C:calendar-data>"

        assert extract_calendar_data(body) == ["SUMMARY:a <b>"]

    def test_self_closing_element_is_ignored(self):
        assert extract_calendar_data("<C:calendar-data/><D:getetag>x</D:getetag>") == []

    def test_no_matches(self):
        assert extract_calendar_data("<D:multistatus xmlns:D='DAV:'/>") == []


class TestQueryRange:
    """query_range never raises; failures become an empty list."""

    def test_returns_payloads(self):
        client = FakeClient(report_body=report_response(vevent("a", "A", "20250910T090000Z", "20250910T100000Z")))
        report = RetrievalReport()

        blobs = query_range(client, "/cal", normalize_date_range("2025", "2025"), report)

        assert len(blobs) == 1
        assert report.successes[0].operation == "report"

    @pytest.mark.parametrize(
        "error",
        [CalDAVAPIError("Unauthorized", 401), CalDAVNetworkError("Network connection failed")],
    )
    def test_transport_failure_gives_empty_list(self, error):
        client = FakeClient(report_error=error)
        report = RetrievalReport()

        assert query_range(client, "/cal", normalize_date_range("2025", "2025"), report) == []
        assert [outcome.operation for outcome in report.failures] == ["report"]
        assert report.failures[0].target == "/cal"

    def test_unexpected_failure_gives_empty_list(self):
        client = FakeClient(report_error=RuntimeError("connection pool closed"))
        report = RetrievalReport()

        assert query_range(client, "/cal", normalize_date_range("2025", "2025"), report) == []
        assert report.failures[0].reason == "connection pool closed"

    def test_malformed_collection_url_gives_empty_list(self, config):
        report = RetrievalReport()

        with patch("caldav2cli.dav.client.requests.request") as request:
            blobs = query_range(CalDAVClient(config=config), "http://[::1/cal", normalize_date_range("2025", "2025"), report)

        assert blobs == []
        request.assert_not_called()
        assert [outcome.operation for outcome in report.failures] == ["report"]

    def test_unusable_range_skips_request(self):
        client = FakeClient(report_body=report_response())

        assert query_range(client, "/cal", normalize_date_range("later", "2025")) == []
        assert client.calls["report"] == 0
