"""Tests for caldav2cli/cli.py"""

import json

import pytest
from typer.testing import CliRunner

from caldav2cli import __version__, cli
from caldav2cli.dav.calendars import CalendarInfo
from caldav2cli.dav.discovery import CollectionEntry

runner = CliRunner()


@pytest.fixture
def caldav_env(clear_caldav_env, monkeypatch):
    monkeypatch.setenv("CALDAV_BASE_URL", "https://dav.example.com")
    monkeypatch.setenv("CALDAV_USERNAME", "alice")
    monkeypatch.setenv("CALDAV_PASSWORD", "secret")


def test_version():
    result = runner.invoke(cli.app, ["--version"])

    assert result.exit_code == 0
    assert f"caldav2cli version {__version__}" in result.output


class TestListEvents:
    def test_prints_json_from_retrieval(self, caldav_env, monkeypatch):
        calls = []

        def fake_list_events_json(client, calendar_url, start, end):
            calls.append((client.base_url, calendar_url, start, end))
            return "[]"

        monkeypatch.setattr(cli, "list_events_json", fake_list_events_json)

        result = runner.invoke(cli.app, ["list-events", "-c", "/cal/", "--start", "2025", "--end", "2025-02"])

        assert result.exit_code == 0
        assert result.output.strip() == "[]"
        assert calls == [("https://dav.example.com", "/cal/", "2025", "2025-02")]

    def test_invalid_date_is_rejected(self, caldav_env):
        result = runner.invoke(cli.app, ["list-events", "-c", "/cal/", "--start", "someday", "--end", "2025"])

        assert result.exit_code == 1
        assert "Validation Error: Invalid date string" in result.output

    def test_missing_configuration(self, clear_caldav_env):
        result = runner.invoke(cli.app, ["list-events", "-c", "/cal/", "--start", "2025", "--end", "2025"])

        assert result.exit_code == 1
        assert "Configuration Error" in result.output


class TestCreateEvent:
    def test_prints_uid(self, caldav_env, monkeypatch):
        captured = {}

        def fake_create_event(client, calendar_url, summary, start, end, recurrence=None):
            captured.update(calendar_url=calendar_url, summary=summary, recurrence=recurrence)
            return "uid-1@caldav2cli"

        monkeypatch.setattr(cli, "create_event", fake_create_event)

        result = runner.invoke(
            cli.app,
            [
                "create-event",
                "-c",
                "/cal/",
                "-s",
                "Standup",
                "--start",
                "2025-09-10T09:00:00Z",
                "--end",
                "2025-09-10T09:30:00Z",
                "--freq",
                "weekly",
                "--byday",
                "MO,WE",
            ],
        )

        assert result.exit_code == 0
        assert result.output.strip() == "uid-1@caldav2cli"
        assert captured["summary"] == "Standup"
        assert captured["recurrence"].freq == "WEEKLY"
        assert captured["recurrence"].byday == ("MO", "WE")

    def test_bad_frequency(self, caldav_env):
        result = runner.invoke(
            cli.app,
            ["create-event", "-c", "/cal/", "-s", "x", "--start", "2025-09-10T09:00:00Z", "--end", "2025-09-10T10:00:00Z", "--freq", "HOURLY"],
        )

        assert result.exit_code == 1
        assert "Error creating event" in result.output


def test_delete_event(caldav_env, monkeypatch):
    deleted = []
    monkeypatch.setattr(cli, "delete_event", lambda client, url, uid: deleted.append((url, uid)))

    result = runner.invoke(cli.app, ["delete-event", "-c", "/cal/", "--uid", "abc"])

    assert result.exit_code == 0
    assert "Event deleted successfully" in result.output
    assert deleted == [("/cal/", "abc")]


def test_list_calendars(caldav_env, monkeypatch):
    monkeypatch.setattr(cli, "list_calendars", lambda client: [CalendarInfo(name="📅 work", url="/calendars/alice/work")])

    result = runner.invoke(cli.app, ["list-calendars"])

    assert result.exit_code == 0
    assert json.loads(result.output) == [{"name": "📅 work", "url": "/calendars/alice/work"}]


def test_check(caldav_env, monkeypatch):
    monkeypatch.setattr(cli, "check_connection", lambda client: [CollectionEntry(path="/calendars", is_directory=True)])

    result = runner.invoke(cli.app, ["check"])

    assert result.exit_code == 0
    assert "Connected to https://dav.example.com (1 items)" in result.output
