"""Shared test fixtures for caldav2cli tests.

Event dates are read as naive local time, so the suite pins the process
timezone to UTC to keep overlap checks deterministic.
"""

import os
import time

import pytest

from caldav2cli.dav.config import CalDAVConfig

os.environ["TZ"] = "UTC"
time.tzset()


@pytest.fixture
def config() -> CalDAVConfig:
    return CalDAVConfig(
        base_url="https://dav.example.com",
        username="alice",
        password="secret",
        auth_type="digest",
        timeout_seconds=5.0,
    )


@pytest.fixture
def clear_caldav_env(monkeypatch):
    for name in ("CALDAV_BASE_URL", "CALDAV_USERNAME", "CALDAV_PASSWORD", "CALDAV_AUTH_TYPE", "CALDAV_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
