"""Configuration loader for CalDAV CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .constants import AUTH_TYPES, DEFAULT_AUTH_TYPE, DEFAULT_TIMEOUT_SECONDS
from .errors import CalDAVConfigError


@dataclass(frozen=True)
class CalDAVConfig:
    base_url: str
    username: str
    password: str
    auth_type: str
    timeout_seconds: float


def load_config() -> CalDAVConfig:
    base_url = os.getenv("CALDAV_BASE_URL")
    if not base_url:
        raise CalDAVConfigError("Required environment variable CALDAV_BASE_URL is not set")

    username = os.getenv("CALDAV_USERNAME", "")
    password = os.getenv("CALDAV_PASSWORD", "")

    auth_type = os.getenv("CALDAV_AUTH_TYPE", DEFAULT_AUTH_TYPE).strip().lower()
    if auth_type not in AUTH_TYPES:
        raise CalDAVConfigError(
            f"CALDAV_AUTH_TYPE must be one of: {', '.join(sorted(AUTH_TYPES))}",
            details={"value": auth_type},
        )

    raw_timeout = os.getenv("CALDAV_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise CalDAVConfigError("CALDAV_TIMEOUT must be a number of seconds", details={"value": raw_timeout}) from exc

    return CalDAVConfig(
        base_url=base_url,
        username=username,
        password=password,
        auth_type=auth_type,
        timeout_seconds=timeout,
    )
