"""Error types for CalDAV operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class CalDAVError(Exception):
    message: str
    code: str = "CALDAV_ERROR"
    details: Any | None = None
    status_code: int | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message

    @property
    def is_not_found(self) -> bool:
        """True when the server answered 404 for the requested resource."""
        return self.status_code == 404


class CalDAVConfigError(CalDAVError):
    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(message, code="CONFIG_ERROR", details=details)


class CalDAVAPIError(CalDAVError):
    def __init__(self, message: str, status_code: int | None = None, response: Any | None = None) -> None:
        super().__init__(
            message,
            code="API_ERROR",
            details={"status_code": status_code, "response": response},
            status_code=status_code,
        )
        self.response = response


class CalDAVValidationError(CalDAVError):
    def __init__(self, message: str, field: str | None = None, value: Any | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR", details={"field": field, "value": value})
        self.field = field
        self.value = value


class CalDAVNetworkError(CalDAVError):
    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message, code="NETWORK_ERROR", details={"original_error": str(original_error) if original_error else None})
        self.original_error = original_error


class CalDAVTimeoutError(CalDAVError):
    def __init__(self, message: str, timeout: float | None = None) -> None:
        super().__init__(message, code="TIMEOUT_ERROR", details={"timeout": timeout})
        self.timeout = timeout


def format_error_for_user(error: Exception) -> str:
    if isinstance(error, CalDAVConfigError):
        return f"Configuration Error: {error.message}"
    if isinstance(error, CalDAVValidationError):
        return f"Validation Error: {error.message}"
    if isinstance(error, CalDAVAPIError):
        status = f" [HTTP {error.status_code}]" if error.status_code else ""
        return f"API Error{status}: {error.message}"
    if isinstance(error, CalDAVNetworkError):
        return f"Network Error: {error.message}"
    if isinstance(error, CalDAVTimeoutError):
        return f"Timeout Error: {error.message}"
    if isinstance(error, CalDAVError):
        return f"Error: {error.message}"
    return f"Error: {str(error)}"
