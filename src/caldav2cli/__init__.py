"""Command line tools for CalDAV calendars."""

__version__ = "0.1.0"
