"""WebDAV collection listing and resource fetching."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from xml.etree import ElementTree as ET

from .client import CalDAVClient
from .constants import DAV_NAMESPACE, DIRECTORY_ESCAPE_MARKER, MAX_RECURSION_DEPTH
from .errors import CalDAVError
from .outcomes import RetrievalReport

logger = logging.getLogger(__name__)

_NS = {"d": DAV_NAMESPACE}


@dataclass(frozen=True)
class CollectionEntry:
    path: str
    is_directory: bool


def _normalize(path: str) -> str:
    return path.rstrip("/") or "/"


def parse_multistatus(xml_text: str, client: CalDAVClient) -> list[CollectionEntry]:
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise CalDAVError("Invalid PROPFIND response", details={"response": xml_text[:200]}) from exc

    entries: list[CollectionEntry] = []
    for response in root.findall("d:response", _NS):
        href = response.find("d:href", _NS)
        if href is None or not href.text:
            continue
        is_directory = response.find(".//d:resourcetype/d:collection", _NS) is not None
        path = client.relative_path(href.text.strip())
        entries.append(CollectionEntry(path=_normalize(path), is_directory=is_directory))
    return entries


def list_shallow(client: CalDAVClient, path: str) -> list[CollectionEntry]:
    """List the direct children of ``path``, without the collection itself."""
    entries = parse_multistatus(client.propfind(path, depth=1), client)
    own_path = _normalize(client.relative_path(path))
    return [entry for entry in entries if entry.path != own_path]


def list_recursive(
    client: CalDAVClient,
    path: str,
    report: Optional[RetrievalReport] = None,
    max_depth: int = MAX_RECURSION_DEPTH,
) -> list[CollectionEntry]:
    """Depth-first listing of ``path`` and its sub-collections.

    Children whose path contains ``..`` are listed but never entered, every
    collection is entered at most once, and nothing deeper than ``max_depth``
    is visited. A failing sub-listing only drops that subtree.
    """
    items: list[CollectionEntry] = []
    visited = {_normalize(client.relative_path(path))}

    def walk(current: str, depth: int) -> None:
        try:
            entries = list_shallow(client, current)
        except CalDAVError as exc:
            logger.debug("Error accessing directory %s: %s", current, exc)
            if report is not None:
                report.skipped("list", current, exc)
            return
        if report is not None:
            report.succeeded("list", current)

        for entry in entries:
            items.append(entry)
            if not entry.is_directory:
                continue
            if DIRECTORY_ESCAPE_MARKER in entry.path:
                logger.debug("Not descending into %s", entry.path)
                continue
            if entry.path in visited:
                continue
            if depth >= max_depth:
                if report is not None:
                    report.skipped("list", entry.path, f"maximum depth {max_depth} reached")
                continue
            visited.add(entry.path)
            walk(entry.path, depth + 1)

    walk(path, 0)
    return items


def fetch_object(client: CalDAVClient, path: str) -> str:
    return client.get_text(path)
