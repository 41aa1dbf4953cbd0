"""HTTP client for CalDAV/WebDAV servers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping
from urllib.parse import quote, unquote, urlparse

import requests
from requests.auth import AuthBase, HTTPBasicAuth, HTTPDigestAuth

from .config import CalDAVConfig, load_config
from .constants import DEFAULT_HEADERS, PROPFIND_BODY, XML_CONTENT_TYPE
from .errors import CalDAVAPIError, CalDAVError, CalDAVNetworkError, CalDAVTimeoutError

logger = logging.getLogger(__name__)

_PATH_SAFE_CHARS = "/@:~!$&'()*+,;=-._"


@dataclass(frozen=True)
class DAVResponse:
    status_code: int
    text: str
    headers: Mapping[str, str]


class CalDAVClient:
    def __init__(
        self,
        config: CalDAVConfig | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.config = config or load_config()
        self.base_url = (base_url or self.config.base_url).rstrip("/")
        self.timeout = timeout or self.config.timeout_seconds
        self._base_path = urlparse(self.base_url).path.rstrip("/")

    def url_for(self, path: str) -> str:
        if urlparse(path).scheme in ("http", "https"):
            return path
        return f"{self.base_url}/{quote(path.lstrip('/'), safe=_PATH_SAFE_CHARS)}"

    def relative_path(self, href: str) -> str:
        """Map a server href onto a path relative to the base URL."""
        path = unquote(urlparse(href).path)
        if self._base_path and path.startswith(self._base_path + "/"):
            path = path[len(self._base_path):]
        elif self._base_path and path == self._base_path:
            path = "/"
        if not path.startswith("/"):
            path = "/" + path
        return path

    def get_text(self, path: str) -> str:
        return self.request("GET", path).text

    def propfind(self, path: str, depth: int = 1) -> str:
        response = self.request(
            "PROPFIND",
            path,
            body=PROPFIND_BODY,
            headers={"Content-Type": XML_CONTENT_TYPE},
            depth=depth,
        )
        return response.text

    def report(self, path: str, body: str) -> str:
        # Servers commonly gate REPORT behind digest auth.
        response = self.request(
            "REPORT",
            path,
            body=body,
            headers={"Content-Type": XML_CONTENT_TYPE},
            depth=1,
            digest=True,
        )
        return response.text

    def put(self, path: str, body: str, headers: Mapping[str, str] | None = None) -> DAVResponse:
        return self.request("PUT", path, body=body, headers=headers)

    def delete(self, path: str) -> DAVResponse:
        return self.request("DELETE", path)

    def mkcol(self, path: str) -> DAVResponse:
        return self.request("MKCOL", path)

    def exists(self, path: str) -> bool:
        try:
            self.request("PROPFIND", path, body=PROPFIND_BODY, headers={"Content-Type": XML_CONTENT_TYPE}, depth=0)
        except CalDAVAPIError as exc:
            if exc.is_not_found:
                return False
            raise
        return True

    def request(
        self,
        method: str,
        path: str,
        body: str | None = None,
        headers: Mapping[str, str] | None = None,
        depth: int | None = None,
        digest: bool = False,
    ) -> DAVResponse:
        url = self.url_for(path)
        request_headers = {**DEFAULT_HEADERS, **(headers or {})}
        if depth is not None:
            request_headers["Depth"] = str(depth)

        logger.debug("%s %s", method, url)
        try:
            response = requests.request(
                method,
                url,
                headers=request_headers,
                data=body.encode("utf-8") if body is not None else None,
                auth=self._auth(digest),
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            raise CalDAVTimeoutError("Request timeout", timeout=self.timeout) from exc
        except requests.RequestException as exc:
            raise CalDAVNetworkError("Network connection failed", exc) from exc

        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = "utf-8"

        logger.debug("%s %s -> %s", method, url, response.status_code)
        if not response.ok:
            message = response.text.strip() or response.reason
            raise self._http_error(response.status_code, message, url)

        return DAVResponse(status_code=response.status_code, text=response.text, headers=response.headers)

    def _auth(self, digest: bool) -> AuthBase | None:
        if not self.config.username:
            return None
        if digest or self.config.auth_type == "digest":
            return HTTPDigestAuth(self.config.username, self.config.password)
        return HTTPBasicAuth(self.config.username, self.config.password)

    def _http_error(self, status_code: int, message: str, url: str) -> CalDAVError:
        if status_code == 401:
            return CalDAVAPIError("Unauthorized: Check CALDAV_USERNAME and CALDAV_PASSWORD", status_code)
        if status_code == 403:
            return CalDAVAPIError(f"Forbidden: Access denied to {url}", status_code)
        if status_code == 404:
            return CalDAVAPIError(f"Not found: {url}", status_code)
        if status_code >= 500:
            return CalDAVAPIError("Internal server error", status_code, message)
        return CalDAVAPIError(f"HTTP error ({status_code}): {message}", status_code, message)
