#!/usr/bin/env python3
"""
HTTP client for a running asset browser server.

Wraps the listing query and raw file retrieval with retries, so scripts and
the CLI can talk to a remote server the same way they use a local lister.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import requests

from .errors import AssetBrowserError


class ClientError(AssetBrowserError):
    """A request failed; ``status_code`` is None for transport failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class RemoteVariant:
    name: str
    url: str
    ext: str
    size: int
    mimetype: str
    is_image: bool
    is_preview: bool
    tags: List[str] = field(default_factory=list)


@dataclass
class RemoteItem:
    """One item of a remote listing (directory or asset group)."""

    name: str
    path: str
    is_dir: bool
    kind: str
    url: Optional[str] = None
    thumbnail: Optional[str] = None
    key: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    files: List[RemoteVariant] = field(default_factory=list)


@dataclass
class RemoteListing:
    cwd: str
    items: List[RemoteItem] = field(default_factory=list)
    tags: List[Dict[str, Any]] = field(default_factory=list)


class AssetBrowserClient:
    """
    Client for the asset browser HTTP API.

    Transport failures and 5xx responses are retried with exponential
    back-off; 4xx responses are raised immediately since retrying cannot fix
    them.
    """

    def __init__(self, base_url: str = "http://localhost:5174", timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"Accept": "application/json"}
        self.max_retries = 3
        self.retry_delay = 0.5

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        last_error: Optional[Exception] = None
        for attempt in range(self.max_retries):
            try:
                response = requests.get(url, params=params, headers=self.headers, timeout=self.timeout)
            except requests.RequestException as exc:
                last_error = exc
            else:
                if response.status_code < 400:
                    return response
                error = ClientError(_error_message(response), status_code=response.status_code)
                if response.status_code < 500:
                    raise error
                last_error = error

            if attempt < self.max_retries - 1:
                time.sleep(self.retry_delay * (2**attempt))

        if isinstance(last_error, ClientError):
            raise last_error
        raise ClientError(f"GET {url} failed after retries: {last_error}") from last_error

    def list_directory(
        self,
        rel_path: str = "",
        query: str = "",
        tags: Sequence[str] = (),
        tag_sort: str = "pop",
    ) -> Dict[str, Any]:
        """Fetch the raw listing JSON for a directory."""
        params: Dict[str, Any] = {}
        if rel_path:
            params["dir"] = rel_path
        if query:
            params["q"] = query
        if tags:
            params["tag"] = list(tags)
        if tag_sort != "pop":
            params["tag_sort"] = tag_sort
        return self._get("/api/assets", params=params or None).json()

    def get_listing(self, rel_path: str = "", **filters: Any) -> RemoteListing:
        """Fetch a directory listing parsed into dataclasses."""
        return self._parse_listing(self.list_directory(rel_path, **filters))

    def fetch_file(self, url_or_path: str) -> bytes:
        """Download a raw file, given its public URL (``/files/...``) or relative path."""
        path = url_or_path if url_or_path.startswith("/files/") else "/files/" + url_or_path.lstrip("/")
        return self._get(path).content

    def _parse_listing(self, data: Dict[str, Any]) -> RemoteListing:
        items: List[RemoteItem] = []
        for item_data in data.get("items") or []:
            files = [
                RemoteVariant(
                    name=f.get("name") or "",
                    url=f.get("url") or "",
                    ext=f.get("ext") or "",
                    size=int(f.get("size") or 0),
                    mimetype=f.get("mimetype") or "",
                    is_image=bool(f.get("isImage")),
                    is_preview=bool(f.get("isPreviewLike")),
                    tags=list(f.get("tags") or []),
                )
                for f in item_data.get("files") or []
            ]
            items.append(
                RemoteItem(
                    name=item_data.get("name") or "",
                    path=item_data.get("path") or "",
                    is_dir=bool(item_data.get("isDir")),
                    kind=item_data.get("kind") or "other",
                    url=item_data.get("url"),
                    thumbnail=item_data.get("thumbnail"),
                    key=item_data.get("normalizeBase"),
                    tags=list(item_data.get("tags") or []),
                    files=files,
                )
            )
        return RemoteListing(cwd=data.get("cwd") or "", items=items, tags=list(data.get("tags") or []))


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error"):
        return f"HTTP {response.status_code}: {payload['error']}"
    return f"HTTP {response.status_code}: {response.text.strip()[:200]}"
