#!/usr/bin/env python3
"""
HTTP surface of the asset browser.

Routes:
- ``GET /api/assets?dir=<rel>`` lists one directory as JSON. Optional ``q``,
  ``tag`` (repeatable) and ``tag_sort`` narrow the listing.
- ``GET /files/<rel>`` streams a raw file from under the root.

Each request runs the listing pipeline from scratch on its own thread; the
server only shares the read-only lister and ruleset between threads.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, unquote, urlsplit

from .config import BrowserConfig
from .directory_lister import DirectoryLister
from .errors import ListingError, NotFoundError, PathTraversalError
from .file_record import FILES_URL_PREFIX
from .listing_filter import TAG_SORTS, filter_listing
from .media_types import MediaTypes
from .path_guard import safe_join
from .ruleset import AssetRuleset, load_ruleset

logger = logging.getLogger(__name__)

STREAM_CHUNK_SIZE = 64 * 1024


def send_json_response(handler: BaseHTTPRequestHandler, payload: Dict[str, Any], status: int = 200) -> None:
    body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    handler.send_response(status)
    handler.send_header("Content-Type", "application/json; charset=utf-8")
    handler.send_header("Content-Length", str(len(body)))
    handler.end_headers()
    handler.wfile.write(body)


def send_text_response(handler: BaseHTTPRequestHandler, text: str, status: int) -> None:
    body = text.encode("utf-8")
    handler.send_response(status)
    handler.send_header("Content-Type", "text/plain; charset=utf-8")
    handler.send_header("Content-Length", str(len(body)))
    handler.end_headers()
    handler.wfile.write(body)


class AssetHTTPServer(ThreadingHTTPServer):
    """Threading HTTP server carrying the lister shared by all handlers."""

    daemon_threads = True

    def __init__(self, address, lister: DirectoryLister):
        super().__init__(address, AssetRequestHandler)
        self.lister = lister
        self.media_types = MediaTypes(lister.ruleset)


class AssetRequestHandler(BaseHTTPRequestHandler):
    server: AssetHTTPServer

    def log_message(self, format: str, *args: object) -> None:  # noqa: A003
        logger.info("%s - %s", self.address_string(), format % args)

    def do_GET(self) -> None:  # noqa: N802
        parsed = urlsplit(self.path)
        if parsed.path == "/api/assets":
            self._handle_listing(parse_qs(parsed.query))
            return
        if parsed.path.startswith(FILES_URL_PREFIX):
            self._handle_file(unquote(parsed.path[len(FILES_URL_PREFIX):]))
            return
        send_json_response(self, {"error": "not found"}, status=404)

    def _handle_listing(self, params: Dict[str, list]) -> None:
        rel = _first(params, "dir") or ""
        tag_sort = _first(params, "tag_sort") or "pop"
        if tag_sort not in TAG_SORTS:
            send_json_response(self, {"error": f"tag_sort must be one of {', '.join(TAG_SORTS)}"}, status=400)
            return
        try:
            listing = self.server.lister.list(rel)
        except PathTraversalError as exc:
            logger.warning("Rejected listing outside root: %r", rel)
            send_json_response(self, {"error": str(exc)}, status=403)
            return
        except ListingError as exc:
            logger.error("Listing failed for %r: %s", rel, exc.reason)
            send_json_response(self, {"error": str(exc)}, status=404)
            return
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected listing failure for %r", rel)
            send_json_response(self, {"error": str(exc)}, status=500)
            return

        query = _first(params, "q") or ""
        tags = params.get("tag", [])
        if query or tags or tag_sort != "pop":
            listing = filter_listing(listing, query=query, tags=tags, tag_sort=tag_sort)
        send_json_response(self, listing.to_dict())

    def _handle_file(self, rel_path: str) -> None:
        try:
            abs_path = safe_join(self.server.lister.root, rel_path)
            if os.path.isdir(abs_path):
                send_text_response(self, "Directory listing via /api/assets only", 400)
                return
            if not os.path.isfile(abs_path):
                raise NotFoundError(rel_path)
            handle = open(abs_path, "rb")
        except PathTraversalError:
            logger.warning("Rejected file request outside root: %r", rel_path)
            send_text_response(self, "Forbidden", 403)
            return
        except (NotFoundError, OSError):
            send_text_response(self, "Not found", 404)
            return

        with handle:
            self._stream_file(handle, os.path.basename(abs_path))

    def _stream_file(self, handle, name: str) -> None:
        ext = os.path.splitext(name)[1].lower()
        content_type = self.server.media_types.guess(name, ext)
        size = os.fstat(handle.fileno()).st_size
        self.send_response(200)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(size))
        self.end_headers()
        shutil.copyfileobj(handle, self.wfile, STREAM_CHUNK_SIZE)


def _first(params: Dict[str, list], name: str) -> Optional[str]:
    values = params.get(name)
    return values[0] if values else None


def make_server(config: BrowserConfig, ruleset: Optional[AssetRuleset] = None) -> AssetHTTPServer:
    """
    Build a server for the configured root without starting it.

    Args:
        config: Service configuration
        ruleset: Ruleset to use; loaded from ``config.dictionary`` when None
    """
    ruleset = ruleset or load_ruleset(config.dictionary)
    lister = DirectoryLister(config.assets_root, ruleset, stable_order=config.stable_order)
    return AssetHTTPServer((config.host, config.port), lister)


def serve(config: BrowserConfig) -> None:
    """Run the server until interrupted."""
    server = make_server(config)
    host, port = server.server_address[:2]
    logger.info("Asset API running at http://%s:%s", host, port)
    logger.info("Serving files from: %s", os.path.abspath(config.assets_root))
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
