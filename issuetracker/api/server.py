"""HTTP server for the issues API.

Routes GET/POST/PUT/DELETE {api_prefix}/{project} to the handlers, plus a
health check on / and /health. The store lives on the server object, so each
server (and each test) has its own.
"""

import json
import logging
from collections.abc import Callable, Mapping
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import unquote, urlsplit

from issuetracker.api.handlers import create_issue, delete_issue, list_issues, update_issue
from issuetracker.api.request import content_length, parse_body, parse_query
from issuetracker.config import AppConfig
from issuetracker.logging import ACCESS_LOGGER
from issuetracker.store import IssueStore

LOG = logging.getLogger("issuetracker.api.server")
ACCESS_LOG = logging.getLogger(ACCESS_LOGGER)

BodyHandler = Callable[[IssueStore, str, Mapping[str, Any]], Any]

BODY_HANDLERS: dict[str, BodyHandler] = {
    "POST": create_issue,
    "PUT": update_issue,
    "DELETE": delete_issue,
}


class IssueTrackerServer(ThreadingHTTPServer):
    """Threading HTTP server carrying the shared store and config."""

    daemon_threads = True

    def __init__(self, address: tuple[str, int], config: AppConfig, store: IssueStore) -> None:
        self.config = config
        self.store = store
        super().__init__(address, IssueRequestHandler)


class IssueRequestHandler(BaseHTTPRequestHandler):
    """Handle /health and {api_prefix}/{project} for all four methods."""

    server: IssueTrackerServer
    server_version = "issuetracker"

    def do_GET(self) -> None:
        self._dispatch("GET")

    def do_POST(self) -> None:
        self._dispatch("POST")

    def do_PUT(self) -> None:
        self._dispatch("PUT")

    def do_DELETE(self) -> None:
        self._dispatch("DELETE")

    def _project_from_path(self, path: str) -> str | None:
        """Project name from {api_prefix}/{project}, or None if path does not match."""
        prefix = self.server.config.server.api_prefix + "/"
        if not path.startswith(prefix):
            return None
        rest = path[len(prefix) :].rstrip("/")
        if not rest or "/" in rest:
            return None
        return unquote(rest)

    def _read_body(self) -> dict[str, Any]:
        length = content_length(self.headers.get("Content-Length"), self.headers.get("Transfer-Encoding"))
        body = self.rfile.read(length) if length else b""
        return parse_body(body, self.headers.get("Content-Type", ""))

    def _dispatch(self, method: str) -> None:
        url = urlsplit(self.path)
        if method == "GET" and url.path in ("/", "/health"):
            self._send_json(200, {"status": "ok", "service": "issuetracker"})
            return

        project = self._project_from_path(url.path)
        if project is None:
            self._send_json(404, {"error": "not found"})
            return

        try:
            if method == "GET":
                payload = list_issues(self.server.store, project, parse_query(url.query))
            else:
                payload = BODY_HANDLERS[method](self.server.store, project, self._read_body())
        except Exception as e:
            LOG.exception("%s %s failed: %s", method, self.path, e)
            self._send_json(500, {"error": "internal server error"})
            return
        self._send_json(200, payload)

    def _send_json(self, status: int, payload: Any) -> None:
        data = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format: str, *args: Any) -> None:
        ACCESS_LOG.info("%s - " + format, self.address_string(), *args)


def make_server(config: AppConfig, store: IssueStore) -> IssueTrackerServer:
    """Bind the server to config.server.host/port without serving yet."""
    return IssueTrackerServer((config.server.host, config.server.port), config, store)


def run_server(config: AppConfig, store: IssueStore) -> None:
    """Serve the issues API until interrupted."""
    server = make_server(config, store)
    host, port = server.server_address[:2]
    LOG.info("Issue tracker listening on %s:%s%s/{project}", host, port, config.server.api_prefix)
    try:
        server.serve_forever()
    finally:
        server.server_close()
