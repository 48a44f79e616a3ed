"""
Pytest configuration and fixtures for client tests
"""

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from gaxios.config import ClientConfig


class RecordingServer:
    """Local HTTP server that records requests and answers with a canned response"""

    def __init__(self):
        self.requests: list[dict] = []
        self.status = 200
        self.body: bytes = b'{"message": "request success"}'
        self.headers: dict[str, str] = {"Content-Type": "application/json"}
        self._server = ThreadingHTTPServer(("127.0.0.1", 0), self._handler_class())
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    @property
    def url(self) -> str:
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}"

    def respond(self, status: int, body=b"", headers: dict[str, str] | None = None):
        """Set the response returned for every following request"""
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.status = status
        self.body = body
        if headers is not None:
            self.headers = headers

    @property
    def last_request(self) -> dict:
        return self.requests[-1]

    def start(self):
        self._thread.start()

    def stop(self):
        self._server.shutdown()
        self._server.server_close()

    def _handler_class(self):
        server = self

        class Handler(BaseHTTPRequestHandler):
            def _handle(self):
                length = int(self.headers.get("Content-Length") or 0)
                body = self.rfile.read(length) if length else b""
                server.requests.append(
                    {
                        "method": self.command,
                        "path": self.path,
                        "headers": dict(self.headers.items()),
                        "body": body,
                    }
                )
                self.send_response(server.status)
                for name, value in server.headers.items():
                    self.send_header(name, value)
                self.send_header("Content-Length", str(len(server.body)))
                self.end_headers()
                self.wfile.write(server.body)

            do_GET = _handle
            do_POST = _handle
            do_PATCH = _handle
            do_DELETE = _handle

            def log_message(self, format, *args):
                pass

        return Handler


PROXY_VARIABLES = ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "NO_PROXY")


@pytest.fixture(autouse=True)
def clean_proxy_environ(monkeypatch):
    """Keep proxy settings from the environment away from requests to the local server"""
    for name in PROXY_VARIABLES:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.lower(), raising=False)


@pytest.fixture
def test_server():
    """Running RecordingServer, shut down after the test"""
    server = RecordingServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture
def json_config():
    """Config sending Accept: application/json on every request"""
    return ClientConfig(headers={"Accept": "application/json"})
