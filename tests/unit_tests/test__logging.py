import json
import logging
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from files_gateway.config.settings import TokenRedactingFilter, configure_logging
from files_gateway.main import create_app
from tests.consts import TEST_BOT_TOKEN
from tests.fixtures.telegram_fixtures import make_settings


class GetFileHandler(BaseHTTPRequestHandler):
    """Answers every request like a successful Bot API getFile."""

    def do_GET(self):
        body = json.dumps({"ok": True, "result": {"file_id": "d1", "file_path": "documents/d1.pdf"}}).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def local_bot_api(monkeypatch):
    monkeypatch.setenv("NO_PROXY", "127.0.0.1")
    server = HTTPServer(("127.0.0.1", 0), GetFileHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_port}"
    server.shutdown()
    server.server_close()


def test_debug_logging_never_contains_token(local_bot_api, caplog):
    caplog.set_level(logging.DEBUG)
    app = create_app(settings=make_settings(telegram_api_url=local_bot_api, log_level="DEBUG"))

    with TestClient(app, follow_redirects=False) as test_client:
        response = test_client.get("/api/download/d1")

    assert response.status_code == status.HTTP_302_FOUND
    assert TEST_BOT_TOKEN in response.headers["location"]
    assert caplog.records
    assert TEST_BOT_TOKEN not in caplog.text


def test_urllib3_is_held_at_info():
    configure_logging("DEBUG")

    assert logging.getLogger("urllib3").getEffectiveLevel() == logging.INFO


def test_filter_masks_token_in_formatted_message():
    record = logging.LogRecord(
        name="urllib3.connectionpool",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=1,
        msg='%s "%s %s HTTP/1.1" %s',
        args=("http://127.0.0.1:8081", "GET", f"/bot{TEST_BOT_TOKEN}/getFile?file_id=d1", 200),
        exc_info=None,
    )

    assert TokenRedactingFilter().filter(record) is True
    assert TEST_BOT_TOKEN not in record.getMessage()
    assert "/bot<token>/getFile" in record.getMessage()


def test_filter_leaves_other_records_alone():
    record = logging.LogRecord("files_gateway", logging.INFO, __file__, 1, "Sending %d bytes", (5,), None)

    TokenRedactingFilter().filter(record)

    assert record.args == (5,)
    assert record.getMessage() == "Sending 5 bytes"
