"""Stub Telegram Bot API and app fixtures for tests."""
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from files_gateway.config.settings import Settings
from files_gateway.main import create_app
from files_gateway.telegram.client import TelegramFileStore
from tests.consts import (
    TEST_API_URL,
    TEST_BOT_TOKEN,
    TEST_CHAT_ID,
    TEST_MAX_UPLOAD_SIZE_BYTES,
)


class StubResponse:
    """The slice of ``requests.Response`` the client reads."""

    def __init__(self, body: Any = None, status_code: int = 200, text: Optional[str] = None):
        self.body = body
        self.status_code = status_code
        self.text = text

    def json(self):
        if self.text is not None:
            raise ValueError("No JSON object could be decoded")
        return self.body


class StubSession:
    """Records outbound calls and answers them with queued responses per Bot API method."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.responses: Dict[str, StubResponse] = {}
        self.error: Optional[Exception] = None

    def respond(self, method: str, body: Any = None, status_code: int = 200, text: Optional[str] = None) -> None:
        self.responses[method] = StubResponse(body=body, status_code=status_code, text=text)

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def request(self, http_method: str, url: str, **kwargs) -> StubResponse:
        method = url.rsplit("/", 1)[-1]
        self.calls.append({"http_method": http_method, "url": url, "method": method, **kwargs})
        if self.error is not None:
            raise self.error
        return self.responses[method]

    def __enter__(self) -> "StubSession":
        return self

    def __exit__(self, *exc_info) -> None:
        pass


def ok(result: Any) -> Dict[str, Any]:
    return {"ok": True, "result": result}


def rejected(description: str, error_code: int = 400) -> Dict[str, Any]:
    return {"ok": False, "error_code": error_code, "description": description}


def make_settings(**overrides) -> Settings:
    values = {
        "bot_token": TEST_BOT_TOKEN,
        "chat_id": TEST_CHAT_ID,
        "telegram_api_url": TEST_API_URL,
        "max_upload_size_bytes": TEST_MAX_UPLOAD_SIZE_BYTES,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def stub_session() -> StubSession:
    return StubSession()


@pytest.fixture
def file_store(stub_session: StubSession) -> TelegramFileStore:
    return TelegramFileStore(
        bot_token=TEST_BOT_TOKEN,
        api_url=TEST_API_URL,
        timeout=5.0,
        session_factory=lambda: stub_session,
    )


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def client(settings: Settings, file_store: TelegramFileStore) -> TestClient:
    app = create_app(settings=settings, file_store=file_store)
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


@pytest.fixture
def unconfigured_client() -> TestClient:
    """App started without BOT_TOKEN and CHAT_ID."""
    app = create_app(settings=make_settings(bot_token=None, chat_id=None))
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
