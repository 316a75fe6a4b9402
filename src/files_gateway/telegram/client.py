"""Telegram Bot API client covering the three file-store calls the gateway needs."""
import logging
from typing import Any, Callable, Dict, Optional

import requests

from files_gateway.errors import (
    MalformedRemoteResponse,
    NetworkFailure,
    RemoteRejection,
)
from files_gateway.telegram.operations import RemoteOperation
from files_gateway.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)

# Bot API caption limit
MAX_CAPTION_LENGTH = 1024


class TelegramFileStore:
    """HTTP client treating a Telegram chat as a remote file-store.

    Credentials are fixed at construction. Every call is a single request
    with an explicit timeout and is never retried; callers decide on retries.
    """

    def __init__(
        self,
        bot_token: str,
        api_url: str = "https://api.telegram.org",
        timeout: float = 30.0,
        session_factory: Optional[Callable[[], requests.Session]] = None,
    ):
        """Initialize the client.

        Args:
            bot_token: Bot access token; becomes the ``bot<token>`` URL segment
            api_url: Base URL of the Bot API
            timeout: Request timeout in seconds
            session_factory: Builds the session for one call; defaults to
                ``requests.Session``. Sessions are never shared between
                calls, so concurrent requests keep no common state.
        """
        self.bot_token = bot_token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session_factory = session_factory or requests.Session

    @property
    def credential_segment(self) -> str:
        return f"bot{self.bot_token}"

    def method_url(self, method: str) -> str:
        return f"{self.api_url}/{self.credential_segment}/{method}"

    def file_url(self, file_path: str) -> str:
        """Retrieval URL for a path returned by ``getFile``."""
        return f"{self.api_url}/file/{self.credential_segment}/{file_path}"

    def _redact(self, text: str) -> str:
        return text.replace(self.bot_token, "<token>") if self.bot_token else text

    def _parse(self, response: requests.Response, method: str) -> Dict[str, Any]:
        """Decode a Bot API envelope, raising on ok=false."""
        # The Bot API reports errors with 4xx/5xx *and* a JSON envelope, so the
        # body is read regardless of the HTTP status.
        try:
            body = response.json()
        except ValueError:
            raise MalformedRemoteResponse(
                detail=f"{method} returned HTTP {response.status_code} with a non-JSON body"
            )

        if not isinstance(body, dict) or not isinstance(body.get("ok"), bool):
            raise MalformedRemoteResponse(detail=f"{method} returned a body without a boolean 'ok'")

        if not body["ok"]:
            description = body.get("description")
            error_code = body.get("error_code")
            logger.warning(f"{method} rejected by Telegram: {error_code} {description}")
            raise RemoteRejection(description=description, error_code=error_code)

        return body

    def _request(self, http_method: str, method: str, **kwargs) -> Dict[str, Any]:
        try:
            with self.session_factory() as session:
                response = session.request(
                    http_method,
                    self.method_url(method),
                    timeout=self.timeout,
                    **kwargs,
                )
        except requests.RequestException as e:
            detail = self._redact(f"{type(e).__name__}: {e}")
            logger.error(f"{method} request failed: {detail}")
            raise NetworkFailure(detail=detail)
        return self._parse(response, method)

    @log_execution_time("telegram.send_file")
    def send_file(
        self,
        operation: RemoteOperation,
        chat_id: str,
        payload: bytes,
        filename: str,
        media_type: Optional[str] = None,
        caption: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Upload a payload with the given write operation.

        :param operation: Decides the endpoint and the multipart field name.
        :param chat_id: Destination chat that stores the file.
        :param payload: Complete file content, already size-checked.
        :param filename: Name sent along with the payload.
        :param media_type: MIME type sent along with the payload.
        :param caption: Optional message caption, truncated to the Bot API limit.
        :return: The ``result`` message object of the Bot API response.
        """
        data = {"chat_id": chat_id}
        if caption:
            data["caption"] = caption[:MAX_CAPTION_LENGTH]
        files = {
            operation.field_name: (filename, payload, media_type or "application/octet-stream"),
        }
        logger.info(f"Sending {len(payload)} bytes to {operation.endpoint} as '{operation.field_name}'")
        body = self._request("POST", operation.endpoint, data=data, files=files)
        return body.get("result")

    @log_execution_time("telegram.get_file")
    def get_file(self, file_id: str) -> Dict[str, Any]:
        """Look up a stored file; the result carries ``file_path`` when downloadable."""
        body = self._request("GET", "getFile", params={"file_id": file_id})
        result = body.get("result")
        if not isinstance(result, dict):
            raise MalformedRemoteResponse(detail="getFile result is not an object")
        return result
