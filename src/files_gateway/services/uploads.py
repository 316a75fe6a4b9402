"""Upload classification and dispatch to the remote file-store."""
import logging
from dataclasses import dataclass
from typing import Optional

from files_gateway.config.settings import Settings
from files_gateway.errors import ConfigurationError, ValidationError
from files_gateway.telegram.client import TelegramFileStore
from files_gateway.telegram.operations import RemoteOperation, classify_media_type
from files_gateway.telegram.references import extract_file_reference

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "upload.bin"


@dataclass
class UploadRequest:
    """A parsed multipart upload, alive for one request."""
    payload: Optional[bytes]
    filename: Optional[str]
    media_type: Optional[str]

    @property
    def size(self) -> int:
        return len(self.payload) if self.payload else 0


@dataclass(frozen=True)
class UploadResult:
    success: bool
    file_name: str
    file_size: int
    media_type: str
    telegram_file_id: Optional[str] = None


def build_caption(filename: str) -> str:
    return f"File Upload: {filename}"


class UploadService:
    """Decide how an upload is stored and return the handle the store issues."""

    def __init__(self, settings: Settings, file_store: Optional[TelegramFileStore]):
        self.settings = settings
        self.chat_id = settings.chat_id
        self.max_upload_size_bytes = settings.max_upload_size_bytes
        self.file_store = file_store

    def check_configured(self) -> None:
        self.settings.require_credentials()
        if self.file_store is None:
            raise ConfigurationError(["BOT_TOKEN"])

    def check_size(self, size: Optional[int]) -> None:
        """Enforce the upload ceiling; ``None`` means the size is not known yet."""
        if size is not None and size > self.max_upload_size_bytes:
            raise ValidationError(
                f"File is too large: {size} bytes exceeds the "
                f"{self.max_upload_size_bytes} byte limit."
            )

    def validate(self, upload: Optional[UploadRequest]) -> None:
        """Reject uploads before any remote call is made."""
        if upload is None or upload.payload is None:
            raise ValidationError("No file was uploaded.")
        if upload.size == 0:
            raise ValidationError("Uploaded file is empty.")
        self.check_size(upload.size)

    def upload(self, upload: Optional[UploadRequest]) -> UploadResult:
        """Store one upload on the remote file-store.

        Configuration is checked first, then the payload, then the single
        remote write. Failures surface as ``GatewayError`` subclasses.
        """
        self.check_configured()
        self.validate(upload)

        filename = upload.filename or DEFAULT_FILENAME
        operation: RemoteOperation = classify_media_type(upload.media_type)
        logger.info(
            f"Uploading '{filename}' ({upload.size} bytes, declared {upload.media_type!r}) "
            f"via {operation.endpoint}"
        )

        result = self.file_store.send_file(
            operation=operation,
            chat_id=self.chat_id,
            payload=upload.payload,
            filename=filename,
            media_type=upload.media_type,
            caption=build_caption(filename),
        )
        file_id = extract_file_reference(result)

        logger.info(f"Stored '{filename}' as {operation.value} {file_id}")
        return UploadResult(
            success=True,
            telegram_file_id=file_id,
            file_name=filename,
            file_size=upload.size,
            media_type=operation.value,
        )
