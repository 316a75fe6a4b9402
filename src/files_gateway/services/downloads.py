"""Resolution of a stored file reference into a retrieval URL."""
import logging
from typing import Optional

from files_gateway.config.settings import Settings
from files_gateway.errors import (
    ConfigurationError,
    ExtractionFailure,
    ReferenceNotFound,
    RemoteRejection,
    ValidationError,
)
from files_gateway.telegram.client import TelegramFileStore

logger = logging.getLogger(__name__)

# Path segments that reach the route when a client interpolates a missing id
RESERVED_REFERENCES = frozenset({"undefined", "null", "download", ":fileid", "{fileid}"})

# getFile answers these for unknown or malformed file ids
NOT_FOUND_ERROR_CODES = frozenset({400, 404})


class ReferenceResolver:
    """Translate a RemoteFileReference into the remote store's download URL.

    The gateway only resolves where the bytes are; clients fetch them from
    the remote store directly.
    """

    def __init__(self, settings: Settings, file_store: Optional[TelegramFileStore]):
        self.settings = settings
        self.file_store = file_store

    @staticmethod
    def validate_reference(file_id: Optional[str]) -> str:
        reference = (file_id or "").strip()
        if not reference or reference.lower() in RESERVED_REFERENCES:
            raise ValidationError("Invalid file id.")
        return reference

    def resolve(self, file_id: Optional[str]) -> str:
        """Return the retrieval URL for ``file_id``.

        :raises ValidationError: for an empty or reserved reference.
        :raises ReferenceNotFound: if the remote store does not know it.
        """
        reference = self.validate_reference(file_id)
        # Lookups need only the bot token
        self.settings.require_credentials("BOT_TOKEN")
        if self.file_store is None:
            raise ConfigurationError(["BOT_TOKEN"])

        try:
            result = self.file_store.get_file(reference)
        except RemoteRejection as e:
            if e.error_code in NOT_FOUND_ERROR_CODES:
                raise ReferenceNotFound(detail=e.description)
            raise

        file_path = result.get("file_path")
        if not isinstance(file_path, str) or not file_path:
            # Telegram omits file_path for files above its download limit
            raise ExtractionFailure(
                message="File is not available for download.",
                detail=f"getFile returned no file_path for {reference}",
            )

        logger.info(f"Resolved {reference} to {file_path}")
        return self.file_store.file_url(file_path)
