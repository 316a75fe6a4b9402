"""
Remote file-store integration.

Wraps the Telegram Bot API calls (sendPhoto, sendVideo, sendDocument, getFile)
and the normalization of their responses.
"""
from files_gateway.telegram.client import TelegramFileStore
from files_gateway.telegram.operations import RemoteOperation, classify_media_type
from files_gateway.telegram.references import extract_file_reference, parse_media_result

__all__ = [
    "RemoteOperation",
    "TelegramFileStore",
    "classify_media_type",
    "extract_file_reference",
    "parse_media_result",
]
