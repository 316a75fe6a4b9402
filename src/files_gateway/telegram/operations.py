"""Mapping from a declared MIME type to the Bot API write operation."""
from enum import Enum
from typing import Optional


class RemoteOperation(str, Enum):
    """Write operations of the remote file-store.

    The value is the coarse media-type label; it is also the multipart field
    name the Bot API expects the payload under.
    """

    SEND_PHOTO = "photo"
    SEND_VIDEO = "video"
    SEND_DOCUMENT = "document"

    @property
    def field_name(self) -> str:
        return self.value

    @property
    def endpoint(self) -> str:
        return _ENDPOINTS[self]


_ENDPOINTS = {
    RemoteOperation.SEND_PHOTO: "sendPhoto",
    RemoteOperation.SEND_VIDEO: "sendVideo",
    RemoteOperation.SEND_DOCUMENT: "sendDocument",
}


def classify_media_type(media_type: Optional[str]) -> RemoteOperation:
    """Pick the write operation for a client-declared MIME type.

    Only the declared type is inspected; file content is never sniffed, so a
    client that mislabels a PDF as ``image/png`` gets ``sendPhoto`` and the
    remote store's verdict on it.
    """
    if not media_type:
        return RemoteOperation.SEND_DOCUMENT

    # "image/PNG; charset=x" -> "image/png"
    essence = media_type.split(";", 1)[0].strip().lower()
    if essence.startswith("image/"):
        return RemoteOperation.SEND_PHOTO
    if essence.startswith("video/"):
        return RemoteOperation.SEND_VIDEO
    return RemoteOperation.SEND_DOCUMENT
