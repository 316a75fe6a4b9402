"""
Normalization of the Bot API ``result`` object into one file reference.

The shape of a successful write depends on the operation used: ``sendPhoto``
returns a ``photo`` list of size variants, ``sendVideo`` a ``video`` object
and ``sendDocument`` a ``document`` object. The shape is parsed once into a
small closed set of variants so the photo > video > document priority lives
in one place.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Union

from files_gateway.errors import ExtractionFailure


@dataclass(frozen=True)
class PhotoResult:
    """Photo variants, smallest first as the Bot API orders them."""
    sizes: List[Dict[str, Any]]

    @property
    def file_reference(self) -> str:
        # Largest variant is last; earlier entries are thumbnails
        return _file_id(self.sizes[-1], "photo")


@dataclass(frozen=True)
class VideoResult:
    file: Dict[str, Any]

    @property
    def file_reference(self) -> str:
        return _file_id(self.file, "video")


@dataclass(frozen=True)
class DocumentResult:
    file: Dict[str, Any]

    @property
    def file_reference(self) -> str:
        return _file_id(self.file, "document")


MediaResult = Union[PhotoResult, VideoResult, DocumentResult]


def _file_id(entry: Any, field: str) -> str:
    file_id = entry.get("file_id") if isinstance(entry, dict) else None
    if not isinstance(file_id, str) or not file_id:
        raise ExtractionFailure(detail=f"'{field}' entry has no file_id")
    return file_id


def parse_media_result(result: Any) -> MediaResult:
    """Resolve the populated media field of a Bot API message.

    :raises ExtractionFailure: if none of photo, video or document is present,
        or the present one is not shaped as expected.
    """
    if not isinstance(result, dict):
        raise ExtractionFailure(detail=f"result is {type(result).__name__}, expected an object")

    if result.get("photo") is not None:
        sizes = result["photo"]
        if not isinstance(sizes, list) or not sizes:
            raise ExtractionFailure(detail="'photo' is not a non-empty list")
        return PhotoResult(sizes=sizes)
    if result.get("video") is not None:
        return VideoResult(file=result["video"])
    if result.get("document") is not None:
        return DocumentResult(file=result["document"])

    raise ExtractionFailure(detail=f"no photo, video or document in result keys {sorted(result)}")


def extract_file_reference(result: Any) -> str:
    """Return the single RemoteFileReference carried by a write result."""
    return parse_media_result(result).file_reference
