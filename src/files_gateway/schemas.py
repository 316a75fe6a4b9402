####################################
# --- Request/response schemas --- #
####################################

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from files_gateway.services.uploads import UploadResult


class UploadFileResponse(BaseModel):
    """Response model for `POST /api/upload`.

    Field names are camelCase on the wire; existing clients read
    ``telegramFileId`` as the download handle.
    """
    success: Literal[True] = True
    telegram_file_id: str = Field(
        alias="telegramFileId",
        description="Opaque reference to pass to `GET /api/download/{fileId}`.",
        json_schema_extra={"example": "BQACAgQAAxkDAAIBQ2Z..."},
    )
    file_name: str = Field(alias="fileName", description="The uploaded file's name.")
    file_size: int = Field(alias="fileSize", description="The size of the file in bytes.")
    media_type: Literal["photo", "video", "document"] = Field(
        alias="mediaType",
        description="How the file was stored, derived from its declared MIME type.",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "success": True,
                "telegramFileId": "BQACAgQAAxkDAAIBQ2Z...",
                "fileName": "report.pdf",
                "fileSize": 52344,
                "mediaType": "document",
            }
        },
    )

    @classmethod
    def from_result(cls, result: UploadResult) -> "UploadFileResponse":
        return cls(
            telegram_file_id=result.telegram_file_id,
            file_name=result.file_name,
            file_size=result.file_size,
            media_type=result.media_type,
        )


class ErrorResponse(BaseModel):
    """Body of every failed request."""
    success: Literal[False] = False
    message: str

    model_config = ConfigDict(
        json_schema_extra={"example": {"success": False, "message": "No file was uploaded."}}
    )


class HealthResponse(BaseModel):
    """Response model for `GET /api/health`."""
    status: Literal["ok", "degraded"]
    configured: bool
    missing_settings: List[str] = Field(default_factory=list)
    telegram_api_url: str
    max_upload_size_bytes: int
