from typing import Optional

from fastapi import APIRouter, Depends, File, Path, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse

from files_gateway.dependencies import get_reference_resolver, get_upload_service
from files_gateway.errors import ValidationError
from files_gateway.schemas import ErrorResponse, UploadFileResponse
from files_gateway.services.downloads import ReferenceResolver
from files_gateway.services.uploads import UploadRequest, UploadService

router = APIRouter()


@router.post(
    "/upload",
    response_model=UploadFileResponse,
    response_model_by_alias=True,
    responses={
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "No file, an empty file, or a file above the size limit.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Missing configuration or the remote file-store failed.",
        },
    },
)
async def upload_file(
    file: Optional[UploadFile] = File(None, description="The file to store."),
    upload_service: UploadService = Depends(get_upload_service),
) -> UploadFileResponse:
    """
    Store a file on Telegram and return its reference.

    `image/*` uploads are sent as photos, `video/*` as videos and everything
    else as documents. The declared content type is trusted as-is.
    """
    upload_service.check_configured()
    if file is None:
        raise ValidationError("No file was uploaded.")

    # Refuse before buffering when the parser already knows the size
    upload_service.check_size(file.size)
    try:
        payload = await file.read()
    finally:
        await file.close()

    upload = UploadRequest(payload=payload, filename=file.filename, media_type=file.content_type)
    # requests is blocking; keep the event loop free while Telegram answers
    result = await run_in_threadpool(upload_service.upload, upload)
    return UploadFileResponse.from_result(result)


@router.get(
    "/download/{file_id}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={
        status.HTTP_302_FOUND: {"description": "Redirect to the file on the Telegram file server."},
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Invalid file id."},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Unknown file id."},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def download_file(
    file_id: str = Path(..., description="The `telegramFileId` returned by the upload."),
    resolver: ReferenceResolver = Depends(get_reference_resolver),
) -> RedirectResponse:
    """
    Redirect to a stored file.

    The gateway only looks up where the file lives; the bytes are served by
    Telegram. Retrieval URLs may expire, so clients should resolve again
    rather than cache them.
    """
    url = await run_in_threadpool(resolver.resolve, file_id)
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get("/download", include_in_schema=False)
@router.get("/download/", include_in_schema=False)
async def download_without_file_id() -> RedirectResponse:
    raise ValidationError("Invalid file id.")
