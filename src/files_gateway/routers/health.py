from fastapi import APIRouter, Depends

from files_gateway.config.settings import Settings
from files_gateway.dependencies import get_app_settings
from files_gateway.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Health check endpoint for monitoring gateway readiness.

    Reports whether the Telegram credentials are configured. The remote
    file-store itself is not contacted.
    """
    missing = settings.missing_credentials()
    return HealthResponse(
        status="degraded" if missing else "ok",
        configured=not missing,
        missing_settings=missing,
        telegram_api_url=settings.telegram_api_url,
        max_upload_size_bytes=settings.max_upload_size_bytes,
    )
