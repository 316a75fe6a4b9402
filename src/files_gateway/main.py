from textwrap import dedent
import logging

import pydantic
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from files_gateway.config.settings import Settings, configure_logging
from files_gateway.errors import (
    GatewayError,
    handle_broad_exceptions,
    handle_gateway_errors,
    handle_http_exceptions,
    handle_pydantic_validation_errors,
    handle_request_validation_errors,
)
from files_gateway.routers.files import router as files_router
from files_gateway.routers.health import router as health_router
from files_gateway.services.downloads import ReferenceResolver
from files_gateway.services.uploads import UploadService
from files_gateway.telegram.client import TelegramFileStore

# Set up logging
logger = logging.getLogger(__name__)

CORS_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type"]
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
}


def create_app(
    settings: Settings | None = None,
    file_store: TelegramFileStore | None = None,
) -> FastAPI:
    """Create a FastAPI application.

    :param settings: Defaults to settings read from the environment.
    :param file_store: Remote file-store client; built from ``settings`` when
        omitted. Stays ``None`` without a bot token, which makes every remote
        operation fail with a configuration error.
    """
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        summary="Store files on Telegram and hand back a download handle",
        version="v1",
        description=dedent(
            """\
        Uploads are forwarded to a Telegram chat through the Bot API; the
        returned `telegramFileId` is the only handle to the stored file.
        `GET /api/download/{fileId}` redirects to the file on Telegram's
        file server.
        """
        ),
        docs_url="/docs",
        generate_unique_id_function=custom_generate_unique_id,
    )

    missing = settings.missing_credentials()
    if missing:
        logger.error(f"Required settings are not set: {', '.join(missing)}. Uploads and downloads will fail.")

    if file_store is None and settings.bot_token:
        file_store = TelegramFileStore(
            bot_token=settings.bot_token,
            api_url=settings.telegram_api_url,
            timeout=settings.request_timeout_seconds,
        )

    app.state.settings = settings
    app.state.upload_service = UploadService(settings, file_store)
    app.state.reference_resolver = ReferenceResolver(settings, file_store)

    app.include_router(files_router, prefix="/api", tags=["files"])
    app.include_router(health_router, prefix="/api", tags=["health"])

    app.add_exception_handler(GatewayError, handle_gateway_errors)
    app.add_exception_handler(RequestValidationError, handle_request_validation_errors)
    app.add_exception_handler(StarletteHTTPException, handle_http_exceptions)
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)
    app.middleware("http")(apply_cors_headers)

    return app


async def apply_cors_headers(request: Request, call_next):
    """Answer every OPTIONS request and stamp CORS headers on all responses."""
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
