"""Error taxonomy and the FastAPI handlers that turn it into JSON responses."""
import logging
from typing import Iterable, Optional

import pydantic
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base class for every failure the gateway reports to a client.

    ``message`` is what the client sees. Subclasses that wrap sensitive
    upstream detail keep it in ``detail`` for the server log only.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class ConfigurationError(GatewayError):
    """Required credentials are absent. Every request fails until fixed."""

    default_message = "Server configuration is incomplete."

    def __init__(self, missing: Iterable[str] = ()):
        self.missing = list(missing)
        super().__init__(
            detail=f"Missing required settings: {', '.join(self.missing)}" if self.missing else None
        )


class ValidationError(GatewayError):
    """Client-caused problem with the request itself."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request."


class RemoteRejection(GatewayError):
    """The remote file-store answered with ok=false."""

    default_message = "Remote file-store rejected the request."

    def __init__(self, description: Optional[str] = None, error_code: Optional[int] = None):
        self.description = description
        self.error_code = error_code
        super().__init__(message=description or self.default_message)


class ExtractionFailure(GatewayError):
    """The remote call succeeded but yielded no usable reference or path."""

    default_message = "Remote file-store returned no usable file reference."


class MalformedRemoteResponse(ExtractionFailure):
    """The remote body was not the JSON object the Bot API promises."""

    default_message = "Remote file-store returned a malformed response."


class NetworkFailure(GatewayError):
    """The remote call could not complete. Detail stays in the server log."""

    default_message = "Could not reach the remote file-store."


class ReferenceNotFound(GatewayError):
    """The remote file-store does not know the reference."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "File not found."


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


async def handle_gateway_errors(request: Request, exc: GatewayError) -> JSONResponse:
    """Convert a GatewayError into the JSON error body."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"{request.method} {request.url.path} failed with {type(exc).__name__}: "
        f"{exc.message}" + (f" ({exc.detail})" if exc.detail else "")
    )
    return error_response(exc.status_code, exc.message)


async def handle_request_validation_errors(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed forms and path/query params are client errors, reported as 400."""
    errors = exc.errors()
    logger.warning(f"{request.method} {request.url.path} rejected: {errors}")
    message = "; ".join(str(error.get("msg", "invalid input")) for error in errors) or ValidationError.default_message
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_http_exceptions(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes and unsupported methods get the same body shape as everything else."""
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_pydantic_validation_errors(request: Request, exc: pydantic.ValidationError) -> JSONResponse:
    """Pydantic errors raised inside handlers mean we built a bad model, not that the client erred."""
    logger.error(f"Model validation failed while handling {request.url.path}: {exc.errors()}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GatewayError.default_message)


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception:  # pylint: disable=broad-except
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GatewayError.default_message)
