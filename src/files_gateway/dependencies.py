"""FastAPI dependencies exposing the services built in ``create_app``."""
from fastapi import Request

from files_gateway.config.settings import Settings
from files_gateway.services.downloads import ReferenceResolver
from files_gateway.services.uploads import UploadService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service


def get_reference_resolver(request: Request) -> ReferenceResolver:
    return request.app.state.reference_resolver
