"""
Request-scoped services behind the HTTP routes.

``UploadService`` classifies and stores uploads; ``ReferenceResolver`` turns
stored references back into download locations.
"""
from files_gateway.services.downloads import ReferenceResolver
from files_gateway.services.uploads import UploadRequest, UploadResult, UploadService

__all__ = ["ReferenceResolver", "UploadRequest", "UploadResult", "UploadService"]
