"""Verification document upload endpoints."""

from fastapi import APIRouter, Depends, File, Query, UploadFile

from talentnest.config import settings
from talentnest.core.exceptions import InvalidInputException
from talentnest.core.redis_client import RateLimiter
from talentnest.core.storage import DocumentStore
from talentnest.dependencies import (
    AuthenticatedUser,
    get_document_store,
    get_rate_limiter,
)
from talentnest.schemas.uploads import UploadDeleteResponse, UploadResponse
from talentnest.services.upload_service import UploadService

router = APIRouter(prefix="/upload", tags=["Uploads"])


def get_upload_service(
    store: DocumentStore = Depends(get_document_store),
    rate_limiter: RateLimiter | None = Depends(get_rate_limiter),
) -> UploadService:
    """Get upload service instance."""
    return UploadService(store, rate_limiter)


@router.post("", response_model=UploadResponse)
async def upload_file(
    current_user: AuthenticatedUser,
    file: UploadFile | None = File(None),
    upload_service: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    """
    Upload a verification document into the caller's namespace.

    Accepts JPEG, PNG, GIF, WebP, PDF and Word documents up to 10MB. The
    returned ``fileName`` is the object key to attach to the profile.
    """
    if file is None or not file.filename:
        raise InvalidInputException("No file provided")

    # One byte past the limit is enough to reject oversized files
    data = await file.read(settings.upload_max_bytes + 1)
    stored = await upload_service.upload(current_user["id"], file.filename, file.content_type, data)
    return UploadResponse(**stored)


@router.delete("", response_model=UploadDeleteResponse)
async def delete_file(
    current_user: AuthenticatedUser,
    file_name: str | None = Query(None, alias="fileName", description="Object key to delete"),
    upload_service: UploadService = Depends(get_upload_service),
) -> UploadDeleteResponse:
    """Delete one of the caller's uploads."""
    await upload_service.delete(current_user["id"], file_name)
    return UploadDeleteResponse()
