"""Upload service: policy checks and object naming for verification documents."""

import secrets
import string
import time
from pathlib import PurePosixPath
from uuid import UUID

from structlog import get_logger

from talentnest.config import settings
from talentnest.core.exceptions import (
    ForbiddenException,
    InvalidInputException,
    PersistenceFailureException,
    RateLimitException,
    UploadRejectedException,
)
from talentnest.core.redis_client import RateLimiter
from talentnest.core.storage import DocumentStore, DocumentStoreError

logger = get_logger(__name__)

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def validate_upload(size: int, content_type: str | None, max_bytes: int | None = None) -> None:
    """
    Check an upload against the size limit and the content type allow-list.

    The limit is inclusive: a file of exactly ``max_bytes`` is accepted.

    Raises:
        UploadRejectedException: If the file is too large or of a disallowed type
    """
    limit = settings.upload_max_bytes if max_bytes is None else max_bytes
    if size > limit:
        raise UploadRejectedException(
            f"File size exceeds the {limit // (1024 * 1024)}MB limit"
        )

    if content_type not in ALLOWED_CONTENT_TYPES:
        raise UploadRejectedException(
            "Invalid file type. Only images, PDFs, and Word documents are allowed"
        )


def build_object_key(user_id: UUID | str, filename: str | None, content_type: str) -> str:
    """
    Build a collision-resistant key inside the uploader's namespace.

    Format: ``<user_id>/<epoch_millis>-<9 random chars>.<ext>``
    """
    ext = PurePosixPath(filename or "").suffix.lstrip(".").lower()
    if not ext or not ext.isalnum():
        ext = ALLOWED_CONTENT_TYPES[content_type]

    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(9))
    return f"{user_id}/{int(time.time() * 1000)}-{suffix}.{ext}"


def is_owned_by(path: str, user_id: UUID | str) -> bool:
    """Whether ``path`` lies inside the user's namespace."""
    return path.startswith(f"{user_id}/") and ".." not in PurePosixPath(path).parts


class UploadService:
    """Service for storing and removing user uploads."""

    def __init__(self, store: DocumentStore, rate_limiter: RateLimiter | None = None):
        """Initialize service with a document store and optional rate limiter."""
        self.store = store
        self.rate_limiter = rate_limiter

    def check_rate_limit(self, user_id: UUID | str) -> None:
        """
        Throttle uploads per user.

        Raises:
            RateLimitException: If the user exceeded the per-minute quota
        """
        if self.rate_limiter is None:
            return
        if not self.rate_limiter.check_rate_limit(
            f"upload:{user_id}", limit=settings.rate_limit_per_minute, window=60
        ):
            raise RateLimitException("Too many uploads. Please try again later")

    async def upload(
        self, user_id: UUID | str, filename: str | None, content_type: str | None, data: bytes
    ) -> dict:
        """
        Validate and store an upload.

        Returns:
            Stored object key, original name, size and content type

        Raises:
            RateLimitException: If the user is uploading too fast
            UploadRejectedException: If the file violates the upload policy
            PersistenceFailureException: If the store rejects the object
        """
        self.check_rate_limit(user_id)
        validate_upload(len(data), content_type)

        path = build_object_key(user_id, filename, content_type)
        try:
            await self.store.upload(path, data, content_type)
        except DocumentStoreError as e:
            raise PersistenceFailureException("Failed to upload file") from e

        logger.info("upload_stored", user_id=str(user_id), path=path, size=len(data))
        return {
            "file_name": path,
            "original_name": filename,
            "size": len(data),
            "content_type": content_type,
        }

    async def delete(self, user_id: UUID | str, path: str | None) -> None:
        """
        Delete one of the caller's uploads.

        Raises:
            InvalidInputException: If no path is given
            ForbiddenException: If the path is outside the caller's namespace
            PersistenceFailureException: If the store fails the deletion
        """
        if not path:
            raise InvalidInputException("No file name provided")

        if not is_owned_by(path, user_id):
            raise ForbiddenException("You can only delete your own files")

        try:
            await self.store.delete(path)
        except DocumentStoreError as e:
            raise PersistenceFailureException("Failed to delete file") from e

        logger.info("upload_deleted", user_id=str(user_id), path=path)
