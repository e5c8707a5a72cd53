"""Document store backed by a Firebase Storage bucket."""

from typing import Any

from google.api_core import exceptions as gcs_exceptions
from starlette.concurrency import run_in_threadpool
from structlog import get_logger

logger = get_logger(__name__)


class DocumentStoreError(Exception):
    """Raised when the object store rejects or fails an operation."""


class DocumentStore:
    """
    Thin async wrapper over a google-cloud-storage bucket.

    The SDK is blocking, so every call is pushed to Starlette's threadpool.
    Object keys are opaque to the store; ownership rules live in the services.
    """

    CACHE_CONTROL = "max-age=3600"

    def __init__(self, bucket: Any):
        """Initialize with a bucket handle (``firebase_admin.storage.bucket()``)."""
        self.bucket = bucket

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        """
        Store ``data`` under ``path`` without overwriting an existing object.

        Returns:
            The stored object path

        Raises:
            DocumentStoreError: If the upload fails or the path is taken
        """

        def _upload() -> None:
            blob = self.bucket.blob(path)
            blob.cache_control = self.CACHE_CONTROL
            blob.upload_from_string(data, content_type=content_type, if_generation_match=0)

        try:
            await run_in_threadpool(_upload)
        except gcs_exceptions.GoogleAPIError as e:
            logger.error("document_store_upload_failed", path=path, error=str(e))
            raise DocumentStoreError(str(e)) from e

        return path

    async def delete(self, path: str) -> None:
        """
        Delete the object at ``path``.

        Raises:
            DocumentStoreError: If the object is missing or the call fails
        """
        try:
            await run_in_threadpool(self.bucket.blob(path).delete)
        except gcs_exceptions.GoogleAPIError as e:
            logger.error("document_store_delete_failed", path=path, error=str(e))
            raise DocumentStoreError(str(e)) from e

    async def exists(self, path: str) -> bool:
        """
        Check whether an object is stored at ``path``.

        Raises:
            DocumentStoreError: If the lookup itself fails
        """
        try:
            return bool(await run_in_threadpool(self.bucket.blob(path).exists))
        except gcs_exceptions.GoogleAPIError as e:
            logger.error("document_store_lookup_failed", path=path, error=str(e))
            raise DocumentStoreError(str(e)) from e
