"""FastAPI dependencies."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from talentnest.config import settings
from talentnest.core.firebase import get_storage_bucket
from talentnest.core.redis_client import CacheManager, RateLimiter, get_redis_client
from talentnest.core.security import decode_access_token
from talentnest.core.storage import DocumentStore
from talentnest.database import get_db
from talentnest.services.user_service import UserService

# Security
security = HTTPBearer(auto_error=False)


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_cache_manager() -> CacheManager:
    """Get cache manager bound to the shared Redis client."""
    return CacheManager(get_redis_client())


def get_rate_limiter() -> RateLimiter:
    """Get rate limiter bound to the shared Redis client."""
    return RateLimiter(get_redis_client())


def get_document_store() -> DocumentStore:
    """Get the document store for the configured Firebase Storage bucket."""
    return DocumentStore(get_storage_bucket(settings.firebase_storage_bucket))


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> UUID:
    """
    Extract and validate user ID from JWT token.

    Args:
        credentials: Bearer token credentials

    Returns:
        User ID from token

    Raises:
        HTTPException: If token is missing, invalid or expired
    """
    if credentials is None:
        raise _credentials_error("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _credentials_error()

    user_id_str = payload.get("sub")
    if user_id_str is None or not isinstance(user_id_str, str):
        raise _credentials_error()

    try:
        return UUID(user_id_str)
    except ValueError as e:
        raise _credentials_error("Invalid user ID format") from e


async def get_authenticated_user(
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
    cache_manager: Annotated[CacheManager | None, Depends(get_cache_manager)],
) -> dict:
    """
    Get the token's user from the database, active or not.

    Rejected artisans are deactivated but must still be able to correct
    their profile, documents and uploads for another review, so those
    routes depend on this instead of ``get_current_user``.

    Raises:
        HTTPException: If the user no longer exists
    """
    user = await UserService(cache_manager).get_user_by_id(db, user_id)

    if not user:
        raise _credentials_error("User not found")

    return user


async def get_current_user(
    user: Annotated[dict, Depends(get_authenticated_user)],
) -> dict:
    """
    Get current user, requiring an active account.

    Raises:
        HTTPException: If user not found or inactive
    """
    if not user["is_active"]:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is deactivated",
        )

    return user


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]
CurrentUser = Annotated[dict, Depends(get_current_user)]
AuthenticatedUser = Annotated[dict, Depends(get_authenticated_user)]
CacheManagerDep = Annotated[CacheManager | None, Depends(get_cache_manager)]
RateLimiterDep = Annotated[RateLimiter | None, Depends(get_rate_limiter)]
DocumentStoreDep = Annotated[DocumentStore, Depends(get_document_store)]
