"""Authentication service for Firebase and JWT."""

from sqlalchemy.ext.asyncio import AsyncSession

from talentnest.core.exceptions import UnauthorizedException
from talentnest.core.firebase import verify_firebase_token
from talentnest.core.redis_client import CacheManager
from talentnest.core.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
)
from talentnest.schemas.auth import FirebaseAuthRequest, Token
from talentnest.schemas.users import UserCreate
from talentnest.services.user_service import UserService


class AuthService:
    """Authentication service for handling Firebase and JWT operations."""

    # Revoked refresh tokens stay blacklisted for their full lifetime
    REVOCATION_TTL = 86400 * 30

    def __init__(self, cache_manager: CacheManager | None):
        """Initialize auth service with cache manager."""
        self.cache = cache_manager

    async def verify_firebase_id_token(self, id_token: str) -> dict:
        """
        Verify Firebase ID token and extract user claims.

        Raises:
            UnauthorizedException: If token verification fails
        """
        try:
            return await verify_firebase_token(id_token)
        except ValueError as e:
            raise UnauthorizedException(str(e)) from e

    async def handle_firebase_login(
        self, firebase_token_data: dict, request: FirebaseAuthRequest, db: AsyncSession
    ) -> tuple[dict, Token]:
        """
        Create or fetch the user behind a verified Firebase token and issue tokens.

        Args:
            firebase_token_data: Decoded Firebase token with user info
            request: Sign-in request carrying registration-only fields
            db: Database session

        Returns:
            Tuple of (user dict, token pair)
        """
        email = firebase_token_data.get("email")
        if not email:
            raise UnauthorizedException("Email is required from Firebase token")

        name = firebase_token_data.get("name") or email
        first_name, _, last_name = name.partition(" ")

        user_data = UserCreate(
            firebase_uid=firebase_token_data["uid"],
            email=email,
            email_verified=firebase_token_data.get("email_verified", False),
            full_name=name,
            first_name=first_name or None,
            last_name=last_name or None,
            photo_url=firebase_token_data.get("picture"),
            phone=request.phone,
            matric_number=request.matric_number,
            department=request.department,
            role=request.role,
        )

        user = await UserService(self.cache).get_or_create_user(db, user_data)
        return user, self.create_tokens(str(user["id"]))

    def create_tokens(self, user_id: str) -> Token:
        """Create access and refresh tokens for a user."""
        return Token(
            access_token=create_access_token(data={"sub": user_id}),
            refresh_token=create_refresh_token(data={"sub": user_id}),
            token_type="bearer",
        )

    def refresh_access_token(self, refresh_token: str) -> Token:
        """
        Create a new token pair from a refresh token.

        Raises:
            UnauthorizedException: If the refresh token is invalid or revoked
        """
        payload = decode_refresh_token(refresh_token)
        if payload is None or payload.get("sub") is None:
            raise UnauthorizedException("Invalid refresh token")

        if self.cache and self.cache.exists(f"blacklist:{refresh_token}"):
            raise UnauthorizedException("Token has been revoked")

        return self.create_tokens(payload["sub"])

    def revoke_token(self, token: str) -> None:
        """Revoke a refresh token by adding it to the blacklist."""
        if self.cache:
            self.cache.set(f"blacklist:{token}", "1", ttl=self.REVOCATION_TTL)
