"""Authentication endpoints."""

from fastapi import APIRouter, status
from sqlalchemy.exc import IntegrityError

from talentnest.core.exceptions import ConflictException
from talentnest.dependencies import CacheManagerDep, DatabaseSession
from talentnest.schemas.auth import AuthUser, FirebaseAuthRequest, LoginResponse, Token, TokenRefresh
from talentnest.services.auth_service import AuthService

router = APIRouter()


@router.post(
    "/firebase/verify",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    tags=["Authentication"],
    summary="Firebase ID token verification",
)
async def firebase_verify(
    request: FirebaseAuthRequest,
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
) -> LoginResponse:
    """
    Verify a Firebase ID token from the web client and return JWT tokens.

    The first sign-in creates the account with the requested role (student or
    artisan) and optional phone, matric number and department. Later sign-ins
    only refresh the last login timestamp.

    Args:
        request: Firebase ID token plus registration fields
        db: Database session
        cache_manager: Cache for user lookups

    Returns:
        Access token, refresh token, and user information

    Raises:
        UnauthorizedException: If token verification fails
        ConflictException: If the email is already bound to another account
    """
    auth_service = AuthService(cache_manager)

    firebase_token_data = await auth_service.verify_firebase_id_token(request.id_token)

    try:
        user, tokens = await auth_service.handle_firebase_login(firebase_token_data, request, db)
    except IntegrityError as e:
        await db.rollback()
        raise ConflictException("An account with this email already exists") from e

    return LoginResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        user=AuthUser(
            id=str(user["id"]),
            email=user["email"],
            name=user["full_name"] or user["email"],
            picture=user["photo_url"],
            role=user["role"],
            is_active=user["is_active"],
            is_verified=user["is_verified"],
        ),
    )


@router.post(
    "/refresh",
    response_model=Token,
    status_code=status.HTTP_200_OK,
    tags=["Authentication"],
    summary="Refresh access token",
)
async def refresh_token(request: TokenRefresh, cache_manager: CacheManagerDep) -> Token:
    """
    Exchange a refresh token for a new token pair.

    Raises:
        UnauthorizedException: If the refresh token is invalid or revoked
    """
    return AuthService(cache_manager).refresh_access_token(request.refresh_token)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["Authentication"],
    summary="Logout and revoke tokens",
)
async def logout(request: TokenRefresh, cache_manager: CacheManagerDep) -> None:
    """Logout user by revoking refresh token."""
    AuthService(cache_manager).revoke_token(request.refresh_token)
