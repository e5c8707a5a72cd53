"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field

from talentnest.schemas.users import SelfServiceRole, UserContactFields


class Token(BaseModel):
    """JWT token response schema."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenRefresh(BaseModel):
    """Token refresh request schema."""

    refresh_token: str


class FirebaseAuthRequest(UserContactFields):
    """
    Firebase ID token sign-in request.

    ``role`` and the contact fields only apply when the account is created;
    they are ignored for returning users.
    """

    id_token: str = Field(..., description="Firebase ID token from the web client")
    role: SelfServiceRole = "student"


class AuthUser(BaseModel):
    """User summary returned at sign-in."""

    id: str
    email: EmailStr
    name: str
    picture: str | None = None
    role: str
    is_active: bool = True
    is_verified: bool = False


class LoginResponse(BaseModel):
    """Login response with tokens and user info."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: AuthUser
