"""User schemas for request/response validation."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from talentnest.core.validation import normalize_matric_number, normalize_phone_number

SelfServiceRole = Literal["student", "artisan"]


class UserContactFields(BaseModel):
    """Phone and university identity fields shared by create and update."""

    phone: str | None = Field(None, max_length=20)
    matric_number: str | None = None
    department: str | None = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str | None) -> str | None:
        """Normalize phone numbers to +234 form."""
        return normalize_phone_number(value) if value else None

    @field_validator("matric_number")
    @classmethod
    def validate_matric_number(cls, value: str | None) -> str | None:
        """Validate matric number format."""
        return normalize_matric_number(value) if value else None


class UserCreate(UserContactFields):
    """Schema for creating a new user on first sign-in."""

    firebase_uid: str = Field(..., description="Firebase user ID")
    email: EmailStr
    email_verified: bool = False
    full_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    photo_url: str | None = None
    role: SelfServiceRole = "student"


class UserUpdate(UserContactFields):
    """Schema for updating the caller's own profile. Role and account flags are not editable."""

    model_config = ConfigDict(extra="forbid")

    full_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    photo_url: str | None = None


class UserResponse(BaseModel):
    """User schema for API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: EmailStr
    email_verified: bool
    full_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    photo_url: str | None = None
    phone: str | None = None
    matric_number: str | None = None
    department: str | None = None
    role: str
    is_active: bool
    is_verified: bool
    created_at: datetime
    updated_at: datetime
    last_login_at: datetime | None = None
