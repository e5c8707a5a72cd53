"""Provider profile schemas for request/response validation."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from talentnest.core.validation import normalize_phone_number

# ============================================================================
# Provider Profile Schemas
# ============================================================================

# Columns that are NOT NULL in provider_profiles; omitting them is fine, null is not
NON_NULLABLE_FIELDS = (
    "business_name",
    "specialization",
    "experience_years",
    "availability_is_available",
    "availability_available_for_work",
    "availability_available_for_learning",
    "pricing_currency",
)


class ProviderProfileFields(BaseModel):
    """Descriptive fields an artisan may set on their own profile."""

    description: str | None = None
    bio: str | None = None
    experience_years: int | None = Field(None, ge=0)
    location: str | None = None
    whatsapp_number: str | None = None
    availability_is_available: bool | None = None
    availability_available_for_work: bool | None = None
    availability_available_for_learning: bool | None = None
    availability_response_time: str | None = Field(None, max_length=50)
    pricing_base_rate: Decimal | None = Field(None, ge=0, decimal_places=2)
    pricing_learning_rate: Decimal | None = Field(None, ge=0, decimal_places=2)
    pricing_currency: str | None = Field(None, min_length=3, max_length=3)

    @field_validator("whatsapp_number")
    @classmethod
    def validate_whatsapp_number(cls, value: str | None) -> str | None:
        """Normalize WhatsApp numbers to +234 form."""
        return normalize_phone_number(value) if value else None

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        """Refuse `null` for fields whose columns cannot hold it."""
        nulls = [
            name
            for name in NON_NULLABLE_FIELDS
            if name in self.model_fields_set and getattr(self, name, None) is None
        ]
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self


class ProviderProfileCreate(ProviderProfileFields):
    """Schema for registering an artisan profile."""

    model_config = ConfigDict(extra="forbid")

    business_name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    specialization: list[str] = Field(..., min_length=1)


class ProviderProfileUpdate(ProviderProfileFields):
    """
    Schema for updating an artisan profile.

    Verification sub-checks and status are deliberately absent.
    """

    model_config = ConfigDict(extra="forbid")

    business_name: str | None = Field(None, min_length=1, max_length=200)
    specialization: list[str] | None = Field(None, min_length=1)


class ProviderDocumentCreate(BaseModel):
    """Attach a previously uploaded object to the caller's profile."""

    model_config = ConfigDict(extra="forbid")

    document_type: str = Field(..., min_length=1, max_length=50)
    storage_path: str = Field(..., min_length=1)
    original_filename: str | None = None
    size_bytes: int | None = Field(None, ge=0)
    content_type: str | None = Field(None, max_length=100)


class ProviderDocumentResponse(BaseModel):
    """Provider document response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    profile_id: UUID
    document_type: str
    storage_path: str
    original_filename: str | None = None
    size_bytes: int | None = None
    content_type: str | None = None
    uploaded_at: datetime


class ProviderOwner(BaseModel):
    """Contact fields of the user owning a profile."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    full_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    matric_number: str | None = None
    department: str | None = None
    is_active: bool
    is_verified: bool


class ProviderProfileResponse(BaseModel):
    """Provider profile as stored, with owner and documents attached."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    business_name: str
    description: str | None = None
    bio: str | None = None
    specialization: list[str] = Field(default_factory=list)
    experience_years: int
    location: str | None = None
    rating: Decimal | None = None
    total_reviews: int = 0
    whatsapp_number: str | None = None
    availability_is_available: bool
    availability_available_for_work: bool
    availability_available_for_learning: bool
    availability_response_time: str | None = None
    pricing_base_rate: Decimal | None = None
    pricing_learning_rate: Decimal | None = None
    pricing_currency: str
    matric_number_verified: bool
    business_name_verified: bool
    certificates_verified: bool
    bio_verified: bool
    verification_status: str
    verification_notes: str | None = None
    verification_submitted_at: datetime | None = None
    verification_reviewed_at: datetime | None = None
    verification_reviewed_by: UUID | None = None
    version: int
    created_at: datetime
    updated_at: datetime
    owner: ProviderOwner | None = None
    documents: list[ProviderDocumentResponse] = Field(default_factory=list)

    @field_serializer("rating", "pricing_base_rate", "pricing_learning_rate", when_used="json")
    def serialize_decimal(self, value: Decimal | None) -> float | None:
        """Serialize Decimal to float for JSON."""
        return float(value) if value is not None else None
