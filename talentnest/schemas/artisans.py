"""Public marketplace projections of verified artisans."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for display-oriented payloads serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ArtisanAvailability(CamelModel):
    """Availability block of a listed artisan."""

    is_available: bool
    available_for_work: bool
    available_for_learning: bool
    response_time: str | None = None


class ArtisanPricing(CamelModel):
    """Pricing block of a listed artisan."""

    base_rate: Decimal | None = None
    learning_rate: Decimal | None = None
    currency: str

    @field_serializer("base_rate", "learning_rate", when_used="json")
    def serialize_decimal(self, value: Decimal | None) -> float | None:
        """Serialize Decimal to float for JSON."""
        return float(value) if value is not None else None


class ArtisanProviderIdentity(CamelModel):
    """Identity of the student behind a listing."""

    name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    matric_number: str
    department: str | None = None


class VerifiedArtisan(CamelModel):
    """Public listing entry for an artisan that passed every verification gate."""

    id: UUID
    user_id: UUID
    business_name: str
    description: str | None = None
    bio: str
    specialization: list[str]
    experience: int
    location: str | None = None
    rating: Decimal | None = None
    total_reviews: int
    certificates: list[str]
    whatsapp_number: str | None = None
    availability: ArtisanAvailability
    pricing: ArtisanPricing
    provider: ArtisanProviderIdentity
    verified: bool = True
    verified_badge: bool = True
    joined_at: datetime

    @field_serializer("rating", when_used="json")
    def serialize_rating(self, value: Decimal | None) -> float | None:
        """Serialize Decimal to float for JSON."""
        return float(value) if value is not None else None


class VerifiedArtisanListResponse(BaseModel):
    """Response of ``GET /artisans/verified``."""

    success: bool = True
    data: list[VerifiedArtisan]
    total: int
    message: str


class VerifiedArtisanResponse(BaseModel):
    """Response of ``GET /artisans/{id}``."""

    success: bool = True
    data: VerifiedArtisan
