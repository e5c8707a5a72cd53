"""Verification workflow schemas."""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from talentnest.schemas.providers import ProviderProfileResponse


class VerificationAction(StrEnum):
    """Decision an admin can take on a pending profile."""

    APPROVE = "approve"
    REJECT = "reject"


class VerificationDetails(BaseModel):
    """Per-criterion outcome supplied with a rejection. Missing keys count as not verified."""

    model_config = ConfigDict(extra="forbid")

    matric_number_verified: bool = False
    business_name_verified: bool = False
    certificates_verified: bool = False
    bio_verified: bool = False


class VerificationDecisionRequest(BaseModel):
    """Body of ``POST /admin/verification``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    action: VerificationAction
    provider_id: UUID
    admin_notes: str | None = Field(None, max_length=2000)
    verification_details: VerificationDetails | None = None
    expected_version: int | None = Field(
        None,
        ge=0,
        description="Profile version the reviewer saw; stale decisions are rejected with 409",
    )


class EvidenceFile(BaseModel):
    """Document attached to a verification request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    path: str
    type: str
    name: str | None = None
    size: int | None = None


class VerificationRequestItem(BaseModel):
    """A pending profile as shown to reviewers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    provider_id: UUID
    provider_name: str
    provider_email: str
    provider_phone: str | None = None
    matric_number: str
    department: str
    business_name: str
    business_description: str | None = None
    bio: str | None = None
    specializations: list[str]
    experience_years: int
    evidence_files: list[EvidenceFile]
    status: str
    submitted_at: datetime | None = None
    reviewed_at: datetime | None = None
    reviewed_by: UUID | None = None
    admin_notes: str | None = None
    matric_number_verified: bool
    business_name_verified: bool
    certificates_verified: bool
    bio_verified: bool
    verification_complete: bool
    version: int


class VerificationListResponse(BaseModel):
    """Response of ``GET /admin/verification``."""

    success: bool = True
    data: list[VerificationRequestItem]


class VerificationDecisionResponse(BaseModel):
    """Response of ``POST /admin/verification``."""

    success: bool = True
    message: str
    data: ProviderProfileResponse
