"""Admin-specific schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from talentnest.schemas.providers import ProviderProfileResponse


class AdminUserListResponse(BaseModel):
    """Response schema for admin user listing."""

    users: list[dict[str, Any]]
    total: int
    page: int
    page_size: int
    total_pages: int

    model_config = ConfigDict(from_attributes=True)


class AdminProviderListResponse(BaseModel):
    """Response schema for admin provider profile listing."""

    providers: list[ProviderProfileResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
