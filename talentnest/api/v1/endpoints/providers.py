"""Artisan provider profile endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from talentnest.core.redis_client import CacheManager
from talentnest.dependencies import (
    AuthenticatedUser,
    DatabaseSession,
    DocumentStoreDep,
    get_cache_manager,
)
from talentnest.schemas.providers import (
    ProviderDocumentCreate,
    ProviderDocumentResponse,
    ProviderProfileCreate,
    ProviderProfileResponse,
    ProviderProfileUpdate,
)
from talentnest.services.provider_service import ProviderService

router = APIRouter(prefix="/providers", tags=["Providers"])


def get_provider_service(
    cache_manager: CacheManager | None = Depends(get_cache_manager),
) -> ProviderService:
    """Get provider service instance."""
    return ProviderService(cache_manager=cache_manager)


@router.post("", response_model=ProviderProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_provider_profile(
    profile_data: ProviderProfileCreate,
    db: DatabaseSession,
    current_user: AuthenticatedUser,
    provider_service: ProviderService = Depends(get_provider_service),
):
    """
    Register the caller's artisan profile.

    The profile starts in ``pending`` state with every verification check unset
    and appears in the admin review queue.

    - **business_name**: Trading name shown on the marketplace
    - **description**: What the artisan offers
    - **location**: Where the artisan works
    - **specialization**: One or more categories
    """
    profile = await provider_service.create_profile(db, current_user, profile_data)
    return await provider_service.get_profile_with_details(db, profile["id"])


@router.get("/me", response_model=ProviderProfileResponse)
async def get_my_provider_profile(
    db: DatabaseSession,
    current_user: AuthenticatedUser,
    provider_service: ProviderService = Depends(get_provider_service),
):
    """Get the caller's profile with verification state and documents."""
    return await provider_service.get_profile_for_user(db, current_user)


@router.patch("/me", response_model=ProviderProfileResponse)
async def update_my_provider_profile(
    profile_data: ProviderProfileUpdate,
    db: DatabaseSession,
    current_user: AuthenticatedUser,
    provider_service: ProviderService = Depends(get_provider_service),
):
    """Update descriptive fields of the caller's profile."""
    return await provider_service.update_profile(db, current_user, profile_data)


@router.post(
    "/me/documents",
    response_model=ProviderDocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def attach_provider_document(
    document_data: ProviderDocumentCreate,
    db: DatabaseSession,
    current_user: AuthenticatedUser,
    store: DocumentStoreDep,
    provider_service: ProviderService = Depends(get_provider_service),
):
    """
    Attach a previously uploaded file to the caller's profile.

    ``storage_path`` is the ``fileName`` returned by ``POST /upload``; the
    object must exist and belong to the caller. Use
    ``document_type=certificate`` for certificates; at least one is required
    before the profile can appear in the public listing.
    """
    return await provider_service.add_document(db, current_user, document_data, store)


@router.delete("/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_provider_document(
    document_id: UUID,
    db: DatabaseSession,
    current_user: AuthenticatedUser,
    store: DocumentStoreDep,
    provider_service: ProviderService = Depends(get_provider_service),
):
    """Delete a document. Allowed for the profile owner and admins."""
    await provider_service.delete_document(db, current_user, document_id, store)
