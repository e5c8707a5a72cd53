"""Public artisan directory endpoints."""

from uuid import UUID

from fastapi import APIRouter, Query

from talentnest.dependencies import CacheManagerDep, DatabaseSession
from talentnest.schemas.artisans import VerifiedArtisanListResponse, VerifiedArtisanResponse
from talentnest.services.listing_service import DEFAULT_LIMIT, MAX_LIMIT, ListingService

router = APIRouter(prefix="/artisans", tags=["Artisans"])


@router.get("/verified", response_model=VerifiedArtisanListResponse)
async def list_verified_artisans(
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
    search: str | None = Query(None, description="Search name, description, bio and skills"),
    category: str | None = Query(None, description="Specialization, or 'all'"),
    location: str | None = Query(None, description="Filter by location"),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Maximum results"),
) -> VerifiedArtisanListResponse:
    """
    List artisans that passed every verification check.

    Results are ordered by rating (unrated artisans last), then by how long
    the artisan has been on the platform.
    """
    artisans = await ListingService(cache_manager).list_verified_artisans(
        db, search=search, category=category, location=location, limit=limit
    )
    return VerifiedArtisanListResponse(
        data=artisans,
        total=len(artisans),
        message=f"Found {len(artisans)} verified artisans",
    )


@router.get("/{profile_id}", response_model=VerifiedArtisanResponse)
async def get_verified_artisan(
    profile_id: UUID,
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
) -> VerifiedArtisanResponse:
    """Get one verified artisan. Unverified profiles are reported as not found."""
    artisan = await ListingService(cache_manager).get_verified_artisan(db, profile_id)
    return VerifiedArtisanResponse(data=artisan)
