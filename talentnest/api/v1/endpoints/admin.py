"""Admin-only endpoints: artisan verification and account oversight."""

from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select

from talentnest.dependencies import CacheManagerDep, DatabaseSession, get_current_user
from talentnest.models.users import users
from talentnest.schemas.admin import AdminProviderListResponse, AdminUserListResponse
from talentnest.schemas.verification import (
    VerificationAction,
    VerificationDecisionRequest,
    VerificationDecisionResponse,
    VerificationListResponse,
)
from talentnest.services.verification_service import VerificationService, require_admin

router = APIRouter(prefix="/admin", tags=["Admin"])


async def admin_user(current_user: dict = Depends(get_current_user)) -> dict:
    """
    Dependency to ensure current user has admin role.

    Raises:
        UnauthorizedException: With status 403 if user is not admin
    """
    require_admin(current_user)
    return current_user


# ============================================================================
# Artisan verification
# ============================================================================


@router.get(
    "/verification",
    response_model=VerificationListResponse,
    response_model_by_alias=True,
    summary="List pending verification requests (admin only)",
)
async def list_verification_requests(
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
    current_user: dict = Depends(get_current_user),
) -> VerificationListResponse:
    """
    List artisan profiles awaiting review, newest submission first.

    Each request carries the artisan's contact details, university identity,
    business details and the evidence files attached to the profile.
    """
    requests = await VerificationService(cache_manager).list_pending(db, current_user)
    return VerificationListResponse(data=requests)


@router.post(
    "/verification",
    response_model=VerificationDecisionResponse,
    summary="Approve or reject an artisan (admin only)",
)
async def decide_verification_request(
    decision: VerificationDecisionRequest,
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
    current_user: dict = Depends(get_current_user),
) -> VerificationDecisionResponse:
    """
    Record a verification decision.

    - **action**: ``approve`` marks every check as verified and activates the
      artisan; ``reject`` records the supplied per-check results and
      deactivates the artisan
    - **providerId**: Profile under review
    - **adminNotes**: Optional notes shown to the artisan
    - **verificationDetails**: Per-check results, used on rejection
    - **expectedVersion**: Profile version the reviewer saw; a stale value
      yields 409
    """
    profile = await VerificationService(cache_manager).decide(
        db,
        current_user,
        decision.provider_id,
        decision.action,
        notes=decision.admin_notes,
        verification_details=decision.verification_details,
        expected_version=decision.expected_version,
    )

    verb = "approved" if decision.action is VerificationAction.APPROVE else "rejected"
    return VerificationDecisionResponse(
        message=f"Artisan verification {verb} successfully",
        data=profile,
    )


@router.get(
    "/providers",
    response_model=AdminProviderListResponse,
    summary="List artisan profiles (admin only)",
)
async def list_provider_profiles(
    db: DatabaseSession,
    cache_manager: CacheManagerDep,
    current_user: dict = Depends(get_current_user),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
    status_filter: Literal["pending", "approved", "rejected"] | None = Query(
        None, alias="status", description="Filter by verification status"
    ),
) -> AdminProviderListResponse:
    """Paginated overview of every artisan profile, newest first."""
    profiles, total = await VerificationService(cache_manager).list_profiles(
        db, current_user, status=status_filter, page=page, page_size=page_size
    )

    return AdminProviderListResponse(
        providers=profiles,
        total=total,
        page=page,
        page_size=page_size,
        total_pages=(total + page_size - 1) // page_size,
    )


# ============================================================================
# Accounts
# ============================================================================


@router.get(
    "/users",
    response_model=AdminUserListResponse,
    summary="List all users (admin only)",
)
async def list_all_users(
    db: DatabaseSession,
    current_user: dict = Depends(admin_user),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
    role: Literal["student", "artisan", "admin"] | None = Query(None, description="Filter by role"),
    is_active: bool | None = Query(None, description="Filter by active status"),
    search: str | None = Query(None, description="Search by name, email or matric number"),
) -> AdminUserListResponse:
    """
    Get paginated list of all users with filtering.

    Requires admin role.
    """
    conditions = []
    if role:
        conditions.append(users.c.role == role)

    if is_active is not None:
        conditions.append(users.c.is_active == is_active)

    if search:
        search_pattern = f"%{search}%"
        conditions.append(
            users.c.full_name.ilike(search_pattern)
            | users.c.email.ilike(search_pattern)
            | users.c.matric_number.ilike(search_pattern)
        )

    total_result = await db.execute(select(func.count()).select_from(users).where(*conditions))
    total = total_result.scalar_one()

    query = (
        select(users)
        .where(*conditions)
        .order_by(users.c.created_at.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    result = await db.execute(query)
    user_list = [dict(row) for row in result.mappings().all()]

    return AdminUserListResponse(
        users=user_list,
        total=total,
        page=page,
        page_size=page_size,
        total_pages=(total + page_size - 1) // page_size,
    )
