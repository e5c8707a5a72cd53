"""Endpoints for the signed-in user's own account."""

from fastapi import APIRouter, Depends

from talentnest.core.exceptions import NotFoundException
from talentnest.dependencies import CacheManagerDep, DatabaseSession, get_current_user
from talentnest.schemas.users import UserResponse, UserUpdate
from talentnest.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_profile(current_user: dict = Depends(get_current_user)):
    """Return the caller's account, including matric number and role."""
    return UserResponse.model_validate(current_user)


@router.patch("/me", response_model=UserResponse)
async def update_current_user_profile(
    user_data: UserUpdate,
    cache_manager: CacheManagerDep,
    db: DatabaseSession,
    current_user: dict = Depends(get_current_user),
):
    """
    Update the caller's contact and university details.

    Role and account flags are not editable here; unknown fields are rejected.
    """
    user = await UserService(cache_manager).update_user(db, current_user["id"], user_data)
    if not user:
        raise NotFoundException("User not found")

    return UserResponse.model_validate(user)
