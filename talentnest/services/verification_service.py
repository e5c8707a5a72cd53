"""Verification workflow service: admin review of artisan profiles."""

from collections import defaultdict
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from talentnest.core.exceptions import (
    ConflictException,
    NotFoundException,
    PersistenceFailureException,
    UnauthorizedException,
)
from talentnest.core.redis_client import CacheManager
from talentnest.models.provider_documents import provider_documents
from talentnest.models.provider_profiles import SUB_CHECK_COLUMNS, provider_profiles
from talentnest.models.users import users
from talentnest.schemas.verification import VerificationDetails
from talentnest.services.provider_service import OWNER_COLUMNS, ProviderService
from talentnest.services.user_service import UserService
from talentnest.services.verification_evaluator import evaluate_decision

logger = get_logger(__name__)


def require_admin(reviewer: Mapping[str, Any]) -> None:
    """
    Ensure the caller holds the admin role.

    Raises:
        UnauthorizedException: With status 403 for any other role
    """
    if reviewer.get("role") != "admin":
        raise UnauthorizedException("Admin access required", status_code=403)


def display_name(owner: Mapping[str, Any]) -> str:
    """Best available human name for a user row."""
    if owner.get("full_name"):
        return owner["full_name"]
    parts = [owner.get("first_name"), owner.get("last_name")]
    name = " ".join(part for part in parts if part)
    return name or owner["email"]


async def fetch_documents(db: AsyncSession, profile_ids: list[UUID]) -> dict[UUID, list[dict]]:
    """Documents of several profiles, grouped by profile ID."""
    grouped: dict[UUID, list[dict]] = defaultdict(list)
    if not profile_ids:
        return grouped

    query = (
        select(provider_documents)
        .where(provider_documents.c.profile_id.in_(profile_ids))
        .order_by(provider_documents.c.uploaded_at, provider_documents.c.id)
    )
    result = await db.execute(query)
    for row in result.mappings().all():
        grouped[row["profile_id"]].append(dict(row))
    return grouped


async def fetch_owners(db: AsyncSession, user_ids: list[UUID]) -> dict[UUID, dict]:
    """Owner contact fields of several profiles, keyed by user ID."""
    if not user_ids:
        return {}
    result = await db.execute(select(*OWNER_COLUMNS).where(users.c.id.in_(user_ids)))
    return {row["id"]: dict(row) for row in result.mappings().all()}


class VerificationService:
    """Service for the admin verification workflow."""

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager
        self.providers = ProviderService(cache_manager)
        self.users = UserService(cache_manager)

    async def list_pending(self, db: AsyncSession, reviewer: dict) -> list[dict]:
        """
        List profiles awaiting review, newest submission first.

        Each entry carries the owner's contact fields and the evidence files
        attached to the profile.

        Raises:
            UnauthorizedException: If the reviewer is not an admin
        """
        require_admin(reviewer)

        query = (
            select(
                provider_profiles,
                users.c.email.label("owner_email"),
                users.c.full_name.label("owner_full_name"),
                users.c.first_name.label("owner_first_name"),
                users.c.last_name.label("owner_last_name"),
                users.c.phone.label("owner_phone"),
                users.c.matric_number.label("owner_matric_number"),
                users.c.department.label("owner_department"),
            )
            .join(users, provider_profiles.c.user_id == users.c.id)
            .where(provider_profiles.c.verification_status == "pending")
            .order_by(
                provider_profiles.c.verification_submitted_at.desc(),
                provider_profiles.c.created_at.desc(),
            )
        )
        result = await db.execute(query)
        rows = [dict(row) for row in result.mappings().all()]

        documents = await fetch_documents(db, [row["id"] for row in rows])
        return [self._to_request_item(row, documents.get(row["id"], [])) for row in rows]

    @staticmethod
    def _to_request_item(row: dict, documents: list[dict]) -> dict:
        """Shape a joined profile row into a reviewer-facing request."""
        owner = {
            "email": row["owner_email"],
            "full_name": row["owner_full_name"],
            "first_name": row["owner_first_name"],
            "last_name": row["owner_last_name"],
        }
        return {
            "id": f"vr-{row['id']}",
            "provider_id": row["id"],
            "provider_name": display_name(owner),
            "provider_email": row["owner_email"],
            "provider_phone": row["owner_phone"],
            "matric_number": row["owner_matric_number"] or "",
            "department": row["owner_department"] or "",
            "business_name": row["business_name"],
            "business_description": row["description"],
            "bio": row["bio"],
            "specializations": row["specialization"] or [],
            "experience_years": row["experience_years"],
            "evidence_files": [
                {
                    "id": doc["id"],
                    "path": doc["storage_path"],
                    "type": doc["document_type"],
                    "name": doc["original_filename"],
                    "size": doc["size_bytes"],
                }
                for doc in documents
            ],
            "status": row["verification_status"],
            "submitted_at": row["verification_submitted_at"],
            "reviewed_at": row["verification_reviewed_at"],
            "reviewed_by": row["verification_reviewed_by"],
            "admin_notes": row["verification_notes"],
            **{column: row[column] for column in SUB_CHECK_COLUMNS},
            "verification_complete": all(row[column] for column in SUB_CHECK_COLUMNS),
            "version": row["version"],
        }

    async def decide(
        self,
        db: AsyncSession,
        reviewer: dict,
        profile_id: UUID,
        action: Any,
        notes: str | None = None,
        verification_details: VerificationDetails | Mapping[str, Any] | None = None,
        expected_version: int | None = None,
    ) -> dict:
        """
        Apply an approve or reject decision to a profile.

        The profile update and the owner's account flags are written in one
        transaction, guarded by the profile's version counter so two reviewers
        cannot interleave their writes.

        Args:
            db: Database session
            reviewer: Authenticated caller
            profile_id: Profile under review
            action: ``approve`` or ``reject``
            notes: Reviewer notes, defaulted per action when blank
            verification_details: Per-criterion results for a rejection
            expected_version: Version the reviewer saw, if known

        Returns:
            The updated profile with owner and documents

        Raises:
            UnauthorizedException: If the reviewer is not an admin
            NotFoundException: If the profile does not exist
            InvalidActionException: If the action is unsupported
            ConflictException: If the profile changed since it was read
            PersistenceFailureException: If the database write fails
        """
        require_admin(reviewer)

        profile = await self.providers.get_profile_by_id(db, profile_id)
        if not profile:
            raise NotFoundException("Provider profile not found")

        outcome = evaluate_decision(action, verification_details, notes)

        seen_version = profile["version"]
        if expected_version is not None and expected_version != seen_version:
            await db.rollback()
            raise ConflictException("Profile was modified by another reviewer; reload and retry")

        now = datetime.now(UTC)
        try:
            locked = await db.execute(
                select(provider_profiles.c.version)
                .where(provider_profiles.c.id == profile_id)
                .with_for_update()
            )
            if locked.scalar_one_or_none() != seen_version:
                await db.rollback()
                raise ConflictException("Profile was modified by another reviewer; reload and retry")

            result = await db.execute(
                update(provider_profiles)
                .where(
                    provider_profiles.c.id == profile_id,
                    provider_profiles.c.version == seen_version,
                )
                .values(
                    **outcome.sub_checks(),
                    verification_status=outcome.verification_status,
                    verification_notes=outcome.verification_notes,
                    verification_reviewed_at=now,
                    verification_reviewed_by=reviewer["id"],
                    version=provider_profiles.c.version + 1,
                    updated_at=now,
                )
            )
            if result.rowcount != 1:
                await db.rollback()
                raise ConflictException("Profile was modified by another reviewer; reload and retry")

            await db.execute(
                update(users)
                .where(users.c.id == profile["user_id"])
                .values(is_active=outcome.approved, is_verified=outcome.approved, updated_at=now)
            )
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(
                "verification_persist_failed",
                profile_id=str(profile_id),
                action=outcome.verification_status,
                error=str(e),
            )
            raise PersistenceFailureException("Failed to update verification status") from e

        self.providers.invalidate(profile_id)
        self.users.invalidate(profile["user_id"])

        logger.info(
            "verification_decided",
            profile_id=str(profile_id),
            user_id=str(profile["user_id"]),
            reviewer_id=str(reviewer["id"]),
            status=outcome.verification_status,
            version=seen_version + 1,
        )

        return await self.providers.get_profile_with_details(db, profile_id)

    async def list_profiles(
        self,
        db: AsyncSession,
        reviewer: dict,
        status: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[dict], int]:
        """
        Paginated overview of all provider profiles for admins.

        Returns:
            Tuple of (profiles with owner and documents, total count)

        Raises:
            UnauthorizedException: If the reviewer is not an admin
        """
        require_admin(reviewer)

        conditions = []
        if status:
            conditions.append(provider_profiles.c.verification_status == status)

        count_query = select(func.count()).select_from(provider_profiles).where(*conditions)
        total = (await db.execute(count_query)).scalar_one()

        query = (
            select(provider_profiles)
            .where(*conditions)
            .order_by(provider_profiles.c.created_at.desc(), provider_profiles.c.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await db.execute(query)
        profiles = [dict(row) for row in result.mappings().all()]

        owners = await fetch_owners(db, [p["user_id"] for p in profiles])
        documents = await fetch_documents(db, [p["id"] for p in profiles])
        for profile in profiles:
            profile["owner"] = owners.get(profile["user_id"])
            profile["documents"] = documents.get(profile["id"], [])

        return profiles, total
