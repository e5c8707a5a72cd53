"""Provider (artisan) profile service for business logic."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from talentnest.core.exceptions import (
    ConflictException,
    ForbiddenException,
    InvalidInputException,
    NotFoundException,
    PersistenceFailureException,
)
from talentnest.core.redis_client import CacheManager
from talentnest.core.storage import DocumentStore, DocumentStoreError
from talentnest.models.provider_documents import provider_documents
from talentnest.models.provider_profiles import provider_profiles
from talentnest.models.users import users
from talentnest.schemas.providers import (
    ProviderDocumentCreate,
    ProviderProfileCreate,
    ProviderProfileUpdate,
)
from talentnest.services.upload_service import is_owned_by

logger = get_logger(__name__)

OWNER_COLUMNS = (
    users.c.id,
    users.c.email,
    users.c.full_name,
    users.c.first_name,
    users.c.last_name,
    users.c.phone,
    users.c.matric_number,
    users.c.department,
    users.c.is_active,
    users.c.is_verified,
)


class ProviderService:
    """Service for artisan profile and document operations."""

    # Cache TTL in seconds (15 minutes for assembled profiles)
    PROFILE_CACHE_TTL = 900

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager

    @staticmethod
    def cache_key(profile_id: UUID | str) -> str:
        """Generate cache key for an assembled profile."""
        return f"provider:{profile_id}"

    def invalidate(self, profile_id: UUID | str) -> None:
        """Drop cached copies of a profile and every public listing page."""
        if self.cache:
            self.cache.delete(self.cache_key(profile_id))
            self.cache.delete_pattern("artisans:verified:*")
            self.cache.delete_pattern("artisans:detail:*")

    # ========================================================================
    # Profiles
    # ========================================================================

    async def create_profile(
        self, db: AsyncSession, user: dict, profile_data: ProviderProfileCreate
    ) -> dict:
        """
        Register the caller's artisan profile in pending state.

        Raises:
            ForbiddenException: If the caller is not an artisan
            ConflictException: If the caller already has a profile
        """
        if user["role"] != "artisan":
            raise ForbiddenException("Only artisan accounts can create a provider profile")

        if await self.get_profile_by_user_id(db, user["id"]):
            raise ConflictException("Provider profile already exists for this user")

        values = profile_data.model_dump(exclude_none=True)
        values["business_name"] = values["business_name"].strip()

        query = (
            provider_profiles.insert()
            .values(
                user_id=user["id"],
                verification_status="pending",
                verification_submitted_at=datetime.now(UTC),
                **values,
            )
            .returning(provider_profiles)
        )

        try:
            result = await db.execute(query)
            profile = result.mappings().first()
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise ConflictException("Provider profile already exists for this user") from e

        if not profile:
            raise ValueError("Failed to create provider profile")

        logger.info("provider_profile_created", profile_id=str(profile["id"]), user_id=str(user["id"]))
        return dict(profile)

    async def get_profile_by_id(self, db: AsyncSession, profile_id: UUID) -> dict | None:
        """Get a bare profile row by ID."""
        result = await db.execute(select(provider_profiles).where(provider_profiles.c.id == profile_id))
        profile = result.mappings().first()
        return dict(profile) if profile else None

    async def get_profile_by_user_id(self, db: AsyncSession, user_id: UUID) -> dict | None:
        """Get a bare profile row by owner ID."""
        result = await db.execute(
            select(provider_profiles).where(provider_profiles.c.user_id == user_id)
        )
        profile = result.mappings().first()
        return dict(profile) if profile else None

    async def get_documents(self, db: AsyncSession, profile_id: UUID) -> list[dict]:
        """Get a profile's documents, oldest first."""
        query = (
            select(provider_documents)
            .where(provider_documents.c.profile_id == profile_id)
            .order_by(provider_documents.c.uploaded_at, provider_documents.c.id)
        )
        result = await db.execute(query)
        return [dict(row) for row in result.mappings().all()]

    async def get_profile_with_details(self, db: AsyncSession, profile_id: UUID) -> dict | None:
        """Get a profile with its owner's contact fields and its documents."""
        if self.cache:
            cached = self.cache.get_json(self.cache_key(profile_id))
            if cached:
                return cached

        profile = await self.get_profile_by_id(db, profile_id)
        if not profile:
            return None

        owner_result = await db.execute(
            select(*OWNER_COLUMNS).where(users.c.id == profile["user_id"])
        )
        owner = owner_result.mappings().first()
        profile["owner"] = dict(owner) if owner else None
        profile["documents"] = await self.get_documents(db, profile_id)

        if self.cache:
            self.cache.set_json(self.cache_key(profile_id), profile, ttl=self.PROFILE_CACHE_TTL)

        return profile

    async def get_profile_for_user(self, db: AsyncSession, user: dict) -> dict:
        """
        Get the caller's own profile with details.

        Raises:
            NotFoundException: If the caller has no profile
        """
        profile = await self.get_profile_by_user_id(db, user["id"])
        if not profile:
            raise NotFoundException("Provider profile not found")

        return await self.get_profile_with_details(db, profile["id"])

    async def update_profile(
        self, db: AsyncSession, user: dict, profile_data: ProviderProfileUpdate
    ) -> dict:
        """
        Update descriptive fields of the caller's profile.

        Verification fields are not part of the update schema and never change here.

        Raises:
            NotFoundException: If the caller has no profile
        """
        profile = await self.get_profile_by_user_id(db, user["id"])
        if not profile:
            raise NotFoundException("Provider profile not found")

        update_data = profile_data.model_dump(exclude_unset=True)
        if update_data:
            update_data["updated_at"] = datetime.now(UTC)
            await db.execute(
                update(provider_profiles)
                .where(provider_profiles.c.id == profile["id"])
                .values(**update_data)
            )
            await db.commit()
            self.invalidate(profile["id"])

        return await self.get_profile_with_details(db, profile["id"])

    # ========================================================================
    # Documents
    # ========================================================================

    async def add_document(
        self,
        db: AsyncSession,
        user: dict,
        document_data: ProviderDocumentCreate,
        store: DocumentStore,
    ) -> dict:
        """
        Attach an uploaded object to the caller's profile.

        The object must sit in the caller's namespace and exist in the store,
        so every attached certificate resolves to a real upload.

        Raises:
            NotFoundException: If the caller has no profile
            ForbiddenException: If the object is outside the caller's namespace
            InvalidInputException: If nothing is stored at the path
            PersistenceFailureException: If the store cannot be queried
            ConflictException: If the object is already attached
        """
        profile = await self.get_profile_by_user_id(db, user["id"])
        if not profile:
            raise NotFoundException("Provider profile not found")

        path = document_data.storage_path
        if not is_owned_by(path, user["id"]):
            raise ForbiddenException("You can only attach files you uploaded")

        try:
            stored = await store.exists(path)
        except DocumentStoreError as e:
            raise PersistenceFailureException("Could not verify the uploaded file") from e
        if not stored:
            raise InvalidInputException("Uploaded file not found")

        query = (
            provider_documents.insert()
            .values(profile_id=profile["id"], **document_data.model_dump())
            .returning(provider_documents)
        )

        try:
            result = await db.execute(query)
            document = result.mappings().first()
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise ConflictException("Document is already attached") from e

        if not document:
            raise ValueError("Failed to attach document")

        self.invalidate(profile["id"])
        return dict(document)

    async def delete_document(
        self, db: AsyncSession, user: dict, document_id: UUID, store: DocumentStore | None
    ) -> None:
        """
        Delete a document row, then its stored object.

        The stored object is removed on a best-effort basis: a store failure is
        logged and the row deletion stands.

        Raises:
            NotFoundException: If the document does not exist
            ForbiddenException: If the caller neither owns it nor is an admin
        """
        query = (
            select(provider_documents, provider_profiles.c.user_id)
            .join(provider_profiles, provider_documents.c.profile_id == provider_profiles.c.id)
            .where(provider_documents.c.id == document_id)
        )
        result = await db.execute(query)
        document = result.mappings().first()

        if not document:
            raise NotFoundException("Document not found")

        if document["user_id"] != user["id"] and user["role"] != "admin":
            raise ForbiddenException("You can only delete your own documents")

        await db.execute(provider_documents.delete().where(provider_documents.c.id == document_id))
        await db.commit()
        self.invalidate(document["profile_id"])

        if store is None:
            return

        try:
            await store.delete(document["storage_path"])
        except DocumentStoreError as e:
            logger.warning(
                "document_object_delete_failed",
                document_id=str(document_id),
                path=document["storage_path"],
                error=str(e),
            )
