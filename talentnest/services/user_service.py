"""User service for business logic."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from talentnest.core.redis_client import CacheManager
from talentnest.models.users import users
from talentnest.schemas.users import UserCreate, UserUpdate


class UserService:
    """Service for user operations."""

    # Cache TTL in seconds (30 minutes for user profiles)
    USER_CACHE_TTL = 1800

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager

    @staticmethod
    def cache_key(user_id: UUID | str) -> str:
        """Generate cache key for user."""
        return f"user:{user_id}"

    def invalidate(self, user_id: UUID | str) -> None:
        """Drop a cached user record."""
        if self.cache:
            self.cache.delete(self.cache_key(user_id))

    async def create_user(self, db: AsyncSession, user_data: UserCreate) -> dict:
        """Create a new user."""
        query = users.insert().values(**user_data.model_dump()).returning(users)

        result = await db.execute(query)
        user = result.mappings().first()
        await db.commit()

        if not user:
            raise ValueError("Failed to create user")

        return dict(user)

    async def get_user_by_id(self, db: AsyncSession, user_id: UUID) -> dict | None:
        """Get user by internal ID with caching."""
        if self.cache:
            cached_user = self.cache.get_json(self.cache_key(user_id))
            if cached_user:
                cached_user["id"] = UUID(str(cached_user["id"]))
                return cached_user

        result = await db.execute(select(users).where(users.c.id == user_id))
        user = result.mappings().first()

        if not user:
            return None

        user_dict = dict(user)

        if self.cache:
            self.cache.set_json(self.cache_key(user_id), user_dict, ttl=self.USER_CACHE_TTL)

        return user_dict

    async def get_user_by_firebase_uid(self, db: AsyncSession, firebase_uid: str) -> dict | None:
        """Get user by Firebase UID."""
        result = await db.execute(select(users).where(users.c.firebase_uid == firebase_uid))
        user = result.mappings().first()
        return dict(user) if user else None

    async def get_user_by_email(self, db: AsyncSession, email: str) -> dict | None:
        """Get user by email."""
        result = await db.execute(select(users).where(users.c.email == email))
        user = result.mappings().first()
        return dict(user) if user else None

    async def get_or_create_user(self, db: AsyncSession, user_data: UserCreate) -> dict:
        """
        Get an existing user by Firebase UID or create one.

        Registration-only fields (role, matric number) are applied on creation
        and ignored for returning users.
        """
        user = await self.get_user_by_firebase_uid(db, user_data.firebase_uid)

        if user:
            await self.update_last_login(db, user["id"])
            return user

        return await self.create_user(db, user_data)

    async def update_user(
        self, db: AsyncSession, user_id: UUID, user_data: UserUpdate
    ) -> dict | None:
        """Update user profile."""
        update_data = user_data.model_dump(exclude_unset=True)
        if not update_data:
            return await self.get_user_by_id(db, user_id)

        update_data["updated_at"] = datetime.now(UTC)

        query = update(users).where(users.c.id == user_id).values(**update_data).returning(users)

        result = await db.execute(query)
        user = result.mappings().first()
        await db.commit()

        if not user:
            return None

        self.invalidate(user_id)
        return dict(user)

    async def update_last_login(self, db: AsyncSession, user_id: UUID) -> None:
        """Update user's last login timestamp."""
        query = update(users).where(users.c.id == user_id).values(last_login_at=datetime.now(UTC))
        await db.execute(query)
        await db.commit()

        self.invalidate(user_id)
