"""
Public listing of verified artisans.

Only profiles that clear every verification gate are ever projected to the
public: approved status, all four sub-checks, a non-blank bio and business
name, at least one certificate document and a matric number on the owner
account. The gates are applied in SQL; the free-text filters and ordering are
applied to the eligible set in Python so they behave the same on every
database backend.
"""

from collections.abc import Iterable
from decimal import Decimal
from uuid import UUID

from sqlalchemy import and_, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from talentnest.core.exceptions import NotFoundException
from talentnest.core.redis_client import CacheManager
from talentnest.models.provider_documents import provider_documents
from talentnest.models.provider_profiles import SUB_CHECK_COLUMNS, provider_profiles
from talentnest.models.users import users

CERTIFICATE_TYPE = "certificate"

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def _not_blank(column):
    return and_(column.is_not(None), func.trim(column) != "")


def eligibility_conditions() -> list:
    """SQL conditions every publicly listed profile must satisfy."""
    has_certificate = exists().where(
        provider_documents.c.profile_id == provider_profiles.c.id,
        provider_documents.c.document_type == CERTIFICATE_TYPE,
    )
    return [
        provider_profiles.c.verification_status == "approved",
        *(provider_profiles.c[column].is_(True) for column in SUB_CHECK_COLUMNS),
        _not_blank(provider_profiles.c.bio),
        _not_blank(provider_profiles.c.business_name),
        has_certificate,
        _not_blank(users.c.matric_number),
    ]


def matches_search(row: dict, search: str) -> bool:
    """Case-insensitive substring match over name, description, bio and specializations."""
    needle = search.lower()
    haystack: list[str] = [
        row["business_name"] or "",
        row["description"] or "",
        row["bio"] or "",
        *(row["specialization"] or []),
    ]
    return any(needle in value.lower() for value in haystack)


def matches_category(row: dict, category: str) -> bool:
    """Case-insensitive membership of ``category`` in the specialization list."""
    wanted = category.lower()
    return any(wanted == value.lower() for value in row["specialization"] or [])


def matches_location(row: dict, location: str) -> bool:
    """Case-insensitive substring match on location."""
    return location.lower() in (row["location"] or "").lower()


def sort_key(row: dict) -> tuple:
    """Rating descending with unrated profiles last, then oldest profile first."""
    rating = row["rating"]
    return (rating is None, -(rating if rating is not None else Decimal(0)), row["created_at"])


def to_verified_artisan(row: dict, certificates: Iterable[str]) -> dict:
    """Project an eligible profile row into the public listing shape."""
    return {
        "id": row["id"],
        "user_id": row["user_id"],
        "business_name": row["business_name"],
        "description": row["description"],
        "bio": row["bio"],
        "specialization": row["specialization"] or [],
        "experience": row["experience_years"],
        "location": row["location"],
        "rating": row["rating"],
        "total_reviews": row["total_reviews"],
        "certificates": list(certificates),
        "whatsapp_number": row["whatsapp_number"],
        "availability": {
            "is_available": row["availability_is_available"],
            "available_for_work": row["availability_available_for_work"],
            "available_for_learning": row["availability_available_for_learning"],
            "response_time": row["availability_response_time"],
        },
        "pricing": {
            "base_rate": row["pricing_base_rate"],
            "learning_rate": row["pricing_learning_rate"],
            "currency": row["pricing_currency"],
        },
        "provider": {
            "name": row["owner_full_name"],
            "first_name": row["owner_first_name"],
            "last_name": row["owner_last_name"],
            "matric_number": row["owner_matric_number"],
            "department": row["owner_department"],
        },
        "verified": True,
        "verified_badge": True,
        "joined_at": row["created_at"],
    }


class ListingService:
    """Service for the public artisan directory."""

    # Cache TTL in seconds (5 minutes for public listings)
    LISTING_CACHE_TTL = 300

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager

    @staticmethod
    def _list_cache_key(
        search: str | None, category: str | None, location: str | None, limit: int
    ) -> str:
        parts = [(value or "").strip().lower() for value in (search, category, location)]
        return "artisans:verified:" + ":".join([*parts, str(limit)])

    async def _eligible_rows(self, db: AsyncSession, profile_id: UUID | None = None) -> list[dict]:
        conditions = eligibility_conditions()
        if profile_id is not None:
            conditions.append(provider_profiles.c.id == profile_id)

        query = (
            select(
                provider_profiles,
                users.c.full_name.label("owner_full_name"),
                users.c.first_name.label("owner_first_name"),
                users.c.last_name.label("owner_last_name"),
                users.c.matric_number.label("owner_matric_number"),
                users.c.department.label("owner_department"),
            )
            .join(users, provider_profiles.c.user_id == users.c.id)
            .where(*conditions)
        )
        result = await db.execute(query)
        return [dict(row) for row in result.mappings().all()]

    async def _certificates(self, db: AsyncSession, profile_ids: list[UUID]) -> dict[UUID, list[str]]:
        grouped: dict[UUID, list[str]] = {profile_id: [] for profile_id in profile_ids}
        if not profile_ids:
            return grouped

        query = (
            select(provider_documents.c.profile_id, provider_documents.c.storage_path)
            .where(
                provider_documents.c.profile_id.in_(profile_ids),
                provider_documents.c.document_type == CERTIFICATE_TYPE,
            )
            .order_by(provider_documents.c.uploaded_at, provider_documents.c.id)
        )
        result = await db.execute(query)
        for row in result.mappings().all():
            grouped[row["profile_id"]].append(row["storage_path"])
        return grouped

    async def list_verified_artisans(
        self,
        db: AsyncSession,
        search: str | None = None,
        category: str | None = None,
        location: str | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[dict]:
        """
        List publicly visible artisans.

        Args:
            db: Database session
            search: Free text matched against name, description, bio and specializations
            category: Specialization to filter on; ``all`` disables the filter
            location: Substring of the artisan's location
            limit: Maximum number of results (1-100)

        Returns:
            Projected artisans ordered by rating, best first
        """
        limit = max(1, min(limit, MAX_LIMIT))
        search = (search or "").strip() or None
        location = (location or "").strip() or None
        category = (category or "").strip() or None
        if category and category.lower() == "all":
            category = None

        cache_key = self._list_cache_key(search, category, location, limit)
        if self.cache:
            cached = self.cache.get_json(cache_key)
            if cached is not None:
                return cached

        rows = await self._eligible_rows(db)
        if search:
            rows = [row for row in rows if matches_search(row, search)]
        if category:
            rows = [row for row in rows if matches_category(row, category)]
        if location:
            rows = [row for row in rows if matches_location(row, location)]

        rows = sorted(rows, key=sort_key)[:limit]
        certificates = await self._certificates(db, [row["id"] for row in rows])
        artisans = [to_verified_artisan(row, certificates[row["id"]]) for row in rows]

        if self.cache:
            self.cache.set_json(cache_key, artisans, ttl=self.LISTING_CACHE_TTL)

        return artisans

    async def get_verified_artisan(self, db: AsyncSession, profile_id: UUID) -> dict:
        """
        Get one publicly visible artisan.

        Raises:
            NotFoundException: If the profile is missing or not eligible for listing
        """
        cache_key = f"artisans:detail:{profile_id}"
        if self.cache:
            cached = self.cache.get_json(cache_key)
            if cached:
                return cached

        rows = await self._eligible_rows(db, profile_id)
        if not rows:
            raise NotFoundException("Artisan not found")

        certificates = await self._certificates(db, [profile_id])
        artisan = to_verified_artisan(rows[0], certificates[profile_id])

        if self.cache:
            self.cache.set_json(cache_key, artisan, ttl=self.LISTING_CACHE_TTL)

        return artisan
