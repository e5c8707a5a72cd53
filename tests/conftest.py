import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import timedelta
from typing import Any
from uuid import UUID, uuid4

# Settings are read at import time; point them at throwaway backends first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("LOG_FORMAT", "console")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from talentnest.core.security import create_access_token
from talentnest.core.storage import DocumentStoreError
from talentnest.database import get_db
from talentnest.dependencies import get_cache_manager, get_document_store, get_rate_limiter
from talentnest.main import app
from talentnest.models import metadata, provider_documents, provider_profiles, users

TEST_DATABASE_URL = "sqlite+aiosqlite://"


class FakeDocumentStore:
    """In-memory stand-in for the Firebase Storage bucket."""

    def __init__(self):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.fail = False

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        if self.fail:
            raise DocumentStoreError("bucket unavailable")
        if path in self.objects:
            raise DocumentStoreError("object already exists")
        self.objects[path] = (data, content_type)
        return path

    async def delete(self, path: str) -> None:
        if self.fail:
            raise DocumentStoreError("bucket unavailable")
        if path not in self.objects:
            raise DocumentStoreError("object not found")
        del self.objects[path]

    async def exists(self, path: str) -> bool:
        if self.fail:
            raise DocumentStoreError("bucket unavailable")
        return path in self.objects


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a session on a fresh in-memory database."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def document_store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession, document_store: FakeDocumentStore
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client with Redis disabled and an in-memory bucket."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache_manager] = lambda: None
    app.dependency_overrides[get_rate_limiter] = lambda: None
    app.dependency_overrides[get_document_store] = lambda: document_store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ============================================================================
# Factories
# ============================================================================


@pytest.fixture
def user_factory(db_session: AsyncSession) -> Callable[..., Awaitable[dict]]:
    """Insert a user row and return it."""

    async def create(role: str = "student", **overrides: Any) -> dict:
        user_id = uuid4()
        values = {
            "id": user_id,
            "firebase_uid": f"firebase_{user_id.hex}",
            "email": f"{user_id.hex[:12]}@unilag.edu.ng",
            "email_verified": True,
            "full_name": "Test User",
            "first_name": "Test",
            "last_name": "User",
            "phone": "+2348012345678",
            "matric_number": "21-52hl001",
            "department": "Computer Science",
            "role": role,
        }
        values.update(overrides)
        await db_session.execute(insert(users).values(**values))
        await db_session.commit()

        result = await db_session.execute(select(users).where(users.c.id == user_id))
        return dict(result.mappings().one())

    return create


@pytest.fixture
def profile_factory(db_session: AsyncSession) -> Callable[..., Awaitable[dict]]:
    """Insert a provider profile for a user and return it."""

    async def create(user: dict, **overrides: Any) -> dict:
        profile_id = uuid4()
        values = {
            "id": profile_id,
            "user_id": user["id"],
            "business_name": "Ada's Tailoring",
            "description": "Custom native wear and alterations",
            "bio": "Third-year student sewing since secondary school.",
            "specialization": ["Fashion", "Tailoring"],
            "experience_years": 3,
            "location": "Akoka, Lagos",
            "whatsapp_number": "+2348012345678",
        }
        values.update(overrides)
        await db_session.execute(insert(provider_profiles).values(**values))
        await db_session.commit()

        result = await db_session.execute(
            select(provider_profiles).where(provider_profiles.c.id == profile_id)
        )
        return dict(result.mappings().one())

    return create


@pytest.fixture
def document_factory(db_session: AsyncSession) -> Callable[..., Awaitable[dict]]:
    """Attach a document row to a profile and return it."""

    async def create(profile: dict, document_type: str = "certificate", **overrides: Any) -> dict:
        document_id = uuid4()
        values = {
            "id": document_id,
            "profile_id": profile["id"],
            "document_type": document_type,
            "storage_path": f"{profile['user_id']}/{document_id.hex}.pdf",
            "original_filename": "certificate.pdf",
            "size_bytes": 2048,
            "content_type": "application/pdf",
        }
        values.update(overrides)
        await db_session.execute(insert(provider_documents).values(**values))
        await db_session.commit()
        return values

    return create


@pytest.fixture
def verified_artisan_factory(
    user_factory, profile_factory, document_factory
) -> Callable[..., Awaitable[dict]]:
    """Create an artisan that clears every public listing gate."""

    async def create(user_overrides: dict | None = None, **profile_overrides: Any) -> dict:
        user = await user_factory(role="artisan", is_verified=True, **(user_overrides or {}))
        values = {
            "verification_status": "approved",
            "matric_number_verified": True,
            "business_name_verified": True,
            "certificates_verified": True,
            "bio_verified": True,
        }
        values.update(profile_overrides)
        profile = await profile_factory(user, **values)
        await document_factory(profile)
        return profile

    return create


# ============================================================================
# Accounts and tokens
# ============================================================================


def bearer(user_id: UUID) -> dict:
    token = create_access_token(data={"sub": str(user_id)}, expires_delta=timedelta(minutes=30))
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def admin_user(user_factory) -> dict:
    return await user_factory(role="admin", full_name="Admin User", matric_number=None)


@pytest_asyncio.fixture
async def artisan_user(user_factory) -> dict:
    return await user_factory(role="artisan", full_name="Ada Obi", first_name="Ada", last_name="Obi")


@pytest_asyncio.fixture
async def student_user(user_factory) -> dict:
    return await user_factory(role="student", matric_number="22-52hl045")


@pytest.fixture
def admin_headers(admin_user) -> dict:
    return bearer(admin_user["id"])


@pytest.fixture
def artisan_headers(artisan_user) -> dict:
    return bearer(artisan_user["id"])


@pytest.fixture
def student_headers(student_user) -> dict:
    return bearer(student_user["id"])


@pytest.fixture
def headers_for() -> Callable[[UUID], dict]:
    """Build bearer headers for an arbitrary user ID."""
    return bearer
