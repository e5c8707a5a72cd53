"""User model definition using SQLAlchemy Core."""

import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    String,
    Table,
    Text,
    Uuid,
    false,
    func,
    text,
    true,
)

from talentnest.models.base import metadata

USER_ROLES = ("student", "artisan", "admin")

users = Table(
    "users",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid.uuid4),
    # Firebase identity (source of truth for authentication)
    Column("firebase_uid", Text, nullable=False, unique=True, index=True),
    Column("email", Text, nullable=False, unique=True, index=True),
    Column("email_verified", Boolean, nullable=False, server_default=false()),
    # Profile info (mutable)
    Column("full_name", Text),
    Column("first_name", Text),
    Column("last_name", Text),
    Column("photo_url", Text),
    Column("phone", String(20)),
    # University identity
    Column("matric_number", String(20), index=True),
    Column("department", Text),
    # Fixed at registration
    Column("role", Text, nullable=False, server_default=text("'student'")),
    # Account state, flipped by artisan verification decisions
    Column("is_active", Boolean, nullable=False, server_default=true()),
    Column("is_verified", Boolean, nullable=False, server_default=false()),
    # Audit
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("last_login_at", DateTime(timezone=True)),
    CheckConstraint("role IN ('student', 'artisan', 'admin')", name="users_role_check"),
)
