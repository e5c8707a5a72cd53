"""Provider (artisan) profile model definition using SQLAlchemy Core."""

import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
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

VERIFICATION_STATUSES = ("pending", "approved", "rejected")

SUB_CHECK_COLUMNS = (
    "matric_number_verified",
    "business_name_verified",
    "certificates_verified",
    "bio_verified",
)

provider_profiles = Table(
    "provider_profiles",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid.uuid4),
    Column(
        "user_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    ),
    # Business details
    Column("business_name", Text, nullable=False),
    Column("description", Text),
    Column("bio", Text),
    Column("specialization", JSON, nullable=False, default=list),
    Column("experience_years", Integer, nullable=False, server_default=text("0")),
    Column("location", Text),
    Column("rating", Numeric(3, 2)),
    Column("total_reviews", Integer, nullable=False, server_default=text("0")),
    Column("whatsapp_number", String(20)),
    # Availability
    Column("availability_is_available", Boolean, nullable=False, server_default=true()),
    Column("availability_available_for_work", Boolean, nullable=False, server_default=true()),
    Column("availability_available_for_learning", Boolean, nullable=False, server_default=false()),
    Column("availability_response_time", String(50), server_default=text("'within 24 hours'")),
    # Pricing
    Column("pricing_base_rate", Numeric(12, 2)),
    Column("pricing_learning_rate", Numeric(12, 2)),
    Column("pricing_currency", String(3), nullable=False, server_default=text("'NGN'")),
    # Verification sub-checks
    Column("matric_number_verified", Boolean, nullable=False, server_default=false()),
    Column("business_name_verified", Boolean, nullable=False, server_default=false()),
    Column("certificates_verified", Boolean, nullable=False, server_default=false()),
    Column("bio_verified", Boolean, nullable=False, server_default=false()),
    # Aggregate verification state
    Column(
        "verification_status",
        Text,
        nullable=False,
        server_default=text("'pending'"),
        index=True,
    ),
    Column("verification_notes", Text),
    Column("verification_submitted_at", DateTime(timezone=True), server_default=func.now()),
    Column("verification_reviewed_at", DateTime(timezone=True)),
    Column("verification_reviewed_by", Uuid),
    # Bumped on every decision; conditional updates compare against it
    Column("version", Integer, nullable=False, server_default=text("0")),
    # Metadata
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    CheckConstraint(
        "verification_status IN ('pending', 'approved', 'rejected')",
        name="provider_profiles_verification_status_check",
    ),
    CheckConstraint("experience_years >= 0", name="provider_profiles_experience_check"),
)
