"""Create provider_profiles table

Revision ID: 003
Revises: 002
Create Date: 2026-01-12 00:20:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SUB_CHECKS = (
    "matric_number_verified",
    "business_name_verified",
    "certificates_verified",
    "bio_verified",
)


def upgrade() -> None:
    """Create provider_profiles table."""
    op.create_table(
        "provider_profiles",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        # Business details
        sa.Column("business_name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column(
            "specialization",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("experience_years", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("rating", sa.Numeric(3, 2), nullable=True),
        sa.Column("total_reviews", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("whatsapp_number", sa.String(20), nullable=True),
        # Availability
        sa.Column(
            "availability_is_available", sa.Boolean(), nullable=False, server_default=sa.text("true")
        ),
        sa.Column(
            "availability_available_for_work",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("true"),
        ),
        sa.Column(
            "availability_available_for_learning",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "availability_response_time",
            sa.String(50),
            nullable=True,
            server_default=sa.text("'within 24 hours'"),
        ),
        # Pricing
        sa.Column("pricing_base_rate", sa.Numeric(12, 2), nullable=True),
        sa.Column("pricing_learning_rate", sa.Numeric(12, 2), nullable=True),
        sa.Column("pricing_currency", sa.String(3), nullable=False, server_default=sa.text("'NGN'")),
        # Verification
        *(
            sa.Column(name, sa.Boolean(), nullable=False, server_default=sa.text("false"))
            for name in SUB_CHECKS
        ),
        sa.Column(
            "verification_status", sa.Text(), nullable=False, server_default=sa.text("'pending'")
        ),
        sa.Column("verification_notes", sa.Text(), nullable=True),
        sa.Column(
            "verification_submitted_at",
            sa.TIMESTAMP(timezone=True),
            nullable=True,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("verification_reviewed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("verification_reviewed_by", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint(
            "verification_status IN ('pending', 'approved', 'rejected')",
            name="provider_profiles_verification_status_check",
        ),
        sa.CheckConstraint("experience_years >= 0", name="provider_profiles_experience_check"),
    )

    op.create_index("ix_provider_profiles_user_id", "provider_profiles", ["user_id"], unique=True)
    op.create_index(
        "ix_provider_profiles_verification_status", "provider_profiles", ["verification_status"]
    )


def downgrade() -> None:
    """Drop provider_profiles table."""
    op.drop_index("ix_provider_profiles_verification_status", table_name="provider_profiles")
    op.drop_index("ix_provider_profiles_user_id", table_name="provider_profiles")
    op.drop_table("provider_profiles")
