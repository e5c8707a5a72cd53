"""Create provider_documents table

Revision ID: 004
Revises: 003
Create Date: 2026-01-12 00:30:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create provider_documents table."""
    op.create_table(
        "provider_documents",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column(
            "profile_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("provider_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("document_type", sa.String(50), nullable=False),
        sa.Column("storage_path", sa.Text(), nullable=False),
        sa.Column("original_filename", sa.Text(), nullable=True),
        sa.Column("size_bytes", sa.Integer(), nullable=True),
        sa.Column("content_type", sa.String(100), nullable=True),
        sa.Column(
            "uploaded_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint("storage_path", name="provider_documents_storage_path_key"),
    )

    op.create_index("ix_provider_documents_profile_id", "provider_documents", ["profile_id"])
    op.create_index("ix_provider_documents_document_type", "provider_documents", ["document_type"])


def downgrade() -> None:
    """Drop provider_documents table."""
    op.drop_index("ix_provider_documents_document_type", table_name="provider_documents")
    op.drop_index("ix_provider_documents_profile_id", table_name="provider_documents")
    op.drop_table("provider_documents")
