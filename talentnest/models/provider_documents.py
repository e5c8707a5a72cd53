"""Provider verification document model definition using SQLAlchemy Core."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text, Uuid, func

from talentnest.models.base import metadata

provider_documents = Table(
    "provider_documents",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid.uuid4),
    Column(
        "profile_id",
        Uuid,
        ForeignKey("provider_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    # certificate | portfolio | ...
    Column("document_type", String(50), nullable=False, index=True),
    # Object key in the document bucket, "<user_id>/<name>"
    Column("storage_path", Text, nullable=False, unique=True),
    Column("original_filename", Text),
    Column("size_bytes", Integer),
    Column("content_type", String(100)),
    Column("uploaded_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)
