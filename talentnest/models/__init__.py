"""Database models."""

from talentnest.models.base import metadata
from talentnest.models.provider_documents import provider_documents
from talentnest.models.provider_profiles import provider_profiles
from talentnest.models.users import users

__all__ = [
    "metadata",
    "provider_documents",
    "provider_profiles",
    "users",
]
