"""Shared table metadata."""

from sqlalchemy import MetaData

# All tables register here so foreign keys resolve across modules
metadata = MetaData()
