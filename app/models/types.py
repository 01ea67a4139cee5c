"""
Column types shared by the models.

JSON columns are JSONB on PostgreSQL and plain JSON elsewhere (SQLite in tests).
"""

from datetime import datetime, timezone

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB

JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def enum_values(enum_cls):
    """Store enum members by value ("full-time") rather than by name."""
    return [member.value for member in enum_cls]
