"""Database layer - session management, base models, and mixins."""

from app.core.database.base import Base, OwnerMixin, TimestampMixin, UUIDMixin
from app.core.database.repository import Repository
from app.core.database.session import (
    async_engine,
    async_session_factory,
    get_db,
)


__all__ = [
    "Base",
    "OwnerMixin",
    "Repository",
    "TimestampMixin",
    "UUIDMixin",
    "async_engine",
    "async_session_factory",
    "get_db",
]
