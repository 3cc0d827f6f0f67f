"""Generic async repository for UUID-keyed models."""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.base import Base


ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """Document-style CRUD plus the two query shapes list endpoints need.

    Subclasses set ``model``. Queries take a SQLAlchemy boolean clause so
    visibility scoping stays in the authorization policy, not here.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, entity_id: UUID) -> ModelT | None:
        """Get an entity by primary key.

        Args:
            entity_id: The entity's UUID

        Returns:
            The entity if found, None otherwise
        """
        stmt = select(self.model).where(self.model.id == entity_id)  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, entity: ModelT) -> ModelT:
        """Persist a new entity and load server-generated columns."""
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: ModelT, changes: dict[str, Any]) -> ModelT:
        """Apply field changes to an entity and flush them.

        Args:
            entity: The entity to modify
            changes: Attribute names mapped to new values

        Returns:
            The refreshed entity
        """
        for field, value in changes.items():
            setattr(entity, field, value)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelT) -> None:
        """Delete an entity."""
        await self.session.delete(entity)
        await self.session.flush()

    async def count_matching(self, clause: ColumnElement[bool]) -> int:
        """Count entities matching a filter clause."""
        stmt = select(func.count()).select_from(self.model).where(clause)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_page(
        self,
        clause: ColumnElement[bool],
        offset: int,
        limit: int,
        order_by: Sequence[Any],
    ) -> list[ModelT]:
        """Return one page of entities matching a filter clause.

        Args:
            clause: Boolean filter
            offset: Number of rows to skip
            limit: Maximum number of rows to return
            order_by: Ordering expressions, applied in sequence

        Returns:
            List of entities
        """
        stmt = (
            select(self.model)
            .where(clause)
            .order_by(*order_by)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
