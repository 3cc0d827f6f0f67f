"""Exercise repository for database operations."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import ColumnElement, case, literal, select

from app.api.dependencies import DBSession
from app.core.constants import SEARCH_RESULT_LIMIT
from app.core.database import Repository
from app.modules.exercises.models import Exercise


# Columns covered by text search
SEARCH_COLUMNS = (Exercise.name, Exercise.target, Exercise.body_part)


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def relevance_score(terms: Iterable[str]) -> ColumnElement[int]:
    """Score a row by how many (term, searched column) pairs match."""
    score: ColumnElement[int] = literal(0)
    for term in terms:
        pattern = _like_pattern(term)
        for column in SEARCH_COLUMNS:
            score = score + case((column.ilike(pattern, escape="\\"), 1), else_=0)
    return score


class ExerciseRepository(Repository[Exercise]):
    """Repository for Exercise database operations."""

    model = Exercise

    def __init__(self, session: DBSession) -> None:
        super().__init__(session)

    async def get_many(
        self,
        exercise_ids: Iterable[UUID],
        clause: ColumnElement[bool],
    ) -> list[Exercise]:
        """Get the exercises among ``exercise_ids`` matching a filter clause."""
        stmt = select(Exercise).where(Exercise.id.in_(set(exercise_ids)), clause)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search(
        self,
        terms: list[str],
        clause: ColumnElement[bool],
        limit: int = SEARCH_RESULT_LIMIT,
    ) -> list[Exercise]:
        """Text search over name, target and body part.

        Args:
            terms: Lowercased search terms
            clause: Filter restricting the rows searched
            limit: Maximum number of results

        Returns:
            Matching exercises, most relevant first
        """
        if not terms:
            return []

        score = relevance_score(terms)
        stmt = (
            select(Exercise)
            .where(clause, score > 0)
            .order_by(score.desc(), Exercise.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def is_referenced(self, exercise_id: UUID) -> bool:
        """Check whether any workout entry points at an exercise."""
        stmt = select(Exercise.workout_entries.any()).where(Exercise.id == exercise_id)
        result = await self.session.execute(stmt)
        return bool(result.scalar())
