"""Exercise service: CRUD and search under the ownership policy."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy.exc import IntegrityError

from app.api.pagination import PageParams
from app.core.auth.schemas import AuthenticatedIdentity
from app.core.errors import ConflictError
from app.core.permissions.policy import OwnershipPolicy
from app.modules.exercises.models import Exercise
from app.modules.exercises.repos import ExerciseRepository
from app.modules.exercises.schemas import ExerciseCreate, ExerciseUpdate


exercise_policy = OwnershipPolicy("exercise", visibility_aware=True)


class ExerciseService:
    """Exercise operations for an already permission-checked identity.

    Every method assumes the permission gate ran; the ownership policy
    decides per row.
    """

    def __init__(
        self,
        repo: Annotated[ExerciseRepository, Depends(ExerciseRepository)],
    ) -> None:
        self.repo = repo
        self.policy = exercise_policy

    async def list_readable(
        self,
        identity: AuthenticatedIdentity,
        params: PageParams,
    ) -> tuple[list[Exercise], int]:
        """List the exercises an identity can read, newest first.

        Returns:
            Tuple of (exercises on the page, total readable count)
        """
        clause = self.policy.readable_clause(Exercise, identity)
        total = await self.repo.count_matching(clause)
        items = await self.repo.find_page(
            clause,
            offset=params.offset,
            limit=params.page_size,
            order_by=[Exercise.created_at.desc(), Exercise.id],
        )
        return items, total

    async def search(self, identity: AuthenticatedIdentity, query: str) -> list[Exercise]:
        """Search readable exercises by name, target and body part."""
        terms = list(dict.fromkeys(term.lower() for term in query.split()))
        return await self.repo.search(
            terms, self.policy.readable_clause(Exercise, identity)
        )

    async def get(self, identity: AuthenticatedIdentity, exercise_id: UUID) -> Exercise:
        """Get one exercise.

        Raises:
            NotFoundError: If it does not exist or is private to someone else
        """
        exercise = await self.repo.get_by_id(exercise_id)
        return self.policy.ensure_readable(exercise, identity)

    async def create(
        self, identity: AuthenticatedIdentity, data: ExerciseCreate
    ) -> Exercise:
        """Create a custom exercise owned by the caller."""
        exercise = Exercise(
            **data.model_dump(),
            owner_id=identity.id,
            is_custom=True,
        )
        return await self.repo.create(exercise)

    async def update(
        self,
        identity: AuthenticatedIdentity,
        exercise_id: UUID,
        data: ExerciseUpdate,
    ) -> Exercise:
        """Update an exercise owned by the caller, or any exercise as ADMIN.

        Raises:
            NotFoundError: If it does not exist
            ForbiddenError: If the caller is neither owner nor ADMIN
        """
        exercise = self.policy.ensure_mutable(
            await self.repo.get_by_id(exercise_id), identity, "update"
        )
        return await self.repo.update(exercise, data.model_dump(exclude_none=True))

    async def delete(self, identity: AuthenticatedIdentity, exercise_id: UUID) -> None:
        """Delete an exercise owned by the caller, or any exercise as ADMIN.

        Raises:
            NotFoundError: If it does not exist
            ForbiddenError: If the caller is neither owner nor ADMIN
            ConflictError: If a workout still lists the exercise
        """
        exercise = self.policy.ensure_mutable(
            await self.repo.get_by_id(exercise_id), identity, "delete"
        )
        if await self.repo.is_referenced(exercise.id):
            raise _exercise_in_use()
        try:
            await self.repo.delete(exercise)
        except IntegrityError as exc:
            # A workout picked up the exercise after the check above
            raise _exercise_in_use() from exc


def _exercise_in_use() -> ConflictError:
    return ConflictError(
        "Exercise is used by a workout",
        error_code="exercise_in_use",
    )


ExerciseSvc = Annotated[ExerciseService, Depends(ExerciseService)]
