"""Workout service: CRUD under the ownership policy."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends

from app.api.pagination import PageParams
from app.core.auth.schemas import AuthenticatedIdentity
from app.core.errors import ValidationError
from app.core.permissions.policy import OwnershipPolicy
from app.modules.exercises.models import Exercise
from app.modules.exercises.repos import ExerciseRepository
from app.modules.exercises.services import exercise_policy
from app.modules.workouts.models import Workout, WorkoutExercise
from app.modules.workouts.repos import WorkoutRepository
from app.modules.workouts.schemas import WorkoutCreate, WorkoutEntry, WorkoutUpdate


workout_policy = OwnershipPolicy("workout", visibility_aware=False)


class WorkoutService:
    """Workout operations for an already permission-checked identity."""

    def __init__(
        self,
        repo: Annotated[WorkoutRepository, Depends(WorkoutRepository)],
        exercise_repo: Annotated[ExerciseRepository, Depends(ExerciseRepository)],
    ) -> None:
        self.repo = repo
        self.exercise_repo = exercise_repo
        self.policy = workout_policy

    async def list_readable(
        self,
        identity: AuthenticatedIdentity,
        params: PageParams,
    ) -> tuple[list[Workout], int]:
        """List the workouts an identity can read, most recent date first."""
        clause = self.policy.readable_clause(Workout, identity)
        total = await self.repo.count_matching(clause)
        items = await self.repo.find_page(
            clause,
            offset=params.offset,
            limit=params.page_size,
            order_by=[Workout.date.desc(), Workout.id],
        )
        return items, total

    async def get(self, identity: AuthenticatedIdentity, workout_id: UUID) -> Workout:
        """Get one workout.

        Raises:
            NotFoundError: If it does not exist or belongs to someone else
        """
        workout = await self.repo.get_by_id(workout_id)
        return self.policy.ensure_readable(workout, identity)

    async def create(self, identity: AuthenticatedIdentity, data: WorkoutCreate) -> Workout:
        """Log a workout owned by the caller.

        Raises:
            ValidationError: If an entry names an exercise the owner cannot read
        """
        entries = await self._build_entries(identity.id, data.entries)
        workout = Workout(
            **data.model_dump(exclude_none=True, exclude={"entries"}),
            owner_id=identity.id,
            entries=entries,
        )
        return await self.repo.create(workout)

    async def update(
        self,
        identity: AuthenticatedIdentity,
        workout_id: UUID,
        data: WorkoutUpdate,
    ) -> Workout:
        """Update a workout as its owner or an ADMIN.

        Raises:
            NotFoundError: If it does not exist
            ForbiddenError: If the caller is neither owner nor ADMIN
            ValidationError: If an entry names an exercise the owner cannot read
        """
        workout = self.policy.ensure_mutable(
            await self.repo.get_by_id(workout_id), identity, "update"
        )
        changes = data.model_dump(exclude_none=True, exclude={"entries"})
        if data.entries is not None:
            # Entries must stay readable by the owner, not just the editor
            changes["entries"] = await self._build_entries(
                workout.owner_id, data.entries
            )
        return await self.repo.update(workout, changes)

    async def delete(self, identity: AuthenticatedIdentity, workout_id: UUID) -> None:
        """Delete a workout as its owner or an ADMIN.

        Raises:
            NotFoundError: If it does not exist
            ForbiddenError: If the caller is neither owner nor ADMIN
        """
        workout = self.policy.ensure_mutable(
            await self.repo.get_by_id(workout_id), identity, "delete"
        )
        await self.repo.delete(workout)

    async def _build_entries(
        self,
        reader_id: UUID | None,
        entries: list[WorkoutEntry],
    ) -> list[WorkoutExercise]:
        if not entries:
            return []

        readable = await self.exercise_repo.get_many(
            (entry.exercise_id for entry in entries),
            exercise_policy.user_readable_clause(Exercise, reader_id),
        )
        readable_ids = {exercise.id for exercise in readable}
        errors = [
            {
                "field": f"entries.{index}.exercise_id",
                "message": f"Exercise {entry.exercise_id} not found",
            }
            for index, entry in enumerate(entries)
            if entry.exercise_id not in readable_ids
        ]
        if errors:
            raise ValidationError("Workout references unknown exercises", errors=errors)

        return [
            WorkoutExercise(position=index, **entry.model_dump())
            for index, entry in enumerate(entries)
        ]


WorkoutSvc = Annotated[WorkoutService, Depends(WorkoutService)]
