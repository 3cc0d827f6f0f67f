"""Workout repository for database operations."""

from app.api.dependencies import DBSession
from app.core.database import Repository
from app.modules.workouts.models import Workout


class WorkoutRepository(Repository[Workout]):
    """Repository for Workout database operations.

    Entries load eagerly with their workout.
    """

    model = Workout

    def __init__(self, session: DBSession) -> None:
        super().__init__(session)
