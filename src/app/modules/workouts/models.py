"""Workout database models."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import DateTime, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database.base import Base, OwnerMixin, TimestampMixin, UUIDMixin


class Workout(Base, UUIDMixin, TimestampMixin, OwnerMixin):
    """A training session logged by a user.

    Workouts have no visibility flag: only the owner and ADMIN see them.

    Attributes:
        date: When the workout took place
        notes: Free-form notes
        entries: Exercises performed, in order
    """

    __tablename__ = "workouts"

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
        index=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    entries: Mapped[list["WorkoutExercise"]] = relationship(
        "WorkoutExercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.position",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Workout(id={self.id}, owner_id={self.owner_id}, date={self.date})>"


class WorkoutExercise(Base, UUIDMixin):
    """One exercise performed within a workout.

    Attributes:
        workout_id: The workout this entry belongs to
        exercise_id: The exercise performed
        position: Order within the workout, starting at 0
        sets: Number of sets, at least 1
        reps: Repetitions per set, at least 1
        weight: Load per repetition, 0 for bodyweight
    """

    __tablename__ = "workout_exercises"

    workout_id: Mapped[UUID] = mapped_column(
        ForeignKey("workouts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    exercise_id: Mapped[UUID] = mapped_column(
        ForeignKey("exercises.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sets: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    workout: Mapped["Workout"] = relationship("Workout", back_populates="entries")
