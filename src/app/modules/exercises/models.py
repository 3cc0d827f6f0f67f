"""Exercise database models."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import MAX_NAME_LENGTH, MAX_URL_LENGTH, MAX_VISIBILITY_LENGTH
from app.core.database.base import Base, OwnerMixin, TimestampMixin, UUIDMixin
from app.core.permissions.policy import Visibility


if TYPE_CHECKING:
    from app.modules.workouts.models import WorkoutExercise


class Exercise(Base, UUIDMixin, TimestampMixin, OwnerMixin):
    """An exercise from the shared catalog or created by a user.

    Attributes:
        name: Display name
        gif_url: Demonstration animation
        target: Target muscle
        body_part: Body part trained
        equipment: Equipment needed
        is_custom: True for exercises created through the API
        visibility: Whether users other than the owner can see it
    """

    __tablename__ = "exercises"

    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    gif_url: Mapped[str] = mapped_column(String(MAX_URL_LENGTH), nullable=False)
    target: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    body_part: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    equipment: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    is_custom: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    visibility: Mapped[Visibility] = mapped_column(
        Enum(
            Visibility,
            native_enum=False,
            length=MAX_VISIBILITY_LENGTH,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        default=Visibility.PRIVATE,
        nullable=False,
        index=True,
    )

    # Workout entries never follow an exercise into deletion
    workout_entries: Mapped[list["WorkoutExercise"]] = relationship(
        "WorkoutExercise",
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Exercise(id={self.id}, name={self.name}, visibility={self.visibility})>"
