"""Exercise factories for tests."""

from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory

from app.core.permissions.policy import Visibility
from app.modules.exercises.schemas import ExerciseCreate


class ExerciseCreateFactory(ModelFactory):
    """Factory for exercise creation payloads."""

    __model__ = ExerciseCreate

    @classmethod
    def name(cls) -> str:
        """Generate a unique exercise name."""
        return f"Exercise {uuid4().hex[:6]}"

    @classmethod
    def gif_url(cls) -> str:
        return f"https://cdn.example.com/{uuid4().hex[:8]}.gif"

    @classmethod
    def target(cls) -> str:
        return "quads"

    @classmethod
    def body_part(cls) -> str:
        return "upper legs"

    @classmethod
    def equipment(cls) -> str:
        return "barbell"

    @classmethod
    def visibility(cls) -> Visibility:
        return Visibility.PRIVATE
