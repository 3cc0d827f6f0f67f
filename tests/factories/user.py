"""User factories for tests."""

from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory

from app.modules.users.schemas import RegisterRequest


class RegisterRequestFactory(ModelFactory):
    """Factory for registration payloads with the default role."""

    __model__ = RegisterRequest

    @classmethod
    def username(cls) -> str:
        """Generate a unique username."""
        return f"user-{uuid4().hex[:8]}"

    @classmethod
    def password(cls) -> str:
        return "testpassword123"

    @classmethod
    def role(cls) -> None:
        return None

    @classmethod
    def permissions(cls) -> None:
        return None
