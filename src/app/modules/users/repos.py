"""User repository for database operations."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import select

from app.api.dependencies import DBSession
from app.core.database import Repository
from app.modules.users.models import User


class UserRepository(Repository[User]):
    """Repository for User database operations."""

    model = User

    def __init__(self, session: DBSession) -> None:
        super().__init__(session)

    async def get_by_username(self, username: str) -> User | None:
        """Get a user by username.

        Args:
            username: The user's unique name

        Returns:
            User if found, None otherwise
        """
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


UserRepo = Annotated[UserRepository, Depends(UserRepository)]
