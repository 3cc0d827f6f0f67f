"""User database models."""

from sqlalchemy import JSON, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import MAX_ROLE_NAME_LENGTH, MAX_USERNAME_LENGTH
from app.core.database.base import Base, TimestampMixin, UUIDMixin
from app.core.permissions.roles import Role


class User(Base, UUIDMixin, TimestampMixin):
    """A registered identity.

    Attributes:
        username: Unique login name
        password_hash: Bcrypt hash of the password
        role: Role assigned at registration
        permissions: Permission names granted at registration. A snapshot:
            later changes to the role catalog do not touch existing rows.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(MAX_USERNAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    role: Mapped[Role] = mapped_column(
        Enum(Role, native_enum=False, length=MAX_ROLE_NAME_LENGTH),
        nullable=False,
        default=Role.VISITOR,
    )
    permissions: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"
