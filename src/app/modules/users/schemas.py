"""Pydantic schemas for registration and login."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.constants import (
    MAX_PASSWORD_LENGTH,
    MAX_USERNAME_LENGTH,
    MIN_PASSWORD_LENGTH,
)
from app.core.permissions.roles import Permission, Role


class Credentials(BaseModel):
    """Username and password pair."""

    username: str = Field(..., min_length=1, max_length=MAX_USERNAME_LENGTH)
    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: object) -> object:
        """Trim surrounding whitespace so " alice" and "alice" collide."""
        return v.strip() if isinstance(v, str) else v


class RegisterRequest(Credentials):
    """Schema for registering a user.

    ``role`` defaults to the catalog's default role. ``permissions``, when
    given, replaces the role's default set as-is.
    """

    role: Role | None = None
    permissions: list[Permission] | None = None


class LoginRequest(Credentials):
    """Schema for username/password login."""


class TokenRequest(RegisterRequest):
    """Schema for POST /auth/token: login, or register on first use."""


class UserResponse(BaseModel):
    """Public view of a user. Never includes the password hash."""

    id: UUID
    username: str
    role: Role
    permissions: list[Permission]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RegisterResponse(BaseModel):
    """Response for a successful registration."""

    message: str = "User registered successfully"
    user: UserResponse
