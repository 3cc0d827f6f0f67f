"""Pydantic schemas for exercise operations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.constants import MAX_NAME_LENGTH, MAX_URL_LENGTH
from app.core.permissions.policy import Visibility


class ExerciseBase(BaseModel):
    """Fields shared by exercise requests and responses."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    gif_url: str = Field(..., min_length=1, max_length=MAX_URL_LENGTH)
    target: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    body_part: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    equipment: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)


class ExerciseCreate(ExerciseBase):
    """Schema for creating an exercise. Private unless stated otherwise."""

    visibility: Visibility = Visibility.PRIVATE


class ExerciseUpdate(BaseModel):
    """Schema for updating an exercise.

    Visibility and ownership are fixed at creation, so they are rejected
    here rather than ignored.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    gif_url: str | None = Field(None, min_length=1, max_length=MAX_URL_LENGTH)
    target: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    body_part: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    equipment: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)


class ExerciseResponse(ExerciseBase):
    """Schema for exercise response data."""

    id: UUID
    owner_id: UUID | None
    is_custom: bool
    visibility: Visibility
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
