"""Pydantic schemas for workout operations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.constants import MAX_NOTES_LENGTH


class WorkoutEntry(BaseModel):
    """One exercise within a workout."""

    exercise_id: UUID
    sets: int = Field(..., ge=1)
    reps: int = Field(..., ge=1)
    weight: float = Field(0.0, ge=0)


class WorkoutCreate(BaseModel):
    """Schema for logging a workout. ``date`` defaults to now."""

    date: datetime | None = None
    notes: str | None = Field(None, max_length=MAX_NOTES_LENGTH)
    entries: list[WorkoutEntry] = Field(default_factory=list)


class WorkoutUpdate(BaseModel):
    """Schema for updating a workout.

    ``entries``, when given, replaces the whole list.
    """

    model_config = ConfigDict(extra="forbid")

    date: datetime | None = None
    notes: str | None = Field(None, max_length=MAX_NOTES_LENGTH)
    entries: list[WorkoutEntry] | None = None


class WorkoutEntryResponse(WorkoutEntry):
    """Schema for a workout entry in responses."""

    model_config = ConfigDict(from_attributes=True)


class WorkoutResponse(BaseModel):
    """Schema for workout response data."""

    id: UUID
    owner_id: UUID | None
    date: datetime
    notes: str | None
    entries: list[WorkoutEntryResponse]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
