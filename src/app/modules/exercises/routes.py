"""Exercise API routes.

All routes require a valid token. Reads need READ, creation WRITE,
updates UPDATE and deletion DELETE; on top of that, rows are filtered
by visibility and mutations are limited to the owner or an ADMIN.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.api.pagination import Page, Pagination
from app.api.schemas import MessageResponse
from app.core.auth.dependencies import authenticate
from app.core.permissions.dependencies import CanDelete, CanRead, CanUpdate, CanWrite
from app.modules.exercises.schemas import (
    ExerciseCreate,
    ExerciseResponse,
    ExerciseUpdate,
)
from app.modules.exercises.services import ExerciseSvc


router = APIRouter(
    prefix="/exercises",
    tags=["exercises"],
    dependencies=[Depends(authenticate)],
)


@router.get(
    "",
    response_model=Page[ExerciseResponse],
    summary="List exercises",
    description="Public exercises, the caller's private ones and legacy ownerless ones.",
)
async def list_exercises(
    identity: CanRead,
    service: ExerciseSvc,
    pagination: Pagination,
) -> Page[ExerciseResponse]:
    """List readable exercises, newest first."""
    items, total = await service.list_readable(identity, pagination)
    return Page[ExerciseResponse].build(
        [ExerciseResponse.model_validate(item) for item in items],
        total,
        pagination,
    )


@router.get(
    "/search/{query}",
    response_model=list[ExerciseResponse],
    summary="Search exercises",
    description="Matches name, target and body part; the ten most relevant results.",
)
async def search_exercises(
    query: str,
    identity: CanRead,
    service: ExerciseSvc,
) -> list[ExerciseResponse]:
    """Search readable exercises."""
    results = await service.search(identity, query)
    return [ExerciseResponse.model_validate(item) for item in results]


@router.get(
    "/{exercise_id}",
    response_model=ExerciseResponse,
    summary="Get an exercise",
)
async def get_exercise(
    exercise_id: UUID,
    identity: CanRead,
    service: ExerciseSvc,
) -> ExerciseResponse:
    """Get an exercise; private exercises of other users read as not found."""
    return ExerciseResponse.model_validate(await service.get(identity, exercise_id))


@router.post(
    "",
    response_model=ExerciseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an exercise",
)
async def create_exercise(
    data: ExerciseCreate,
    identity: CanWrite,
    service: ExerciseSvc,
) -> ExerciseResponse:
    """Create a custom exercise owned by the caller."""
    return ExerciseResponse.model_validate(await service.create(identity, data))


@router.put(
    "/{exercise_id}",
    response_model=ExerciseResponse,
    summary="Update an exercise",
)
async def update_exercise(
    exercise_id: UUID,
    data: ExerciseUpdate,
    identity: CanUpdate,
    service: ExerciseSvc,
) -> ExerciseResponse:
    """Update an exercise as its owner or an ADMIN."""
    exercise = await service.update(identity, exercise_id, data)
    return ExerciseResponse.model_validate(exercise)


@router.delete(
    "/{exercise_id}",
    response_model=MessageResponse,
    summary="Delete an exercise",
)
async def delete_exercise(
    exercise_id: UUID,
    identity: CanDelete,
    service: ExerciseSvc,
) -> MessageResponse:
    """Delete an exercise as its owner or an ADMIN."""
    await service.delete(identity, exercise_id)
    return MessageResponse(message="Exercise deleted successfully")
