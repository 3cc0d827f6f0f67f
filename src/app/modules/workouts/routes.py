"""Workout API routes.

All routes require a valid token plus the permission matching the HTTP
method. Workouts are visible to their owner and to ADMIN only.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.api.pagination import Page, Pagination
from app.api.schemas import MessageResponse
from app.core.auth.dependencies import authenticate
from app.core.permissions.dependencies import CanDelete, CanRead, CanUpdate, CanWrite
from app.modules.workouts.schemas import WorkoutCreate, WorkoutResponse, WorkoutUpdate
from app.modules.workouts.services import WorkoutSvc


router = APIRouter(
    prefix="/workouts",
    tags=["workouts"],
    dependencies=[Depends(authenticate)],
)


@router.get("", response_model=Page[WorkoutResponse], summary="List workouts")
async def list_workouts(
    identity: CanRead,
    service: WorkoutSvc,
    pagination: Pagination,
) -> Page[WorkoutResponse]:
    """List readable workouts, most recent first."""
    items, total = await service.list_readable(identity, pagination)
    return Page[WorkoutResponse].build(
        [WorkoutResponse.model_validate(item) for item in items],
        total,
        pagination,
    )


@router.get("/{workout_id}", response_model=WorkoutResponse, summary="Get a workout")
async def get_workout(
    workout_id: UUID,
    identity: CanRead,
    service: WorkoutSvc,
) -> WorkoutResponse:
    """Get a workout; other users' workouts read as not found."""
    return WorkoutResponse.model_validate(await service.get(identity, workout_id))


@router.post(
    "",
    response_model=WorkoutResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a workout",
)
async def create_workout(
    data: WorkoutCreate,
    identity: CanWrite,
    service: WorkoutSvc,
) -> WorkoutResponse:
    """Log a workout owned by the caller."""
    return WorkoutResponse.model_validate(await service.create(identity, data))


@router.put("/{workout_id}", response_model=WorkoutResponse, summary="Update a workout")
async def update_workout(
    workout_id: UUID,
    data: WorkoutUpdate,
    identity: CanUpdate,
    service: WorkoutSvc,
) -> WorkoutResponse:
    """Update a workout as its owner or an ADMIN."""
    workout = await service.update(identity, workout_id, data)
    return WorkoutResponse.model_validate(workout)


@router.delete(
    "/{workout_id}",
    response_model=MessageResponse,
    summary="Delete a workout",
)
async def delete_workout(
    workout_id: UUID,
    identity: CanDelete,
    service: WorkoutSvc,
) -> MessageResponse:
    """Delete a workout as its owner or an ADMIN."""
    await service.delete(identity, workout_id)
    return MessageResponse(message="Workout deleted successfully")
