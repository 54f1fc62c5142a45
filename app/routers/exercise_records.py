# =============================================================================
# app/routers/exercise_records.py - Exercise Record Endpoints
# =============================================================================
# Workout log. Same access rules as meals: owner or ADMIN.
# =============================================================================

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import Identity, require_user
from app.dependencies import ExerciseRecordServiceDep
from app.responses import created, deleted, ok, paginated, updated
from core.models import (
    ExerciseRecordCreate,
    ExerciseRecordResponse,
    ExerciseRecordSummary,
    ExerciseRecordUpdate,
    ExerciseType,
    PageRequest,
)
from core.services import ListFilters

router = APIRouter()


@router.post("", status_code=201)
def create_exercise_record(
    payload: ExerciseRecordCreate,
    service: ExerciseRecordServiceDep,
    identity: Identity = Depends(require_user),
):
    record = service.create(payload, owner=identity)
    return created(ExerciseRecordResponse.model_validate(record), "Exercise record created successfully")


@router.get("")
def list_exercise_records(
    service: ExerciseRecordServiceDep,
    identity: Identity = Depends(require_user),
    page: Optional[int] = Query(default=None),
    limit: Optional[int] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Matches the description"),
    exercise_type: Optional[ExerciseType] = Query(default=None, alias="exerciseType"),
    user_id: Optional[UUID] = Query(default=None, alias="userId", description="ADMIN only"),
):
    filters = ListFilters(
        page=PageRequest.clamp(page, limit),
        search=search,
        category=exercise_type,
        user_id=user_id,
    )
    result = service.list(filters, identity)
    return paginated(
        [ExerciseRecordSummary.model_validate(record) for record in result.items],
        result.page,
        result.total,
    )


@router.get("/{record_id}")
def get_exercise_record(
    record_id: Annotated[UUID, Path(description="Exercise record UUID")],
    service: ExerciseRecordServiceDep,
    identity: Identity = Depends(require_user),
):
    record = service.get_by_id(record_id, identity)
    return ok(ExerciseRecordResponse.model_validate(record))


@router.put("/{record_id}")
def update_exercise_record(
    record_id: Annotated[UUID, Path(description="Exercise record UUID")],
    payload: ExerciseRecordUpdate,
    service: ExerciseRecordServiceDep,
    identity: Identity = Depends(require_user),
):
    record = service.update(record_id, payload, identity)
    return updated(ExerciseRecordResponse.model_validate(record))


@router.delete("/{record_id}")
def delete_exercise_record(
    record_id: Annotated[UUID, Path(description="Exercise record UUID")],
    service: ExerciseRecordServiceDep,
    identity: Identity = Depends(require_user),
):
    service.delete(record_id, identity)
    return deleted()
