# =============================================================================
# app/routers/diaries.py - Diary Endpoints
# =============================================================================
# Private journal entries. USER and ADMIN may call these endpoints, but
# everyone only ever sees their own entries.
# =============================================================================

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import Identity, require_user
from app.dependencies import DiaryServiceDep
from app.responses import created, deleted, ok, paginated, updated
from core.models import DiaryCreate, DiaryResponse, DiaryUpdate, PageRequest
from core.services import ListFilters

router = APIRouter()


@router.post("", status_code=201)
def create_diary(
    payload: DiaryCreate,
    service: DiaryServiceDep,
    identity: Identity = Depends(require_user),
):
    """Write a diary entry for the current user."""
    entry = service.create(payload, owner=identity)
    return created(DiaryResponse.model_validate(entry), "Diary entry created successfully")


@router.get("")
def list_diaries(
    service: DiaryServiceDep,
    identity: Identity = Depends(require_user),
    page: Optional[int] = Query(default=None, description="Page number, starts at 1"),
    limit: Optional[int] = Query(default=None, description="Page size, at most 100"),
    search: Optional[str] = Query(default=None, description="Matches title or content"),
):
    """List the current user's diary entries, most recent first."""
    filters = ListFilters(page=PageRequest.clamp(page, limit), search=search)
    result = service.list(filters, identity)
    return paginated(
        [DiaryResponse.model_validate(entry) for entry in result.items],
        result.page,
        result.total,
    )


@router.get("/{diary_id}")
def get_diary(
    diary_id: Annotated[UUID, Path(description="Diary entry UUID")],
    service: DiaryServiceDep,
    identity: Identity = Depends(require_user),
):
    entry = service.get_by_id(diary_id, identity)
    return ok(DiaryResponse.model_validate(entry))


@router.put("/{diary_id}")
def update_diary(
    diary_id: Annotated[UUID, Path(description="Diary entry UUID")],
    payload: DiaryUpdate,
    service: DiaryServiceDep,
    identity: Identity = Depends(require_user),
):
    entry = service.update(diary_id, payload, identity)
    return updated(DiaryResponse.model_validate(entry))


@router.delete("/{diary_id}")
def delete_diary(
    diary_id: Annotated[UUID, Path(description="Diary entry UUID")],
    service: DiaryServiceDep,
    identity: Identity = Depends(require_user),
):
    service.delete(diary_id, identity)
    return deleted("Diary entry deleted successfully")
