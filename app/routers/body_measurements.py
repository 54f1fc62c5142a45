# =============================================================================
# app/routers/body_measurements.py - Body Measurement Endpoints
# =============================================================================
# Owner-only weight / body-fat log, plus two read views:
# - GET /recent     the user's cached window of the 30 latest summaries
# - GET /aggregate  averages per week, month or year
# =============================================================================

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import Identity, require_user
from app.dependencies import BodyMeasurementServiceDep
from app.responses import created, deleted, ok, paginated, updated
from core.models import (
    AggregationPeriod,
    BodyMeasurementCreate,
    BodyMeasurementResponse,
    BodyMeasurementUpdate,
    PageRequest,
    RecentMeasurementResponse,
)
from core.services import ListFilters

router = APIRouter()


@router.post("", status_code=201)
def create_body_measurement(
    payload: BodyMeasurementCreate,
    service: BodyMeasurementServiceDep,
    identity: Identity = Depends(require_user),
):
    """Record a measurement and add it to the user's recent window."""
    measurement = service.create(payload, owner=identity)
    return created(
        BodyMeasurementResponse.model_validate(measurement),
        "Body measurement created successfully",
    )


@router.get("")
def list_body_measurements(
    service: BodyMeasurementServiceDep,
    identity: Identity = Depends(require_user),
    page: Optional[int] = Query(default=None),
    limit: Optional[int] = Query(default=None),
):
    filters = ListFilters(page=PageRequest.clamp(page, limit))
    result = service.list(filters, identity)
    return paginated(
        [BodyMeasurementResponse.model_validate(m) for m in result.items],
        result.page,
        result.total,
    )


@router.get("/recent")
def get_recent_body_measurements(
    service: BodyMeasurementServiceDep,
    identity: Identity = Depends(require_user),
):
    """Recent window (at most 30 entries), oldest first."""
    entries = service.recent(identity)
    return ok([RecentMeasurementResponse.model_validate(entry) for entry in entries])


@router.get("/aggregate")
def aggregate_body_measurements(
    service: BodyMeasurementServiceDep,
    identity: Identity = Depends(require_user),
    period: AggregationPeriod = Query(default=AggregationPeriod.MONTH),
    target_date: Optional[datetime] = Query(
        default=None,
        alias="targetDate",
        description="Only measurements taken on or before this moment",
    ),
):
    """
    Average weight and body fat per period.

    Example response data:
        [{"date": "2024-02", "averageWeightKg": 72.1, "averageBodyFatPercentage": 18.0, "count": 4}]
    """
    return ok(service.aggregate(identity, period, target_date))


@router.get("/{measurement_id}")
def get_body_measurement(
    measurement_id: Annotated[UUID, Path(description="Measurement UUID")],
    service: BodyMeasurementServiceDep,
    identity: Identity = Depends(require_user),
):
    measurement = service.get_by_id(measurement_id, identity)
    return ok(BodyMeasurementResponse.model_validate(measurement))


@router.put("/{measurement_id}")
def update_body_measurement(
    measurement_id: Annotated[UUID, Path(description="Measurement UUID")],
    payload: BodyMeasurementUpdate,
    service: BodyMeasurementServiceDep,
    identity: Identity = Depends(require_user),
):
    measurement = service.update(measurement_id, payload, identity)
    return updated(BodyMeasurementResponse.model_validate(measurement))


@router.delete("/{measurement_id}")
def delete_body_measurement(
    measurement_id: Annotated[UUID, Path(description="Measurement UUID")],
    service: BodyMeasurementServiceDep,
    identity: Identity = Depends(require_user),
):
    service.delete(measurement_id, identity)
    return deleted("Body measurement deleted successfully")
