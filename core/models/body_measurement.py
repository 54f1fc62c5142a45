# =============================================================================
# core/models/body_measurement.py - Body Measurement Schemas
# =============================================================================
# These models define the API contract for body measurements:
# - BodyMeasurementCreate / BodyMeasurementUpdate: Input
# - BodyMeasurementResponse: One stored measurement
# - RecentMeasurementResponse: One entry of the user's bounded recent window
# - MeasurementAggregate: Averages for one week / month / year bucket
# =============================================================================

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from .base import NOT_NULL_MESSAGE, CamelModel, RequestModel


class BodyMeasurementCreate(RequestModel):
    """
    Schema for recording a measurement.

    Example:
        {
            "measurementDate": "2024-02-10T07:00:00Z",
            "weightKg": 72.4,
            "bodyFatPercentage": 18.1
        }
    """

    measurement_date: datetime
    weight_kg: float = Field(..., ge=0)
    body_fat_percentage: float = Field(..., ge=0, le=100)


class BodyMeasurementUpdate(RequestModel):
    measurement_date: Optional[datetime] = None
    weight_kg: Optional[float] = Field(default=None, ge=0)
    body_fat_percentage: Optional[float] = Field(default=None, ge=0, le=100)

    @field_validator("measurement_date", "weight_kg", "body_fat_percentage")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError(NOT_NULL_MESSAGE)
        return value


class BodyMeasurementResponse(CamelModel):
    id: UUID
    user_id: UUID
    measurement_date: datetime
    weight_kg: float
    body_fat_percentage: float
    created_at: datetime


class RecentMeasurementResponse(CamelModel):
    """
    One summary from the user's recent window (ids are local to the window).

    Example:
        {"id": 3, "date": "2024-02-10T07:00:00+00:00", "weightKg": 72.4, "bodyFatPercentage": 18.1}
    """

    id: int
    date: datetime
    weight_kg: float
    body_fat_percentage: float


class MeasurementAggregate(CamelModel):
    """
    Averages for one period bucket.

    Example:
        {"date": "2024-W06", "averageWeightKg": 72.1, "averageBodyFatPercentage": 18.0, "count": 3}
    """

    date: str = Field(..., description="Bucket key: YYYY-Www, YYYY-MM or YYYY")
    average_weight_kg: float
    average_body_fat_percentage: float
    count: int
