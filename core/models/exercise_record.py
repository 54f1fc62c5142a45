# =============================================================================
# core/models/exercise_record.py - Exercise Record Schemas
# =============================================================================

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from .base import NOT_NULL_MESSAGE, CamelModel, RequestModel
from .enums import ExerciseType


class ExerciseRecordCreate(RequestModel):
    """
    Schema for logging a workout.

    Example:
        {
            "exerciseDate": "2024-02-10T07:00:00Z",
            "exerciseType": "CARDIO",
            "durationMinutes": 45,
            "caloriesBurned": 400,
            "description": "Morning run"
        }
    """

    exercise_date: datetime
    exercise_type: Optional[ExerciseType] = None
    duration_minutes: Optional[float] = Field(default=None, ge=0)
    calories_burned: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = Field(default=None, min_length=3)


class ExerciseRecordUpdate(RequestModel):
    exercise_date: Optional[datetime] = None
    exercise_type: Optional[ExerciseType] = None
    duration_minutes: Optional[float] = Field(default=None, ge=0)
    calories_burned: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = Field(default=None, min_length=3)

    @field_validator("exercise_date")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError(NOT_NULL_MESSAGE)
        return value


class ExerciseRecordSummary(CamelModel):
    id: UUID
    user_id: UUID
    exercise_date: datetime
    exercise_type: Optional[ExerciseType] = None
    duration_minutes: Optional[float] = None
    calories_burned: Optional[float] = None
    created_at: datetime


class ExerciseRecordResponse(ExerciseRecordSummary):
    description: Optional[str] = None
