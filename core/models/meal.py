# =============================================================================
# core/models/meal.py - Meal Schemas
# =============================================================================
# Nutrition values are optional, but never negative.
# =============================================================================

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from .article import URL_PATTERN
from .base import NOT_NULL_MESSAGE, CamelModel, RequestModel
from .enums import MealType


class MealCreate(RequestModel):
    """
    Schema for logging a meal.

    Example:
        {
            "mealType": "LUNCH",
            "mealDate": "2024-02-10T12:30:00Z",
            "description": "Chicken salad",
            "calories": 450,
            "protein": 35
        }
    """

    meal_type: MealType
    meal_date: datetime
    image_url: Optional[str] = Field(default=None, max_length=2048, pattern=URL_PATTERN)
    description: Optional[str] = Field(default=None, min_length=3)
    calories: Optional[float] = Field(default=None, ge=0)
    protein: Optional[float] = Field(default=None, ge=0)
    carbohydrates: Optional[float] = Field(default=None, ge=0)
    fats: Optional[float] = Field(default=None, ge=0)


class MealUpdate(RequestModel):
    meal_type: Optional[MealType] = None
    meal_date: Optional[datetime] = None
    image_url: Optional[str] = Field(default=None, max_length=2048, pattern=URL_PATTERN)
    description: Optional[str] = Field(default=None, min_length=3)
    calories: Optional[float] = Field(default=None, ge=0)
    protein: Optional[float] = Field(default=None, ge=0)
    carbohydrates: Optional[float] = Field(default=None, ge=0)
    fats: Optional[float] = Field(default=None, ge=0)

    @field_validator("meal_type", "meal_date")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError(NOT_NULL_MESSAGE)
        return value


class MealSummary(CamelModel):
    """List item: macro details are left to the detail view."""

    id: UUID
    user_id: UUID
    meal_type: MealType
    meal_date: datetime
    image_url: Optional[str] = None
    calories: Optional[float] = None
    created_at: datetime


class MealResponse(MealSummary):
    description: Optional[str] = None
    protein: Optional[float] = None
    carbohydrates: Optional[float] = None
    fats: Optional[float] = None
    updated_at: Optional[datetime] = None
