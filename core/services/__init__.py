# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .base import ListFilters, ListResult, ResourceService
from .user_service import UserService
from .article_service import ArticleService
from .diary_service import DiaryService
from .meal_service import MealService
from .exercise_record_service import ExerciseRecordService
from .body_measurement_service import BodyMeasurementService, period_key

__all__ = [
    "ListFilters",
    "ListResult",
    "ResourceService",
    "UserService",
    "ArticleService",
    "DiaryService",
    "MealService",
    "ExerciseRecordService",
    "BodyMeasurementService",
    "period_key",
]
