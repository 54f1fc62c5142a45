# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - base.py: camelCase base classes
# - enums.py: Roles and resource categories
# - pagination.py: Page clamping and pagination metadata
# - user.py, article.py, diary.py, meal.py, exercise_record.py,
#   body_measurement.py: One Create/Update/Response set per resource
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Shared Models
# -----------------------------------------------------------------------------
from .base import CamelModel, RequestModel
from .enums import (
    AggregationPeriod,
    ArticleCategory,
    ExerciseType,
    MealType,
    UserRole,
)
from .pagination import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
    MAX_PAGE,
    PageRequest,
    PaginationMeta,
)

# -----------------------------------------------------------------------------
# Resource Models
# -----------------------------------------------------------------------------
from .user import UserCreate, UserResponse, UserUpdate
from .article import ArticleCreate, ArticleResponse, ArticleSummary, ArticleUpdate
from .diary import DiaryCreate, DiaryResponse, DiaryUpdate
from .meal import MealCreate, MealResponse, MealSummary, MealUpdate
from .exercise_record import (
    ExerciseRecordCreate,
    ExerciseRecordResponse,
    ExerciseRecordSummary,
    ExerciseRecordUpdate,
)
from .body_measurement import (
    BodyMeasurementCreate,
    BodyMeasurementResponse,
    BodyMeasurementUpdate,
    MeasurementAggregate,
    RecentMeasurementResponse,
)

__all__ = [
    # Shared
    "CamelModel",
    "RequestModel",
    "AggregationPeriod",
    "ArticleCategory",
    "ExerciseType",
    "MealType",
    "UserRole",
    "DEFAULT_LIMIT",
    "DEFAULT_PAGE",
    "MAX_LIMIT",
    "MAX_PAGE",
    "PageRequest",
    "PaginationMeta",
    # User
    "UserCreate",
    "UserResponse",
    "UserUpdate",
    # Article
    "ArticleCreate",
    "ArticleResponse",
    "ArticleSummary",
    "ArticleUpdate",
    # Diary
    "DiaryCreate",
    "DiaryResponse",
    "DiaryUpdate",
    # Meal
    "MealCreate",
    "MealResponse",
    "MealSummary",
    "MealUpdate",
    # Exercise record
    "ExerciseRecordCreate",
    "ExerciseRecordResponse",
    "ExerciseRecordSummary",
    "ExerciseRecordUpdate",
    # Body measurement
    "BodyMeasurementCreate",
    "BodyMeasurementResponse",
    "BodyMeasurementUpdate",
    "MeasurementAggregate",
    "RecentMeasurementResponse",
]
