# =============================================================================
# core/models/enums.py - Shared Enumerations
# =============================================================================
# Enum values are stored by name in the database and travel unchanged over
# the wire, so names and values are kept identical.
# =============================================================================

from enum import Enum


class UserRole(str, Enum):
    """Roles checked by the authorization layer."""
    USER = "USER"
    ADMIN = "ADMIN"


class ArticleCategory(str, Enum):
    NUTRITION = "NUTRITION"
    FITNESS = "FITNESS"
    MENTAL_HEALTH = "MENTAL_HEALTH"
    LIFESTYLE = "LIFESTYLE"
    RECIPE = "RECIPE"
    MEDICAL = "MEDICAL"


class MealType(str, Enum):
    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"
    SNACK = "SNACK"


class ExerciseType(str, Enum):
    CARDIO = "CARDIO"
    STRENGTH = "STRENGTH"
    FLEXIBILITY = "FLEXIBILITY"
    BALANCE = "BALANCE"
    SPORTS = "SPORTS"
    OTHER = "OTHER"


class AggregationPeriod(str, Enum):
    """
    Grouping used by the body-measurement trend endpoint.

    - week: ISO week, keyed "2024-W05"
    - month: calendar month, keyed "2024-02"
    - year: calendar year, keyed "2024"
    """
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
