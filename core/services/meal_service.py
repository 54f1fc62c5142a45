# =============================================================================
# core/services/meal_service.py - Meal Operations
# =============================================================================
# Users see their own meals; an ADMIN may see and manage every user's meals
# and filter the list by user id.
# =============================================================================

from core.services.base import ResourceService
from lib.tables import Meal


class MealService(ResourceService[Meal]):
    model = Meal
    label = "Meal"
    date_field = "meal_date"
    search_fields = ("description",)
    category_field = "meal_type"
    writable_fields = frozenset({
        "meal_type", "meal_date", "image_url", "description",
        "calories", "protein", "carbohydrates", "fats",
    })
    admin_override = True
