# =============================================================================
# core/services/exercise_record_service.py - Exercise Record Operations
# =============================================================================
# Same access rules as meals: owner or ADMIN.
# =============================================================================

from core.services.base import ResourceService
from lib.tables import ExerciseRecord


class ExerciseRecordService(ResourceService[ExerciseRecord]):
    model = ExerciseRecord
    label = "Exercise record"
    date_field = "exercise_date"
    search_fields = ("description",)
    category_field = "exercise_type"
    writable_fields = frozenset({
        "exercise_date", "exercise_type", "duration_minutes", "calories_burned", "description",
    })
    admin_override = True
