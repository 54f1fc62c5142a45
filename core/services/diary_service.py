# =============================================================================
# core/services/diary_service.py - Diary Operations
# =============================================================================
# Diary entries are private: not even an ADMIN can read another user's diary.
# =============================================================================

from core.services.base import ResourceService
from lib.tables import Diary


class DiaryService(ResourceService[Diary]):
    model = Diary
    label = "Diary entry"
    date_field = "entry_date"
    search_fields = ("title", "content")
    writable_fields = frozenset({"entry_date", "title", "content"})
