# =============================================================================
# core/models/diary.py - Diary Schemas
# =============================================================================

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from .base import NOT_NULL_MESSAGE, CamelModel, RequestModel


class DiaryCreate(RequestModel):
    """
    Schema for writing a diary entry.

    Example:
        {
            "entryDate": "2024-02-10T21:00:00Z",
            "title": "Long run",
            "content": "Ran 12km, felt great afterwards."
        }
    """

    entry_date: datetime
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: str = Field(..., min_length=10)


class DiaryUpdate(RequestModel):
    entry_date: Optional[datetime] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=10)

    @field_validator("entry_date", "content")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError(NOT_NULL_MESSAGE)
        return value


class DiaryResponse(CamelModel):
    id: UUID
    user_id: UUID
    entry_date: datetime
    title: Optional[str] = None
    content: str
    created_at: datetime
    updated_at: Optional[datetime] = None
