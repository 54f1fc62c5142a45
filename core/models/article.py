# =============================================================================
# core/models/article.py - Article Schemas
# =============================================================================
# Articles are global content: anyone may read them, only ADMIN may write.
# =============================================================================

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from .base import NOT_NULL_MESSAGE, CamelModel, RequestModel
from .enums import ArticleCategory

URL_PATTERN = r"^https?://\S+$"


class ArticleCreate(RequestModel):
    """
    Schema for publishing an article.

    Example:
        {
            "title": "Five habits for better sleep",
            "category": "LIFESTYLE",
            "publishDate": "2024-03-01T08:00:00Z",
            "content": "Keep a consistent schedule ...",
            "author": "Health Team"
        }
    """

    title: str = Field(..., min_length=5, max_length=200)
    category: Optional[ArticleCategory] = None
    publish_date: datetime
    image_url: Optional[str] = Field(default=None, max_length=2048, pattern=URL_PATTERN)
    content: str = Field(..., min_length=10)
    author: Optional[str] = Field(default=None, max_length=100)


class ArticleUpdate(RequestModel):
    title: Optional[str] = Field(default=None, min_length=5, max_length=200)
    category: Optional[ArticleCategory] = None
    publish_date: Optional[datetime] = None
    image_url: Optional[str] = Field(default=None, max_length=2048, pattern=URL_PATTERN)
    content: Optional[str] = Field(default=None, min_length=10)
    author: Optional[str] = Field(default=None, max_length=100)
    views_count: Optional[int] = Field(default=None, ge=0)

    @field_validator("title", "publish_date", "content", "views_count")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError(NOT_NULL_MESSAGE)
        return value


class ArticleSummary(CamelModel):
    """List item: everything except the body."""

    id: UUID
    title: str
    category: Optional[ArticleCategory] = None
    publish_date: datetime
    image_url: Optional[str] = None
    author: Optional[str] = None
    views_count: int = 0
    created_at: datetime


class ArticleResponse(ArticleSummary):
    content: str
    updated_at: Optional[datetime] = None
