# =============================================================================
# core/models/pagination.py - Pagination Schemas
# =============================================================================
# A client asks for (page, limit); the services translate it into
# (skip, take). Out-of-range values are clamped, never rejected:
#   - page  < 1          -> 1
#   - limit < 1          -> 1
#   - page  > MAX_PAGE   -> MAX_PAGE
#   - limit > MAX_LIMIT  -> MAX_LIMIT
# The metadata returned to the client reflects the clamped values.
# =============================================================================

from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel

from .base import CamelModel

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# (MAX_PAGE - 1) * MAX_LIMIT must fit a 64-bit OFFSET
MAX_PAGE = 1_000_000


class PageRequest(BaseModel):
    """
    Effective page and page size after clamping.

    Example:
        PageRequest.clamp(page=0, limit=500)   # page=1, limit=100
        PageRequest.clamp(page=3, limit=10).skip  # 20
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def clamp(cls, page: Optional[int] = None, limit: Optional[int] = None) -> PageRequest:
        page = DEFAULT_PAGE if page is None else min(max(page, 1), MAX_PAGE)
        limit = DEFAULT_LIMIT if limit is None else min(max(limit, 1), MAX_LIMIT)
        return cls(page=page, limit=limit)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def take(self) -> int:
        return self.limit


class PaginationMeta(CamelModel):
    """
    Pagination block of a list response.

    Carries both naming styles so older and newer clients read the same
    block.

    Example:
        {
            "total": 25, "page": 3, "limit": 10,
            "totalItems": 25, "itemsPerPage": 10, "currentPage": 3,
            "totalPages": 3, "hasNextPage": false
        }
    """

    total: int
    page: int
    limit: int
    total_items: int
    items_per_page: int
    current_page: int
    total_pages: int
    has_next_page: bool

    @classmethod
    def build(cls, page: PageRequest, total: int) -> PaginationMeta:
        total_pages = math.ceil(total / page.limit) if total else 0
        return cls(
            total=total,
            page=page.page,
            limit=page.limit,
            total_items=total,
            items_per_page=page.limit,
            current_page=page.page,
            total_pages=total_pages,
            has_next_page=page.page < total_pages,
        )
