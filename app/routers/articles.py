# =============================================================================
# app/routers/articles.py - Article Endpoints
# =============================================================================
# Reads are public (no token needed). Create, update and delete require
# the ADMIN role.
# =============================================================================

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import Identity, require_admin
from app.dependencies import ArticleServiceDep
from app.responses import created, deleted, ok, paginated, updated
from core.models import (
    ArticleCategory,
    ArticleCreate,
    ArticleResponse,
    ArticleSummary,
    ArticleUpdate,
    PageRequest,
)
from core.services import ListFilters

router = APIRouter()


@router.get("")
def list_articles(
    service: ArticleServiceDep,
    page: Optional[int] = Query(default=None),
    limit: Optional[int] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Matches title, content or author"),
    category: Optional[ArticleCategory] = Query(default=None),
):
    """List articles, most recently published first."""
    filters = ListFilters(page=PageRequest.clamp(page, limit), search=search, category=category)
    result = service.list(filters)
    return paginated(
        [ArticleSummary.model_validate(article) for article in result.items],
        result.page,
        result.total,
    )


@router.get("/{article_id}")
def get_article(
    article_id: Annotated[UUID, Path(description="Article UUID")],
    service: ArticleServiceDep,
):
    article = service.get_by_id(article_id)
    return ok(ArticleResponse.model_validate(article))


@router.post("", status_code=201)
def create_article(
    payload: ArticleCreate,
    service: ArticleServiceDep,
    identity: Identity = Depends(require_admin),
):
    article = service.create(payload)
    return created(ArticleResponse.model_validate(article), "Article created successfully")


@router.put("/{article_id}")
def update_article(
    article_id: Annotated[UUID, Path(description="Article UUID")],
    payload: ArticleUpdate,
    service: ArticleServiceDep,
    identity: Identity = Depends(require_admin),
):
    article = service.update(article_id, payload, identity)
    return updated(ArticleResponse.model_validate(article), "Article updated successfully")


@router.delete("/{article_id}")
def delete_article(
    article_id: Annotated[UUID, Path(description="Article UUID")],
    service: ArticleServiceDep,
    identity: Identity = Depends(require_admin),
):
    service.delete(article_id, identity)
    return deleted("Article deleted successfully")
