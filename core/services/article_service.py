# =============================================================================
# core/services/article_service.py - Article Operations
# =============================================================================
# Articles are not owned by any user: reads are public, writes are limited
# to ADMIN by the route dependencies.
# =============================================================================

from core.services.base import ResourceService
from lib.tables import Article


class ArticleService(ResourceService[Article]):
    """Service for health articles, newest publish_date first."""

    model = Article
    label = "Article"
    date_field = "publish_date"
    search_fields = ("title", "content", "author")
    category_field = "category"
    writable_fields = frozenset({
        "title", "category", "publish_date", "image_url", "content", "author", "views_count",
    })
    owned = False
