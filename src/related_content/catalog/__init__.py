"""Static content catalog: models, fetching and the cached content pool."""

from related_content.catalog.fetcher import CatalogFetcher
from related_content.catalog.loader import (
    Catalog,
    CatalogLoader,
    build_pool,
    get_static_pool,
    reset_static_pool,
)
from related_content.catalog.models import ContentItem, ContentType, RelatedArticle

__all__ = [
    "Catalog",
    "CatalogFetcher",
    "CatalogLoader",
    "ContentItem",
    "ContentType",
    "RelatedArticle",
    "build_pool",
    "get_static_pool",
    "reset_static_pool",
]
