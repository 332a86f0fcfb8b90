"""Related-article selection, merging and the service entry point."""

from related_content.related.merger import merge_results
from related_content.related.selector import RelatedSelector
from related_content.related.service import (
    RelatedContentService,
    build_service,
    get_related_articles,
)

__all__ = [
    "RelatedContentService",
    "RelatedSelector",
    "build_service",
    "get_related_articles",
    "merge_results",
]
