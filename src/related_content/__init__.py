"""Related-article recommendations for blog and information-hub content."""

__version__ = "0.1.0"

from related_content.related.service import (  # noqa: E402
    RelatedContentService,
    build_service,
    get_related_articles,
)

__all__ = ["RelatedContentService", "build_service", "get_related_articles", "__version__"]
