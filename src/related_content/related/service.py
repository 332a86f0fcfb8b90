"""Related-articles entry point: database results merged with scored static content."""

import asyncio
import logging
from collections.abc import Callable
from functools import partial

from related_content.catalog.loader import CatalogLoader, get_static_pool
from related_content.catalog.models import ContentItem, ContentType, RelatedArticle
from related_content.config import Settings, get_settings
from related_content.exceptions import CatalogError, ConfigError, DatabaseError
from related_content.related.merger import merge_results
from related_content.related.selector import RelatedSelector
from related_content.storage.repository import PostRepository, SqlitePostRepository

logger = logging.getLogger(__name__)

PoolProvider = Callable[[], list[ContentItem]]


class RelatedContentService:
    """Computes related articles for blog posts and information-hub articles.

    Database posts come first (most recent), followed by static catalog items
    ranked by shared category, tags, keywords and page type. Failures degrade
    to shorter lists; nothing here raises to the caller.
    """

    def __init__(
        self,
        pool_provider: PoolProvider,
        repository: PostRepository | None = None,
        selector: RelatedSelector | None = None,
        default_count: int = 3,
        db_timeout: float = 3.0,
        db_fetch_multiplier: int = 2,
    ):
        """Initialize the service.

        Args:
            pool_provider: Returns the static content pool (called lazily,
                never in database-only mode)
            repository: Database posts source, or None to skip the database
            selector: Selector for static results
            default_count: Count used when the caller passes none
            db_timeout: Seconds before a database fetch gives up
            db_fetch_multiplier: Over-fetch factor when static results follow
        """
        self.pool_provider = pool_provider
        self.repository = repository
        self.selector = selector or RelatedSelector()
        self.default_count = default_count
        self.db_timeout = db_timeout
        self.db_fetch_multiplier = db_fetch_multiplier

    async def fetch_db_related(
        self, current_slug: str, category: str | None, limit: int
    ) -> list[RelatedArticle]:
        """Fetch database posts, returning [] on error or timeout."""
        if self.repository is None or limit <= 0:
            return []

        try:
            return await asyncio.wait_for(
                self.repository.find_related(current_slug, category, limit),
                timeout=self.db_timeout,
            )
        except TimeoutError:
            logger.warning(
                f"Database related-posts query timed out after {self.db_timeout}s "
                f"for {current_slug}"
            )
        except DatabaseError as e:
            logger.warning(f"Database unavailable, using static results only: {e}")
        except Exception as e:
            logger.warning(f"Database related-posts query failed for {current_slug}: {e!r}")
        return []

    async def _static_related(
        self, current_slug: str, current_type: ContentType, count: int
    ) -> list[RelatedArticle]:
        try:
            pool = await asyncio.to_thread(self.pool_provider)
        except CatalogError as e:
            logger.warning(f"Static catalog unavailable: {e}")
            return []
        except Exception as e:
            logger.warning(f"Static catalog failed to load: {e!r}")
            return []

        source = next(
            (item for item in pool if item.slug == current_slug and item.type == current_type),
            None,
        )

        if source is None:
            logger.info(
                f"{current_type.value}/{current_slug} not in static pool, "
                "using random published items"
            )
            items = self.selector.fallback(pool, count)
        else:
            items = [entry.item for entry in self.selector.select(source, pool, count)]

        return [item.to_related() for item in items]

    async def get_related_articles(
        self,
        current_slug: str,
        current_type: ContentType | str,
        count: int | None = None,
        *,
        db_only: bool = False,
        category_hint: str | None = None,
    ) -> list[RelatedArticle]:
        """Return up to `count` related articles.

        Args:
            current_slug: Slug of the article being viewed
            current_type: "blog" or "information"
            count: Number of articles wanted
            db_only: Skip the static catalog entirely (for database posts)
            category_hint: Category name used to filter database results

        Returns:
            Related articles, database results first
        """
        if count is None:
            count = self.default_count
        if count <= 0:
            return []

        try:
            content_type = ContentType(current_type)
        except ValueError:
            logger.warning(f"Unknown content type {current_type!r} for {current_slug}")
            return []

        limit = count if db_only else count * self.db_fetch_multiplier
        db_results = await self.fetch_db_related(current_slug, category_hint, limit)

        if db_only:
            return merge_results(db_results, [], count)

        static_results = await self._static_related(current_slug, content_type, count)
        return merge_results(db_results, static_results, count)


def build_service(settings: Settings | None = None) -> RelatedContentService:
    """Create a service wired from settings."""
    settings = settings or get_settings()

    loader = CatalogLoader(settings.catalog.sources, settings.catalog.http_timeout)
    repository = None
    if settings.database_file is not None:
        repository = SqlitePostRepository(str(settings.database_file))

    return RelatedContentService(
        pool_provider=partial(get_static_pool, loader),
        repository=repository,
        default_count=settings.related.default_count,
        db_timeout=settings.related.db_timeout_seconds,
        db_fetch_multiplier=settings.related.db_fetch_multiplier,
    )


async def get_related_articles(
    current_slug: str,
    current_type: ContentType | str,
    count: int = 3,
    *,
    db_only: bool = False,
    category_hint: str | None = None,
    settings: Settings | None = None,
) -> list[RelatedArticle]:
    """Related articles using the configured catalog and database."""
    try:
        service = build_service(settings)
    except ConfigError as e:
        logger.warning(f"Related articles disabled, bad configuration: {e}")
        return []
    return await service.get_related_articles(
        current_slug, current_type, count, db_only=db_only, category_hint=category_hint
    )
