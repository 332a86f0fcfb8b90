"""Static content pool: normalisation and the process-wide cache."""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

from related_content.catalog.fetcher import CatalogFetcher
from related_content.catalog.models import (
    BlogPostRecord,
    ContentItem,
    ContentType,
    InformationArticleRecord,
    LookupRecord,
)

logger = logging.getLogger(__name__)


@dataclass
class Catalog:
    """Raw catalog records merged from one or more documents."""

    blog_posts: list[BlogPostRecord] = field(default_factory=list)
    information_articles: list[InformationArticleRecord] = field(default_factory=list)
    categories: dict[str, LookupRecord] = field(default_factory=dict)
    information_categories: dict[str, LookupRecord] = field(default_factory=dict)
    information_sections: dict[str, LookupRecord] = field(default_factory=dict)

    def add_document(self, document: dict[str, Any], source: str = "<memory>") -> None:
        """Merge a parsed catalog document into this catalog."""
        self.blog_posts.extend(_parse_records(document, "blog_posts", BlogPostRecord, source))
        self.information_articles.extend(
            _parse_records(document, "information_articles", InformationArticleRecord, source)
        )
        for key in ("categories", "information_categories", "information_sections"):
            table: dict[str, LookupRecord] = getattr(self, key)
            for record in _parse_records(document, key, LookupRecord, source):
                table[record.id] = record


def _parse_records(
    document: dict[str, Any], key: str, model: type[BaseModel], source: str
) -> list[Any]:
    """Validate each entry under `key`, skipping the ones that don't fit."""
    entries = document.get(key) or []
    if not isinstance(entries, list):
        logger.warning(f"Catalog {source}: '{key}' is not a list, ignoring")
        return []

    records = []
    for index, entry in enumerate(entries):
        try:
            records.append(model.model_validate(entry))
        except ValidationError as e:
            logger.warning(
                f"Catalog {source}: skipping {key}[{index}] "
                f"({e.error_count()} validation error(s))"
            )
    return records


def _name(record: LookupRecord | None, attr: str) -> str:
    if record is None:
        return ""
    return getattr(record, attr) or ""


def normalise_blog_post(post: BlogPostRecord, categories: dict[str, LookupRecord]) -> ContentItem:
    category = categories.get(post.category_id or "")
    return ContentItem(
        slug=post.slug,
        type=ContentType.BLOG,
        title_en=post.title_en or "",
        title_ar=post.title_ar or "",
        excerpt_en=post.excerpt_en or "",
        excerpt_ar=post.excerpt_ar or "",
        featured_image=post.featured_image or "",
        category_id=post.category_id or "",
        category_name_en=_name(category, "name_en"),
        category_name_ar=_name(category, "name_ar"),
        tags=list(post.tags or []),
        keywords=list(post.keywords or []),
        page_type=post.page_type or "",
        reading_time=post.reading_time or 0,
        published=post.published,
    )


def normalise_information_article(
    article: InformationArticleRecord,
    categories: dict[str, LookupRecord],
    sections: dict[str, LookupRecord],
) -> ContentItem:
    """Normalise an information article; the section names the category when none matches."""
    category = categories.get(article.category_id or "")
    section = sections.get(article.section_id or "")
    return ContentItem(
        slug=article.slug,
        type=ContentType.INFORMATION,
        title_en=article.title_en or "",
        title_ar=article.title_ar or "",
        excerpt_en=article.excerpt_en or "",
        excerpt_ar=article.excerpt_ar or "",
        featured_image=article.featured_image or "",
        category_id=article.category_id or "",
        category_name_en=_name(category, "name_en") or _name(section, "name_en"),
        category_name_ar=_name(category, "name_ar") or _name(section, "name_ar"),
        tags=list(article.tags or []),
        keywords=list(article.keywords or []),
        page_type=article.page_type or "",
        reading_time=article.reading_time or 0,
        published=article.published,
    )


def build_pool(catalog: Catalog) -> list[ContentItem]:
    """Flatten a catalog into content items: blog posts first, then information articles."""
    items = [normalise_blog_post(post, catalog.categories) for post in catalog.blog_posts]
    items.extend(
        normalise_information_article(
            article, catalog.information_categories, catalog.information_sections
        )
        for article in catalog.information_articles
    )
    return items


class CatalogLoader:
    """Loads the static content pool from configured catalog sources."""

    def __init__(self, sources: Iterable[str], http_timeout: float = 30.0):
        self.sources = list(sources)
        self.http_timeout = http_timeout

    def load_catalog(self) -> Catalog:
        """Read and merge every source.

        Raises:
            CatalogError: If any source can't be read or parsed
        """
        catalog = Catalog()
        with CatalogFetcher(timeout=self.http_timeout) as fetcher:
            for source in self.sources:
                catalog.add_document(fetcher.fetch(source), source=source)
        return catalog

    def load(self) -> list[ContentItem]:
        """Load and normalise the full content pool."""
        if not self.sources:
            logger.info("No catalog sources configured, static pool is empty")
            return []

        pool = build_pool(self.load_catalog())
        logger.info(f"Loaded {len(pool)} catalog items from {len(self.sources)} source(s)")
        return pool

    def __call__(self) -> list[ContentItem]:
        return self.load()


# Process-wide static pool (lazy loaded, read-only once populated)
_static_pool: list[ContentItem] | None = None
_pool_lock = threading.Lock()


def get_static_pool(loader: Callable[[], list[ContentItem]]) -> list[ContentItem]:
    """Return the cached static pool, loading it with `loader` on first use.

    The first successful load wins for the life of the process. A load that
    raises is not cached.
    """
    global _static_pool
    pool = _static_pool
    if pool is not None:
        return pool

    with _pool_lock:
        if _static_pool is None:
            _static_pool = loader()
        return _static_pool


def reset_static_pool() -> None:
    """Drop the cached static pool so the next call reloads it."""
    global _static_pool
    with _pool_lock:
        _static_pool = None

