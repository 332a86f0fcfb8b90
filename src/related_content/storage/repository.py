"""Database access for live (database-authored) blog posts."""

import logging
import re
import sqlite3
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite

from related_content.catalog.models import ContentType, RelatedArticle
from related_content.exceptions import DatabaseError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS categories (
    id          TEXT PRIMARY KEY,
    slug        TEXT NOT NULL,
    name_en     TEXT NOT NULL DEFAULT '',
    name_ar     TEXT NOT NULL DEFAULT ''
);

CREATE TABLE IF NOT EXISTS blog_posts (
    id                  INTEGER PRIMARY KEY AUTOINCREMENT,
    slug                TEXT    NOT NULL UNIQUE,
    title_en            TEXT    NOT NULL DEFAULT '',
    title_ar            TEXT    NOT NULL DEFAULT '',
    meta_description_en TEXT,
    excerpt_en          TEXT,
    excerpt_ar          TEXT,
    featured_image      TEXT,
    category_id         TEXT    REFERENCES categories(id),
    tags                TEXT,   -- JSON array of strings
    published           INTEGER NOT NULL DEFAULT 0,
    deleted_at          TEXT,
    created_at          TEXT    NOT NULL DEFAULT (datetime('now'))
);

CREATE INDEX IF NOT EXISTS idx_blog_posts_created_at ON blog_posts(created_at);
"""

RELATED_QUERY = """
SELECT p.slug, p.title_en, p.title_ar, p.meta_description_en, p.excerpt_en,
       p.excerpt_ar, p.featured_image, c.name_en AS category_name_en,
       c.name_ar AS category_name_ar
FROM blog_posts p
LEFT JOIN categories c ON c.id = p.category_id
WHERE p.published = 1 AND p.slug != ? AND p.deleted_at IS NULL
{category_filter}
ORDER BY p.created_at DESC
LIMIT ?
"""

CATEGORY_FILTER = (
    "AND (LOWER(c.name_en) LIKE ? ESCAPE '\\' OR c.slug LIKE ? ESCAPE '\\')"
)


def slugify_category(category: str) -> str:
    """Lowercase and replace whitespace runs with hyphens."""
    return re.sub(r"\s+", "-", category.lower())


def _contains_pattern(value: str) -> str:
    """LIKE pattern matching `value` anywhere, with wildcards escaped."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PostRepository(ABC):
    """Source of published database posts for related-article lists."""

    @abstractmethod
    async def find_related(
        self, exclude_slug: str, category: str | None = None, limit: int = 6
    ) -> list[RelatedArticle]:
        """Fetch recent published, non-deleted posts.

        Args:
            exclude_slug: Slug of the article being viewed
            category: Optional category hint (name substring or slug)
            limit: Maximum number of posts

        Returns:
            Posts ordered most recent first

        Raises:
            DatabaseError: If the query fails
        """
        pass


class SqlitePostRepository(PostRepository):
    """PostRepository backed by a SQLite file."""

    def __init__(self, path: str):
        self.path = path

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[aiosqlite.Connection]:
        conn = await aiosqlite.connect(self.path)
        conn.row_factory = aiosqlite.Row
        await conn.execute("PRAGMA foreign_keys=ON;")
        try:
            yield conn
        finally:
            await conn.close()

    async def init_tables(self) -> None:
        """Create the categories and blog_posts tables if they don't exist."""
        try:
            async with self.connect() as conn:
                await conn.executescript(SCHEMA)
                await conn.commit()
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to initialize schema: {e}") from e
        logger.info(f"Database tables initialized at {self.path}")

    async def find_related(
        self, exclude_slug: str, category: str | None = None, limit: int = 6
    ) -> list[RelatedArticle]:
        params: list = [exclude_slug]
        category_filter = ""
        if category:
            category_filter = CATEGORY_FILTER
            params.append(_contains_pattern(category.lower()))
            params.append(_contains_pattern(slugify_category(category)))
        params.append(limit)

        query = RELATED_QUERY.format(category_filter=category_filter)
        try:
            async with self.connect() as conn:
                cursor = await conn.execute(query, tuple(params))
                rows = await cursor.fetchall()
        except sqlite3.Error as e:
            raise DatabaseError(f"Related posts query failed: {e}") from e

        return [self._to_related(row) for row in rows]

    @staticmethod
    def _to_related(row: aiosqlite.Row) -> RelatedArticle:
        return RelatedArticle(
            slug=row["slug"],
            title_en=row["title_en"],
            title_ar=row["title_ar"],
            excerpt_en=row["meta_description_en"] or row["excerpt_en"] or "",
            excerpt_ar=row["excerpt_ar"] or "",
            featured_image=row["featured_image"] or "",
            type=ContentType.BLOG,
            category_name_en=row["category_name_en"] or None,
            category_name_ar=row["category_name_ar"] or None,
        )
