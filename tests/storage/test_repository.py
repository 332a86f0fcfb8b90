"""Tests for SqlitePostRepository."""

import asyncio
import json
from pathlib import Path

import pytest

from related_content.catalog.models import ContentType
from related_content.exceptions import DatabaseError
from related_content.storage.repository import SqlitePostRepository, slugify_category


async def execute(repo: SqlitePostRepository, query: str, params: tuple = ()) -> None:
    async with repo.connect() as conn:
        await conn.execute(query, params)
        await conn.commit()


async def add_category(repo: SqlitePostRepository, cat_id: str, slug: str, name_en: str) -> None:
    await execute(
        repo,
        "INSERT INTO categories (id, slug, name_en, name_ar) VALUES (?, ?, ?, ?)",
        (cat_id, slug, name_en, f"{name_en} (ar)"),
    )


async def add_post(
    repo: SqlitePostRepository,
    slug: str,
    created_at: str,
    category_id: str | None = None,
    published: bool = True,
    deleted_at: str | None = None,
    meta_description_en: str | None = None,
    excerpt_en: str | None = None,
) -> None:
    await execute(
        repo,
        """
        INSERT INTO blog_posts (slug, title_en, title_ar, meta_description_en, excerpt_en,
                                category_id, tags, published, deleted_at, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            slug,
            f"Title {slug}",
            "",
            meta_description_en,
            excerpt_en,
            category_id,
            json.dumps(["tag"]),
            int(published),
            deleted_at,
            created_at,
        ),
    )


@pytest.fixture
def repo(tmp_path: Path):
    """Repository with schema, two categories and a handful of posts."""
    repository = SqlitePostRepository(str(tmp_path / "posts.db"))

    async def seed() -> None:
        await repository.init_tables()
        await add_category(repository, "c1", "fine-dining", "Fine Dining")
        await add_category(repository, "c2", "day-trips", "Day Trips")
        await add_post(repository, "oldest", "2024-01-01 10:00:00", "c1")
        await add_post(
            repository,
            "middle",
            "2024-02-01 10:00:00",
            "c2",
            meta_description_en="Meta text",
            excerpt_en="Excerpt text",
        )
        await add_post(repository, "newest", "2024-03-01 10:00:00", "c1", excerpt_en="Only excerpt")
        await add_post(repository, "draft", "2024-04-01 10:00:00", "c1", published=False)
        await add_post(
            repository, "removed", "2024-05-01 10:00:00", "c1", deleted_at="2024-05-02"
        )
        await add_post(repository, "uncategorised", "2023-12-01 10:00:00")

    asyncio.run(seed())
    return repository


def slugs(articles) -> list[str]:
    return [a.slug for a in articles]


def test_slugify_category():
    assert slugify_category("Fine  Dining") == "fine-dining"
    assert slugify_category("Day\tTrips Abroad") == "day-trips-abroad"


def test_published_non_deleted_most_recent_first(repo):
    articles = asyncio.run(repo.find_related("nothing", limit=10))
    assert slugs(articles) == ["newest", "middle", "oldest", "uncategorised"]


def test_excludes_current_slug(repo):
    articles = asyncio.run(repo.find_related("newest", limit=10))
    assert "newest" not in slugs(articles)


def test_limit(repo):
    articles = asyncio.run(repo.find_related("nothing", limit=2))
    assert slugs(articles) == ["newest", "middle"]


def test_category_name_substring_case_insensitive(repo):
    articles = asyncio.run(repo.find_related("nothing", category="dining", limit=10))
    assert slugs(articles) == ["newest", "oldest"]


def test_category_slugified_hint(repo):
    """A hint with irregular spacing still matches the category slug."""
    articles = asyncio.run(repo.find_related("nothing", category="Day  Trips", limit=10))
    assert slugs(articles) == ["middle"]


def test_category_wildcards_are_literal(repo):
    articles = asyncio.run(repo.find_related("nothing", category="%", limit=10))
    assert articles == []


def test_maps_rows_to_blog_articles(repo):
    articles = {a.slug: a for a in asyncio.run(repo.find_related("nothing", limit=10))}

    middle = articles["middle"]
    assert middle.type == ContentType.BLOG
    assert middle.title_en == "Title middle"
    assert middle.excerpt_en == "Meta text"
    assert middle.category_name_en == "Day Trips"
    assert middle.category_name_ar == "Day Trips (ar)"
    assert middle.reading_time is None

    assert articles["newest"].excerpt_en == "Only excerpt"
    assert articles["oldest"].excerpt_en == ""
    assert articles["uncategorised"].category_name_en is None
    assert articles["uncategorised"].featured_image == ""


def test_missing_database_directory_raises(tmp_path: Path):
    repository = SqlitePostRepository(str(tmp_path / "missing" / "posts.db"))

    with pytest.raises(DatabaseError):
        asyncio.run(repository.find_related("x"))


def test_missing_tables_raise(tmp_path: Path):
    repository = SqlitePostRepository(str(tmp_path / "empty.db"))

    with pytest.raises(DatabaseError):
        asyncio.run(repository.find_related("x"))
