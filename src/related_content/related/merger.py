"""Merging database and static results."""

from collections.abc import Iterable

from related_content.catalog.models import RelatedArticle


def merge_results(
    db_results: Iterable[RelatedArticle],
    static_results: Iterable[RelatedArticle],
    count: int,
) -> list[RelatedArticle]:
    """Combine results, database first, deduplicated by slug and capped at `count`.

    The first occurrence of a slug wins, so a database row shadows a static
    item with the same slug.
    """
    if count <= 0:
        return []

    seen: set[str] = set()
    merged: list[RelatedArticle] = []

    for results in (db_results, static_results):
        for article in results:
            if article.slug in seen:
                continue
            seen.add(article.slug)
            merged.append(article)
            if len(merged) >= count:
                return merged

    return merged
