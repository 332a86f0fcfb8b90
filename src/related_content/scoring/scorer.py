"""Pairwise relevance scoring between catalog items."""

import logging
from dataclasses import dataclass

from related_content.catalog.models import ContentItem

logger = logging.getLogger(__name__)


@dataclass
class ScoredCandidate:
    """Candidate item with its relevance score against a source."""

    item: ContentItem
    score: int


def count_shared(source: list[str], candidate: list[str]) -> int:
    """Count source entries that also appear in candidate, ignoring case.

    Repeated source entries each count.
    """
    if not source or not candidate:
        return 0
    candidate_lower = {entry.lower() for entry in candidate}
    return sum(1 for entry in source if entry.lower() in candidate_lower)


class RelevanceScorer:
    """Scores how related a candidate is to the article being viewed."""

    # Scoring weights
    WEIGHT_SAME_CATEGORY = 30
    WEIGHT_SHARED_TAG = 15
    WEIGHT_SHARED_KEYWORD = 10
    WEIGHT_SAME_PAGE_TYPE = 10
    WEIGHT_CROSS_TYPE = 5

    def breakdown(self, source: ContentItem, candidate: ContentItem) -> dict[str, int]:
        """Per-signal score contributions.

        Args:
            source: The article being viewed
            candidate: The article being considered

        Returns:
            Mapping of signal name to points (category, tags, keywords,
            page_type, cross_type)
        """
        same_category = bool(source.category_id) and source.category_id == candidate.category_id
        same_page_type = bool(source.page_type) and source.page_type == candidate.page_type

        return {
            "category": self.WEIGHT_SAME_CATEGORY if same_category else 0,
            "tags": count_shared(source.tags, candidate.tags) * self.WEIGHT_SHARED_TAG,
            "keywords": count_shared(source.keywords, candidate.keywords)
            * self.WEIGHT_SHARED_KEYWORD,
            "page_type": self.WEIGHT_SAME_PAGE_TYPE if same_page_type else 0,
            "cross_type": self.WEIGHT_CROSS_TYPE if source.type != candidate.type else 0,
        }

    def score(self, source: ContentItem, candidate: ContentItem) -> int:
        """Score a candidate against the source. Always >= 0."""
        return sum(self.breakdown(source, candidate).values())

    def rank(
        self, source: ContentItem, candidates: list[ContentItem]
    ) -> list[ScoredCandidate]:
        """Score candidates and sort by score descending.

        The sort is stable, so equal scores keep pool order.
        """
        scored = [ScoredCandidate(item, self.score(source, item)) for item in candidates]
        ranked = sorted(scored, key=lambda x: x.score, reverse=True)

        if ranked:
            logger.debug(
                f"Ranked {len(ranked)} candidates for {source.type.value}/{source.slug}, "
                f"top score={ranked[0].score}"
            )
        return ranked
