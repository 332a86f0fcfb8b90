"""Top-N selection with a cross-type diversity guarantee."""

import logging
import random

from related_content.catalog.models import ContentItem
from related_content.scoring.scorer import RelevanceScorer, ScoredCandidate

logger = logging.getLogger(__name__)


class RelatedSelector:
    """Picks related items for a source from the static pool."""

    def __init__(
        self,
        scorer: RelevanceScorer | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize the selector.

        Args:
            scorer: Relevance scorer (default weights if omitted)
            rng: Random source for fallback and fill ordering
        """
        self.scorer = scorer or RelevanceScorer()
        self.rng = rng or random.Random()

    def select(
        self, source: ContentItem, pool: list[ContentItem], count: int
    ) -> list[ScoredCandidate]:
        """Select up to `count` items related to `source`.

        Steps:
        - Drop the source and unpublished items, score and rank the rest
        - Keep the top `count`
        - If none of them differs in type from the source (and count > 1),
          swap the best opposite-type candidate in for the lowest-ranked
          same-type entry
        - If still short, pad with shuffled opposite-type items at score 0

        Args:
            source: The article being viewed
            pool: Full static content pool
            count: Number of items wanted

        Returns:
            Selected candidates, best first
        """
        if count <= 0:
            return []

        candidates = [
            item for item in pool if item.published and item.identity != source.identity
        ]
        ranked = self.scorer.rank(source, candidates)
        top = ranked[:count]

        has_cross_type = any(entry.item.type != source.type for entry in top)
        if not has_cross_type and count > 1:
            self._ensure_cross_type(source, ranked, top)

        if len(top) < count:
            top.extend(self._fill(source, pool, top, count - len(top)))

        return top

    def _ensure_cross_type(
        self,
        source: ContentItem,
        ranked: list[ScoredCandidate],
        top: list[ScoredCandidate],
    ) -> None:
        """Substitute the best opposite-type candidate into `top` in place."""
        selected = {entry.item.identity for entry in top}
        best_cross = next(
            (
                entry
                for entry in ranked
                if entry.item.type != source.type and entry.item.identity not in selected
            ),
            None,
        )
        if best_cross is None:
            logger.debug(f"No {source.type.opposite.value} candidate for {source.slug}")
            return

        for i in range(len(top) - 1, -1, -1):
            if top[i].item.type == source.type:
                logger.debug(
                    f"Swapping {top[i].item.slug} for cross-type {best_cross.item.slug}"
                )
                top[i] = best_cross
                break

    def _fill(
        self,
        source: ContentItem,
        pool: list[ContentItem],
        top: list[ScoredCandidate],
        needed: int,
    ) -> list[ScoredCandidate]:
        used = {entry.item.identity for entry in top}
        used.add(source.identity)

        fillers = [
            item
            for item in pool
            if item.published and item.type != source.type and item.identity not in used
        ]
        self.rng.shuffle(fillers)
        return [ScoredCandidate(item, 0) for item in fillers[:needed]]

    def fallback(self, pool: list[ContentItem], count: int) -> list[ContentItem]:
        """Random published items, used when the source isn't in the pool."""
        if count <= 0:
            return []
        published = [item for item in pool if item.published]
        self.rng.shuffle(published)
        return published[:count]
