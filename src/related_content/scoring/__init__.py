"""Relevance scoring module."""

from related_content.scoring.scorer import RelevanceScorer, ScoredCandidate, count_shared

__all__ = ["RelevanceScorer", "ScoredCandidate", "count_shared"]
