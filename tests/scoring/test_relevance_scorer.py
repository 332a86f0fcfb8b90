"""Tests for RelevanceScorer."""

import pytest

from related_content.catalog.models import ContentItem, ContentType
from related_content.scoring.scorer import RelevanceScorer, count_shared


def create_item(
    slug: str = "item",
    content_type: ContentType = ContentType.BLOG,
    category_id: str = "",
    tags: list[str] | None = None,
    keywords: list[str] | None = None,
    page_type: str = "",
    published: bool = True,
) -> ContentItem:
    """Helper to create a ContentItem."""
    return ContentItem(
        slug=slug,
        type=content_type,
        category_id=category_id,
        tags=tags or [],
        keywords=keywords or [],
        page_type=page_type,
        published=published,
    )


@pytest.fixture
def scorer():
    return RelevanceScorer()


@pytest.fixture
def paris_guide():
    return create_item(
        "paris-guide", ContentType.BLOG, category_id="travel", tags=["food", "budget"]
    )


class TestCountShared:
    """Tests for the shared entry counter."""

    def test_case_insensitive(self):
        assert count_shared(["Food", "BUDGET"], ["food", "budget"]) == 2

    def test_counts_repeated_source_entries(self):
        assert count_shared(["food", "food", "Food"], ["food"]) == 3

    def test_repeats_on_candidate_side_count_once(self):
        assert count_shared(["food"], ["food", "food"]) == 1

    def test_empty_lists(self):
        assert count_shared([], ["food"]) == 0
        assert count_shared(["food"], []) == 0


class TestRelevanceScorer:
    """Tests for scoring logic."""

    def test_same_category_shared_tag_and_cross_type(self, scorer, paris_guide):
        """Category, one tag and the cross-type bonus add up to 50."""
        candidate = create_item(
            "a", ContentType.INFORMATION, category_id="travel", tags=["food"]
        )
        assert scorer.score(paris_guide, candidate) == 50

    def test_unrelated_same_type_scores_zero(self, scorer, paris_guide):
        candidate = create_item("b", ContentType.BLOG, category_id="nightlife", tags=["bars"])
        assert scorer.score(paris_guide, candidate) == 0

    def test_empty_category_never_matches(self, scorer):
        source = create_item("s", category_id="")
        candidate = create_item("c", category_id="")
        assert scorer.score(source, candidate) == 0

    def test_empty_page_type_never_matches(self, scorer):
        source = create_item("s", page_type="")
        candidate = create_item("c", page_type="")
        assert scorer.breakdown(source, candidate)["page_type"] == 0

    def test_same_page_type(self, scorer):
        source = create_item("s", page_type="guide")
        candidate = create_item("c", page_type="guide")
        assert scorer.score(source, candidate) == 10

    def test_page_type_is_case_sensitive(self, scorer):
        source = create_item("s", page_type="guide")
        candidate = create_item("c", page_type="Guide")
        assert scorer.score(source, candidate) == 0

    def test_shared_keywords(self, scorer):
        source = create_item("s", keywords=["Paris", "metro", "louvre"])
        candidate = create_item("c", keywords=["paris", "LOUVRE"])
        assert scorer.score(source, candidate) == 20

    def test_breakdown_sums_to_score(self, scorer):
        source = create_item(
            "s", category_id="travel", tags=["food"], keywords=["paris"], page_type="guide"
        )
        candidate = create_item(
            "c",
            ContentType.INFORMATION,
            category_id="travel",
            tags=["food"],
            keywords=["paris"],
            page_type="guide",
        )

        breakdown = scorer.breakdown(source, candidate)

        assert breakdown == {
            "category": 30,
            "tags": 15,
            "keywords": 10,
            "page_type": 10,
            "cross_type": 5,
        }
        assert scorer.score(source, candidate) == sum(breakdown.values())

    def test_each_shared_tag_raises_score(self, scorer):
        """Score grows with every extra shared tag or keyword, no size normalisation."""
        source = create_item("s", tags=["a", "b", "c"], keywords=["x", "y"])
        previous = -1
        for tags, keywords in [
            ([], []),
            (["a"], []),
            (["a", "b"], []),
            (["a", "b", "c"], []),
            (["a", "b", "c"], ["x"]),
            (["a", "b", "c"], ["x", "y"]),
        ]:
            candidate = create_item("c", tags=tags + ["noise"] * 20, keywords=keywords)
            current = scorer.score(source, candidate)
            assert current > previous
            previous = current

    def test_score_never_negative(self, scorer, paris_guide):
        candidates = [
            create_item("x"),
            create_item("y", ContentType.INFORMATION),
            create_item("z", tags=["food"], published=False),
        ]
        assert all(scorer.score(paris_guide, c) >= 0 for c in candidates)


class TestRank:
    """Tests for ranking."""

    def test_sorted_by_score_descending(self, scorer, paris_guide):
        low = create_item("low")
        high = create_item("high", ContentType.INFORMATION, category_id="travel", tags=["food"])
        mid = create_item("mid", tags=["budget"])

        ranked = scorer.rank(paris_guide, [low, high, mid])

        assert [entry.item.slug for entry in ranked] == ["high", "mid", "low"]
        assert [entry.score for entry in ranked] == [50, 15, 0]

    def test_ties_all_present(self, scorer, paris_guide):
        first = create_item("first", tags=["food"])
        second = create_item("second", tags=["budget"])

        ranked = scorer.rank(paris_guide, [first, second])

        assert {entry.item.slug for entry in ranked} == {"first", "second"}
        assert ranked[0].score == ranked[1].score == 15

    def test_empty_candidates(self, scorer, paris_guide):
        assert scorer.rank(paris_guide, []) == []
