from datetime import datetime, timedelta, timezone

import pytest

from research_recommender.errors import InvalidInputError
from research_recommender.models.data_models import (
    Algorithm,
    Article,
    ArticleMetrics,
    Interaction,
    InteractionType,
)
from research_recommender.rule_based.collaborative import CollaborativeScorer

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _make_article(article_id, categories=("AI",)):
    return Article(
        article_id=article_id,
        categories=list(categories),
        keywords=[],
        source_name="arXiv",
        publication_date=NOW - timedelta(days=10),
        metrics=ArticleMetrics(),
    )


def _make_interaction(user_id, article_id, kind, category="AI", hours_ago=1):
    return Interaction(
        user_id=user_id,
        article_id=article_id,
        interaction_type=kind,
        timestamp=NOW - timedelta(hours=hours_ago),
        category=category,
    )


def test_peer_bookmark_in_shared_category():
    interactions = [
        _make_interaction("user1", "seen", InteractionType.VIEW),
        _make_interaction("user2", "x", InteractionType.BOOKMARK),
    ]

    [result] = CollaborativeScorer().score("user1", interactions, [_make_article("x")])

    assert result.article_id == "x"
    assert result.score == pytest.approx(50.0)
    assert result.confidence == pytest.approx(0.625)
    assert result.reasons == ("Bookmarked by similar researchers", "Popular in your research area")
    assert result.algorithm is Algorithm.COLLABORATIVE


def test_multiple_peer_signals_accumulate_and_confidence_caps():
    interactions = [
        _make_interaction("user1", "seen", InteractionType.LIKE),
        _make_interaction("user2", "x", InteractionType.BOOKMARK),
        _make_interaction("user3", "x", InteractionType.BOOKMARK),
        _make_interaction("user4", "x", InteractionType.LIKE),
    ]

    [result] = CollaborativeScorer().score("user1", interactions, [_make_article("x")])

    # 3 * 25 + 2 * 10 + 1 * 5 + 15
    assert result.score == pytest.approx(115.0)
    assert result.confidence == 1.0
    assert result.reasons == (
        "Bookmarked by similar researchers",
        "Liked by users with similar interests",
        "Popular in your research area",
    )


def test_soft_signals_and_other_categories_are_ignored():
    interactions = [
        _make_interaction("user1", "seen", InteractionType.VIEW),
        _make_interaction("user2", "x", InteractionType.VIEW),
        _make_interaction("user2", "x", InteractionType.SHARE),
        _make_interaction("user2", "x", InteractionType.DISCUSS),
        _make_interaction("user3", "y", InteractionType.BOOKMARK, category="biology"),
    ]
    candidates = [_make_article("x"), _make_article("y", categories=("biology",))]

    assert CollaborativeScorer().score("user1", interactions, candidates) == []


def test_users_own_signals_do_not_count_as_peers():
    interactions = [_make_interaction("user1", "x", InteractionType.BOOKMARK)]

    assert CollaborativeScorer().score("user1", interactions, [_make_article("x")]) == []


def test_candidate_without_matching_category_still_scores_base():
    interactions = [
        _make_interaction("user1", "seen", InteractionType.VIEW),
        _make_interaction("user2", "x", InteractionType.LIKE),
    ]

    [result] = CollaborativeScorer().score("user1", interactions, [_make_article("x", categories=("physics",))])

    assert result.score == pytest.approx(30.0)
    assert result.reasons == ("Liked by users with similar interests",)


def test_read_history_is_not_excluded():
    # 다른 스코어러와 달리 이미 본 논문도 결과에 남는다
    interactions = [
        _make_interaction("user1", "x", InteractionType.VIEW),
        _make_interaction("user2", "x", InteractionType.BOOKMARK),
    ]

    results = CollaborativeScorer().score("user1", interactions, [_make_article("x")])

    assert [r.article_id for r in results] == ["x"]


def test_plain_string_interaction_types_are_accepted():
    interactions = [
        _make_interaction("user1", "seen", "view"),
        _make_interaction("user2", "x", "bookmark"),
    ]

    [result] = CollaborativeScorer().score("user1", interactions, [_make_article("x")])

    assert result.score == pytest.approx(50.0)


def test_sorted_descending():
    interactions = [
        _make_interaction("user1", "seen", InteractionType.VIEW),
        _make_interaction("user2", "one", InteractionType.LIKE),
        _make_interaction("user2", "two", InteractionType.BOOKMARK),
        _make_interaction("user3", "two", InteractionType.BOOKMARK),
    ]
    candidates = [_make_article("one"), _make_article("two")]

    results = CollaborativeScorer().score("user1", interactions, candidates)

    assert [r.article_id for r in results] == ["two", "one"]


def test_unknown_interaction_type_is_rejected():
    interactions = [_make_interaction("user2", "x", "download")]

    with pytest.raises(InvalidInputError) as exc:
        CollaborativeScorer().score("user1", interactions, [_make_article("x")])

    assert exc.value.field == "interaction.interaction_type"


def test_empty_user_id_is_rejected():
    with pytest.raises(InvalidInputError) as exc:
        CollaborativeScorer().score("", [], [])

    assert exc.value.field == "user_id"
