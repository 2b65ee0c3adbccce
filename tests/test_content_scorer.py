from datetime import datetime, timedelta, timezone

import pytest

from research_recommender.errors import InvalidInputError
from research_recommender.models.data_models import Algorithm, Article, ArticleMetrics, UserProfile
from research_recommender.rule_based.content import ContentScorer

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def _make_article(article_id, categories=None, source="arXiv", days_ago=30, impact=0.0, novelty=0.0):
    return Article(
        article_id=article_id,
        categories=categories or [],
        keywords=[],
        source_name=source,
        publication_date=NOW - timedelta(days=days_ago),
        metrics=ArticleMetrics(impact_score=impact, novelty_score=novelty, readability_score=40.0),
    )


def _make_profile(interests=None, history=None, sources=None):
    return UserProfile(
        user_id="user1",
        research_interests=interests or [],
        reading_history=history or [],
        preferred_sources=sources or [],
    )


def test_interest_recent_and_quality_boost_add_up():
    profile = _make_profile(interests=["neuroscience"])
    article = _make_article("a1", categories=["neuroscience"], days_ago=0, impact=50, novelty=50)

    [result] = ContentScorer().score(profile, [article], now=NOW)

    assert result.article_id == "a1"
    assert result.score == pytest.approx(77.5)
    assert result.reasons == ("Matches your research interests", "Recently published")
    assert result.algorithm is Algorithm.CONTENT_BASED
    assert result.confidence == pytest.approx(0.775)


def test_preferred_source_adds_bonus_and_reason():
    profile = _make_profile(interests=["AI"], sources=["Nature"])
    article = _make_article("a1", categories=["AI"], source="Nature")

    [result] = ContentScorer().score(profile, [article], now=NOW)

    assert result.score == pytest.approx(55.0)
    assert result.reasons == ("Matches your research interests", "From your preferred journal")


def test_read_articles_are_never_recommended():
    profile = _make_profile(interests=["AI"], history=["read-me"])
    candidates = [
        _make_article("read-me", categories=["AI"], days_ago=0, impact=100, novelty=100),
        _make_article("fresh", categories=["AI"]),
    ]

    results = ContentScorer().score(profile, candidates, now=NOW)

    assert [r.article_id for r in results] == ["fresh"]


def test_score_must_exceed_threshold():
    profile = _make_profile()
    # recent(20) + impact 50 * 0.2 (10) == 30 → 제외
    at_threshold = _make_article("edge", days_ago=1, impact=50)
    above = _make_article("above", days_ago=1, impact=55)

    results = ContentScorer().score(profile, [at_threshold, above], now=NOW)

    assert [r.article_id for r in results] == ["above"]
    assert all(r.score > 30 for r in results)


def test_recent_window_is_seven_whole_days():
    profile = _make_profile(interests=["AI"])
    candidates = [
        _make_article("seven", categories=["AI"], days_ago=7),
        _make_article("eight", categories=["AI"], days_ago=8),
    ]

    by_id = {r.article_id: r for r in ContentScorer().score(profile, candidates, now=NOW)}

    assert "Recently published" in by_id["seven"].reasons
    assert "Recently published" not in by_id["eight"].reasons


def test_naive_publication_date_is_treated_as_utc():
    profile = _make_profile(interests=["AI"])
    article = _make_article("naive", categories=["AI"])
    article.publication_date = datetime(2024, 12, 30, 12, 0)

    [result] = ContentScorer().score(profile, [article], now=NOW)

    assert "Recently published" in result.reasons


def test_results_sorted_descending_and_idempotent():
    profile = _make_profile(interests=["AI"], sources=["Nature"])
    candidates = [
        _make_article("low", categories=["AI"]),
        _make_article("high", categories=["AI"], source="Nature", days_ago=1, impact=90),
        _make_article("mid", categories=["AI"], impact=40),
    ]
    scorer = ContentScorer()

    first = scorer.score(profile, candidates, now=NOW)
    second = scorer.score(profile, candidates, now=NOW)

    assert [r.article_id for r in first] == ["high", "mid", "low"]
    scores = [r.score for r in first]
    assert scores == sorted(scores, reverse=True)
    assert first == second


def test_missing_publication_date_aborts_scoring():
    profile = _make_profile(interests=["AI"])
    good = _make_article("good", categories=["AI"])
    bad = _make_article("bad", categories=["AI"])
    bad.publication_date = None

    with pytest.raises(InvalidInputError) as exc:
        ContentScorer().score(profile, [good, bad], now=NOW)

    assert exc.value.field == "article.publication_date"


def test_non_numeric_metric_is_rejected():
    profile = _make_profile(interests=["AI"])
    article = _make_article("a1", categories=["AI"])
    article.metrics = ArticleMetrics(impact_score="high", novelty_score=1.0)

    with pytest.raises(InvalidInputError) as exc:
        ContentScorer().score(profile, [article], now=NOW)

    assert exc.value.field == "article.metrics.impact_score"


def test_non_datetime_now_is_rejected():
    profile = _make_profile(interests=["AI"])
    article = _make_article("a1", categories=["AI"])

    with pytest.raises(InvalidInputError) as exc:
        ContentScorer().score(profile, [article], now="2025-01-01")

    assert exc.value.field == "now"
