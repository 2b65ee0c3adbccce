from datetime import datetime, timezone

import pytest

from research_recommender.data.mock_data import get_mock_articles, get_mock_interactions, get_mock_profile
from research_recommender.errors import UnknownAlgorithmError
from research_recommender.interface import api_interface, recommend
from research_recommender.models.data_models import ExpertiseLevel


class FakeLoader:
    def __init__(self, profile=None):
        now = datetime.now(timezone.utc)
        self.articles = get_mock_articles(now)
        self.interactions = get_mock_interactions(now)
        self.profile = profile
        self.events = []
        self.logged = []

    def get_candidate_articles(self, limit):
        return self.articles[:limit]

    def get_user_profile(self, user_id):
        return self.profile

    def get_recent_interactions(self, limit):
        return self.interactions[:limit]

    def log_recommendation_event(self, user_id, results, algorithm):
        self.events.append((user_id, [r["id"] for r in results], algorithm))
        return "reco-1"

    def log_interaction(self, **kwargs):
        self.logged.append(kwargs)
        return "int-1"


@pytest.fixture
def fake_loader(monkeypatch):
    loader = FakeLoader(profile=get_mock_profile("user1"))
    monkeypatch.setattr(recommend, "_loader", loader)
    return loader


def test_fallback_profile_is_empty():
    profile = recommend.build_fallback_profile("ghost")

    assert profile.user_id == "ghost"
    assert profile.research_interests == []
    assert profile.reading_history == []
    assert profile.expertise_level is ExpertiseLevel.INTERMEDIATE


def test_recommend_user_attaches_article_payload(fake_loader):
    results = recommend.recommend_user("user1", algorithm="content-based", limit=5)

    assert [r["id"] for r in results] == ["mock-neuro-1", "mock-ai-1"]
    top = results[0]
    assert top["title"] == "Cortical Dynamics of Working Memory"
    assert top["source"]["name"] == "Nature Neuroscience"
    assert top["algorithmUsed"] == "content-based"
    assert top["recommendationReasons"][0] == "Matches your research interests"
    assert 0.0 <= top["confidence"] <= 1.0


def test_missing_profile_uses_fallback():
    loader = FakeLoader(profile=None)

    results = recommend.recommend_user("ghost", algorithm="trending", limit=5, loader=loader)

    # 관심사가 없으면 trending 신호만 남는다
    assert [r["id"] for r in results] == ["mock-ai-1", "mock-neuro-1"]
    assert all("Trending in your field of interest" not in r["recommendationReasons"] for r in results)


def test_get_user_recommendations_logs_exposure(fake_loader):
    response = api_interface.get_user_recommendations("user1", algorithm="hybrid", limit=1)

    assert response["count"] == 1
    assert response["recommendationId"] == "reco-1"
    assert fake_loader.events == [("user1", ["mock-ai-1"], "hybrid")]


def test_get_user_recommendations_rejects_unknown_algorithm(fake_loader):
    with pytest.raises(UnknownAlgorithmError):
        api_interface.get_user_recommendations("user1", algorithm="magic")

    assert fake_loader.events == []


def test_log_recommendation_interaction_forwards_to_loader(fake_loader):
    result = api_interface.log_recommendation_interaction("user1", "mock-ai-1", "like", duration=3.0)

    assert result == {"ok": True, "interactionId": "int-1", "interactionType": "like", "articleId": "mock-ai-1"}
    assert fake_loader.logged[0]["interaction_type"] == "like"
