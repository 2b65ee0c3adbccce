import pytest

from research_recommender import config
from research_recommender.errors import InvalidInputError
from research_recommender.rule_based.hybrid import HybridWeights


def test_default_hybrid_weights(monkeypatch):
    for name in ("RECO_WEIGHT_CONTENT", "RECO_WEIGHT_COLLABORATIVE", "RECO_WEIGHT_TRENDING"):
        monkeypatch.delenv(name, raising=False)

    assert config.load_hybrid_weights() == HybridWeights(0.4, 0.35, 0.25)


def test_hybrid_weights_from_environment(monkeypatch):
    monkeypatch.setenv("RECO_WEIGHT_CONTENT", "0.5")
    monkeypatch.setenv("RECO_WEIGHT_COLLABORATIVE", "0.3")
    monkeypatch.setenv("RECO_WEIGHT_TRENDING", "")

    weights = config.load_hybrid_weights()

    assert weights == HybridWeights(content=0.5, collaborative=0.3, trending=0.25)


def test_non_numeric_weight_is_rejected(monkeypatch):
    monkeypatch.setenv("RECO_WEIGHT_TRENDING", "lots")

    with pytest.raises(InvalidInputError) as exc:
        config.load_hybrid_weights()

    assert exc.value.field == "RECO_WEIGHT_TRENDING"


def test_nan_weight_from_environment_is_rejected(monkeypatch):
    monkeypatch.setenv("RECO_WEIGHT_CONTENT", "nan")

    with pytest.raises(InvalidInputError) as exc:
        config.load_hybrid_weights()

    assert exc.value.field == "weights.content"
