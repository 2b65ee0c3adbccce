from .content import ContentScorer
from .collaborative import CollaborativeScorer
from .trending import TrendingScorer
from .hybrid import HybridCombiner, HybridWeights

__all__ = ["ContentScorer", "CollaborativeScorer", "TrendingScorer", "HybridCombiner", "HybridWeights"]
