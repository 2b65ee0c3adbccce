from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Union

from ..errors import InvalidInputError, UnknownAlgorithmError
from ..models.data_models import Algorithm, Article, Interaction, RecommendationScore, UserProfile
from ..rule_based.collaborative import CollaborativeScorer
from ..rule_based.content import ContentScorer
from ..rule_based.hybrid import HybridCombiner, HybridWeights
from ..rule_based.trending import TrendingScorer
from ..rule_based.validation import validate_now, validate_user_id

logger = logging.getLogger(__name__)

Strategy = Callable[
    [str, UserProfile, Sequence[Interaction], Sequence[Article], Optional[datetime], HybridWeights],
    List[RecommendationScore],
]


def _content(user_id, profile, interactions, candidates, now, weights):
    return ContentScorer().score(profile, candidates, now=now)


def _collaborative(user_id, profile, interactions, candidates, now, weights):
    return CollaborativeScorer().score(user_id, interactions, candidates)


def _trending(user_id, profile, interactions, candidates, now, weights):
    return TrendingScorer().score(profile, candidates)


def _hybrid(user_id, profile, interactions, candidates, now, weights):
    return HybridCombiner(weights).combine(user_id, profile, interactions, candidates, now=now)


STRATEGIES: Dict[Algorithm, Strategy] = {
    Algorithm.CONTENT_BASED: _content,
    Algorithm.COLLABORATIVE: _collaborative,
    Algorithm.TRENDING: _trending,
    Algorithm.HYBRID: _hybrid,
}


def parse_algorithm(value: Union[str, Algorithm]) -> Algorithm:
    try:
        return Algorithm(value)
    except ValueError:
        raise UnknownAlgorithmError(value) from None


def get_recommendations(
    user_id: str,
    algorithm: Union[str, Algorithm],
    limit: int,
    profile: UserProfile,
    interactions: Sequence[Interaction],
    candidates: Sequence[Article],
    now: Optional[datetime] = None,
    weights: Optional[HybridWeights] = None,
) -> List[RecommendationScore]:
    """
    추천 엔진 진입점.

    - algorithm 에 해당하는 전략을 실행하고 상위 limit 개를 반환
    - 입력이 잘못되면 InvalidInputError (부분 결과 없음)
    """
    validate_user_id(user_id)
    algo = parse_algorithm(algorithm)
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise InvalidInputError("limit", "expected a positive integer")
    validate_now(now)

    logger.info(f"[Pipeline] user_id={user_id}, algorithm={algo.value}, limit={limit}")

    scores = STRATEGIES[algo](user_id, profile, interactions, candidates, now, weights or HybridWeights())

    logger.info(f"[Pipeline] {len(scores)} scored → returning {min(limit, len(scores))}")
    return scores[:limit]
