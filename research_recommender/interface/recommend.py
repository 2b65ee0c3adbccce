import logging
from typing import Any, Dict, List, Optional, Sequence

from .. import config
from ..data.data_loader import MongoDataLoader
from ..models.data_models import Algorithm, Article, ExpertiseLevel, RecommendationScore, UserProfile
from ..rule_based.hybrid import HybridWeights
from ..service.pipeline import get_recommendations

logger = logging.getLogger(__name__)

_loader: Optional[MongoDataLoader] = None


def _get_loader() -> MongoDataLoader:
    global _loader
    if _loader is None:
        _loader = MongoDataLoader()
    return _loader


def build_fallback_profile(user_id: str) -> UserProfile:
    """프로필이 없는 사용자용 기본 프로필. 관심사/이력 없이 trending 위주로 추천된다."""
    return UserProfile(
        user_id=user_id,
        research_interests=[],
        reading_history=[],
        bookmarked_categories=[],
        expertise_level=ExpertiseLevel.INTERMEDIATE,
        preferred_sources=[],
    )


def attach_payloads(scores: Sequence[RecommendationScore], articles: Sequence[Article]) -> List[Dict[str, Any]]:
    """점수 결과에 논문 전체 정보를 붙여서 프론트 응답 형태로 변환."""
    by_id = {a.article_id: a for a in articles}
    payloads = []
    for s in scores:
        article = by_id.get(s.article_id)
        if article is None:
            continue
        item = article.to_payload()
        item.update(
            {
                "recommendationScore": s.score,
                "recommendationReasons": list(s.reasons),
                "confidence": s.confidence,
                "algorithmUsed": s.algorithm.value,
            }
        )
        payloads.append(item)
    return payloads


def recommend_user(
    user_id: str,
    algorithm: str = Algorithm.HYBRID.value,
    limit: int = config.DEFAULT_LIMIT,
    loader: Optional[MongoDataLoader] = None,
    weights: Optional[HybridWeights] = None,
) -> List[Dict[str, Any]]:
    """
    후보 논문 / 프로필 / 상호작용 로그를 불러와 추천 엔진을 한 번 돌린다.
    """
    loader = loader or _get_loader()

    candidates = loader.get_candidate_articles(config.CANDIDATE_LIMIT)
    profile = loader.get_user_profile(user_id)
    if profile is None:
        logger.info(f"[Recommend] no profile for user_id={user_id} → fallback profile")
        profile = build_fallback_profile(user_id)
    interactions = loader.get_recent_interactions(config.INTERACTION_LIMIT)

    scores = get_recommendations(
        user_id=user_id,
        algorithm=algorithm,
        limit=limit,
        profile=profile,
        interactions=interactions,
        candidates=candidates,
        weights=weights or config.load_hybrid_weights(),
    )
    return attach_payloads(scores, candidates)
