from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from ..models.data_models import Algorithm
from ..service.pipeline import parse_algorithm
from .recommend import _get_loader, recommend_user

logger = logging.getLogger(__name__)


# ------------------------------------------------------
# 추천 API + 노출 로그 기록
# ------------------------------------------------------
def get_user_recommendations(
    user_id: str,
    algorithm: str = Algorithm.HYBRID.value,
    limit: int = 5,
    log_exposure: bool = True,
) -> Dict[str, Any]:
    algo = parse_algorithm(algorithm)
    loader = _get_loader()

    results: List[Dict[str, Any]] = recommend_user(user_id, algorithm=algo.value, limit=limit, loader=loader)

    recommendation_id: Optional[str] = None
    if log_exposure:
        recommendation_id = loader.log_recommendation_event(
            user_id=user_id,
            results=results,
            algorithm=algo.value,
        )

    return {
        "userId": user_id,
        "algorithm": algo.value,
        "count": len(results),
        "results": results,
        "recommendationId": recommendation_id,
    }


# ------------------------------------------------------
# view / bookmark / share / discuss / like 상호작용 로그 API
# ------------------------------------------------------
def log_recommendation_interaction(
    user_id: str,
    article_id: str,
    interaction_type: str = "view",
    duration: Optional[float] = None,
    category: Optional[str] = None,
    keywords: Optional[List[str]] = None,
) -> Dict[str, Any]:
    logger.info(f"[Interaction] user_id={user_id}, article_id={article_id}, type={interaction_type}, duration={duration}")

    interaction_id = _get_loader().log_interaction(
        user_id=user_id,
        article_id=article_id,
        interaction_type=interaction_type,
        duration=duration,
        category=category,
        keywords=keywords,
    )

    return {
        "ok": True,
        "interactionId": interaction_id,
        "interactionType": interaction_type,
        "articleId": article_id,
    }
