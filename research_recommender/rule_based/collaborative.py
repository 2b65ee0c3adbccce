from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Sequence, Set

from ..models.data_models import Algorithm, Article, Interaction, InteractionType, RecommendationScore
from .scoring import (
    COLLAB_BOOKMARK_BONUS,
    COLLAB_CATEGORY_BONUS,
    COLLAB_CONFIDENCE_SCALE,
    COLLAB_LIKE_BONUS,
    COLLAB_MATCH_SCORE,
    COLLAB_MIN_SCORE,
    REASON_PEER_BOOKMARK,
    REASON_PEER_LIKE,
    REASON_POPULAR_AREA,
    confidence,
    intersects,
    rank,
)
from .validation import validate_articles, validate_interactions, validate_user_id

logger = logging.getLogger(__name__)

# view / share / discuss 는 약한 신호라서 peer signal 로 세지 않는다
PEER_SIGNAL_TYPES = frozenset({InteractionType.BOOKMARK, InteractionType.LIKE})


class CollaborativeScorer:
    """
    같은 카테고리에서 활동한 다른 사용자들의 북마크/좋아요 기반 점수.

    NOTE: 다른 스코어러와 달리 reading_history 를 제외하지 않는다.
    """

    algorithm = Algorithm.COLLABORATIVE

    def score(
        self,
        user_id: str,
        interactions: Sequence[Interaction],
        candidates: Sequence[Article],
    ) -> List[RecommendationScore]:
        validate_user_id(user_id)
        validate_interactions(interactions)
        validate_articles(candidates)

        user_categories: Set[str] = {i.category for i in interactions if i.user_id == user_id}

        peer_by_article: Dict[str, List[InteractionType]] = defaultdict(list)
        for i in interactions:
            kind = InteractionType(i.interaction_type)
            if i.user_id == user_id or kind not in PEER_SIGNAL_TYPES:
                continue
            if i.category in user_categories:
                peer_by_article[i.article_id].append(kind)

        results: List[RecommendationScore] = []
        for article in candidates:
            matches = peer_by_article.get(article.article_id)
            if not matches:
                continue

            score = len(matches) * COLLAB_MATCH_SCORE
            reasons: List[str] = []

            bookmarks = sum(1 for kind in matches if kind is InteractionType.BOOKMARK)
            likes = sum(1 for kind in matches if kind is InteractionType.LIKE)

            score += bookmarks * COLLAB_BOOKMARK_BONUS
            if bookmarks > 0:
                reasons.append(REASON_PEER_BOOKMARK)

            score += likes * COLLAB_LIKE_BONUS
            if likes > 0:
                reasons.append(REASON_PEER_LIKE)

            if intersects(article.categories, user_categories):
                score += COLLAB_CATEGORY_BONUS
                reasons.append(REASON_POPULAR_AREA)

            if score > COLLAB_MIN_SCORE:
                results.append(
                    RecommendationScore(
                        article_id=article.article_id,
                        score=score,
                        reasons=tuple(reasons),
                        confidence=confidence(score, COLLAB_CONFIDENCE_SCALE),
                        algorithm=self.algorithm,
                    )
                )

        logger.debug(
            f"[Collaborative] user={user_id} categories={len(user_categories)} "
            f"peer_articles={len(peer_by_article)} scored={len(results)}"
        )
        return rank(results)
