from __future__ import annotations

import logging
from typing import List, Sequence

from ..models.data_models import Algorithm, Article, RecommendationScore, UserProfile
from .scoring import (
    ENGAGEMENT_BOOKMARK_WEIGHT,
    ENGAGEMENT_CAP,
    ENGAGEMENT_CITATION_WEIGHT,
    ENGAGEMENT_REASON_THRESHOLD,
    ENGAGEMENT_VIEW_WEIGHT,
    REASON_ENGAGEMENT,
    REASON_TRENDING,
    REASON_TRENDING_FIELD,
    TRENDING_CONFIDENCE_SCALE,
    TRENDING_FIELD_BONUS,
    TRENDING_MIN_SCORE,
    TRENDING_THRESHOLD,
    TRENDING_WEIGHT,
    confidence,
    intersects,
    rank,
)
from .validation import validate_articles, validate_profile

logger = logging.getLogger(__name__)


def engagement_score(article: Article) -> float:
    return (
        article.view_count * ENGAGEMENT_VIEW_WEIGHT
        + article.bookmark_count * ENGAGEMENT_BOOKMARK_WEIGHT
        + article.citation_count * ENGAGEMENT_CITATION_WEIGHT
    )


class TrendingScorer:
    """커뮤니티 인기도(trending score, 조회/북마크/인용) + 관심 분야 보너스."""

    algorithm = Algorithm.TRENDING

    def score(self, profile: UserProfile, candidates: Sequence[Article]) -> List[RecommendationScore]:
        validate_profile(profile)
        validate_articles(candidates)

        read_ids = set(profile.reading_history)
        results: List[RecommendationScore] = []

        for article in candidates:
            if article.article_id in read_ids:
                continue

            score = 0.0
            reasons: List[str] = []

            if article.trending_score > TRENDING_THRESHOLD:
                score += article.trending_score * TRENDING_WEIGHT
                reasons.append(REASON_TRENDING)

            engagement = engagement_score(article)
            score += min(engagement, ENGAGEMENT_CAP)
            # reason 은 cap 과 무관하게 raw engagement 기준
            if engagement > ENGAGEMENT_REASON_THRESHOLD:
                reasons.append(REASON_ENGAGEMENT)

            if intersects(article.categories, profile.research_interests):
                score += TRENDING_FIELD_BONUS
                reasons.append(REASON_TRENDING_FIELD)

            if score > TRENDING_MIN_SCORE:
                results.append(
                    RecommendationScore(
                        article_id=article.article_id,
                        score=score,
                        reasons=tuple(reasons),
                        confidence=confidence(score, TRENDING_CONFIDENCE_SCALE),
                        algorithm=self.algorithm,
                    )
                )

        logger.debug(f"[Trending] user={profile.user_id} candidates={len(candidates)} scored={len(results)}")
        return rank(results)
