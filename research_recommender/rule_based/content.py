from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from ..models.data_models import Algorithm, Article, RecommendationScore, UserProfile
from .scoring import (
    CONTENT_CONFIDENCE_SCALE,
    CONTENT_IMPACT_WEIGHT,
    CONTENT_INTEREST_BONUS,
    CONTENT_MIN_SCORE,
    CONTENT_NOVELTY_WEIGHT,
    CONTENT_RECENT_BONUS,
    CONTENT_RECENT_DAYS,
    CONTENT_SOURCE_BONUS,
    REASON_INTERESTS,
    REASON_PREFERRED_SOURCE,
    REASON_RECENT,
    confidence,
    days_since,
    intersects,
    rank,
)
from .validation import validate_articles, validate_now, validate_profile

logger = logging.getLogger(__name__)


class ContentScorer:
    """
    관심 분야 / 선호 저널 / 최신성 / 논문 품질 지표 기반 점수.

    - 이미 읽은 논문(reading_history)은 추천하지 않는다.
    - CONTENT_MIN_SCORE 를 넘는 논문만 반환.
    """

    algorithm = Algorithm.CONTENT_BASED

    def score(
        self,
        profile: UserProfile,
        candidates: Sequence[Article],
        now: Optional[datetime] = None,
    ) -> List[RecommendationScore]:
        validate_profile(profile)
        validate_now(now)
        validate_articles(candidates)

        read_ids = set(profile.reading_history)
        results: List[RecommendationScore] = []

        for article in candidates:
            if article.article_id in read_ids:
                continue

            score = 0.0
            reasons: List[str] = []

            if intersects(article.categories, profile.research_interests):
                score += CONTENT_INTEREST_BONUS
                reasons.append(REASON_INTERESTS)

            if article.source_name in profile.preferred_sources:
                score += CONTENT_SOURCE_BONUS
                reasons.append(REASON_PREFERRED_SOURCE)

            if days_since(article.publication_date, now) <= CONTENT_RECENT_DAYS:
                score += CONTENT_RECENT_BONUS
                reasons.append(REASON_RECENT)

            # 품질 보정 (reason 없음)
            score += article.metrics.impact_score * CONTENT_IMPACT_WEIGHT
            score += article.metrics.novelty_score * CONTENT_NOVELTY_WEIGHT

            if score > CONTENT_MIN_SCORE:
                results.append(
                    RecommendationScore(
                        article_id=article.article_id,
                        score=score,
                        reasons=tuple(reasons),
                        confidence=confidence(score, CONTENT_CONFIDENCE_SCALE),
                        algorithm=self.algorithm,
                    )
                )

        logger.debug(f"[Content] user={profile.user_id} candidates={len(candidates)} scored={len(results)}")
        return rank(results)
