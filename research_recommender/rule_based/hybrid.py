from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from ..errors import InvalidInputError
from ..models.data_models import Algorithm, Article, Interaction, RecommendationScore, UserProfile
from .collaborative import CollaborativeScorer
from .content import ContentScorer
from .scoring import HYBRID_CONFIDENCE_SCALE, confidence, rank
from .trending import TrendingScorer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HybridWeights:
    content: float = 0.4
    collaborative: float = 0.35
    trending: float = 0.25

    def __post_init__(self) -> None:
        for name in ("content", "collaborative", "trending"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidInputError(f"weights.{name}", "expected a finite non-negative number")
            # nan / inf 는 confidence 를 [0, 1] 밖으로 밀어낸다
            if not math.isfinite(value) or value < 0:
                raise InvalidInputError(f"weights.{name}", "expected a finite non-negative number")


def dedupe_reasons(reasons: Sequence[str]) -> Tuple[str, ...]:
    """완전 일치 기준 중복 제거. 처음 등장한 순서를 유지한다."""
    return tuple(dict.fromkeys(reasons))


class HybridCombiner:
    """
    content / collaborative / trending 결과를 가중합해서 하나의 랭킹으로 합친다.

    1) 세 스코어러를 같은 후보군에 대해 각각 실행
    2) content → collaborative → trending 순서로 가중 점수를 누적, reason 은 이어붙임
    3) reason 중복 제거 + confidence 재계산 후 점수 내림차순 정렬
    """

    algorithm = Algorithm.HYBRID

    def __init__(
        self,
        weights: Optional[HybridWeights] = None,
        content: Optional[ContentScorer] = None,
        collaborative: Optional[CollaborativeScorer] = None,
        trending: Optional[TrendingScorer] = None,
    ) -> None:
        self.weights = weights or HybridWeights()
        self.content = content or ContentScorer()
        self.collaborative = collaborative or CollaborativeScorer()
        self.trending = trending or TrendingScorer()

    def combine(
        self,
        user_id: str,
        profile: UserProfile,
        interactions: Sequence[Interaction],
        candidates: Sequence[Article],
        now: Optional[datetime] = None,
    ) -> List[RecommendationScore]:
        content_scores = self.content.score(profile, candidates, now=now)
        collaborative_scores = self.collaborative.score(user_id, interactions, candidates)
        trending_scores = self.trending.score(profile, candidates)

        return self.merge(
            [
                (content_scores, self.weights.content),
                (collaborative_scores, self.weights.collaborative),
                (trending_scores, self.weights.trending),
            ]
        )

    def merge(self, weighted: Sequence[Tuple[Sequence[RecommendationScore], float]]) -> List[RecommendationScore]:
        # article_id -> (누적 점수, reason 목록). dict 삽입 순서 = 동점일 때의 순서
        totals: Dict[str, float] = {}
        reasons: Dict[str, List[str]] = {}

        for scores, weight in weighted:
            for s in scores:
                if s.article_id in totals:
                    totals[s.article_id] += s.score * weight
                    reasons[s.article_id].extend(s.reasons)
                else:
                    totals[s.article_id] = s.score * weight
                    reasons[s.article_id] = list(s.reasons)

        combined = [
            RecommendationScore(
                article_id=article_id,
                score=total,
                reasons=dedupe_reasons(reasons[article_id]),
                confidence=confidence(total, HYBRID_CONFIDENCE_SCALE),
                algorithm=self.algorithm,
            )
            for article_id, total in totals.items()
        ]

        logger.debug(f"[Hybrid] merged {sum(len(s) for s, _ in weighted)} strategy scores into {len(combined)}")
        return rank(combined)
