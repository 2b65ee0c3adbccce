from datetime import datetime, timezone
from typing import Iterable, List, Optional

from ..models.data_models import RecommendationScore

# Content-based
CONTENT_INTEREST_BONUS = 40.0
CONTENT_SOURCE_BONUS = 15.0
CONTENT_RECENT_BONUS = 20.0
CONTENT_RECENT_DAYS = 7
CONTENT_IMPACT_WEIGHT = 0.2
CONTENT_NOVELTY_WEIGHT = 0.15
CONTENT_MIN_SCORE = 30.0
CONTENT_CONFIDENCE_SCALE = 100.0

# Collaborative
COLLAB_MATCH_SCORE = 25.0
COLLAB_BOOKMARK_BONUS = 10.0
COLLAB_LIKE_BONUS = 5.0
COLLAB_CATEGORY_BONUS = 15.0
COLLAB_MIN_SCORE = 20.0
COLLAB_CONFIDENCE_SCALE = 80.0

# Trending
TRENDING_THRESHOLD = 80.0
TRENDING_WEIGHT = 0.5
ENGAGEMENT_VIEW_WEIGHT = 0.01
ENGAGEMENT_BOOKMARK_WEIGHT = 0.5
ENGAGEMENT_CITATION_WEIGHT = 2.0
ENGAGEMENT_CAP = 30.0
ENGAGEMENT_REASON_THRESHOLD = 50.0
TRENDING_FIELD_BONUS = 20.0
TRENDING_MIN_SCORE = 25.0
TRENDING_CONFIDENCE_SCALE = 100.0

# Hybrid
HYBRID_CONFIDENCE_SCALE = 80.0

# Reason strings (프론트에 그대로 노출됨)
REASON_INTERESTS = "Matches your research interests"
REASON_PREFERRED_SOURCE = "From your preferred journal"
REASON_RECENT = "Recently published"
REASON_PEER_BOOKMARK = "Bookmarked by similar researchers"
REASON_PEER_LIKE = "Liked by users with similar interests"
REASON_POPULAR_AREA = "Popular in your research area"
REASON_TRENDING = "Currently trending in the community"
REASON_ENGAGEMENT = "High community engagement"
REASON_TRENDING_FIELD = "Trending in your field of interest"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # naive datetime 은 UTC 로 간주
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def days_since(published: datetime, now: Optional[datetime] = None) -> int:
    """now - published 를 일 단위(내림)로 반환. 미래 날짜면 음수."""
    now = _as_utc(now or utc_now())
    return (now - _as_utc(published)).days


def confidence(score: float, scale: float) -> float:
    return min(score / scale, 1.0)


def intersects(left: Iterable[str], right: Iterable[str]) -> bool:
    return not set(left).isdisjoint(right)


def rank(scores: List[RecommendationScore]) -> List[RecommendationScore]:
    # 동점은 입력 순서를 유지 (stable sort) - 호출 측에서 순서를 가정하면 안 됨
    return sorted(scores, key=lambda s: s.score, reverse=True)
