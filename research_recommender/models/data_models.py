from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Algorithm(str, Enum):
    CONTENT_BASED = "content-based"
    COLLABORATIVE = "collaborative"
    TRENDING = "trending"
    HYBRID = "hybrid"


class InteractionType(str, Enum):
    VIEW = "view"
    BOOKMARK = "bookmark"
    SHARE = "share"
    DISCUSS = "discuss"
    LIKE = "like"


class ExpertiseLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


@dataclass
class ArticleMetrics:
    impact_score: float = 0.0
    novelty_score: float = 0.0
    readability_score: float = 0.0


@dataclass
class Article:
    article_id: str
    categories: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    source_name: str = ""
    publication_date: Optional[datetime] = None
    citation_count: int = 0
    view_count: int = 0
    bookmark_count: int = 0
    trending_score: float = 0.0
    metrics: ArticleMetrics = field(default_factory=ArticleMetrics)
    # 아래 필드는 응답 payload 용. 점수 계산에는 쓰지 않는다.
    title: Optional[str] = None
    abstract: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    source_url: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.article_id,
            "title": self.title,
            "abstract": self.abstract,
            "authors": list(self.authors),
            "categories": list(self.categories),
            "keywords": list(self.keywords),
            "source": {"name": self.source_name, "url": self.source_url},
            "publicationDate": self.publication_date.isoformat() if self.publication_date else None,
            "citationCount": self.citation_count,
            "viewCount": self.view_count,
            "bookmarkCount": self.bookmark_count,
            "trendingScore": self.trending_score,
            "metrics": {
                "impactScore": self.metrics.impact_score,
                "noveltyScore": self.metrics.novelty_score,
                "readabilityScore": self.metrics.readability_score,
            },
        }


@dataclass(frozen=True)
class Interaction:
    user_id: str
    article_id: str
    interaction_type: InteractionType
    timestamp: datetime
    category: str
    keywords: Tuple[str, ...] = ()
    duration: Optional[float] = None  # seconds


@dataclass
class UserProfile:
    user_id: str
    research_interests: List[str] = field(default_factory=list)
    reading_history: List[str] = field(default_factory=list)
    bookmarked_categories: List[str] = field(default_factory=list)
    # 아직 점수 계산에는 반영하지 않음
    expertise_level: ExpertiseLevel = ExpertiseLevel.INTERMEDIATE
    preferred_sources: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RecommendationScore:
    article_id: str
    score: float
    reasons: Tuple[str, ...]
    confidence: float
    algorithm: Algorithm

    def to_dict(self) -> Dict[str, Any]:
        return {
            "articleId": self.article_id,
            "score": self.score,
            "reasons": list(self.reasons),
            "confidence": self.confidence,
            "algorithmUsed": self.algorithm.value,
        }
