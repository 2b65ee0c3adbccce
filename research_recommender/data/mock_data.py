from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ..models.data_models import (
    Article,
    ArticleMetrics,
    ExpertiseLevel,
    Interaction,
    InteractionType,
    UserProfile,
)


def get_mock_articles(now: Optional[datetime] = None) -> List[Article]:
    now = now or datetime.now(timezone.utc)
    return [
        Article(
            article_id="mock-neuro-1",
            title="Cortical Dynamics of Working Memory",
            abstract="Mock abstract about neural population codes.",
            authors=["Jane Roe"],
            categories=["neuroscience"],
            keywords=["memory", "cortex"],
            source_name="Nature Neuroscience",
            publication_date=now - timedelta(days=2),
            citation_count=4,
            view_count=1200,
            bookmark_count=30,
            trending_score=88.0,
            metrics=ArticleMetrics(impact_score=72.0, novelty_score=64.0, readability_score=55.0),
        ),
        Article(
            article_id="mock-ai-1",
            title="Sparse Mixture-of-Experts at Scale",
            abstract="Mock abstract about conditional computation.",
            authors=["John Doe", "Ada Park"],
            categories=["AI", "machine-learning"],
            keywords=["moe", "scaling"],
            source_name="arXiv",
            publication_date=now - timedelta(days=20),
            citation_count=25,
            view_count=5400,
            bookmark_count=80,
            trending_score=93.0,
            metrics=ArticleMetrics(impact_score=81.0, novelty_score=70.0, readability_score=48.0),
        ),
        Article(
            article_id="mock-bio-1",
            title="CRISPR Screens in Organoids",
            abstract="Mock abstract about functional genomics.",
            authors=["Min Lee"],
            categories=["biology"],
            keywords=["crispr", "organoid"],
            source_name="Cell",
            publication_date=now - timedelta(days=45),
            citation_count=2,
            view_count=300,
            bookmark_count=5,
            trending_score=40.0,
            metrics=ArticleMetrics(impact_score=60.0, novelty_score=50.0, readability_score=62.0),
        ),
    ]


def get_mock_profile(user_id: str = "user1") -> UserProfile:
    return UserProfile(
        user_id=user_id,
        research_interests=["neuroscience", "AI"],
        reading_history=["mock-bio-1"],
        bookmarked_categories=["AI"],
        expertise_level=ExpertiseLevel.ADVANCED,
        preferred_sources=["Nature Neuroscience"],
    )


def get_mock_interactions(now: Optional[datetime] = None) -> List[Interaction]:
    now = now or datetime.now(timezone.utc)
    return [
        Interaction("user1", "mock-bio-1", InteractionType.VIEW, now - timedelta(days=3), "AI", ("scaling",), 240.0),
        Interaction("user2", "mock-ai-1", InteractionType.BOOKMARK, now - timedelta(days=1), "AI", ("moe",)),
        Interaction("user3", "mock-ai-1", InteractionType.LIKE, now - timedelta(hours=5), "AI", ("moe",)),
        Interaction("user3", "mock-neuro-1", InteractionType.SHARE, now - timedelta(hours=2), "neuroscience"),
    ]
