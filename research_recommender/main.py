import logging
from datetime import datetime, timezone

from .data.mock_data import get_mock_articles, get_mock_interactions, get_mock_profile
from .models.data_models import Algorithm
from .service.pipeline import get_recommendations


def demo_recommendations(user_id: str = "user1", limit: int = 5):
    now = datetime.now(timezone.utc)
    candidates = get_mock_articles(now)
    interactions = get_mock_interactions(now)
    profile = get_mock_profile(user_id)

    for algorithm in Algorithm:
        print(f"=== {user_id} Recommendations ({algorithm.value}) ===")
        recs = get_recommendations(user_id, algorithm, limit, profile, interactions, candidates, now=now)
        for r in recs:
            print(f"{r.article_id} (score={r.score:.2f}, confidence={r.confidence:.2f}) {list(r.reasons)}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    demo_recommendations()
