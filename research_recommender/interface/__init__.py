from .recommend import recommend_user, build_fallback_profile
from .api_interface import get_user_recommendations, log_recommendation_interaction

__all__ = [
    "recommend_user",
    "build_fallback_profile",
    "get_user_recommendations",
    "log_recommendation_interaction",
]
