from .data_loader import MongoDataLoader
from .mock_data import get_mock_articles, get_mock_interactions, get_mock_profile

__all__ = ["MongoDataLoader", "get_mock_articles", "get_mock_interactions", "get_mock_profile"]
