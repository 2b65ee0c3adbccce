from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from pymongo import DESCENDING, MongoClient
from sshtunnel import SSHTunnelForwarder

from .. import config
from ..errors import InvalidInputError
from ..models.data_models import (
    Article,
    ArticleMetrics,
    ExpertiseLevel,
    Interaction,
    InteractionType,
    UserProfile,
)

logger = logging.getLogger(__name__)

# 전역 SSH 터널 (싱글톤 패턴으로 관리)
_ssh_tunnel: Optional[SSHTunnelForwarder] = None


def get_ssh_tunnel() -> SSHTunnelForwarder:
    """SSH 터널을 싱글톤으로 가져오거나 생성합니다."""
    import paramiko

    global _ssh_tunnel
    if _ssh_tunnel is None or not _ssh_tunnel.is_active:
        if not config.SSH_PEM_KEY_PATH:
            raise InvalidInputError("MONGO_SSH_KEY_PATH", "required when MONGO_SSH_HOST is set")
        pkey = paramiko.RSAKey.from_private_key_file(config.SSH_PEM_KEY_PATH)

        _ssh_tunnel = SSHTunnelForwarder(
            (config.SSH_HOST, config.SSH_PORT),
            ssh_username=config.SSH_USERNAME,
            ssh_pkey=pkey,
            remote_bind_address=("127.0.0.1", config.MONGODB_PORT),
            local_bind_address=("127.0.0.1", 0),  # 사용 가능한 포트 자동 할당
            allow_agent=False,
            host_pkey_directories=[],
        )
        _ssh_tunnel.start()
        logger.info(f"[Loader] SSH tunnel up: {config.SSH_HOST} → 127.0.0.1:{_ssh_tunnel.local_bind_port}")
    return _ssh_tunnel


def _build_mongo_client() -> MongoClient:
    host, port = config.MONGODB_HOST, config.MONGODB_PORT
    if config.SSH_HOST:
        host, port = "127.0.0.1", get_ssh_tunnel().local_bind_port

    if config.MONGODB_USERNAME:
        uri = (
            f"mongodb://{config.MONGODB_USERNAME}:{config.MONGODB_PASSWORD}"
            f"@{host}:{port}/?authSource={config.MONGODB_AUTH_SOURCE}&directConnection=true"
        )
    else:
        uri = f"mongodb://{host}:{port}/?directConnection=true"

    return MongoClient(
        uri,
        serverSelectionTimeoutMS=30000,
        connectTimeoutMS=30000,
        socketTimeoutMS=30000,
    )


def _required(doc: Dict[str, Any], key: str, prefix: str) -> Any:
    value = doc.get(key)
    if value is None:
        raise InvalidInputError(f"{prefix}.{key}", "missing required field")
    return value


def _str_list(value: Any, name: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise InvalidInputError(name, "expected a list")
    return [str(v) for v in value]


def _number(doc: Dict[str, Any], key: str, name: str, cast=float):
    # 원본 스키마 기본값(0)을 따른다. 형식이 틀리면 필드 이름과 함께 실패
    value = doc.get(key)
    if value is None:
        return cast(0)
    if isinstance(value, bool):
        raise InvalidInputError(name, f"expected a number, got {value!r}")
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise InvalidInputError(name, f"expected a number, got {value!r}") from None


def _mapping(value: Any, name: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidInputError(name, "expected an object")
    return value


def _as_utc(value: datetime) -> datetime:
    # pymongo 는 기본적으로 naive UTC datetime 을 돌려준다
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class MongoDataLoader:
    """
    MongoDB 기반 후보 논문(Article) / UserProfile / Interaction 로딩 + 로그 기록 클래스
    """

    def __init__(self, client: Optional[MongoClient] = None, db_name: Optional[str] = None):
        if client is None:
            client = _build_mongo_client()

        self.client = client
        self.db = self.client[db_name or config.MONGODB_DB_NAME]

        # Collections
        self.col_research = self.db["research"]
        self.col_profiles = self.db["userprofiles"]
        self.col_interactions = self.db["interactions"]
        self.col_reco_events = self.db["recommendation_events"]

    # ------------------------------------------------------
    # Document → dataclass 변환
    # ------------------------------------------------------
    @staticmethod
    def _parse_datetime(value: Any, name: str) -> datetime:
        if isinstance(value, datetime):
            return _as_utc(value)
        if isinstance(value, str):
            try:
                return _as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
            except ValueError:
                pass
        raise InvalidInputError(name, f"expected a datetime, got {value!r}")

    @staticmethod
    def _doc_to_article(doc: Dict[str, Any]) -> Article:
        prefix = "research"
        source = doc.get("source")
        if isinstance(source, str):
            source = {"name": source}
        source = _mapping(source, f"{prefix}.source")
        metrics = _mapping(doc.get("metrics"), f"{prefix}.metrics")
        authors = []
        for a in doc.get("authors") or []:
            authors.append(a.get("name", "") if isinstance(a, dict) else str(a))

        return Article(
            article_id=str(_required(doc, "_id", prefix)),
            categories=_str_list(doc.get("categories"), f"{prefix}.categories"),
            keywords=_str_list(doc.get("keywords"), f"{prefix}.keywords"),
            source_name=str(_required(source, "name", f"{prefix}.source")),
            source_url=source.get("url"),
            publication_date=MongoDataLoader._parse_datetime(
                _required(doc, "publicationDate", prefix), f"{prefix}.publicationDate"
            ),
            citation_count=_number(doc, "citationCount", f"{prefix}.citationCount", int),
            view_count=_number(doc, "viewCount", f"{prefix}.viewCount", int),
            bookmark_count=_number(doc, "bookmarkCount", f"{prefix}.bookmarkCount", int),
            trending_score=_number(doc, "trendingScore", f"{prefix}.trendingScore"),
            metrics=ArticleMetrics(
                impact_score=_number(metrics, "impactScore", f"{prefix}.metrics.impactScore"),
                novelty_score=_number(metrics, "noveltyScore", f"{prefix}.metrics.noveltyScore"),
                readability_score=_number(metrics, "readabilityScore", f"{prefix}.metrics.readabilityScore"),
            ),
            title=doc.get("title"),
            abstract=doc.get("abstract"),
            authors=authors,
        )

    @staticmethod
    def _parse_interests(value: Any) -> List[str]:
        # 문자열 또는 {field, subfields} 객체 둘 다 허용
        tags: List[str] = []
        for item in value or []:
            if isinstance(item, str):
                tags.append(item)
            elif isinstance(item, dict) and item.get("field"):
                tags.append(str(item["field"]))
                tags.extend(str(s) for s in item.get("subfields") or [])
            else:
                raise InvalidInputError("userprofile.researchInterests", f"unexpected entry {item!r}")
        return list(dict.fromkeys(tags))

    @staticmethod
    def _doc_to_profile(doc: Dict[str, Any]) -> UserProfile:
        prefix = "userprofile"
        level = doc.get("expertiseLevel") or ExpertiseLevel.INTERMEDIATE.value
        try:
            expertise = ExpertiseLevel(level)
        except ValueError:
            raise InvalidInputError(f"{prefix}.expertiseLevel", f"unknown level {level!r}") from None

        return UserProfile(
            user_id=str(_required(doc, "userId", prefix)),
            research_interests=MongoDataLoader._parse_interests(doc.get("researchInterests")),
            reading_history=_str_list(doc.get("readingHistory"), f"{prefix}.readingHistory"),
            bookmarked_categories=_str_list(doc.get("bookmarkedCategories"), f"{prefix}.bookmarkedCategories"),
            expertise_level=expertise,
            preferred_sources=_str_list(doc.get("preferredSources"), f"{prefix}.preferredSources"),
        )

    @staticmethod
    def _doc_to_interaction(doc: Dict[str, Any]) -> Interaction:
        prefix = "interaction"
        kind = _required(doc, "interactionType", prefix)
        try:
            interaction_type = InteractionType(kind)
        except ValueError:
            raise InvalidInputError(f"{prefix}.interactionType", f"unknown type {kind!r}") from None

        duration = doc.get("duration")
        if duration is not None:
            duration = _number(doc, "duration", f"{prefix}.duration")
        return Interaction(
            user_id=str(_required(doc, "userId", prefix)),
            article_id=str(_required(doc, "articleId", prefix)),
            interaction_type=interaction_type,
            timestamp=MongoDataLoader._parse_datetime(_required(doc, "timestamp", prefix), f"{prefix}.timestamp"),
            category=str(_required(doc, "category", prefix)),
            keywords=tuple(_str_list(doc.get("keywords"), f"{prefix}.keywords")),
            duration=duration,
        )

    # ------------------------------------------------------
    # 조회
    # ------------------------------------------------------
    def get_candidate_articles(self, limit: int = config.CANDIDATE_LIMIT) -> List[Article]:
        cursor = (
            self.col_research.find()
            .sort([("trendingScore", DESCENDING), ("metrics.impactScore", DESCENDING), ("citationCount", DESCENDING)])
            .limit(limit)
        )
        return [self._doc_to_article(d) for d in cursor]

    def get_article(self, article_id: str) -> Optional[Article]:
        doc = self.col_research.find_one({"_id": article_id})
        return self._doc_to_article(doc) if doc else None

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        doc = self.col_profiles.find_one({"userId": user_id})
        return self._doc_to_profile(doc) if doc else None

    def get_recent_interactions(self, limit: int = config.INTERACTION_LIMIT) -> List[Interaction]:
        cursor = self.col_interactions.find().sort("timestamp", DESCENDING).limit(limit)
        return [self._doc_to_interaction(d) for d in cursor]

    # ------------------------------------------------------
    # 로그 기록
    # ------------------------------------------------------
    def log_interaction(
        self,
        user_id: str,
        article_id: str,
        interaction_type: str,
        duration: Optional[float] = None,
        category: Optional[str] = None,
        keywords: Optional[Sequence[str]] = None,
    ) -> str:
        """사용자의 view/bookmark/share/discuss/like 상호작용을 기록."""
        try:
            kind = InteractionType(interaction_type)
        except ValueError:
            raise InvalidInputError("interactionType", f"unknown type {interaction_type!r}") from None

        if category is None:
            # 카테고리를 안 주면 논문의 첫 번째 카테고리를 사용
            article = self.get_article(article_id)
            if article is None or not article.categories:
                raise InvalidInputError("category", f"cannot infer category for article {article_id!r}")
            category = article.categories[0]
            if keywords is None:
                keywords = article.keywords

        interaction_id = str(uuid4())
        doc = {
            "_id": interaction_id,
            "userId": user_id,
            "articleId": article_id,
            "interactionType": kind.value,
            "duration": duration,
            "category": category,
            "keywords": list(keywords or []),
            "timestamp": datetime.now(timezone.utc),
        }
        self.col_interactions.insert_one(doc)
        logger.info(f"[Loader] interaction {kind.value} user={user_id} article={article_id} → {interaction_id}")
        return interaction_id

    def log_recommendation_event(
        self,
        user_id: str,
        results: Sequence[Dict[str, Any]],
        algorithm: str,
    ) -> str:
        """
        추천 결과 노출 시 1회 호출.
        - results: recommend_user 가 반환하는 payload 리스트 그대로 사용
        - 점수는 저장하지 않고 노출 순서만 남긴다
        """
        recommendation_id = str(uuid4())
        items = [
            {"articleId": r.get("id"), "position": idx} for idx, r in enumerate(results)
        ]
        doc = {
            "_id": recommendation_id,
            "userId": user_id,
            "algorithm": algorithm,
            "items": items,
            "createdAt": datetime.now(timezone.utc),
        }
        self.col_reco_events.insert_one(doc)
        return recommendation_id
