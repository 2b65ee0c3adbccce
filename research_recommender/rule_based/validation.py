"""
입력 엔티티 검증.

스코어러는 점수 계산 전에 모든 입력 레코드를 먼저 검사한다.
하나라도 잘못되면 InvalidInputError 를 던지고 부분 결과는 만들지 않는다.
"""
from __future__ import annotations

from datetime import datetime
from numbers import Real
from typing import Any, Iterable, Sequence

from ..errors import InvalidInputError
from ..models.data_models import Article, ExpertiseLevel, Interaction, InteractionType, UserProfile

_MISSING = object()
_COLLECTION_TYPES = (list, tuple, set, frozenset)


def _require(obj: Any, attr: str, prefix: str) -> Any:
    value = getattr(obj, attr, _MISSING)
    if value is _MISSING or value is None:
        raise InvalidInputError(f"{prefix}.{attr}", "missing required field")
    return value


def _require_str(obj: Any, attr: str, prefix: str) -> str:
    value = _require(obj, attr, prefix)
    if not isinstance(value, str) or not value:
        raise InvalidInputError(f"{prefix}.{attr}", "expected a non-empty string")
    return value


def _require_str_collection(obj: Any, attr: str, prefix: str) -> None:
    value = _require(obj, attr, prefix)
    if not isinstance(value, _COLLECTION_TYPES):
        raise InvalidInputError(f"{prefix}.{attr}", "expected a collection of strings")
    for item in value:
        if not isinstance(item, str):
            raise InvalidInputError(f"{prefix}.{attr}", f"non-string tag {item!r}")


def _require_number(obj: Any, attr: str, prefix: str) -> None:
    value = _require(obj, attr, prefix)
    # bool 은 int 의 서브클래스라서 따로 걸러낸다
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"{prefix}.{attr}", "expected a number")


def _require_datetime(obj: Any, attr: str, prefix: str) -> None:
    value = _require(obj, attr, prefix)
    if not isinstance(value, datetime):
        raise InvalidInputError(f"{prefix}.{attr}", "expected a datetime")


def _require_sequence(value: Any, name: str) -> Sequence[Any]:
    if value is None or not isinstance(value, (list, tuple)):
        raise InvalidInputError(name, "expected a list")
    return value


def validate_user_id(user_id: Any, name: str = "user_id") -> str:
    if not isinstance(user_id, str) or not user_id:
        raise InvalidInputError(name, "expected a non-empty string")
    return user_id


def validate_now(now: Any) -> None:
    # None 이면 호출 시점의 UTC 시각을 쓴다
    if now is not None and not isinstance(now, datetime):
        raise InvalidInputError("now", "expected a datetime")


def validate_article(article: Article) -> None:
    prefix = "article"
    _require_str(article, "article_id", prefix)
    _require_str_collection(article, "categories", prefix)
    _require_str_collection(article, "keywords", prefix)
    source = _require(article, "source_name", prefix)
    if not isinstance(source, str):
        raise InvalidInputError(f"{prefix}.source_name", "expected a string")
    _require_datetime(article, "publication_date", prefix)
    for attr in ("citation_count", "view_count", "bookmark_count", "trending_score"):
        _require_number(article, attr, prefix)

    metrics = _require(article, "metrics", prefix)
    for attr in ("impact_score", "novelty_score", "readability_score"):
        _require_number(metrics, attr, f"{prefix}.metrics")


def validate_profile(profile: UserProfile) -> None:
    prefix = "profile"
    validate_user_id(getattr(profile, "user_id", None), f"{prefix}.user_id")
    for attr in ("research_interests", "reading_history", "bookmarked_categories", "preferred_sources"):
        _require_str_collection(profile, attr, prefix)
    level = _require(profile, "expertise_level", prefix)
    try:
        ExpertiseLevel(level)
    except ValueError:
        raise InvalidInputError(f"{prefix}.expertise_level", f"unknown level {level!r}") from None


def validate_interaction(interaction: Interaction) -> None:
    prefix = "interaction"
    _require_str(interaction, "user_id", prefix)
    _require_str(interaction, "article_id", prefix)
    kind = _require(interaction, "interaction_type", prefix)
    try:
        InteractionType(kind)
    except ValueError:
        raise InvalidInputError(f"{prefix}.interaction_type", f"unknown type {kind!r}") from None
    _require_datetime(interaction, "timestamp", prefix)
    _require_str(interaction, "category", prefix)
    _require_str_collection(interaction, "keywords", prefix)
    duration = getattr(interaction, "duration", None)
    if duration is not None and (isinstance(duration, bool) or not isinstance(duration, Real)):
        raise InvalidInputError(f"{prefix}.duration", "expected a number of seconds")


def validate_articles(candidates: Iterable[Article]) -> Sequence[Article]:
    candidates = _require_sequence(candidates, "candidates")
    for article in candidates:
        validate_article(article)
    return candidates


def validate_interactions(interactions: Iterable[Interaction]) -> Sequence[Interaction]:
    interactions = _require_sequence(interactions, "interactions")
    for interaction in interactions:
        validate_interaction(interaction)
    return interactions
