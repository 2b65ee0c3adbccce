from __future__ import annotations


class RecommendationError(Exception):
    """추천 엔진 공통 예외."""


class InvalidInputError(RecommendationError):
    """
    후보 논문 / 프로필 / 상호작용 레코드의 필수 필드가 없거나 형식이 잘못된 경우.

    field 에 문제가 된 필드 이름을 담는다. (예: "article.metrics.impact_score")
    """

    def __init__(self, field: str, message: str = "missing or malformed field"):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class UnknownAlgorithmError(InvalidInputError):
    def __init__(self, value: object):
        super().__init__("algorithm", f"unknown algorithm {value!r}")
