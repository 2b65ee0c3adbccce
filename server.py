"""
논문 추천 서버 - FastAPI 메인 파일.

content-based / collaborative / trending / hybrid 추천 API를 제공합니다.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from research_recommender import config
from research_recommender.errors import InvalidInputError
from research_recommender.interface.api_interface import (
    get_user_recommendations,
    log_recommendation_interaction,
)
from research_recommender.models.data_models import Algorithm, InteractionType

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# --- Schemas ---


class ArticleRecommendation(BaseModel):
    """개별 추천 논문"""
    article_id: str
    title: Optional[str] = None
    abstract: Optional[str] = None
    authors: List[str] = []
    categories: List[str] = []
    source: Dict[str, Any] = {}
    publication_date: Optional[str] = None
    recommendation_score: float
    recommendation_reasons: List[str] = []
    confidence: float = Field(ge=0.0, le=1.0)
    algorithm_used: Algorithm


class RecommendationResponse(BaseModel):
    """추천 API 응답"""
    user_id: str
    session_id: str
    algorithm: Algorithm
    recommendation_id: Optional[str] = None
    recommendations: List[ArticleRecommendation]
    total_count: int
    timestamp: str


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    service: str
    version: str


class InteractionRequest(BaseModel):
    """상호작용 로그 요청"""
    user_id: str
    article_id: str
    interaction_type: InteractionType = InteractionType.VIEW
    duration: Optional[float] = Field(default=None, ge=0)  # seconds
    category: Optional[str] = None
    keywords: Optional[List[str]] = None


class InteractionResponse(BaseModel):
    """상호작용 로그 응답"""
    ok: bool
    interaction_id: str


# --- Helper Functions ---


def transform_article(raw: Dict[str, Any]) -> ArticleRecommendation:
    """interface 응답(dict)을 API 스키마로 변환"""
    return ArticleRecommendation(
        article_id=raw.get("id", ""),
        title=raw.get("title"),
        abstract=raw.get("abstract"),
        authors=raw.get("authors", []),
        categories=raw.get("categories", []),
        source=raw.get("source") or {},
        publication_date=raw.get("publicationDate"),
        recommendation_score=raw.get("recommendationScore", 0.0),
        recommendation_reasons=raw.get("recommendationReasons", []),
        confidence=raw.get("confidence", 0.0),
        algorithm_used=raw.get("algorithmUsed", Algorithm.HYBRID.value),
    )


def create_session_id() -> str:
    """새 세션 ID 생성"""
    return str(uuid.uuid4())


# --- Lifespan ---


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작 및 종료"""
    logger.info("[Startup] Research Recommendation Server starting...")
    yield
    logger.info("[Shutdown] Research Recommendation Server shutting down...")


app = FastAPI(
    title="Research Recommendation Server",
    description="content-based / collaborative / trending / hybrid 논문 추천 API",
    version="1.0.0",
    lifespan=lifespan,
)


# --- API Endpoints ---


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """헬스 체크"""
    return HealthResponse(
        status="ok",
        service="research-recommendation",
        version="1.0.0",
    )


@app.get("/recommendations", response_model=RecommendationResponse)
def get_recommendations(
    user_id: str = Query(..., alias="userId", description="사용자 ID"),
    algorithm: Algorithm = Query(Algorithm.HYBRID, description="추천 알고리즘"),
    limit: int = Query(config.DEFAULT_LIMIT, ge=1, le=config.MAX_LIMIT, description="추천 개수"),
    session_id: Optional[str] = Query(None, alias="sessionId", description="세션 ID (없으면 자동 생성)"),
):
    """
    알고리즘별 추천.

    - content-based: 관심 분야 / 선호 저널 / 최신성
    - collaborative: 비슷한 연구자들의 북마크 / 좋아요
    - trending: 커뮤니티 인기도
    - hybrid: 세 전략의 가중합
    """
    try:
        logger.info(f"[API] recommendations: user_id={user_id}, algorithm={algorithm.value}, limit={limit}")

        raw_result = get_user_recommendations(user_id=user_id, algorithm=algorithm.value, limit=limit)
        recommendations = [transform_article(r) for r in raw_result.get("results", [])]

        response = RecommendationResponse(
            user_id=user_id,
            session_id=session_id or create_session_id(),
            algorithm=algorithm,
            recommendation_id=raw_result.get("recommendationId"),
            recommendations=recommendations,
            total_count=len(recommendations),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

        logger.info(f"[API] Returned {len(recommendations)} recommendations")
        return response

    except InvalidInputError as e:
        logger.warning(f"[API] Invalid recommendation input: {e}")
        raise HTTPException(status_code=400, detail=f"잘못된 입력 ({e.field}): {e.message}")
    except Exception as e:
        logger.error(f"[API] Recommendation error: {e}")
        raise HTTPException(status_code=500, detail=f"추천 생성 실패: {str(e)}")


@app.post("/recommendations/interactions", response_model=InteractionResponse)
def log_interaction(request: InteractionRequest):
    """
    추천 상호작용 로그 기록.

    사용자가 추천된 논문을 보거나 북마크 / 공유 / 토론 / 좋아요 할 때 호출.
    """
    try:
        result = log_recommendation_interaction(
            user_id=request.user_id,
            article_id=request.article_id,
            interaction_type=request.interaction_type.value,
            duration=request.duration,
            category=request.category,
            keywords=request.keywords,
        )

        logger.info(f"[API] Interaction logged: interaction_id={result.get('interactionId')}")
        return InteractionResponse(
            ok=result.get("ok", True),
            interaction_id=result.get("interactionId", ""),
        )

    except InvalidInputError as e:
        logger.warning(f"[API] Invalid interaction: {e}")
        raise HTTPException(status_code=400, detail=f"잘못된 입력 ({e.field}): {e.message}")
    except Exception as e:
        logger.error(f"[API] Interaction log error: {e}")
        raise HTTPException(status_code=500, detail=f"상호작용 로그 실패: {str(e)}")
