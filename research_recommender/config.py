from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import InvalidInputError
from .rule_based.hybrid import HybridWeights

# -----------------------------------------
#  환경변수 로드 (.env)
# -----------------------------------------
_CURRENT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _CURRENT_DIR.parent
_ENV_PATH = Path(os.getenv("RECO_ENV_PATH", str(_PROJECT_ROOT / ".env")))
load_dotenv(_ENV_PATH)

# -----------------------------------------
#  MongoDB
# -----------------------------------------
MONGODB_HOST = os.getenv("MONGO_HOST", "127.0.0.1")
MONGODB_PORT = int(os.getenv("MONGO_PORT", "27017"))
MONGODB_USERNAME = os.getenv("MONGO_USER")
MONGODB_PASSWORD = os.getenv("MONGO_PASSWORD")
MONGODB_DB_NAME = os.getenv("MONGO_DB", "neuronova")
MONGODB_AUTH_SOURCE = os.getenv("MONGO_AUTH_SOURCE", "admin")

# SSH 터널 (MONGO_SSH_HOST 가 있을 때만 사용)
SSH_HOST = os.getenv("MONGO_SSH_HOST")
SSH_PORT = int(os.getenv("MONGO_SSH_PORT", "22"))
SSH_USERNAME = os.getenv("MONGO_SSH_USER", "ubuntu")
SSH_PEM_KEY_PATH = os.getenv("MONGO_SSH_KEY_PATH")

# -----------------------------------------
#  추천 엔진
# -----------------------------------------
CANDIDATE_LIMIT = int(os.getenv("RECO_CANDIDATE_LIMIT", "50"))
INTERACTION_LIMIT = int(os.getenv("RECO_INTERACTION_LIMIT", "1000"))
DEFAULT_LIMIT = int(os.getenv("RECO_DEFAULT_LIMIT", "5"))
MAX_LIMIT = int(os.getenv("RECO_MAX_LIMIT", "50"))


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise InvalidInputError(name, f"expected a number, got {raw!r}") from None


def load_hybrid_weights(defaults: Optional[HybridWeights] = None) -> HybridWeights:
    """RECO_WEIGHT_* 환경변수로 하이브리드 가중치를 덮어쓴다."""
    defaults = defaults or HybridWeights()
    return HybridWeights(
        content=_env_float("RECO_WEIGHT_CONTENT", defaults.content),
        collaborative=_env_float("RECO_WEIGHT_COLLABORATIVE", defaults.collaborative),
        trending=_env_float("RECO_WEIGHT_TRENDING", defaults.trending),
    )
