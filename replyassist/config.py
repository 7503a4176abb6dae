import os
from pathlib import Path

from dotenv import load_dotenv

from replyassist.core.logging import get_logger

_log = get_logger("config")

load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent.resolve()
DATA_ROOT = PROJECT_ROOT / "data"


def _get_int_env(name: str, default: int) -> int:
    """Get integer value from environment variable.

    Args:
        name: Environment variable name
        default: Default value if not set or invalid

    Returns:
        Integer value from env or default
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        _log.warning("Invalid int env", env=name, value=raw)
        return default


def _get_float_env(name: str, default: float) -> float:
    """Get float value from environment variable.

    Args:
        name: Environment variable name
        default: Default value if not set or invalid

    Returns:
        Float value from env or default
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        _log.warning("Invalid float env", env=name, value=raw)
        return default


APP_VERSION = os.getenv("REPLYASSIST_VERSION", "0.3.0")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = _get_int_env("PORT", 8000)

CORS_ALLOW_ORIGINS = os.getenv("CORS_ALLOW_ORIGINS", "")


def get_cors_origins() -> list:
    """Get allowed CORS origins from environment or defaults."""
    if CORS_ALLOW_ORIGINS:
        return [origin.strip() for origin in CORS_ALLOW_ORIGINS.split(",") if origin.strip()]
    return [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]


# =============================================================================
# Catalog
# =============================================================================
INTENTS_PATH = Path(os.getenv("INTENTS_PATH", str(DATA_ROOT / "intents.json")))
SCORING_RULES_PATH = os.getenv("SCORING_RULES_PATH") or None

# =============================================================================
# Lexical ranking
# =============================================================================
NGRAM_SIZE = _get_int_env("NGRAM_SIZE", 3)
SOFTMAX_TEMPERATURE = _get_float_env("SOFTMAX_TEMPERATURE", 0.18)
SUGGEST_TOP_K = _get_int_env("SUGGEST_TOP_K", 5)

# Verdict thresholds (operationally tuned)
VERDICT_STRONG_PCT = _get_int_env("VERDICT_STRONG_PCT", 90)
VERDICT_STRONG_SCORE = _get_float_env("VERDICT_STRONG_SCORE", 0.22)
VERDICT_NORMAL_PCT = _get_int_env("VERDICT_NORMAL_PCT", 70)
VERDICT_NORMAL_SCORE = _get_float_env("VERDICT_NORMAL_SCORE", 0.18)

# =============================================================================
# Remote reranking (Gemini)
# =============================================================================
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or None
GEMINI_MODEL = os.getenv("GEMINI_MODEL") or None

RERANK_CACHE_TTL_SEC = _get_float_env("RERANK_CACHE_TTL_SEC", 600.0)
RERANK_CIRCUIT_TTL_SEC = _get_float_env("RERANK_CIRCUIT_TTL_SEC", 300.0)
RERANK_TIMEOUT_MS = _get_int_env("RERANK_TIMEOUT_MS", 20_000)
RERANK_TEMPERATURE = _get_float_env("RERANK_TEMPERATURE", 0.2)
RERANK_MAX_OUTPUT_TOKENS = _get_int_env("RERANK_MAX_OUTPUT_TOKENS", 512)
RERANK_DISCOVERY_LIMIT = _get_int_env("RERANK_DISCOVERY_LIMIT", 12)
RERANK_MIN_CANDIDATES = _get_int_env("RERANK_MIN_CANDIDATES", 3)
