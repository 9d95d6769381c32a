"""
Runtime configuration read from environment variables.

The composition root calls load_dotenv() before Settings.from_env(), so a
local .env file works the same way as variables injected by the
deployment environment.
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_SENTIMENT_API_URL = "https://hariharan220-finbert-sentiment.hf.space/predict"
DEFAULT_PREDICTOR_API_URL = "https://hariharan220-stock-predictor.hf.space/predict"
DEFAULT_HF_CHAT_MODEL = "google/gemma-2b-it"


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    alpha_vantage_api_key: Optional[str] = None
    news_api_key: Optional[str] = None
    hf_api_key: Optional[str] = None
    llm_provider: str = "bedrock"
    hf_chat_model: str = DEFAULT_HF_CHAT_MODEL
    sentiment_api_url: str = DEFAULT_SENTIMENT_API_URL
    predictor_api_url: str = DEFAULT_PREDICTOR_API_URL
    aws_region: str = "us-east-1"
    news_cache_ttl_seconds: float = 600.0
    fetch_max_retries: int = 3
    rate_limit_backoff_seconds: float = 2.0
    http_timeout_seconds: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            alpha_vantage_api_key=os.environ.get("ALPHA_VANTAGE_API_KEY"),
            news_api_key=os.environ.get("NEWS_API_KEY"),
            hf_api_key=os.environ.get("HF_API_KEY"),
            llm_provider=os.environ.get("LLM_PROVIDER", "bedrock").strip().lower(),
            hf_chat_model=os.environ.get("HF_CHAT_MODEL", DEFAULT_HF_CHAT_MODEL),
            sentiment_api_url=os.environ.get("SENTIMENT_API_URL", DEFAULT_SENTIMENT_API_URL),
            predictor_api_url=os.environ.get("PREDICTOR_API_URL", DEFAULT_PREDICTOR_API_URL),
            aws_region=os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
            news_cache_ttl_seconds=_float_env("NEWS_CACHE_TTL_SECONDS", 600.0),
            fetch_max_retries=_int_env("FETCH_MAX_RETRIES", 3),
            rate_limit_backoff_seconds=_float_env("RATE_LIMIT_BACKOFF_SECONDS", 2.0),
            http_timeout_seconds=_float_env("HTTP_TIMEOUT_SECONDS", 10.0),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
