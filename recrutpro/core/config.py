from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    rate_limit: str
    rate_limit_enabled: bool
    application_rate_limit: str
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    france_travail_client_id: str | None
    france_travail_client_secret: str | None
    france_travail_timeout_s: float
    job_board_db_path: str
    uploads_dir: str
    public_base_url: str
    cv_max_bytes: int


settings = Settings(
    api_key=_get_env("API_KEY"),
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    application_rate_limit=_get_env("APPLICATION_RATE_LIMIT", "20/minute") or "20/minute",
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX", r"^https:\/\/[a-z0-9-]+.*\.vercel\.app$"),
    # VITE_-prefixed names are accepted as fallbacks.
    france_travail_client_id=_get_env("FRANCE_TRAVAIL_CLIENT_ID") or _get_env("VITE_FRANCE_TRAVAIL_CLIENT_ID"),
    france_travail_client_secret=(
        _get_env("FRANCE_TRAVAIL_CLIENT_SECRET") or _get_env("VITE_FRANCE_TRAVAIL_CLIENT_SECRET")
    ),
    france_travail_timeout_s=_get_env_float("FRANCE_TRAVAIL_TIMEOUT_S", 15.0),
    job_board_db_path=_get_env("JOB_BOARD_DB_PATH", "data/job_board.db") or "data/job_board.db",
    uploads_dir=_get_env("UPLOADS_DIR", "data/uploads") or "data/uploads",
    public_base_url=(_get_env("PUBLIC_BASE_URL", "http://localhost:8000") or "http://localhost:8000").rstrip("/"),
    cv_max_bytes=_get_env_int("CV_MAX_BYTES", 5 * 1024 * 1024),
)
