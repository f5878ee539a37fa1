"""Runtime configuration for JobPulse.

All settings come from environment variables so the CLI and the API process
share one source of truth.

Environment variables (optional)
--------------------------------
JOBPULSE_DOTENV (path to .env, default ".env")
    Loaded on import through python-dotenv.
JOBPULSE_HTTP_TIMEOUT (float seconds, default 20)
JOBPULSE_CACHE_TTL (int seconds, default 300)
    Revalidation hint sent upstream as ``Cache-Control: max-age``.
JOBPULSE_CACHE ("true" to keep upstream responses in-process for the TTL)
JOBPULSE_MAX_WORKERS (int, default 8)
JOBPULSE_ORDER ("recency" or "random", default "recency")
JOBPULSE_RULES_FILE (YAML file overriding the classifier vocabularies)
JOBPULSE_REMOTIVE_CATEGORIES (comma list, default "data")
JOBPULSE_JOBICY_INDUSTRIES (comma list, default "data-science")
JOBPULSE_LOG_LEVEL (default "INFO")
"""
from __future__ import annotations

import os

from dotenv import load_dotenv

_ = load_dotenv(dotenv_path=os.getenv("JOBPULSE_DOTENV", ".env"))

USER_AGENT = "JobPulse/1.0"


def _float_env(name: str, default: float) -> float:
    v = os.getenv(name)
    try:
        return float(v) if v is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    v = os.getenv(name)
    try:
        return int(v) if v is not None else default
    except ValueError:
        return default


def _list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    v = os.getenv(name)
    if not v:
        return default
    items = tuple(p.strip() for p in v.split(",") if p.strip())
    return items or default


def http_timeout() -> float:
    return _float_env("JOBPULSE_HTTP_TIMEOUT", 20.0)


def cache_ttl() -> int:
    return _int_env("JOBPULSE_CACHE_TTL", 300)


def cache_enabled() -> bool:
    return os.getenv("JOBPULSE_CACHE", "false").lower() == "true"


def max_workers() -> int:
    return max(_int_env("JOBPULSE_MAX_WORKERS", 8), 1)


def default_order() -> str:
    order = os.getenv("JOBPULSE_ORDER", "recency").lower()
    return order if order in ("recency", "random") else "recency"


def rules_file() -> str | None:
    return os.getenv("JOBPULSE_RULES_FILE") or None


def remotive_categories() -> tuple[str, ...]:
    return _list_env("JOBPULSE_REMOTIVE_CATEGORIES", ("data",))


def jobicy_industries() -> tuple[str, ...]:
    return _list_env("JOBPULSE_JOBICY_INDUSTRIES", ("data-science",))


def log_level() -> str:
    return os.getenv("JOBPULSE_LOG_LEVEL", "INFO").upper()
