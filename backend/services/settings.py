"""Runtime settings read from the environment (optionally via backend/.env)."""

import logging
import os

from models import DEFAULT_SESSION_TTL_SECONDS

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000
DEFAULT_LOG_LEVEL = "INFO"


def _get_positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("[settings] %s=%r is not an integer; using %d", name, raw, default)
        return default
    if value <= 0:
        logger.warning("[settings] %s=%r must be positive; using %d", name, raw, default)
        return default
    return value


def get_session_ttl_seconds() -> int:
    """Session TTL from SESSION_TTL_SECONDS env or the 600s default."""
    return _get_positive_int("SESSION_TTL_SECONDS", DEFAULT_SESSION_TTL_SECONDS)


def get_host() -> str:
    return os.environ.get("HOST", "").strip() or DEFAULT_HOST


def get_port() -> int:
    return _get_positive_int("PORT", DEFAULT_PORT)


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL
