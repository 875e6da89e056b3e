"""Centralized configuration for environment variables.

This module is the single source of truth for configuration used across the
application. Import constants from here rather than calling os.getenv directly
in multiple places.
"""

from __future__ import annotations

import os
from typing import Final

from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        msg = f"Environment variable {name} must be an integer, got {raw!r}"
        raise ValueError(msg) from None


# --- MongoDB ---
MONGODB_URI: Final[str] = os.getenv("MONGODB_URI", "").strip() or (
    "mongodb://localhost:27017"
)
MONGODB_DATABASE: Final[str] = os.getenv("MONGODB_DATABASE", "journey_log")
MONGODB_MAX_POOL_SIZE: Final[int] = _get_int("MONGODB_MAX_POOL_SIZE", 50)
MONGODB_SERVER_SELECTION_TIMEOUT_MS: Final[int] = _get_int(
    "MONGODB_SERVER_SELECTION_TIMEOUT_MS",
    10000,
)

# --- HTTP server ---
PORT: Final[int] = _get_int("PORT", 5000)
LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()


def get_cors_origins() -> list[str]:
    """Return the configured CORS origins, allowing all when unset."""
    raw = os.getenv("CORS_ALLOWED_ORIGINS", "")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


__all__ = [
    "LOG_LEVEL",
    "MONGODB_DATABASE",
    "MONGODB_MAX_POOL_SIZE",
    "MONGODB_SERVER_SELECTION_TIMEOUT_MS",
    "MONGODB_URI",
    "PORT",
    "get_cors_origins",
]
