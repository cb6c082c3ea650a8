"""Core configuration and infrastructure helpers."""

from .config import (
    ACCURACY_TOLERANCE,
    ALLOWED_CORS_ORIGINS,
    DATABASE_URL,
    DB_RESET,
    DURATION_TOLERANCE_MS,
    IP_SALT,
    LEADERBOARD_CACHE_TTL_SEC,
    LOG_DIR,
    LOG_LEVEL,
    SCATTER_SAMPLE_SIZE,
    SEED_AI_BENCHMARKS,
    USERNAME_PATCH_WINDOW_HOURS,
)
from .database import engine, get_session
from .logging import setup_logging
from .time import as_utc, isoformat_z, utcnow

__all__ = [
    "ACCURACY_TOLERANCE",
    "ALLOWED_CORS_ORIGINS",
    "DATABASE_URL",
    "DB_RESET",
    "DURATION_TOLERANCE_MS",
    "IP_SALT",
    "LEADERBOARD_CACHE_TTL_SEC",
    "LOG_DIR",
    "LOG_LEVEL",
    "SCATTER_SAMPLE_SIZE",
    "SEED_AI_BENCHMARKS",
    "USERNAME_PATCH_WINDOW_HOURS",
    "as_utc",
    "engine",
    "get_session",
    "isoformat_z",
    "setup_logging",
    "utcnow",
]
