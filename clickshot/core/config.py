"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Storage --------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = Path(os.getenv("DATA_DIR", str(_PROJECT_ROOT / "data")))
DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///{DATA_DIR / 'runs.db'}"
DB_RESET = _env_bool("DB_RESET", False)
SEED_AI_BENCHMARKS = _env_bool("SEED_AI_BENCHMARKS", True)


# Privacy --------------------------------------------------------------------
IP_SALT = os.getenv("IP_SALT", "click-accuracy-salt")


# CORS -----------------------------------------------------------------------
# FRONTEND_ORIGIN can contain a comma-separated list for multi-domain deploys.
_frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN"))

_local_dev_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

ALLOWED_CORS_ORIGINS = _unique([*_frontend_origins, *_local_dev_origins])


# Run validation policy ------------------------------------------------------
DURATION_TOLERANCE_MS = _env_int("DURATION_TOLERANCE_MS", 5000)
ACCURACY_TOLERANCE = _env_float("ACCURACY_TOLERANCE", 0.05)
USERNAME_PATCH_WINDOW_HOURS = _env_int("USERNAME_PATCH_WINDOW_HOURS", 24)


# Leaderboard ----------------------------------------------------------------
LEADERBOARD_CACHE_TTL_SEC = _env_int("LEADERBOARD_CACHE_TTL_SEC", 5 * 60)
SCATTER_SAMPLE_SIZE = _env_int("SCATTER_SAMPLE_SIZE", 150)


# Logging --------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR") or None


__all__ = [
    "ACCURACY_TOLERANCE",
    "ALLOWED_CORS_ORIGINS",
    "DATABASE_URL",
    "DATA_DIR",
    "DB_RESET",
    "DURATION_TOLERANCE_MS",
    "IP_SALT",
    "LEADERBOARD_CACHE_TTL_SEC",
    "LOG_DIR",
    "LOG_LEVEL",
    "SCATTER_SAMPLE_SIZE",
    "SEED_AI_BENCHMARKS",
    "USERNAME_PATCH_WINDOW_HOURS",
]
