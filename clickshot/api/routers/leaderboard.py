"""Leaderboard endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from ...core import SCATTER_SAMPLE_SIZE, utcnow
from ...services import LeaderboardCache, RunStore, build_leaderboard
from ...services.records import BADGE_DETAILS
from ..deps import get_leaderboard_cache, get_run_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["leaderboard"])


@router.get("/leaderboard")
def get_leaderboard(
    store: RunStore = Depends(get_run_store),
    cache: LeaderboardCache = Depends(get_leaderboard_cache),
) -> Dict[str, Any]:
    """Hall of fame, today's best, AI benchmarks and a scatter sample."""

    try:
        return cache.get_or_compute(
            lambda: build_leaderboard(store, utcnow(), SCATTER_SAMPLE_SIZE)
        )
    except Exception:
        logger.exception("Leaderboard refresh failed with no cached copy")
        raise HTTPException(500, "Internal server error")


@router.get("/badges")
def list_badges() -> List[Dict[str, str]]:
    """Badge catalogue for the client."""

    return [{"id": badge.value, **details} for badge, details in BADGE_DETAILS.items()]


__all__ = ["router"]
