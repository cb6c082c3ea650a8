"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from ..core import get_session
from ..services import LeaderboardCache, RunStore


def get_run_store(session: Session = Depends(get_session)) -> Iterator[RunStore]:
    yield RunStore(session)


def get_leaderboard_cache(request: Request) -> LeaderboardCache:
    return request.app.state.leaderboard_cache


__all__ = ["get_leaderboard_cache", "get_run_store"]
