"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session, SQLModel

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_routes
from .core import (
    ALLOWED_CORS_ORIGINS,
    DB_RESET,
    LEADERBOARD_CACHE_TTL_SEC,
    LOG_DIR,
    LOG_LEVEL,
    SEED_AI_BENCHMARKS,
    engine,
    setup_logging,
)
from .services import LeaderboardCache, RunStore, seed_ai_benchmarks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if DB_RESET:
        logger.warning("DB_RESET is set; dropping all tables")
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    if SEED_AI_BENCHMARKS:
        with Session(engine) as session:
            seed_ai_benchmarks(RunStore(session))
    yield


def create_app(configure_logging: bool = True) -> FastAPI:
    if configure_logging:
        setup_logging(LOG_DIR, LOG_LEVEL)

    app = FastAPI(title="Click Accuracy API", version="1.0.0", lifespan=lifespan)
    app.state.leaderboard_cache = LeaderboardCache(ttl_seconds=LEADERBOARD_CACHE_TTL_SEC)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("clickshot.app:app", host="127.0.0.1", port=3000, reload=True)
