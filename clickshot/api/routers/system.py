"""System-level API endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, func, select

from ...core import get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/health/db")
def health_db(session: Session = Depends(get_session)) -> JSONResponse:
    """Check that the database answers a trivial query."""

    try:
        server_time = session.exec(select(func.now())).one()
    except SQLAlchemyError:
        logger.exception("Database connectivity check failed")
        return JSONResponse(
            {"success": False, "message": "Database connection failed"}, status_code=500
        )

    body: Dict[str, Any] = {
        "success": True,
        "message": "Database connection successful",
        "server_time": str(server_time),
    }
    return JSONResponse(body)


__all__ = ["router"]
