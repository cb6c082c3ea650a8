"""Run submission and username endpoints."""

from __future__ import annotations

import json
import logging
from datetime import timedelta
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request

from ...core import IP_SALT, USERNAME_PATCH_WINDOW_HOURS, as_utc, utcnow
from ...models import Run
from ...services import RunStore, score_run, submission_rankings, validate_submission
from ...services.validation import hash_ip, sanitize_user_agent, validate_username
from ..deps import get_run_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/runs", tags=["runs"])


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


@router.post("")
def submit_run(
    body: Dict[str, Any],
    request: Request,
    store: RunStore = Depends(get_run_store),
):
    """Validate, score and store a finished run."""

    if body.get("stats") is None or body.get("click_logs") is None:
        raise HTTPException(400, "Missing required fields: stats, click_logs")

    check = validate_submission(body)
    if not check.valid:
        logger.info("Rejected run submission: %s", check.error)
        raise HTTPException(400, check.error)

    summary = check.summary
    scores = score_run(summary, check.logs)
    # ranked against prior runs only
    standing = submission_rankings(store, scores.speed_score, scores.performance_score)

    run = Run(
        username=check.username,
        speed_score=scores.speed_score,
        performance_score=scores.performance_score,
        total_hits=summary.total_hits,
        avg_accuracy=scores.avg_accuracy,
        best_accuracy=scores.best_accuracy,
        final_radius=summary.final_radius,
        duration_ms=summary.duration_ms,
        avg_time_per_hit_ms=scores.avg_time_per_hit_ms,
        click_logs_json=json.dumps([log.to_payload() for log in check.logs]),
        badges_json=json.dumps(list(scores.badges)),
        is_ai=False,
        ip_hash=hash_ip(_client_ip(request), IP_SALT),
        user_agent=sanitize_user_agent(request.headers.get("user-agent")),
    )
    run_id = store.insert(run)

    if set(check.badges) != set(scores.badges):
        logger.info(
            "Run id=%s client badges %s differ from computed %s",
            run_id,
            sorted(check.badges),
            list(scores.badges),
        )

    return {
        "success": True,
        "id": run_id,
        "scores": {
            "speed": scores.speed_score,
            "performance": scores.performance_score,
        },
        **standing,
    }


@router.patch("/{run_id}/username")
def update_username(
    run_id: str,
    body: Dict[str, Any],
    store: RunStore = Depends(get_run_store),
):
    """Attach or change the name on a recent run."""

    if not run_id.isdigit():
        raise HTTPException(400, "Invalid run ID")

    username = body.get("username")
    result = validate_username(username)
    if not result:
        raise HTTPException(400, result.error)

    run = store.get(int(run_id))
    if run is None:
        raise HTTPException(404, "Run not found")

    age = utcnow() - as_utc(run.created_at)
    if age > timedelta(hours=USERNAME_PATCH_WINDOW_HOURS):
        logger.info("Refused username update on run id=%s (age %s)", run.id, age)
        raise HTTPException(403, "Run is too old to update username")

    previous = store.patch_username(run.id, username or None)
    return {
        "success": True,
        "message": "Username updated successfully",
        "runId": run.id,
        "username": username or None,
        "previousUsername": previous,
    }


__all__ = ["router"]
