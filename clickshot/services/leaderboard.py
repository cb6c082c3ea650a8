"""Leaderboard aggregates over the Run Store.

Aggregates are recomputed on every call. Separate aggregates read the
store independently, so a run inserted between two of them may show up in
one and not the other.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Any, Dict, List

from ..core.time import isoformat_z
from ..models import Run
from .scoring import round_half_up
from .store import Metric, RunStore

HALL_OF_FAME_SIZE = 10
TODAYS_BEST_SIZE = 10
TODAYS_BEST_WINDOW = timedelta(hours=24)
DEFAULT_SCATTER_SIZE = 150

CATEGORY_HUMAN_NAMED = "human-named"
CATEGORY_HUMAN_ANONYMOUS = "human-anonymous"
CATEGORY_AI = "ai"

_MODEL_KEY_STRIP = re.compile(r"[^a-z0-9]")


def rank(store: RunStore, score: float, metric: Metric | str) -> int:
    """1 + number of human runs with a strictly greater score."""

    return store.count_human_with_score_above(metric, score) + 1


def percentile(store: RunStore, score: float, metric: Metric | str) -> int:
    """Share of human runs with a strictly lower score, 0-100.

    The first human run gets 100.
    """

    total = store.count_human()
    if total == 0:
        return 100
    lower = store.count_human_with_score_below(metric, score)
    return int(round_half_up(100 * lower / total))


def _display_name(run: Run) -> str:
    if run.is_ai:
        return run.username or run.ai_model or "AI"
    return run.username or "Anonymous"


def leaderboard_entry(run: Run, position: int) -> Dict[str, Any]:
    return {
        "rank": position,
        "username": _display_name(run),
        "speed_score": run.speed_score,
        "performance_score": run.performance_score,
        "total_hits": run.total_hits,
        "avg_accuracy": run.avg_accuracy,
        "created_at": isoformat_z(run.created_at),
        "badges": run.badges,
        "is_ai": run.is_ai,
        "ai_model": run.ai_model,
    }


def _ranked(runs: List[Run]) -> List[Dict[str, Any]]:
    return [leaderboard_entry(run, position) for position, run in enumerate(runs, start=1)]


def hall_of_fame(store: RunStore, limit: int = HALL_OF_FAME_SIZE) -> List[Dict[str, Any]]:
    return _ranked(store.query_human(Metric.PERFORMANCE, limit))


def todays_best(
    store: RunStore, now: datetime, limit: int = TODAYS_BEST_SIZE
) -> List[Dict[str, Any]]:
    since = now - TODAYS_BEST_WINDOW
    return _ranked(store.query_human(Metric.PERFORMANCE, limit, since=since))


def ai_benchmarks(store: RunStore) -> List[Dict[str, Any]]:
    return _ranked(store.query_ai(Metric.PERFORMANCE))


def scatter_category(run: Run) -> str:
    if run.is_ai:
        return CATEGORY_AI
    if run.username:
        return CATEGORY_HUMAN_NAMED
    return CATEGORY_HUMAN_ANONYMOUS


def scatter_sample(store: RunStore, limit: int = DEFAULT_SCATTER_SIZE) -> List[Dict[str, Any]]:
    """Most recent runs projected onto (speed, performance)."""

    return [
        {
            "x": run.speed_score,
            "y": run.performance_score,
            "category": scatter_category(run),
            "type": "ai" if run.is_ai else "human",
            "model": run.ai_model,
            "username": run.username,
        }
        for run in store.query_recent(limit)
    ]


def model_key(model: str) -> str:
    """Normalise a free-text model name, e.g. ``"ChatGPT-4"`` -> ``"chatgpt_4"``.

    Distinct names can collide; the later benchmark wins.
    """

    return _MODEL_KEY_STRIP.sub("_", model.lower())


def ai_comparisons(
    store: RunStore, speed: float, performance: float
) -> Dict[str, Dict[str, int]]:
    comparisons: Dict[str, Dict[str, int]] = {}
    for run in store.query_ai(Metric.PERFORMANCE):
        if not run.ai_model:
            continue
        comparisons[model_key(run.ai_model)] = {
            "speed": int(round_half_up(speed - run.speed_score)),
            "performance": int(round_half_up(performance - run.performance_score)),
        }
    return comparisons


def submission_rankings(store: RunStore, speed: float, performance: float) -> Dict[str, Any]:
    """Rank and percentile blocks plus AI deltas for a freshly scored run."""

    return {
        "rankings": {
            Metric.SPEED.value: {
                "rank": rank(store, speed, Metric.SPEED),
                "percentile": percentile(store, speed, Metric.SPEED),
            },
            Metric.PERFORMANCE.value: {
                "rank": rank(store, performance, Metric.PERFORMANCE),
                "percentile": percentile(store, performance, Metric.PERFORMANCE),
            },
        },
        "vs_ai": ai_comparisons(store, speed, performance),
    }


def build_leaderboard(
    store: RunStore, now: datetime, scatter_limit: int = DEFAULT_SCATTER_SIZE
) -> Dict[str, Any]:
    hall = hall_of_fame(store)
    today = todays_best(store, now)
    benchmarks = ai_benchmarks(store)
    scatter = scatter_sample(store, scatter_limit)
    return {
        "hall_of_fame": hall,
        "todays_best": today,
        "ai_benchmarks": benchmarks,
        "scatter_data": scatter,
        "cache_timestamp": isoformat_z(now),
        "total_entries": {
            "hall_of_fame": len(hall),
            "todays_best": len(today),
            "ai_benchmarks": len(benchmarks),
            "scatter_points": len(scatter),
        },
    }


__all__ = [
    "CATEGORY_AI",
    "CATEGORY_HUMAN_ANONYMOUS",
    "CATEGORY_HUMAN_NAMED",
    "ai_benchmarks",
    "ai_comparisons",
    "build_leaderboard",
    "hall_of_fame",
    "leaderboard_entry",
    "model_key",
    "percentile",
    "rank",
    "scatter_category",
    "scatter_sample",
    "submission_rankings",
    "todays_best",
]
