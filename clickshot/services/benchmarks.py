"""Seed data for AI benchmark runs."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..models import Run
from .store import RunStore

logger = logging.getLogger(__name__)

AI_BENCHMARKS: List[Dict[str, Any]] = [
    {
        "model": "ChatGPT-4",
        "speed_score": 78.5,
        "performance_score": 82.3,
        "total_hits": 18,
        "avg_accuracy": 0.91,
        "best_accuracy": 0.98,
        "final_radius": 8,
        "duration_ms": 24000,
        "avg_time_per_hit_ms": 1333,
    },
    {
        "model": "ChatGPT-3.5",
        "speed_score": 85.2,
        "performance_score": 65.8,
        "total_hits": 15,
        "avg_accuracy": 0.88,
        "best_accuracy": 0.95,
        "final_radius": 12,
        "duration_ms": 18000,
        "avg_time_per_hit_ms": 1200,
    },
    {
        "model": "Claude",
        "speed_score": 72.1,
        "performance_score": 88.5,
        "total_hits": 20,
        "avg_accuracy": 0.94,
        "best_accuracy": 0.99,
        "final_radius": 6,
        "duration_ms": 28000,
        "avg_time_per_hit_ms": 1400,
    },
    {
        "model": "Average Human",
        "speed_score": 65.0,
        "performance_score": 60.0,
        "total_hits": 12,
        "avg_accuracy": 0.75,
        "best_accuracy": 0.89,
        "final_radius": 18,
        "duration_ms": 20000,
        "avg_time_per_hit_ms": 1667,
    },
]


def seed_ai_benchmarks(store: RunStore) -> int:
    """Insert benchmark runs whose model is not stored yet; return how many were added."""

    added = 0
    for benchmark in AI_BENCHMARKS:
        model = benchmark["model"]
        if store.has_ai_model(model):
            continue
        fields = {key: value for key, value in benchmark.items() if key != "model"}
        store.insert(Run(username=model, is_ai=True, ai_model=model, **fields))
        added += 1
    if added:
        logger.info("Seeded %d AI benchmark runs", added)
    return added


__all__ = ["AI_BENCHMARKS", "seed_ai_benchmarks"]
