"""Score and badge calculations for finished runs.

Every function here is pure. Persisted scores come from :func:`score_run`,
which recomputes hit count and accuracies from the click log instead of
trusting the client summary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Tuple

from .records import (
    Badge,
    ClickRecord,
    DerivedScores,
    RunSummary,
    best_hit_accuracy,
    hit_records,
    mean_hit_accuracy,
    miss_records,
)

# Tuned constants from the game client; keep the literal values.
BULLSEYE_RATIO = 0.05
WEIGHT_EXPONENT = 1.5
MIN_RADIUS = 1

SPEED_DECAY_SECONDS = 3.5
SPEED_CEILING_SECONDS = 0.1
PERFORMANCE_FULL_HITS = 20


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like JavaScript's ``Math.round`` (halves go up)."""

    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def accuracy(distance: float, radius: float) -> float:
    """Unweighted accuracy of a hit: 1.0 inside the bullseye, linear to 0 at the edge."""

    if distance <= radius * BULLSEYE_RATIO:
        return 1.0
    return max(0.0, 1 - distance / radius)


def weight(start_radius: float, current_radius: float, k: float = WEIGHT_EXPONENT) -> float:
    """Difficulty weight for live feedback; smaller targets weigh more."""

    if current_radius <= 0:
        raise ValueError("current_radius must be positive")
    return (start_radius / current_radius) ** k


def next_radius(radius: float, shrink: float) -> float:
    return max(MIN_RADIUS, radius - shrink)


def speed_score(duration_ms: float, total_hits: int) -> float:
    """Speed score in [0, 100] from the average seconds per hit."""

    if total_hits == 0:
        return 0
    avg_time_per_hit = duration_ms / total_hits / 1000
    if avg_time_per_hit <= SPEED_CEILING_SECONDS:
        return 100
    score = 100 * math.exp(-avg_time_per_hit / SPEED_DECAY_SECONDS)
    return max(0, round_half_up(score, 1))


def performance_score(avg_accuracy: float, total_hits: int) -> float:
    """Accuracy scaled by run length; the multiplier saturates at 20 hits."""

    if total_hits == 0:
        return 0
    distance_multiplier = min(1.0, total_hits / PERFORMANCE_FULL_HITS)
    return round_half_up(avg_accuracy * distance_multiplier * 100, 1)


def average_time_per_hit_ms(duration_ms: float, total_hits: int) -> int:
    if total_hits == 0:
        return 0
    return int(round_half_up(duration_ms / total_hits))


@dataclass(frozen=True)
class BadgeContext:
    """Everything a badge rule may look at."""

    summary: RunSummary
    speed_score: float
    performance_score: float
    logs: Sequence[ClickRecord]


BadgeRule = Callable[[BadgeContext], bool]


def _sharpshooter(ctx: BadgeContext) -> bool:
    return ctx.summary.avg_accuracy > 0.9


def _circus_shot(ctx: BadgeContext) -> bool:
    return ctx.summary.best_accuracy >= 0.99


def _speed_demon(ctx: BadgeContext) -> bool:
    return ctx.speed_score > 85


def _perfectionist(ctx: BadgeContext) -> bool:
    return ctx.performance_score > 90


def _marathon_runner(ctx: BadgeContext) -> bool:
    return ctx.summary.total_hits >= 25


def _consistency(ctx: BadgeContext) -> bool:
    hits = hit_records(ctx.logs)
    return len(hits) > 5 and all(
        log.accuracy is not None and log.accuracy >= 0.8 for log in hits
    )


def _bullseye_master(ctx: BadgeContext) -> bool:
    perfect = [log for log in hit_records(ctx.logs) if log.accuracy == 1.0]
    return len(perfect) >= 5


def _steady_hands(ctx: BadgeContext) -> bool:
    return len(hit_records(ctx.logs)) >= 15 and not miss_records(ctx.logs)


BADGE_RULES: Dict[Badge, BadgeRule] = {
    Badge.SHARPSHOOTER: _sharpshooter,
    Badge.CIRCUS_SHOT: _circus_shot,
    Badge.SPEED_DEMON: _speed_demon,
    Badge.PERFECTIONIST: _perfectionist,
    Badge.MARATHON_RUNNER: _marathon_runner,
    Badge.CONSISTENCY: _consistency,
    Badge.BULLSEYE_MASTER: _bullseye_master,
    Badge.STEADY_HANDS: _steady_hands,
}


def determine_badges(
    summary: RunSummary,
    speed: float,
    performance: float,
    logs: Sequence[ClickRecord],
) -> Tuple[str, ...]:
    """Return earned badge ids in table order."""

    ctx = BadgeContext(
        summary=summary, speed_score=speed, performance_score=performance, logs=logs
    )
    return tuple(badge.value for badge, rule in BADGE_RULES.items() if rule(ctx))


def authoritative_summary(summary: RunSummary, logs: Sequence[ClickRecord]) -> RunSummary:
    """Rebuild the summary from the click log.

    Hit count, mean and best accuracy come from the log; only the final
    radius and duration are taken from the client, both already checked
    by the validator.
    """

    return RunSummary(
        total_hits=len(hit_records(logs)),
        avg_accuracy=mean_hit_accuracy(logs),
        best_accuracy=best_hit_accuracy(logs),
        final_radius=summary.final_radius,
        duration_ms=summary.duration_ms,
    )


def score_run(summary: RunSummary, logs: Sequence[ClickRecord]) -> DerivedScores:
    """Compute the scores and badges stored with an accepted run."""

    truth = authoritative_summary(summary, logs)
    speed = speed_score(truth.duration_ms, truth.total_hits)
    performance = performance_score(truth.avg_accuracy, truth.total_hits)
    return DerivedScores(
        speed_score=speed,
        performance_score=performance,
        badges=determine_badges(truth, speed, performance, logs),
        avg_time_per_hit_ms=average_time_per_hit_ms(truth.duration_ms, truth.total_hits),
        avg_accuracy=truth.avg_accuracy,
        best_accuracy=truth.best_accuracy,
    )


__all__ = [
    "BADGE_RULES",
    "BULLSEYE_RATIO",
    "BadgeContext",
    "MIN_RADIUS",
    "PERFORMANCE_FULL_HITS",
    "SPEED_CEILING_SECONDS",
    "SPEED_DECAY_SECONDS",
    "WEIGHT_EXPONENT",
    "accuracy",
    "authoritative_summary",
    "average_time_per_hit_ms",
    "determine_badges",
    "next_radius",
    "performance_score",
    "round_half_up",
    "score_run",
    "speed_score",
    "weight",
]
