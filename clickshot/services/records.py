"""Click telemetry and run rollup types.

The game client reports each click with compact keys
(``t, cx, cy, tx, ty, r, d, hit, a, w, s``) and the finished run as a
camelCase summary. These dataclasses are the parsed, immutable form used by
scoring, validation and storage.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple


class Badge(str, Enum):
    """Achievement identifiers, in display order."""

    SHARPSHOOTER = "sharpshooter"
    CIRCUS_SHOT = "circus_shot"
    SPEED_DEMON = "speed_demon"
    PERFECTIONIST = "perfectionist"
    MARATHON_RUNNER = "marathon_runner"
    CONSISTENCY = "consistency"
    BULLSEYE_MASTER = "bullseye_master"
    STEADY_HANDS = "steady_hands"


BADGE_IDS: Tuple[str, ...] = tuple(badge.value for badge in Badge)

BADGE_DETAILS: Dict[Badge, Dict[str, str]] = {
    Badge.SHARPSHOOTER: {
        "name": "Sharpshooter",
        "description": "Average accuracy > 90%",
        "icon": "🎯",
    },
    Badge.CIRCUS_SHOT: {
        "name": "Circus Shot",
        "description": "Single hit with 99%+ accuracy",
        "icon": "🎪",
    },
    Badge.SPEED_DEMON: {
        "name": "Speed Demon",
        "description": "Speed score > 85",
        "icon": "⚡",
    },
    Badge.PERFECTIONIST: {
        "name": "Perfectionist",
        "description": "Performance score > 90",
        "icon": "👑",
    },
    Badge.MARATHON_RUNNER: {
        "name": "Marathon Runner",
        "description": "Complete 25+ hits in one run",
        "icon": "🏃",
    },
    Badge.CONSISTENCY: {
        "name": "Consistency King",
        "description": "All hits within 80% accuracy",
        "icon": "🔄",
    },
    Badge.BULLSEYE_MASTER: {
        "name": "Bullseye Master",
        "description": "5+ perfect bullseye hits (100% accuracy)",
        "icon": "🏹",
    },
    Badge.STEADY_HANDS: {
        "name": "Steady Hands",
        "description": "Complete 15+ hits with no misses",
        "icon": "🤝",
    },
}


@dataclass(frozen=True)
class ClickRecord:
    """One observed click. Hits carry accuracy, weight and weighted score."""

    elapsed_ms: float
    click_x: float
    click_y: float
    target_x: float
    target_y: float
    radius: float
    distance: float
    is_hit: bool
    accuracy: Optional[float] = None
    weight: Optional[float] = None
    weighted_score: Optional[float] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ClickRecord":
        """Build a record from an already validated wire dict."""

        return cls(
            elapsed_ms=payload["t"],
            click_x=payload["cx"],
            click_y=payload["cy"],
            target_x=payload["tx"],
            target_y=payload["ty"],
            radius=payload["r"],
            distance=payload["d"],
            is_hit=bool(payload["hit"]),
            accuracy=payload.get("a"),
            weight=payload.get("w"),
            weighted_score=payload.get("s"),
        )

    def to_payload(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "t": self.elapsed_ms,
            "cx": self.click_x,
            "cy": self.click_y,
            "tx": self.target_x,
            "ty": self.target_y,
            "r": self.radius,
            "d": self.distance,
            "hit": self.is_hit,
        }
        if self.accuracy is not None:
            data["a"] = self.accuracy
        if self.weight is not None:
            data["w"] = self.weight
        if self.weighted_score is not None:
            data["s"] = self.weighted_score
        return data


@dataclass(frozen=True)
class RunSummary:
    """Client-reported rollup for one finished run."""

    total_hits: int
    avg_accuracy: float
    best_accuracy: float
    final_radius: float
    duration_ms: float

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RunSummary":
        return cls(
            total_hits=payload["totalHits"],
            avg_accuracy=payload["avgAccuracy"],
            best_accuracy=payload["bestAccuracy"],
            final_radius=payload["finalRadius"],
            duration_ms=payload["durationMs"],
        )


@dataclass(frozen=True)
class DerivedScores:
    """Server-side scores. Never read from the client."""

    speed_score: float
    performance_score: float
    badges: Tuple[str, ...]
    avg_time_per_hit_ms: int = 0
    avg_accuracy: float = 0.0
    best_accuracy: float = 0.0


def hit_records(logs: Iterable[ClickRecord]) -> List[ClickRecord]:
    return [log for log in logs if log.is_hit]


def miss_records(logs: Iterable[ClickRecord]) -> List[ClickRecord]:
    return [log for log in logs if not log.is_hit]


def mean_hit_accuracy(logs: Sequence[ClickRecord]) -> float:
    """Mean accuracy over hit records; a hit without accuracy counts as 0."""

    hits = hit_records(logs)
    if not hits:
        return 0.0
    return sum(log.accuracy or 0.0 for log in hits) / len(hits)


def best_hit_accuracy(logs: Sequence[ClickRecord]) -> float:
    return max((log.accuracy or 0.0 for log in hit_records(logs)), default=0.0)


__all__ = [
    "BADGE_DETAILS",
    "BADGE_IDS",
    "Badge",
    "ClickRecord",
    "DerivedScores",
    "RunSummary",
    "best_hit_accuracy",
    "hit_records",
    "mean_hit_accuracy",
    "miss_records",
]
