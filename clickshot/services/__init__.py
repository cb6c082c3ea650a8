"""Service layer: scoring, validation, storage and leaderboard aggregates."""

from .benchmarks import seed_ai_benchmarks
from .cache import LeaderboardCache
from .leaderboard import build_leaderboard, submission_rankings
from .records import Badge, ClickRecord, DerivedScores, RunSummary
from .scoring import score_run
from .store import Metric, RunNotFound, RunStore
from .validation import ValidationResult, validate_submission

__all__ = [
    "Badge",
    "ClickRecord",
    "DerivedScores",
    "LeaderboardCache",
    "Metric",
    "RunNotFound",
    "RunStore",
    "RunSummary",
    "ValidationResult",
    "build_leaderboard",
    "score_run",
    "seed_ai_benchmarks",
    "submission_rankings",
    "validate_submission",
]
