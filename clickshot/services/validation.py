"""Submission validation for game runs.

Each stage returns a :class:`ValidationResult`; nothing here raises for bad
input. A run is accepted only when every stage passes, and values are never
clamped or repaired.
"""

from __future__ import annotations

import hashlib
import math
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ..core.config import ACCURACY_TOLERANCE, DURATION_TOLERANCE_MS
from .records import BADGE_IDS, ClickRecord, RunSummary, hit_records, mean_hit_accuracy, miss_records

USERNAME_MAX_LENGTH = 20
_USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9 \-_.!]+")

MAX_TOTAL_HITS = 1000
MAX_FINAL_RADIUS = 200
MAX_DURATION_MS = 3_600_000
MIN_MS_PER_HIT = 100

MAX_ELAPSED_MS = 600_000
MAX_COORDINATE = 1000
MAX_TARGET_RADIUS = 200
MAX_DISTANCE = 1000

MAX_BADGES = 10
MAX_MISSES = 1

SUMMARY_FIELDS = ("totalHits", "avgAccuracy", "bestAccuracy", "finalRadius", "durationMs")
CLICK_NUMBER_FIELDS = ("t", "cx", "cy", "tx", "ty", "r", "d")
CLICK_OPTIONAL_FIELDS = ("a", "w", "s")

USER_AGENT_MAX_LENGTH = 200
_USER_AGENT_STRIP = re.compile(r"[<>\"']")


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(False, error)

    def __bool__(self) -> bool:
        return self.valid


@dataclass
class SubmissionCheck:
    """Outcome of validating a full run submission."""

    result: ValidationResult
    username: Optional[str] = None
    summary: Optional[RunSummary] = None
    logs: List[ClickRecord] = field(default_factory=list)
    badges: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.result.valid

    @property
    def error(self) -> Optional[str]:
        return self.result.error


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def validate_username(username: Any) -> ValidationResult:
    """Usernames are optional; when given they must be short and plain."""

    if username is None or username == "":
        return ValidationResult.ok()
    if not isinstance(username, str):
        return ValidationResult.fail("Username must be a string")
    if len(username) > USERNAME_MAX_LENGTH:
        return ValidationResult.fail("Username must be 20 characters or less")
    if not _USERNAME_PATTERN.fullmatch(username):
        return ValidationResult.fail("Username contains invalid characters")
    return ValidationResult.ok()


def validate_run_summary(stats: Any) -> ValidationResult:
    """Field presence, ranges and the human speed floor."""

    if not isinstance(stats, dict):
        return ValidationResult.fail("Stats must be an object")

    for name in SUMMARY_FIELDS:
        if not _is_number(stats.get(name)):
            return ValidationResult.fail(f"Stats missing or invalid field: {name}")

    if not 0 <= stats["totalHits"] <= MAX_TOTAL_HITS:
        return ValidationResult.fail("Invalid total hits count")
    if not 0 <= stats["avgAccuracy"] <= 1:
        return ValidationResult.fail("Invalid average accuracy")
    if not 0 <= stats["bestAccuracy"] <= 1:
        return ValidationResult.fail("Invalid best accuracy")
    if not 1 <= stats["finalRadius"] <= MAX_FINAL_RADIUS:
        return ValidationResult.fail("Invalid final radius")
    if not 0 <= stats["durationMs"] <= MAX_DURATION_MS:
        return ValidationResult.fail("Invalid duration")

    if stats["totalHits"] > 0:
        if stats["durationMs"] / stats["totalHits"] < MIN_MS_PER_HIT:
            return ValidationResult.fail("Game completed too quickly to be human")

    return ValidationResult.ok()


def validate_click_record(log: Any) -> ValidationResult:
    if not isinstance(log, dict):
        return ValidationResult.fail("Click log must be an object")

    for name in CLICK_NUMBER_FIELDS:
        if not _is_number(log.get(name)):
            return ValidationResult.fail(f"Click log missing or invalid field: {name}")
    if not isinstance(log.get("hit"), bool):
        return ValidationResult.fail("Click log missing or invalid field: hit")
    for name in CLICK_OPTIONAL_FIELDS:
        value = log.get(name)
        if value is not None and not _is_number(value):
            return ValidationResult.fail(f"Click log missing or invalid field: {name}")

    if not 0 <= log["t"] <= MAX_ELAPSED_MS:
        return ValidationResult.fail("Invalid timestamp in click log")
    if not (0 <= log["cx"] <= MAX_COORDINATE and 0 <= log["cy"] <= MAX_COORDINATE):
        return ValidationResult.fail("Invalid click coordinates")
    if not (0 <= log["tx"] <= MAX_COORDINATE and 0 <= log["ty"] <= MAX_COORDINATE):
        return ValidationResult.fail("Invalid target coordinates")
    if not 0 < log["r"] <= MAX_TARGET_RADIUS:
        return ValidationResult.fail("Invalid target radius")
    if not 0 <= log["d"] <= MAX_DISTANCE:
        return ValidationResult.fail("Invalid distance")

    return ValidationResult.ok()


def validate_click_logs(logs: Any) -> ValidationResult:
    if not isinstance(logs, list):
        return ValidationResult.fail("click_logs must be an array")
    for log in logs:
        result = validate_click_record(log)
        if not result:
            return result
    return ValidationResult.ok()


def validate_consistency(
    summary: RunSummary,
    logs: Sequence[ClickRecord],
    *,
    duration_tolerance_ms: float = DURATION_TOLERANCE_MS,
    accuracy_tolerance: float = ACCURACY_TOLERANCE,
) -> ValidationResult:
    """Cross-check the client summary against its own click log."""

    hits = hit_records(logs)
    if len(hits) != summary.total_hits:
        return ValidationResult.fail("Hit count mismatch between stats and logs")

    if len(miss_records(logs)) > MAX_MISSES:
        return ValidationResult.fail("Too many misses in click logs")

    if logs:
        last_click_ms = max(log.elapsed_ms for log in logs)
        if abs(last_click_ms - summary.duration_ms) > duration_tolerance_ms:
            return ValidationResult.fail("Duration mismatch between stats and logs")

    if hits:
        if abs(mean_hit_accuracy(logs) - summary.avg_accuracy) > accuracy_tolerance:
            return ValidationResult.fail("Average accuracy mismatch")

    return ValidationResult.ok()


def validate_badges(badges: Any) -> ValidationResult:
    """Client badges are display hints; only the whitelist and count are checked."""

    if not isinstance(badges, list):
        return ValidationResult.fail("Badges must be an array")
    for badge in badges:
        if not isinstance(badge, str) or badge not in BADGE_IDS:
            return ValidationResult.fail(f"Invalid badge: {badge}")
    if len(badges) > MAX_BADGES:
        return ValidationResult.fail("Too many badges")
    return ValidationResult.ok()


def validate_submission(
    body: Any,
    *,
    duration_tolerance_ms: float = DURATION_TOLERANCE_MS,
    accuracy_tolerance: float = ACCURACY_TOLERANCE,
) -> SubmissionCheck:
    """Run every stage in order and stop at the first failure."""

    if not isinstance(body, dict):
        return SubmissionCheck(ValidationResult.fail("Request body must be an object"))

    username = body.get("username")
    result = validate_username(username)
    if not result:
        return SubmissionCheck(result)

    stats = body.get("stats")
    result = validate_run_summary(stats)
    if not result:
        return SubmissionCheck(result)

    raw_logs = body.get("click_logs")
    result = validate_click_logs(raw_logs)
    if not result:
        return SubmissionCheck(result)

    summary = RunSummary.from_payload(stats)
    logs = [ClickRecord.from_payload(log) for log in raw_logs]

    result = validate_consistency(
        summary,
        logs,
        duration_tolerance_ms=duration_tolerance_ms,
        accuracy_tolerance=accuracy_tolerance,
    )
    if not result:
        return SubmissionCheck(result)

    badges = body.get("badges")
    if badges:
        result = validate_badges(badges)
        if not result:
            return SubmissionCheck(result)

    return SubmissionCheck(
        ValidationResult.ok(),
        username=username or None,
        summary=summary,
        logs=logs,
        badges=list(badges or []),
    )


def hash_ip(ip: str, salt: str) -> str:
    """One-way, truncated hash of a client address."""

    return hashlib.sha256(f"{ip}{salt}".encode("utf-8")).hexdigest()[:16]


def sanitize_user_agent(user_agent: Any) -> str:
    if not user_agent or not isinstance(user_agent, str):
        return "unknown"
    return _USER_AGENT_STRIP.sub("", user_agent[:USER_AGENT_MAX_LENGTH]).strip()


__all__ = [
    "SubmissionCheck",
    "ValidationResult",
    "hash_ip",
    "sanitize_user_agent",
    "validate_badges",
    "validate_click_logs",
    "validate_click_record",
    "validate_consistency",
    "validate_run_summary",
    "validate_submission",
    "validate_username",
]
