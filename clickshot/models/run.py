"""Database model for accepted game runs."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Run(SQLModel, table=True):
    """One validated run. Only ``username`` may change after insert."""

    __tablename__ = "runs"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    username: Optional[str] = ORMField(default=None, max_length=20, index=True)
    speed_score: float = ORMField(index=True)
    performance_score: float = ORMField(index=True)
    total_hits: int
    avg_accuracy: float
    best_accuracy: float
    final_radius: float
    duration_ms: float
    avg_time_per_hit_ms: int
    click_logs_json: str = "[]"
    badges_json: str = "[]"
    is_ai: bool = ORMField(default=False, index=True)
    ai_model: Optional[str] = ORMField(default=None, max_length=50)
    ip_hash: Optional[str] = ORMField(default=None, max_length=64)
    user_agent: Optional[str] = None
    created_at: datetime = ORMField(default_factory=utcnow, index=True)

    @property
    def click_logs(self) -> List[Dict[str, Any]]:
        return json.loads(self.click_logs_json or "[]")

    @property
    def badges(self) -> List[str]:
        return json.loads(self.badges_json or "[]")


__all__ = ["Run"]
