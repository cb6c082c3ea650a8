"""Run Store: durable, append-only collection of accepted runs."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlmodel import Session, col, func, select

from ..models import Run

logger = logging.getLogger(__name__)


class Metric(str, Enum):
    SPEED = "speed"
    PERFORMANCE = "performance"


def _score_column(metric: Metric | str):
    if Metric(metric) is Metric.SPEED:
        return col(Run.speed_score)
    return col(Run.performance_score)


class RunNotFound(LookupError):
    pass


class RunStore:
    """Read/write contract over the ``runs`` table.

    Rows are never updated after insert except through
    :meth:`patch_username`.
    """

    def __init__(self, session: Session):
        self.session = session

    def insert(self, run: Run) -> int:
        self.session.add(run)
        self.session.commit()
        self.session.refresh(run)
        logger.info("Stored run id=%s is_ai=%s", run.id, run.is_ai)
        return run.id

    def get(self, run_id: int) -> Optional[Run]:
        return self.session.get(Run, run_id)

    def query_human(
        self,
        order_by: Metric | str = Metric.PERFORMANCE,
        limit: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> List[Run]:
        statement = select(Run).where(col(Run.is_ai).is_(False))
        if since is not None:
            statement = statement.where(col(Run.created_at) >= since)
        statement = statement.order_by(_score_column(order_by).desc(), col(Run.id).asc())
        if limit is not None:
            statement = statement.limit(limit)
        return list(self.session.exec(statement).all())

    def query_ai(self, order_by: Metric | str = Metric.PERFORMANCE) -> List[Run]:
        statement = (
            select(Run)
            .where(col(Run.is_ai).is_(True))
            .order_by(_score_column(order_by).desc(), col(Run.id).asc())
        )
        return list(self.session.exec(statement).all())

    def query_recent(self, limit: int) -> List[Run]:
        statement = (
            select(Run)
            .order_by(col(Run.created_at).desc(), col(Run.id).desc())
            .limit(limit)
        )
        return list(self.session.exec(statement).all())

    def count_human(self) -> int:
        statement = select(func.count(Run.id)).where(col(Run.is_ai).is_(False))
        return int(self.session.exec(statement).one())

    def count_human_with_score_below(self, metric: Metric | str, value: float) -> int:
        statement = select(func.count(Run.id)).where(
            col(Run.is_ai).is_(False), _score_column(metric) < value
        )
        return int(self.session.exec(statement).one())

    def count_human_with_score_above(self, metric: Metric | str, value: float) -> int:
        statement = select(func.count(Run.id)).where(
            col(Run.is_ai).is_(False), _score_column(metric) > value
        )
        return int(self.session.exec(statement).one())

    def has_ai_model(self, model: str) -> bool:
        statement = select(Run.id).where(
            col(Run.is_ai).is_(True), col(Run.ai_model) == model
        )
        return self.session.exec(statement).first() is not None

    def patch_username(self, run_id: int, username: Optional[str]) -> Optional[str]:
        """Replace the username and return the previous one."""

        run = self.get(run_id)
        if run is None:
            raise RunNotFound(run_id)
        previous = run.username
        run.username = username
        self.session.add(run)
        self.session.commit()
        logger.info("Updated username on run id=%s", run_id)
        return previous


__all__ = ["Metric", "RunNotFound", "RunStore"]
