import os
from datetime import timedelta

import pytest

# Configure before the package reads its settings.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_AI_BENCHMARKS"] = "0"

from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from clickshot.app import create_app  # noqa: E402
from clickshot.core import get_session, utcnow  # noqa: E402
from clickshot.models import Run  # noqa: E402
from clickshot.services import RunStore  # noqa: E402
from helpers import hit  # noqa: E402


@pytest.fixture()
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture()
def session(engine):
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture()
def store(session):
    return RunStore(session)


@pytest.fixture()
def app(engine):
    application = create_app(configure_logging=False)

    def _session_override():
        with Session(engine) as db_session:
            yield db_session

    application.dependency_overrides[get_session] = _session_override
    return application


@pytest.fixture()
def client(app):
    # No context manager: skip the lifespan so the global engine is untouched.
    return TestClient(app)


@pytest.fixture()
def make_run(store):
    """Insert a stored run with sensible defaults."""

    def _make(
        speed=50.0,
        performance=50.0,
        username=None,
        is_ai=False,
        ai_model=None,
        age=timedelta(0),
        badges=(),
    ):
        run = Run(
            username=username,
            speed_score=speed,
            performance_score=performance,
            total_hits=10,
            avg_accuracy=0.8,
            best_accuracy=0.9,
            final_radius=12,
            duration_ms=15000,
            avg_time_per_hit_ms=1500,
            badges_json="[" + ",".join(f'"{b}"' for b in badges) + "]",
            is_ai=is_ai,
            ai_model=ai_model,
            created_at=utcnow() - age,
        )
        store.insert(run)
        return run

    return _make


@pytest.fixture()
def valid_submission():
    return {
        "stats": {
            "totalHits": 2,
            "avgAccuracy": 0.85,
            "bestAccuracy": 0.95,
            "finalRadius": 18,
            "durationMs": 2000,
        },
        "click_logs": [
            hit(1000, 0.86),
            hit(2000, 0.84, r=18.0, cx=150.0, cy=150.0, tx=148.0, ty=152.0),
        ],
        "badges": [],
    }
