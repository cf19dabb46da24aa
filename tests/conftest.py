"""Root conftest for all tests.

Every test gets its own in-memory SQLite database. Stores are built on a
session scope bound to that engine, and the API client overrides the scope
dependency so routes hit the same database.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from liftlog.api.dependencies.stores import get_session_scope
from liftlog.db.models import Base
from liftlog.db.session import create_db_engine, make_session_scope
from liftlog.exercises.library import ExerciseLibrary
from liftlog.main import create_app
from liftlog.plans.store import PlanStore
from liftlog.plans.templates import TemplateStore
from liftlog.tracking.completions import CompletionTracker
from liftlog.tracking.sessions import SessionStore
from liftlog.users.prefs import PreferenceStore


class FakeClock:
    """Deterministic clock: each call returns the previous time plus one minute."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(minutes=1)
        return self.now


@pytest.fixture
def engine():
    """Isolated in-memory SQLite engine with all tables created."""
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_scope(engine):
    return make_session_scope(engine)


@pytest.fixture
def test_user_id() -> str:
    """Stable user id for tests."""
    return "user-1"


@pytest.fixture
def other_user_id() -> str:
    return "user-2"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 6, 0, tzinfo=timezone.utc))


@pytest.fixture
def plan_store(session_scope) -> PlanStore:
    return PlanStore(session_scope)


@pytest.fixture
def template_store(session_scope) -> TemplateStore:
    return TemplateStore(session_scope)


@pytest.fixture
def session_store(session_scope, clock) -> SessionStore:
    return SessionStore(session_scope, clock=clock)


@pytest.fixture
def completion_tracker(session_scope, clock) -> CompletionTracker:
    return CompletionTracker(session_scope, clock=clock)


@pytest.fixture
def preference_store(session_scope) -> PreferenceStore:
    return PreferenceStore(session_scope)


@pytest.fixture
def exercise_library(session_scope) -> ExerciseLibrary:
    return ExerciseLibrary(session_scope)


@pytest.fixture
def client(session_scope, test_user_id):
    """API client acting as test_user_id against the test database."""
    app = create_app(create_tables=False)
    app.dependency_overrides[get_session_scope] = lambda: session_scope
    with TestClient(app) as test_client:
        test_client.headers.update({"X-User-Id": test_user_id})
        yield test_client
    app.dependency_overrides.clear()
