"""
API fixtures.

Every test gets fresh tables in the shared in-memory SQLite database and
a :class:`TestClient` talking to the real application.
"""

import datetime

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

import app.db.base  # noqa: F401
from app.db.session import engine
from app.main import app
from app.models.user import User
from app.models.workout import Workout


@pytest.fixture(autouse=True)
def tables():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def today() -> datetime.date:
    return datetime.date.today()


@pytest.fixture
def make_user():
    def _make(email="athlete@example.com", plan_rigidity="LOCKED_1_DAY") -> int:
        with Session(engine) as session:
            user = User(email=email, full_name="Test Athlete", plan_rigidity=plan_rigidity)
            session.add(user)
            session.commit()
            return user.id
    return _make


@pytest.fixture
def make_workout():
    def _make(user_id: int, date: datetime.date, **overrides) -> int:
        fields = dict(title="Tempo run", type="run", duration_min=50)
        fields.update(overrides)
        with Session(engine) as session:
            workout = Workout(user_id=user_id, date=date, **fields)
            session.add(workout)
            session.commit()
            return workout.id
    return _make


@pytest.fixture
def user_id(make_user) -> int:
    return make_user()


@pytest.fixture
def headers(user_id) -> dict:
    return {"X-User-Id": str(user_id)}
