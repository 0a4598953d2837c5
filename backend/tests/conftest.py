"""Shared test fixtures for Taskboard backend tests."""

import os
import sys

import pytest

# Ensure backend is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")  # fast hashing in tests

from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from taskboard.db.database import create_db_and_tables, get_session
from taskboard.main import app
from taskboard.models.task import Task
from taskboard.models.user import User


@pytest.fixture
def engine():
    """Fresh in-memory SQLite DB per test. StaticPool keeps one shared connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    """TestClient on the real app with get_session bound to the test engine."""

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.pop(get_session, None)


@pytest.fixture
def make_user(session):
    """Factory: persist a user and return it."""
    counter = {"n": 0}

    def _make_user(name: str = "Oliver Smith", email: str | None = None, password: str = "welcome") -> User:
        counter["n"] += 1
        user = User(name=name, email=email or f"user{counter['n']}@example.com")
        user.set_password(password)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def make_task(session, user):
    """Factory: persist a task owned by and assigned to `user`."""

    def _make_task(title: str = "Buy groceries", **fields) -> Task:
        fields.setdefault("task_owner_id", user.id)
        fields.setdefault("assigned_user_id", user.id)
        task = Task(title=title, **fields)
        session.add(task)
        session.commit()
        session.refresh(task)
        return task

    return _make_task
