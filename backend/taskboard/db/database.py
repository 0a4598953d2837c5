"""Database setup — SQLite (WAL mode) or any SQLAlchemy URL via SQLModel.

What lives here:
- the process-wide engine built from settings.database_url
- connection pragmas for SQLite (WAL, foreign keys, busy timeout)
- create_db_and_tables() for startup, get_session() for FastAPI endpoints

create_db_and_tables() also registers the ORM lifecycle hooks
(slug assignment and model validation) from taskboard.db.hooks.
"""

from __future__ import annotations

import os
import sqlite3

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from taskboard.config import settings
from taskboard.db.hooks import register_hooks


def get_database_url() -> str:
    """Get database URL, ensuring the data directory exists."""
    url = settings.database_url
    if url.startswith("sqlite:///") and url != "sqlite:///:memory:":
        db_path = url.replace("sqlite:///", "")
        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
    return url


@event.listens_for(Engine, "connect")
def set_sqlite_pragmas(dbapi_connection, connection_record):
    """Enable WAL and foreign key enforcement on SQLite connections."""
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")  # Safe with WAL
    cursor.execute("PRAGMA foreign_keys=ON")     # comments/tasks cascade on delete
    cursor.execute("PRAGMA busy_timeout=5000")   # 5s wait on lock
    cursor.close()


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}  # FastAPI runs sync endpoints in a threadpool
    return {}


_url = get_database_url()
engine = create_engine(_url, echo=settings.sql_echo, connect_args=_connect_args(_url))


def create_db_and_tables(bind: Engine | None = None) -> None:
    """Create all tables defined by SQLModel metadata."""
    from taskboard.models.comment import Comment  # noqa: F401
    from taskboard.models.preference import Preference  # noqa: F401
    from taskboard.models.task import Task  # noqa: F401
    from taskboard.models.user import User  # noqa: F401

    register_hooks()
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    """Dependency for FastAPI endpoints."""
    with Session(engine) as session:
        yield session

