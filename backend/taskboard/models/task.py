"""Task model.

A task is owned by one user and assigned to another (possibly the same)
user. Its slug is derived from the title once, when the row is first
inserted (see taskboard.engines.slug), and never changes afterwards.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal
from uuid import uuid4

from sqlalchemy import inspect as sa_inspect
from sqlmodel import Field as SQLField
from sqlmodel import Session, SQLModel, select

from taskboard.models.checks import check_length, new_errors, record_exists
from taskboard.models.errors import FieldErrors
from taskboard.models.user import User

MAX_TITLE_LENGTH = 125

Progress = Literal["pending", "completed"]
Status = Literal["unstarred", "starred"]

PROGRESS_VALUES: tuple[str, ...] = ("pending", "completed")
STATUS_VALUES: tuple[str, ...] = ("unstarred", "starred")


class Task(SQLModel, table=True):
    """A to-do item with an immutable URL slug."""

    __tablename__ = "tasks"

    id: str = SQLField(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str = SQLField(max_length=MAX_TITLE_LENGTH)
    slug: str | None = SQLField(default=None, unique=True, index=True, nullable=False)
    progress: str = "pending"  # Progress
    status: str = "unstarred"  # Status
    task_owner_id: str = SQLField(foreign_key="users.id", ondelete="CASCADE", index=True)
    assigned_user_id: str = SQLField(foreign_key="users.id", ondelete="CASCADE", index=True)
    created_at: datetime = SQLField(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = SQLField(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def of_progress(cls, session: Session, progress: str) -> list[Task]:
        """Tasks with the given progress, starred first, most recently updated first."""
        by_status = []
        for status in ("starred", "unstarred"):
            stmt = (
                select(cls)
                .where(cls.progress == progress, cls.status == status)
                .order_by(cls.updated_at.desc())  # type: ignore[union-attr]
            )
            by_status.extend(session.exec(stmt).all())
        return by_status

    def slug_changed(self, session: Session) -> bool:
        """True if a persisted task has a slug different from the stored one."""
        state = sa_inspect(self)
        if not state.persistent:
            return False
        history = state.attrs.slug.history
        if not history.has_changes():
            return False
        if history.deleted:
            return True
        # Set while expired: the old value was never loaded, so ask the table
        stored = session.exec(select(Task.slug).where(Task.id == state.identity[0])).first()
        return stored != self.slug

    def validation_errors(self, session: Session) -> FieldErrors:
        errors = new_errors()
        check_length(errors, "title", self.title, MAX_TITLE_LENGTH)
        if self.progress not in PROGRESS_VALUES:
            errors["progress"].append("is not included in the list")
        if self.status not in STATUS_VALUES:
            errors["status"].append("is not included in the list")
        if not record_exists(session, User, self.task_owner_id):
            errors["task_owner"].append("must exist")
        if not record_exists(session, User, self.assigned_user_id):
            errors["assigned_user"].append("must exist")
        if self.slug_changed(session):
            errors["slug"].append("is immutable!")
        return errors
