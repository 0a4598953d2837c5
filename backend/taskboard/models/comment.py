"""Comment model — a short note left by a user on a task."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from sqlmodel import Field as SQLField
from sqlmodel import Session, SQLModel

from taskboard.models.checks import check_length, new_errors, record_exists
from taskboard.models.errors import FieldErrors
from taskboard.models.task import Task
from taskboard.models.user import User

MAX_CONTENT_LENGTH = 511


class Comment(SQLModel, table=True):
    """A comment on a task. Deleted together with its task."""

    __tablename__ = "comments"

    id: str = SQLField(default_factory=lambda: str(uuid4()), primary_key=True)
    content: str = SQLField(max_length=MAX_CONTENT_LENGTH)
    task_id: str = SQLField(foreign_key="tasks.id", ondelete="CASCADE", index=True)
    user_id: str = SQLField(foreign_key="users.id", ondelete="CASCADE", index=True)
    created_at: datetime = SQLField(default_factory=lambda: datetime.now(timezone.utc))

    def validation_errors(self, session: Session) -> FieldErrors:
        errors = new_errors()
        check_length(errors, "content", self.content, MAX_CONTENT_LENGTH)
        if not record_exists(session, Task, self.task_id):
            errors["task"].append("must exist")
        if not record_exists(session, User, self.user_id):
            errors["user"].append("must exist")
        return errors
