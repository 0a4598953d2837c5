"""ORM lifecycle hooks — validation and slug assignment on flush.

Runs inside Session.flush(), before any INSERT/UPDATE is emitted:

- new Task: validate, assign the slug, align updated_at with created_at
- modified Task: validate (a changed slug is rejected), bump updated_at
- new/modified User: lower-case the email, validate
- new/modified Comment, Preference: validate

Any failure raises RecordInvalid and nothing is written.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import event
from sqlmodel import Session

from taskboard.engines.slug import assign_slug
from taskboard.models.errors import RecordInvalid
from taskboard.models.task import Task
from taskboard.models.user import User

logger = logging.getLogger(__name__)


def _validate(session: Session, obj) -> None:
    errors = obj.validation_errors(session)
    if any(errors.values()):
        exc = RecordInvalid(type(obj).__name__, errors)
        logger.info("Rejected %s: %s", exc.model, exc.to_sentence())
        raise exc


def _prepare_new_task(session: Session, task: Task, pending: list[str]) -> None:
    _validate(session, task)
    try:
        assign_slug(session, task, pending)
    except ValueError:
        raise RecordInvalid("Task", {"title": ["must contain at least one letter or number"]}) from None
    pending.append(task.slug)
    task.updated_at = task.created_at


def before_flush(session: Session, flush_context, instances) -> None:
    pending_slugs: list[str] = []

    for obj in list(session.new):
        if isinstance(obj, User):
            obj.normalize()
        if isinstance(obj, Task):
            _prepare_new_task(session, obj, pending_slugs)
        elif hasattr(obj, "validation_errors"):
            _validate(session, obj)

    now = datetime.now(timezone.utc)
    for obj in list(session.dirty):
        if not session.is_modified(obj) or not hasattr(obj, "validation_errors"):
            continue
        if isinstance(obj, User):
            obj.normalize()
        _validate(session, obj)
        if hasattr(obj, "updated_at"):
            obj.updated_at = now


def register_hooks() -> None:
    """Attach the flush hook to every SQLModel session. Safe to call repeatedly."""
    if not event.contains(Session, "before_flush", before_flush):
        event.listen(Session, "before_flush", before_flush)
        logger.debug("before_flush hook registered")
