"""Preference model — per-user notification settings."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from sqlmodel import Field as SQLField
from sqlmodel import Session, SQLModel, select

from taskboard.models.checks import new_errors, record_exists
from taskboard.models.errors import FieldErrors
from taskboard.models.user import User

DEFAULT_NOTIFICATION_HOUR = 10


class Preference(SQLModel, table=True):
    """One row per user; created with defaults on first access."""

    __tablename__ = "preferences"

    id: str = SQLField(default_factory=lambda: str(uuid4()), primary_key=True)
    user_id: str = SQLField(foreign_key="users.id", ondelete="CASCADE", unique=True, index=True)
    notification_delivery_hour: int = DEFAULT_NOTIFICATION_HOUR  # 0..23, server local time
    receive_email: bool = True
    updated_at: datetime = SQLField(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def for_user(cls, session: Session, user_id: str) -> Preference:
        """Return the user's preference, adding a default one if none is stored."""
        preference = session.exec(select(cls).where(cls.user_id == user_id)).first()
        if preference is None:
            preference = cls(user_id=user_id)
            session.add(preference)
        return preference

    def validation_errors(self, session: Session) -> FieldErrors:
        errors = new_errors()
        hour = self.notification_delivery_hour
        if hour is None:
            errors["notification_delivery_hour"].append("can't be blank")
        elif not 0 <= hour <= 23:
            errors["notification_delivery_hour"].append("must be between 0 and 23")
        if self.receive_email is None:
            errors["receive_email"].append("is not included in the list")
        if not record_exists(session, User, self.user_id):
            errors["user"].append("must exist")
        return errors
