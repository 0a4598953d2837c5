"""User model — account, hashed password and authentication token."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import func
from sqlmodel import Field as SQLField
from sqlmodel import Session, SQLModel, select

from taskboard.models.checks import check_length, is_blank, new_errors
from taskboard.models.errors import FieldErrors
from taskboard.security.passwords import generate_token, hash_password, verify_password

MAX_NAME_LENGTH = 35
MAX_EMAIL_LENGTH = 50
MIN_PASSWORD_LENGTH = 6

VALID_EMAIL_REGEX = re.compile(r"([\w+\-]\.?)+@[a-z\d\-]+(\.[a-z]+)*\.[a-z]+", re.IGNORECASE)


class User(SQLModel, table=True):
    """A person who owns tasks, gets tasks assigned and writes comments."""

    __tablename__ = "users"

    id: str = SQLField(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str = SQLField(max_length=MAX_NAME_LENGTH)
    email: str = SQLField(max_length=MAX_EMAIL_LENGTH, unique=True, index=True)  # stored lower-case
    password_digest: str = ""
    authentication_token: str = SQLField(default_factory=generate_token, unique=True)
    created_at: datetime = SQLField(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = SQLField(default_factory=lambda: datetime.now(timezone.utc))

    def set_password(self, password: str) -> None:
        self.password_digest = hash_password(password)

    def authenticate(self, password: str) -> bool:
        return verify_password(password, self.password_digest)

    def normalize(self) -> None:
        if self.email:
            self.email = self.email.strip().lower()

    def validation_errors(self, session: Session) -> FieldErrors:
        errors = new_errors()
        check_length(errors, "name", self.name, MAX_NAME_LENGTH)
        check_length(errors, "email", self.email, MAX_EMAIL_LENGTH)
        if not errors["email"]:
            if not VALID_EMAIL_REGEX.fullmatch(self.email):
                errors["email"].append("is invalid")
            elif self._email_taken(session):
                errors["email"].append("has already been taken")
        if is_blank(self.password_digest):
            errors["password"].append("can't be blank")
        return errors

    def _email_taken(self, session: Session) -> bool:
        email = self.email.lower()
        for obj in session.new:
            if isinstance(obj, User) and obj is not self and (obj.email or "").lower() == email:
                return True
        stmt = select(User.id).where(func.lower(User.email) == email, User.id != self.id)
        return session.exec(stmt).first() is not None
