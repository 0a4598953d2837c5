"""Small validation helpers shared by the table models."""

from __future__ import annotations

from collections import defaultdict

from sqlmodel import Session, SQLModel

from taskboard.models.errors import FieldErrors


def new_errors() -> FieldErrors:
    return defaultdict(list)


def is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def check_length(errors: FieldErrors, field: str, value: str | None, maximum: int) -> None:
    """Record presence and maximum length failures for a text field."""
    if is_blank(value):
        errors[field].append("can't be blank")
    elif len(value) > maximum:
        errors[field].append(f"is too long (maximum is {maximum} characters)")


def record_exists(session: Session, model: type[SQLModel], ident: str | None) -> bool:
    """True if a row with this primary key is stored or pending in the session."""
    if ident is None:
        return False
    for obj in session.new:
        if isinstance(obj, model) and obj.id == ident:
            return True
    return session.get(model, ident) is not None
