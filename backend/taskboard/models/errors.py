"""RecordInvalid — field-level validation failure raised before any write.

Raised from the before_flush hook when a model fails validation. Carries
a mapping of field name to messages so the API can return a structured
error body:

    {"detail": "Title can't be blank and Slug is immutable!",
     "errors": {"title": ["can't be blank"], "slug": ["is immutable!"]}}
"""

from __future__ import annotations

FieldErrors = dict[str, list[str]]


def humanize(field: str) -> str:
    """'assigned_user' -> 'Assigned user'."""
    return field.replace("_", " ").capitalize()


def to_sentence(items: list[str]) -> str:
    """Join items as an English list: 'a', 'a and b', 'a, b, and c'."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return f"{', '.join(items[:-1])}, and {items[-1]}"


class RecordInvalid(Exception):
    """A model instance failed validation."""

    def __init__(self, model: str, errors: FieldErrors) -> None:
        self.model = model
        self.errors = {field: list(messages) for field, messages in errors.items() if messages}
        super().__init__(f"{model} is invalid: {self.to_sentence()}")

    @property
    def full_messages(self) -> list[str]:
        return [
            f"{humanize(field)} {message}"
            for field, messages in self.errors.items()
            for message in messages
        ]

    def to_sentence(self) -> str:
        return to_sentence(self.full_messages)
