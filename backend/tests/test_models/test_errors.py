"""Tests for RecordInvalid message formatting."""

from taskboard.models.errors import RecordInvalid, humanize, to_sentence


def test_humanize():
    assert humanize("assigned_user") == "Assigned user"
    assert humanize("slug") == "Slug"


def test_to_sentence():
    assert to_sentence([]) == ""
    assert to_sentence(["a"]) == "a"
    assert to_sentence(["a", "b"]) == "a and b"
    assert to_sentence(["a", "b", "c"]) == "a, b, and c"


def test_record_invalid_messages():
    exc = RecordInvalid("Task", {"title": ["can't be blank"], "slug": ["is immutable!"], "status": []})
    assert exc.errors == {"title": ["can't be blank"], "slug": ["is immutable!"]}
    assert exc.full_messages == ["Title can't be blank", "Slug is immutable!"]
    assert exc.to_sentence() == "Title can't be blank and Slug is immutable!"
    assert "Task is invalid" in str(exc)
