"""Tests for the User model and password helpers."""

import pytest

from taskboard.models.errors import RecordInvalid
from taskboard.models.user import MAX_NAME_LENGTH, User
from taskboard.security.passwords import hash_password, verify_password


def _new_user(name="Sam Lee", email="sam@example.com", password="welcome"):
    user = User(name=name, email=email)
    user.set_password(password)
    return user


def test_email_is_saved_in_lowercase(session):
    user = _new_user(email="SAM@Example.COM")
    session.add(user)
    session.commit()
    session.refresh(user)
    assert user.email == "sam@example.com"


def test_email_should_be_unique_case_insensitively(session, make_user):
    make_user(email="sam@example.com")
    session.add(_new_user(email="Sam@Example.com"))
    with pytest.raises(RecordInvalid) as excinfo:
        session.commit()
    assert "Email has already been taken" in excinfo.value.full_messages
    session.rollback()


@pytest.mark.parametrize("email", ["sam", "sam@", "sam@example", "@example.com", "sam@exa mple.com"])
def test_invalid_email_formats_are_rejected(session, email):
    session.add(_new_user(email=email))
    with pytest.raises(RecordInvalid) as excinfo:
        session.commit()
    assert excinfo.value.errors["email"] == ["is invalid"]
    session.rollback()


@pytest.mark.parametrize("email", ["sam@example.com", "sam.lee+work@mail.example.org", "a-b@c-d.io"])
def test_valid_email_formats_are_accepted(session, email):
    user = _new_user(email=email)
    session.add(user)
    session.commit()
    assert user.id is not None


def test_name_should_not_exceed_maximum_length(session):
    session.add(_new_user(name="a" * (MAX_NAME_LENGTH + 1)))
    with pytest.raises(RecordInvalid) as excinfo:
        session.commit()
    assert "name" in excinfo.value.errors
    session.rollback()


def test_user_without_password_is_invalid(session):
    session.add(User(name="No Password", email="nopw@example.com"))
    with pytest.raises(RecordInvalid) as excinfo:
        session.commit()
    assert "Password can't be blank" in excinfo.value.full_messages
    session.rollback()


def test_password_is_stored_hashed(user):
    assert user.password_digest
    assert user.password_digest != "welcome"
    assert user.password_digest.startswith("$2")


def test_authenticate(user):
    assert user.authenticate("welcome")
    assert not user.authenticate("wrong-password")


def test_authentication_token_is_generated_and_unique(make_user):
    first = make_user()
    second = make_user()
    assert first.authentication_token
    assert first.authentication_token != second.authentication_token


def test_verify_password_handles_bad_digest():
    assert not verify_password("welcome", "")
    assert not verify_password("welcome", "not-a-bcrypt-digest")


def test_hash_password_rejects_overlong_password():
    with pytest.raises(ValueError):
        hash_password("x" * 73)
