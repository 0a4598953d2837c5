"""Password hashing (bcrypt) and opaque authentication tokens."""

from __future__ import annotations

import secrets

import bcrypt

from taskboard.config import settings

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72
_TOKEN_BYTES = 18


def hash_password(password: str, rounds: int | None = None) -> str:
    """Return a bcrypt digest for the given plaintext password."""
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password longer than {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(raw, salt).decode("utf-8")


def verify_password(password: str, digest: str) -> bool:
    """Check a plaintext password against a stored bcrypt digest."""
    raw = password.encode("utf-8")
    if not digest or len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, digest.encode("utf-8"))
    except ValueError:
        # Malformed digest (e.g. not produced by bcrypt)
        return False


def generate_token() -> str:
    """Random URL-safe token for User.authentication_token."""
    return secrets.token_urlsafe(_TOKEN_BYTES)
