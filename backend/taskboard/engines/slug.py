"""Slug generator — unique, human-readable URL slugs for tasks.

A slug is derived from the task title exactly once, just before the task is
first inserted:

  1. Parameterize the title into a base slug ("Test Task" -> "test-task").
  2. Look up the most specific stored slug that is either the base itself
     or the base followed by "-<digits>". Longest string wins, ties broken
     by descending string order, so "test-task-10" beats "test-task-9" and
     both beat "test-task".
  3. No match -> the base slug. A match -> "base-{n + 1}", where n is the
     integer after the last hyphen of the match, or 1 when that token is
     not a number (or is "0"). Two "buy 2" tasks give "buy-2", "buy-2-3".

The pattern is anchored on the exact base, so "buy-2-apples" is never read
as a numbered "buy", and "fishing" has nothing to do with "fish".

Selection is read-then-decide. Two concurrent creations of the same title
can pick the same candidate; the UNIQUE index on the slug column rejects the
second insert with an IntegrityError, which is surfaced to the caller.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from slugify import slugify
from sqlalchemy import func
from sqlmodel import Session, select

logger = logging.getLogger(__name__)

SEPARATOR = "-"


def parameterize(text: str) -> str:
    """Lower-case, ASCII, hyphen-separated form of free text."""
    # Commas are separators too: "1,000" -> "1-000"
    return slugify(text or "", separator=SEPARATOR, lowercase=True, replacements=[[",", SEPARATOR]])


def slug_pattern(base: str) -> str:
    """Regex matching the base slug alone or with a numeric suffix.

    The base only ever contains [a-z0-9-], none of which need escaping.
    """
    return f"^{base}({SEPARATOR}[0-9]+)?$"


def _specificity(slug: str) -> tuple[int, str]:
    return len(slug), slug


def latest_matching_slug(session: Session, slug_column: Any, base: str) -> str | None:
    """Most specific stored slug for this base: length DESC, slug DESC, first row."""
    stmt = (
        select(slug_column)
        .where(slug_column.regexp_match(slug_pattern(base)))
        .order_by(func.length(slug_column).desc(), slug_column.desc())
        .limit(1)
    )
    return session.exec(stmt).first()


def suffix_of(slug: str) -> int:
    """Integer value of the token after the last hyphen; 0 when it is not a number.

    A base that itself ends in digits counts as its own suffix: "buy-2" -> 2.
    """
    token = slug.rsplit(SEPARATOR, 1)[-1]
    return int(token) if token.isdigit() else 0


def next_slug(base: str, latest: str | None) -> str:
    """Candidate slug given the most specific existing match."""
    if latest is None:
        return base
    count = suffix_of(latest)
    if count == 0:
        # No numeric last token (or a literal "-0"): this is the first duplicate
        count = 1
    return f"{base}{SEPARATOR}{count + 1}"


def generate_slug(
    session: Session,
    slug_column: Any,
    title: str,
    pending: Iterable[str] = (),
) -> str:
    """Compute a unique slug for a new record with this title.

    ``pending`` holds slugs already handed out in the current flush that are
    not in the table yet.
    """
    base = parameterize(title)
    if not base:
        raise ValueError(f"Title {title!r} has no letters or digits to build a slug from")

    matcher = re.compile(slug_pattern(base))
    candidates = [s for s in pending if matcher.match(s)]
    stored = latest_matching_slug(session, slug_column, base)
    if stored is not None:
        candidates.append(stored)
    latest = max(candidates, key=_specificity) if candidates else None

    slug = next_slug(base, latest)
    logger.debug("Slug for %r: base=%s latest=%s -> %s", title, base, latest, slug)
    return slug


def assign_slug(session: Session, record: Any, pending: Iterable[str] = ()) -> str:
    """Set ``record.slug`` from ``record.title``. Call only before the first insert."""
    record.slug = generate_slug(session, type(record).slug, record.title, pending)
    return record.slug
