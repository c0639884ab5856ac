"""URL slug generation and uniqueness resolution.

Uniqueness is probed with a read and then enforced by the unique index on
``slug``; a writer that loses the race gets :class:`SlugTakenError` (409)
from :func:`flush_guarding_slug` and may simply retry.
"""

from __future__ import annotations

import re
import uuid
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.exceptions import SlugTakenError

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def generate_slug(title: str) -> str:
    """Lowercase, collapse every non-alphanumeric run to ``-``, trim hyphens."""
    return _NON_ALNUM.sub("-", title.lower()).strip("-")


async def ensure_unique_slug(
    db: AsyncSession,
    model: Any,
    candidate: str,
    *,
    exclude_id: uuid.UUID | None = None,
) -> str:
    """Return ``candidate`` or the first free ``candidate-N`` (N = 1, 2, ...)."""
    slug = candidate
    counter = 1
    while True:
        stmt = select(func.count()).select_from(model).where(model.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(model.id != exclude_id)
        if not await db.scalar(stmt):
            return slug
        slug = f"{candidate}-{counter}"
        counter += 1


async def resolve_slug(
    db: AsyncSession,
    model: Any,
    *,
    title: str,
    explicit: str | None = None,
    exclude_id: uuid.UUID | None = None,
) -> str:
    # An explicit slug is taken verbatim; only the title is normalised
    base = explicit.strip() if explicit else generate_slug(title)
    if not base:
        base = uuid.uuid4().hex[:12]
    return await ensure_unique_slug(db, model, base, exclude_id=exclude_id)


def _violates_slug_index(exc: IntegrityError, table: str) -> bool:
    cause = getattr(exc.orig, "__cause__", None)
    constraint = getattr(cause, "constraint_name", None)
    if constraint is not None:
        return constraint == f"ix_{table}_slug"
    # SQLite names the column instead: "UNIQUE constraint failed: blogs.slug"
    message = str(exc.orig)
    return f"ix_{table}_slug" in message or f"{table}.slug" in message


async def flush_guarding_slug(db: AsyncSession, obj: Any) -> None:
    """Flush pending changes, mapping a lost slug race to a retryable conflict.

    Other integrity errors (foreign keys, check constraints) propagate unchanged.
    """
    try:
        await db.flush()
    except IntegrityError as exc:
        if not _violates_slug_index(exc, obj.__tablename__):
            raise
        await db.rollback()
        raise SlugTakenError(obj.slug) from exc
    await db.refresh(obj)
