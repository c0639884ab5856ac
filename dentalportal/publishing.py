"""Lifecycle and editing helpers shared by blogs, courses and ebooks."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.lifecycle import CONTENT_LIFECYCLE, ContentAction, sync_published_at
from dentalportal.models.base import as_utc, utcnow
from dentalportal.models.enums import ContentStatus
from dentalportal.slugs import resolve_slug


def publish(entity: Any, *, resource: str, published_at: datetime | None = None) -> None:
    entity.status = CONTENT_LIFECYCLE.next_state(
        entity.status, ContentAction.PUBLISH, resource=resource,
    )
    entity.published_at = as_utc(published_at).astimezone(timezone.utc) if published_at else utcnow()


def unpublish(entity: Any, *, resource: str) -> None:
    entity.status = CONTENT_LIFECYCLE.next_state(
        entity.status, ContentAction.UNPUBLISH, resource=resource,
    )
    entity.published_at = None


def change_status(entity: Any, new_status: ContentStatus, *, resource: str) -> None:
    """Status change arriving through a generic update body.

    Moving into PUBLISHED goes through the publish transition; other targets
    are free-form editorial states.
    """
    previous = entity.status
    if new_status == previous:
        return
    if new_status == ContentStatus.PUBLISHED:
        CONTENT_LIFECYCLE.next_state(previous, ContentAction.PUBLISH, resource=resource)
    entity.status = new_status
    sync_published_at(entity, previous, utcnow())


def initial_status(entity: Any, requested: ContentStatus | None) -> None:
    entity.status = requested or ContentStatus.DRAFT
    sync_published_at(entity, ContentStatus.DRAFT, utcnow())


async def record_view(db: AsyncSession, entity: Any) -> None:
    """Atomically bump ``view_count`` and reload it on ``entity``."""
    model = type(entity)
    await db.execute(
        update(model).where(model.id == entity.id).values(view_count=model.view_count + 1)
    )
    await db.refresh(entity, attribute_names=["view_count"])


def apply_fields(entity: Any, fields: dict[str, Any]) -> None:
    for key, value in fields.items():
        setattr(entity, key, value)


async def status_counts(db: AsyncSession, model: Any) -> dict[ContentStatus, int]:
    result = await db.execute(select(model.status, func.count()).group_by(model.status))
    counts = {status: 0 for status in ContentStatus}
    counts.update({status: count for status, count in result.all()})
    return counts


async def reslug_on_update(db: AsyncSession, entity: Any, fields: dict[str, Any]) -> None:
    """Recompute the slug when the update touches ``title`` or ``slug``."""
    explicit = fields.pop("slug", None)
    if explicit is None and "title" not in fields:
        return
    entity.slug = await resolve_slug(
        db,
        type(entity),
        title=fields.get("title", entity.title),
        explicit=explicit,
        exclude_id=entity.id,
    )


def without_nulls(fields: dict[str, Any], required: tuple[str, ...]) -> dict[str, Any]:
    """Drop explicit nulls sent for columns that cannot be cleared."""
    return {k: v for k, v in fields.items() if v is not None or k not in required}
