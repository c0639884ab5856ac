"""Testimonial service."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal import publishing
from dentalportal.exceptions import NotFoundError
from dentalportal.models.showcase import Testimonial
from dentalportal.testimonials.schemas import TestimonialRequest


async def list_testimonials(db: AsyncSession) -> list[Testimonial]:
    result = await db.execute(
        select(Testimonial).order_by(Testimonial.created_at.desc(), Testimonial.id.asc())
    )
    return list(result.scalars().all())


async def create_testimonial(db: AsyncSession, body: TestimonialRequest) -> Testimonial:
    testimonial = Testimonial(**body.model_dump())
    db.add(testimonial)
    await db.flush()
    await db.refresh(testimonial)
    return testimonial


async def _get(db: AsyncSession, testimonial_id: uuid.UUID) -> Testimonial:
    testimonial = await db.get(Testimonial, testimonial_id)
    if testimonial is None:
        raise NotFoundError("Testimonial")
    return testimonial


async def update_testimonial(db: AsyncSession, testimonial_id: uuid.UUID, fields: dict) -> Testimonial:
    testimonial = await _get(db, testimonial_id)
    publishing.apply_fields(testimonial, publishing.without_nulls(fields, ("name", "message")))
    await db.flush()
    await db.refresh(testimonial)
    return testimonial


async def delete_testimonial(db: AsyncSession, testimonial_id: uuid.UUID) -> None:
    await db.delete(await _get(db, testimonial_id))
    await db.flush()
