"""Testimonial controller."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.exceptions import DomainError, to_http_exception
from dentalportal.schemas import parse_uuid
from dentalportal.testimonials import service
from dentalportal.testimonials.schemas import (
    TestimonialRequest,
    TestimonialResponse,
    UpdateTestimonialRequest,
)
from shared.models.pagination import ApiResponse


async def list_testimonials(db: AsyncSession) -> ApiResponse[list[TestimonialResponse]]:
    items = await service.list_testimonials(db)
    return ApiResponse(
        message="Testimonials retrieved successfully",
        data=[TestimonialResponse.model_validate(t) for t in items],
    )


async def create_testimonial(
    db: AsyncSession, body: TestimonialRequest,
) -> ApiResponse[TestimonialResponse]:
    testimonial = await service.create_testimonial(db, body)
    return ApiResponse(
        message="Testimonial created successfully",
        data=TestimonialResponse.model_validate(testimonial),
    )


async def update_testimonial(
    db: AsyncSession, testimonial_id: str, body: UpdateTestimonialRequest,
) -> ApiResponse[TestimonialResponse]:
    try:
        testimonial = await service.update_testimonial(
            db, parse_uuid(testimonial_id, "Testimonial"), body.model_dump(exclude_unset=True),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="Testimonial updated successfully",
        data=TestimonialResponse.model_validate(testimonial),
    )


async def delete_testimonial(db: AsyncSession, testimonial_id: str) -> ApiResponse[None]:
    try:
        await service.delete_testimonial(db, parse_uuid(testimonial_id, "Testimonial"))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Testimonial deleted successfully")
