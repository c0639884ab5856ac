"""Testimonial router."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.database import get_db
from dentalportal.dependencies import require_admin
from dentalportal.testimonials import controller
from dentalportal.testimonials.schemas import (
    TestimonialRequest,
    TestimonialResponse,
    UpdateTestimonialRequest,
)
from shared.models.pagination import ApiResponse

router = APIRouter(prefix="/testimonials", tags=["testimonials"])


@router.get("", response_model=ApiResponse[list[TestimonialResponse]], summary="All testimonials")
async def list_testimonials(db: AsyncSession = Depends(get_db)) -> ApiResponse[list[TestimonialResponse]]:
    return await controller.list_testimonials(db)


@router.post(
    "",
    response_model=ApiResponse[TestimonialResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Add a testimonial",
)
async def create_testimonial(
    body: TestimonialRequest, db: AsyncSession = Depends(get_db),
) -> ApiResponse[TestimonialResponse]:
    return await controller.create_testimonial(db, body)


@router.put(
    "/{testimonial_id}",
    response_model=ApiResponse[TestimonialResponse],
    dependencies=[Depends(require_admin)],
    summary="Update a testimonial",
)
async def update_testimonial(
    testimonial_id: str,
    body: UpdateTestimonialRequest,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[TestimonialResponse]:
    return await controller.update_testimonial(db, testimonial_id, body)


@router.delete(
    "/{testimonial_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_admin)],
    summary="Delete a testimonial",
)
async def delete_testimonial(testimonial_id: str, db: AsyncSession = Depends(get_db)) -> ApiResponse[None]:
    return await controller.delete_testimonial(db, testimonial_id)
