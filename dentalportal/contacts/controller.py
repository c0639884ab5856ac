"""Contact controller."""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.contacts import service
from dentalportal.contacts.schemas import ContactRequest, ContactResponse
from dentalportal.pagination import ListParams
from shared.models.pagination import ApiResponse, PaginatedResponse


async def submit_query(
    db: AsyncSession, user_id: uuid.UUID, body: ContactRequest,
) -> ApiResponse[ContactResponse]:
    query = await service.submit_query(db, user_id, body)
    return ApiResponse(
        message="Your message has been sent successfully",
        data=ContactResponse.model_validate(query),
    )


async def list_queries(db: AsyncSession, params: ListParams) -> PaginatedResponse[ContactResponse]:
    queries, meta = await service.list_queries(db, params)
    return PaginatedResponse(
        message="Contact queries retrieved successfully",
        data=[ContactResponse.model_validate(q) for q in queries],
        pagination=meta,
    )
