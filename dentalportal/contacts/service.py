"""Contact queries submitted by signed-in users."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.contacts.schemas import ContactRequest
from dentalportal.models.contact import ContactQuery
from dentalportal.pagination import ListParams, apply_filters, order_clause, paginate, search_clause
from shared.models.pagination import PageMeta

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = ("created_at", "name", "email")
SEARCH_COLUMNS = (ContactQuery.name, ContactQuery.email, ContactQuery.phone, ContactQuery.message)


async def submit_query(db: AsyncSession, user_id: uuid.UUID, body: ContactRequest) -> ContactQuery:
    query = ContactQuery(**body.model_dump(), user_id=user_id)
    query.email = query.email.lower()
    db.add(query)
    await db.flush()
    await db.refresh(query)
    logger.info("Contact query %s received from user %s", query.id, user_id)
    return query


async def list_queries(db: AsyncSession, params: ListParams) -> tuple[list[ContactQuery], PageMeta]:
    stmt = apply_filters(select(ContactQuery), search_clause(SEARCH_COLUMNS, params.search))
    return await paginate(
        db, stmt, params, order_by=order_clause(ContactQuery, params, allowed=SORTABLE_FIELDS),
    )
