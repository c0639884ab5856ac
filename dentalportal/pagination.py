"""Offset pagination, search and sort helpers shared by every list endpoint.

Pages are computed with ``skip = (page - 1) * limit``. Because the window is
offset based, rows inserted or deleted between two page requests shift the
following pages; clients browsing long lists may see an item twice or miss
one. This is accepted for the back-office and public catalogues.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from typing import Any

from fastapi import Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.models.pagination import PageMeta

DEFAULT_LIMIT = 10
MAX_LIMIT = 100
SEARCH_RESULT_CAP = 20


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


class ListParams(BaseModel):
    """Common list query: page window, free-text search and single-field sort."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    search: str | None = None
    sort_by: str | None = None
    sort_order: SortOrder | None = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def list_params(
    page: int = Query(1, ge=1, description="Page number (1-indexed)."),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Items per page."),
    search: str | None = Query(None, description="Case-insensitive substring search."),
    sort_by: str | None = Query(None, alias="sortBy", description="Field to sort by."),
    sort_order: SortOrder | None = Query(None, alias="sortOrder", description="asc or desc."),
) -> ListParams:
    """FastAPI dependency building :class:`ListParams` from the query string."""
    term = search.strip() if search else None
    return ListParams(
        page=page, limit=limit, search=term or None, sort_by=sort_by, sort_order=sort_order,
    )


def search_clause(columns: Sequence[Any], term: str | None):
    """OR of case-insensitive ``LIKE %term%`` across ``columns``; None if no term."""
    if not term:
        return None
    pattern = f"%{term}%"
    return or_(*(column.ilike(pattern) for column in columns))


def order_clause(
    model: Any,
    params: ListParams,
    *,
    allowed: Sequence[str],
    default_field: str = "created_at",
    default_order: SortOrder = SortOrder.DESC,
):
    """Resolve ``sort_by``/``sort_order`` against a whitelist of column names."""
    field = params.sort_by if params.sort_by in allowed else default_field
    order = params.sort_order or (default_order if field == default_field else SortOrder.DESC)
    column = getattr(model, field)
    primary = column.asc() if order == SortOrder.ASC else column.desc()
    # id breaks ties so equal sort keys page deterministically
    return [primary, model.id.asc()]


async def paginate(
    db: AsyncSession,
    stmt: Select,
    params: ListParams,
    *,
    order_by: Sequence[Any],
) -> tuple[list[Any], PageMeta]:
    """Run ``stmt`` for one page and count the full result set."""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = await db.scalar(count_stmt) or 0
    result = await db.execute(
        stmt.order_by(*order_by).offset(params.offset).limit(params.limit)
    )
    items = list(result.scalars().all())
    return items, PageMeta.build(page=params.page, limit=params.limit, total=total)


def apply_filters(stmt: Select, *clauses: Any) -> Select:
    for clause in clauses:
        if clause is not None:
            stmt = stmt.where(clause)
    return stmt
