"""Response envelope shared by every endpoint.

Success bodies look like ``{"success": true, "message": "...", "data": ...}``;
list endpoints add a ``pagination`` block with camelCase keys.
"""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PageMeta(BaseModel):
    """Offset pagination window."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(ge=1, description="Current page number (1-indexed).")
    limit: int = Field(ge=1, description="Items per page.")
    total: int = Field(ge=0, description="Total number of matching records.")
    total_pages: int = Field(alias="totalPages")
    has_next_page: bool = Field(alias="hasNextPage")
    has_prev_page: bool = Field(alias="hasPrevPage")

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> "PageMeta":
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if total else 0,
            has_next_page=page * limit < total,
            has_prev_page=page > 1,
        )


class ApiResponse(BaseModel, Generic[T]):
    """Single-object envelope."""

    success: bool = True
    message: str = ""
    data: T | None = None


class PaginatedResponse(BaseModel, Generic[T]):
    """List envelope with pagination metadata."""

    success: bool = True
    message: str = ""
    data: list[T] = Field(default_factory=list)
    pagination: PageMeta
