"""Blog router: HTTP layer only.

Static paths (``/admin``, ``/search``, ``/categories``, ``/statistics``,
``/slug/...``) are declared before ``/{blog_id}`` so they are matched first.
"""

import uuid

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.blogs import controller
from dentalportal.blogs.schemas import (
    BlogFilters,
    BlogResponse,
    BlogStatistics,
    CreateBlogRequest,
    UpdateBlogRequest,
)
from dentalportal.database import get_db
from dentalportal.dependencies import get_current_user, get_optional_user, require_admin
from dentalportal.models.enums import ContentStatus
from dentalportal.pagination import ListParams, list_params
from dentalportal.schemas import PublishRequest
from shared.models.pagination import ApiResponse, PaginatedResponse
from shared.models.user import CurrentUser

router = APIRouter(prefix="/blogs", tags=["blogs"])


@router.post(
    "",
    response_model=ApiResponse[BlogResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Write a blog",
    description="Any signed-in user may write a blog. Created as DRAFT unless `status` is given.",
)
async def create_blog(
    body: CreateBlogRequest,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[BlogResponse]:
    return await controller.create_blog(db, current_user, body)


@router.get(
    "",
    response_model=PaginatedResponse[BlogResponse],
    summary="List published blogs",
)
async def list_published_blogs(
    params: ListParams = Depends(list_params),
    category: str | None = Query(None),
    is_for_dentist: bool | None = Query(None),
    author_id: uuid.UUID | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[BlogResponse]:
    filters = BlogFilters(category=category, is_for_dentist=is_for_dentist, author_id=author_id)
    return await controller.list_blogs(db, params, filters, published_only=True)


@router.get(
    "/admin",
    response_model=PaginatedResponse[BlogResponse],
    dependencies=[Depends(require_admin)],
    summary="List blogs in every status",
)
async def list_all_blogs(
    params: ListParams = Depends(list_params),
    status_filter: ContentStatus | None = Query(None, alias="status"),
    category: str | None = Query(None),
    is_for_dentist: bool | None = Query(None),
    author_id: uuid.UUID | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[BlogResponse]:
    filters = BlogFilters(
        status=status_filter, category=category, is_for_dentist=is_for_dentist, author_id=author_id,
    )
    return await controller.list_blogs(db, params, filters, published_only=False)


@router.get(
    "/search",
    response_model=ApiResponse[list[BlogResponse]],
    summary="Search published blogs",
    description="Matches title, content, excerpt and category. Returns at most 20 blogs.",
)
async def search_blogs(
    q: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[BlogResponse]]:
    return await controller.search_blogs(db, q)


@router.get(
    "/categories",
    response_model=ApiResponse[list[str]],
    summary="Categories used by published blogs",
)
async def list_categories(db: AsyncSession = Depends(get_db)) -> ApiResponse[list[str]]:
    return await controller.list_categories(db)


@router.get(
    "/statistics",
    response_model=ApiResponse[BlogStatistics],
    dependencies=[Depends(require_admin)],
    summary="Blog counts by status and engagement totals",
)
async def statistics(db: AsyncSession = Depends(get_db)) -> ApiResponse[BlogStatistics]:
    return await controller.statistics(db)


@router.get(
    "/slug/{slug}",
    response_model=ApiResponse[BlogResponse],
    summary="Get a blog by slug",
)
async def get_blog_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db),
    viewer: CurrentUser | None = Depends(get_optional_user),
) -> ApiResponse[BlogResponse]:
    return await controller.get_blog_by_slug(db, slug, viewer)


@router.get(
    "/{blog_id}",
    response_model=ApiResponse[BlogResponse],
    summary="Get a blog",
    description="Drafts are only visible to their author and to admins.",
)
async def get_blog(
    blog_id: str,
    db: AsyncSession = Depends(get_db),
    viewer: CurrentUser | None = Depends(get_optional_user),
) -> ApiResponse[BlogResponse]:
    return await controller.get_blog(db, blog_id, viewer)


@router.put(
    "/{blog_id}",
    response_model=ApiResponse[BlogResponse],
    summary="Update a blog",
)
async def update_blog(
    blog_id: str,
    body: UpdateBlogRequest,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[BlogResponse]:
    return await controller.update_blog(db, blog_id, current_user, body)


@router.patch(
    "/{blog_id}/publish",
    response_model=ApiResponse[BlogResponse],
    summary="Publish a blog",
)
async def publish_blog(
    blog_id: str,
    body: PublishRequest | None = Body(None),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[BlogResponse]:
    return await controller.publish_blog(db, blog_id, current_user, body)


@router.patch(
    "/{blog_id}/unpublish",
    response_model=ApiResponse[BlogResponse],
    summary="Move a published blog back to draft",
)
async def unpublish_blog(
    blog_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[BlogResponse]:
    return await controller.unpublish_blog(db, blog_id, current_user)


@router.delete(
    "/{blog_id}",
    response_model=ApiResponse[None],
    summary="Delete a blog",
)
async def delete_blog(
    blog_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[None]:
    return await controller.delete_blog(db, blog_id, current_user)
