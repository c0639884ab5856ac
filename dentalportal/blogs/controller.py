"""Blog controller: maps service results to envelopes, catches domain errors."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.blogs import service
from dentalportal.blogs.schemas import (
    BlogFilters,
    BlogResponse,
    BlogStatistics,
    CreateBlogRequest,
    UpdateBlogRequest,
)
from dentalportal.exceptions import DomainError, to_http_exception
from dentalportal.pagination import ListParams
from dentalportal.schemas import PublishRequest, parse_uuid
from shared.models.pagination import ApiResponse, PaginatedResponse
from shared.models.user import CurrentUser


def _page(blogs, meta) -> PaginatedResponse[BlogResponse]:
    return PaginatedResponse(
        message="Blogs retrieved successfully",
        data=[BlogResponse.model_validate(b) for b in blogs],
        pagination=meta,
    )


async def create_blog(
    db: AsyncSession, author: CurrentUser, body: CreateBlogRequest,
) -> ApiResponse[BlogResponse]:
    try:
        blog = await service.create_blog(db, author, body)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Blog created successfully", data=BlogResponse.model_validate(blog))


async def list_blogs(
    db: AsyncSession, params: ListParams, filters: BlogFilters, *, published_only: bool,
) -> PaginatedResponse[BlogResponse]:
    blogs, meta = await service.list_blogs(db, params, filters, published_only=published_only)
    return _page(blogs, meta)


async def search_blogs(db: AsyncSession, term: str) -> ApiResponse[list[BlogResponse]]:
    blogs = await service.search_blogs(db, term)
    return ApiResponse(
        message="Blogs retrieved successfully",
        data=[BlogResponse.model_validate(b) for b in blogs],
    )


async def list_categories(db: AsyncSession) -> ApiResponse[list[str]]:
    return ApiResponse(
        message="Categories retrieved successfully", data=await service.list_categories(db),
    )


async def get_blog(
    db: AsyncSession, blog_id: str, viewer: CurrentUser | None,
) -> ApiResponse[BlogResponse]:
    try:
        blog = await service.get_blog(db, parse_uuid(blog_id, "Blog"), viewer)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Blog retrieved successfully", data=BlogResponse.model_validate(blog))


async def get_blog_by_slug(
    db: AsyncSession, slug: str, viewer: CurrentUser | None,
) -> ApiResponse[BlogResponse]:
    try:
        blog = await service.get_blog_by_slug(db, slug, viewer)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Blog retrieved successfully", data=BlogResponse.model_validate(blog))


async def update_blog(
    db: AsyncSession, blog_id: str, actor: CurrentUser, body: UpdateBlogRequest,
) -> ApiResponse[BlogResponse]:
    try:
        blog = await service.update_blog(
            db, parse_uuid(blog_id, "Blog"), actor, body.model_dump(exclude_unset=True),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Blog updated successfully", data=BlogResponse.model_validate(blog))


async def publish_blog(
    db: AsyncSession, blog_id: str, actor: CurrentUser, body: PublishRequest | None,
) -> ApiResponse[BlogResponse]:
    try:
        blog = await service.publish_blog(
            db, parse_uuid(blog_id, "Blog"), actor, body.published_at if body else None,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Blog published successfully", data=BlogResponse.model_validate(blog))


async def unpublish_blog(
    db: AsyncSession, blog_id: str, actor: CurrentUser,
) -> ApiResponse[BlogResponse]:
    try:
        blog = await service.unpublish_blog(db, parse_uuid(blog_id, "Blog"), actor)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Blog unpublished successfully", data=BlogResponse.model_validate(blog))


async def delete_blog(db: AsyncSession, blog_id: str, actor: CurrentUser) -> ApiResponse[None]:
    try:
        await service.delete_blog(db, parse_uuid(blog_id, "Blog"), actor)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Blog deleted successfully")


async def statistics(db: AsyncSession) -> ApiResponse[BlogStatistics]:
    return ApiResponse(
        message="Blog statistics retrieved successfully", data=await service.blog_statistics(db),
    )
