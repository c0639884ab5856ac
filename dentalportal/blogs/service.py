"""Blog service: pure business logic, no FastAPI imports.

Any authenticated user may write a blog; only the author or an admin may
change it. Non-admins only ever see published blogs and their own drafts.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal import publishing
from dentalportal.blogs.schemas import BlogFilters, BlogStatistics, CreateBlogRequest
from dentalportal.exceptions import NotFoundError
from dentalportal.models.blog import Blog
from dentalportal.models.enums import ContentStatus
from dentalportal.pagination import (
    SEARCH_RESULT_CAP,
    ListParams,
    apply_filters,
    order_clause,
    paginate,
    search_clause,
)
from dentalportal.policy import ensure_can_modify, ensure_visible
from dentalportal.slugs import flush_guarding_slug, resolve_slug
from shared.models.pagination import PageMeta
from shared.models.user import CurrentUser

RESOURCE = "Blog"
SORTABLE_FIELDS = ("created_at", "updated_at", "published_at", "title", "view_count", "like_count")
SEARCH_COLUMNS = (Blog.title, Blog.content, Blog.excerpt, Blog.category)
REQUIRED_FIELDS = ("title", "content", "tags", "is_for_dentist", "status")


async def create_blog(db: AsyncSession, author: CurrentUser, body: CreateBlogRequest) -> Blog:
    fields = body.model_dump(exclude={"slug", "status"})
    blog = Blog(
        **fields,
        slug=await resolve_slug(db, Blog, title=body.title, explicit=body.slug),
        author_id=author.id,
        author_name=author.full_name,
    )
    publishing.initial_status(blog, body.status)
    db.add(blog)
    await flush_guarding_slug(db, blog)
    return blog


async def list_blogs(
    db: AsyncSession,
    params: ListParams,
    filters: BlogFilters,
    *,
    published_only: bool,
) -> tuple[list[Blog], PageMeta]:
    status = ContentStatus.PUBLISHED if published_only else filters.status
    stmt = apply_filters(
        select(Blog),
        Blog.status == status if status is not None else None,
        Blog.category == filters.category if filters.category else None,
        Blog.author_id == filters.author_id if filters.author_id else None,
        Blog.is_for_dentist == filters.is_for_dentist if filters.is_for_dentist is not None else None,
        search_clause(SEARCH_COLUMNS, params.search),
    )
    return await paginate(
        db, stmt, params, order_by=order_clause(Blog, params, allowed=SORTABLE_FIELDS),
    )


async def search_blogs(db: AsyncSession, term: str) -> list[Blog]:
    result = await db.execute(
        select(Blog)
        .where(Blog.status == ContentStatus.PUBLISHED, search_clause(SEARCH_COLUMNS, term))
        .order_by(Blog.published_at.desc(), Blog.id.asc())
        .limit(SEARCH_RESULT_CAP)
    )
    return list(result.scalars().all())


async def list_categories(db: AsyncSession) -> list[str]:
    result = await db.execute(
        select(Blog.category)
        .where(Blog.status == ContentStatus.PUBLISHED, Blog.category.is_not(None))
        .distinct()
        .order_by(Blog.category)
    )
    return [category for category in result.scalars().all() if category]


async def _get(db: AsyncSession, blog_id: uuid.UUID) -> Blog:
    blog = await db.get(Blog, blog_id)
    if blog is None:
        raise NotFoundError(RESOURCE)
    return blog


async def _view(db: AsyncSession, blog: Blog | None, viewer: CurrentUser | None) -> Blog:
    is_public = blog is not None and blog.status == ContentStatus.PUBLISHED
    ensure_visible(blog, viewer, is_public=is_public, resource=RESOURCE)
    if is_public:
        await publishing.record_view(db, blog)
    return blog


async def get_blog(db: AsyncSession, blog_id: uuid.UUID, viewer: CurrentUser | None) -> Blog:
    return await _view(db, await db.get(Blog, blog_id), viewer)


async def get_blog_by_slug(db: AsyncSession, slug: str, viewer: CurrentUser | None) -> Blog:
    result = await db.execute(select(Blog).where(Blog.slug == slug))
    return await _view(db, result.scalar_one_or_none(), viewer)


async def update_blog(
    db: AsyncSession, blog_id: uuid.UUID, actor: CurrentUser, fields: dict,
) -> Blog:
    blog = await _get(db, blog_id)
    ensure_can_modify(blog, actor, resource=RESOURCE)
    fields = publishing.without_nulls(fields, REQUIRED_FIELDS)
    status = fields.pop("status", None)
    await publishing.reslug_on_update(db, blog, fields)
    publishing.apply_fields(blog, fields)
    if status is not None:
        publishing.change_status(blog, status, resource=RESOURCE)
    await flush_guarding_slug(db, blog)
    return blog


async def publish_blog(
    db: AsyncSession, blog_id: uuid.UUID, actor: CurrentUser, published_at: datetime | None = None,
) -> Blog:
    blog = await _get(db, blog_id)
    ensure_can_modify(blog, actor, resource=RESOURCE)
    publishing.publish(blog, resource=RESOURCE, published_at=published_at)
    await db.flush()
    await db.refresh(blog)
    return blog


async def unpublish_blog(db: AsyncSession, blog_id: uuid.UUID, actor: CurrentUser) -> Blog:
    blog = await _get(db, blog_id)
    ensure_can_modify(blog, actor, resource=RESOURCE)
    publishing.unpublish(blog, resource=RESOURCE)
    await db.flush()
    await db.refresh(blog)
    return blog


async def delete_blog(db: AsyncSession, blog_id: uuid.UUID, actor: CurrentUser) -> None:
    blog = await _get(db, blog_id)
    ensure_can_modify(blog, actor, resource=RESOURCE)
    await db.delete(blog)
    await db.flush()


async def blog_statistics(db: AsyncSession) -> BlogStatistics:
    counts = await publishing.status_counts(db, Blog)
    views, likes = (
        await db.execute(
            select(
                func.coalesce(func.sum(Blog.view_count), 0),
                func.coalesce(func.sum(Blog.like_count), 0),
            )
        )
    ).one()
    return BlogStatistics(
        total=sum(counts.values()),
        published=counts[ContentStatus.PUBLISHED],
        draft=counts[ContentStatus.DRAFT],
        archived=counts[ContentStatus.ARCHIVED],
        under_review=counts[ContentStatus.UNDER_REVIEW],
        total_views=views,
        total_likes=likes,
    )
