"""Course service: pure business logic, no FastAPI imports.

Course CRUD, publication and the media patch applied once background
uploads finish. Enrollment lives in :mod:`dentalportal.enrollments.service`.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal import publishing
from dentalportal.courses.schemas import CourseFilters, CourseStatistics, CreateCourseRequest
from dentalportal.exceptions import NotFoundError
from dentalportal.models.course import Course
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

logger = logging.getLogger(__name__)

RESOURCE = "Course"
SORTABLE_FIELDS = (
    "created_at", "updated_at", "published_at", "title", "price",
    "view_count", "enrollment_count", "rating",
)
SEARCH_COLUMNS = (Course.title, Course.description, Course.short_description, Course.category)
REQUIRED_FIELDS = (
    "title", "description", "content", "tags", "price", "currency",
    "is_free", "is_active", "status",
)
MEDIA_FIELDS = ("thumbnail_image", "video_file")


# ---------------------------------------------------------------------------
# Course CRUD
# ---------------------------------------------------------------------------


async def create_course(db: AsyncSession, creator: CurrentUser, body: CreateCourseRequest) -> Course:
    course = Course(
        **body.model_dump(exclude={"slug", "status"}),
        slug=await resolve_slug(db, Course, title=body.title, explicit=body.slug),
        created_by_id=creator.id,
        created_by_name=creator.full_name,
    )
    publishing.initial_status(course, body.status)
    db.add(course)
    await flush_guarding_slug(db, course)
    logger.info("Course %s created by %s", course.id, creator.id)
    return course


async def list_courses(
    db: AsyncSession,
    params: ListParams,
    filters: CourseFilters,
    *,
    published_only: bool,
) -> tuple[list[Course], PageMeta]:
    status = ContentStatus.PUBLISHED if published_only else filters.status
    is_active = True if published_only else filters.is_active
    stmt = apply_filters(
        select(Course),
        Course.status == status if status is not None else None,
        Course.is_active == is_active if is_active is not None else None,
        Course.category == filters.category if filters.category else None,
        Course.is_free == filters.is_free if filters.is_free is not None else None,
        search_clause(SEARCH_COLUMNS, params.search),
    )
    return await paginate(
        db, stmt, params, order_by=order_clause(Course, params, allowed=SORTABLE_FIELDS),
    )


async def search_courses(db: AsyncSession, term: str) -> list[Course]:
    result = await db.execute(
        select(Course)
        .where(
            Course.status == ContentStatus.PUBLISHED,
            Course.is_active.is_(True),
            search_clause(SEARCH_COLUMNS, term),
        )
        .order_by(Course.published_at.desc(), Course.id.asc())
        .limit(SEARCH_RESULT_CAP)
    )
    return list(result.scalars().all())


async def get_course_by_id(db: AsyncSession, course_id: uuid.UUID) -> Course:
    course = await db.get(Course, course_id)
    if course is None:
        raise NotFoundError(RESOURCE)
    return course


async def _view(db: AsyncSession, course: Course | None, viewer: CurrentUser | None) -> Course:
    is_public = course is not None and course.status == ContentStatus.PUBLISHED
    ensure_visible(course, viewer, is_public=is_public, resource=RESOURCE)
    if is_public:
        await publishing.record_view(db, course)
    return course


async def get_course(db: AsyncSession, course_id: uuid.UUID, viewer: CurrentUser | None) -> Course:
    return await _view(db, await db.get(Course, course_id), viewer)


async def get_course_by_slug(db: AsyncSession, slug: str, viewer: CurrentUser | None) -> Course:
    result = await db.execute(select(Course).where(Course.slug == slug))
    return await _view(db, result.scalar_one_or_none(), viewer)


async def update_course(
    db: AsyncSession, course_id: uuid.UUID, actor: CurrentUser, fields: dict,
) -> Course:
    course = await get_course_by_id(db, course_id)
    ensure_can_modify(course, actor, resource=RESOURCE)
    fields = publishing.without_nulls(fields, REQUIRED_FIELDS)
    status = fields.pop("status", None)
    if fields.get("is_free"):
        fields["price"] = 0
    await publishing.reslug_on_update(db, course, fields)
    publishing.apply_fields(course, fields)
    if status is not None:
        publishing.change_status(course, status, resource=RESOURCE)
    await flush_guarding_slug(db, course)
    return course


async def publish_course(
    db: AsyncSession, course_id: uuid.UUID, actor: CurrentUser, published_at: datetime | None = None,
) -> Course:
    course = await get_course_by_id(db, course_id)
    ensure_can_modify(course, actor, resource=RESOURCE)
    publishing.publish(course, resource=RESOURCE, published_at=published_at)
    await db.flush()
    await db.refresh(course)
    return course


async def unpublish_course(db: AsyncSession, course_id: uuid.UUID, actor: CurrentUser) -> Course:
    course = await get_course_by_id(db, course_id)
    ensure_can_modify(course, actor, resource=RESOURCE)
    publishing.unpublish(course, resource=RESOURCE)
    await db.flush()
    await db.refresh(course)
    return course


async def delete_course(db: AsyncSession, course_id: uuid.UUID, actor: CurrentUser) -> None:
    course = await get_course_by_id(db, course_id)
    ensure_can_modify(course, actor, resource=RESOURCE)
    await db.delete(course)
    await db.flush()
    logger.info("Course %s deleted by %s", course_id, actor.id)


async def apply_media(db: AsyncSession, course_id: uuid.UUID, media: dict[str, str]) -> Course | None:
    """Store uploaded media URLs. Returns None when the course is gone."""
    course = await db.get(Course, course_id)
    if course is None:
        return None
    for key, url in media.items():
        if key in MEDIA_FIELDS:
            setattr(course, key, url)
    await db.flush()
    return course


async def course_statistics(db: AsyncSession) -> CourseStatistics:
    counts = await publishing.status_counts(db, Course)
    views, enrollments = (
        await db.execute(
            select(
                func.coalesce(func.sum(Course.view_count), 0),
                func.coalesce(func.sum(Course.enrollment_count), 0),
            )
        )
    ).one()
    return CourseStatistics(
        total=sum(counts.values()),
        published=counts[ContentStatus.PUBLISHED],
        draft=counts[ContentStatus.DRAFT],
        archived=counts[ContentStatus.ARCHIVED],
        under_review=counts[ContentStatus.UNDER_REVIEW],
        total_views=views,
        total_enrollments=enrollments,
    )
