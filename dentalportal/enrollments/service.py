"""Enrollment service: capacity-checked enrollment, progress and cancellation.

The course row is locked (``SELECT ... FOR UPDATE``) while capacity is
counted, the enrollment inserted and ``enrollment_count`` adjusted, so all
three happen in one transaction. The ``(user_id, course_id)`` unique
constraint remains the final word on duplicates.
"""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.exceptions import (
    AlreadyEnrolledError,
    BadRequestError,
    CourseNotPublishedError,
    EnrollmentLimitReachedError,
    ForbiddenError,
    NotFoundError,
)
from dentalportal.models.base import utcnow
from dentalportal.models.course import Course
from dentalportal.models.enrollment import Enrollment
from dentalportal.models.enums import ContentStatus, EnrollmentStatus
from dentalportal.pagination import ListParams, apply_filters, order_clause, paginate
from shared.models.pagination import PageMeta

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = ("created_at", "progress", "completed_at", "status")


async def _lock_course(db: AsyncSession, course_id: uuid.UUID) -> Course:
    result = await db.execute(select(Course).where(Course.id == course_id).with_for_update())
    course = result.scalar_one_or_none()
    if course is None:
        raise NotFoundError("Course")
    return course


async def _get_own_enrollment(db: AsyncSession, enrollment_id: uuid.UUID, user_id: uuid.UUID, verb: str) -> Enrollment:
    enrollment = await db.get(Enrollment, enrollment_id)
    if enrollment is None:
        raise NotFoundError("Enrollment")
    if enrollment.user_id != user_id:
        raise ForbiddenError(f"You can only {verb} your own enrollment")
    return enrollment


async def count_active(db: AsyncSession, course_id: uuid.UUID) -> int:
    return await db.scalar(
        select(func.count()).select_from(Enrollment).where(
            Enrollment.course_id == course_id,
            Enrollment.status == EnrollmentStatus.ACTIVE,
        )
    ) or 0


# ---------------------------------------------------------------------------
# Enroll
# ---------------------------------------------------------------------------


async def enroll(db: AsyncSession, course_id: uuid.UUID, user_id: uuid.UUID) -> Enrollment:
    course = await _lock_course(db, course_id)
    if course.status != ContentStatus.PUBLISHED:
        raise CourseNotPublishedError()

    # Any previous row blocks, including cancelled ones
    existing = await db.scalar(
        select(Enrollment.id).where(
            Enrollment.user_id == user_id, Enrollment.course_id == course_id,
        )
    )
    if existing is not None:
        raise AlreadyEnrolledError()

    if course.max_enrollments is not None:
        if await count_active(db, course_id) >= course.max_enrollments:
            raise EnrollmentLimitReachedError()

    enrollment = Enrollment(
        user_id=user_id,
        course_id=course_id,
        status=EnrollmentStatus.ACTIVE,
        progress=0,
        amount_paid=Decimal("0.00") if course.is_free else course.price,
    )
    db.add(enrollment)
    course.enrollment_count += 1
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise AlreadyEnrolledError() from exc
    await db.refresh(enrollment)
    logger.info("User %s enrolled in course %s", user_id, course_id)
    return enrollment


# ---------------------------------------------------------------------------
# Progress / cancel
# ---------------------------------------------------------------------------


async def update_progress(
    db: AsyncSession, enrollment_id: uuid.UUID, user_id: uuid.UUID, progress: int,
) -> Enrollment:
    if not 0 <= progress <= 100:
        raise BadRequestError("Progress must be between 0 and 100")
    enrollment = await _get_own_enrollment(db, enrollment_id, user_id, "update")
    if enrollment.status in (EnrollmentStatus.CANCELLED, EnrollmentStatus.REFUNDED):
        raise BadRequestError("Enrollment is not active")

    enrollment.progress = progress
    # Completion is stamped once and never moved afterwards
    if progress >= 100 and enrollment.completed_at is None:
        enrollment.status = EnrollmentStatus.COMPLETED
        enrollment.completed_at = utcnow()
    await db.flush()
    await db.refresh(enrollment)
    return enrollment


async def cancel_enrollment(
    db: AsyncSession, enrollment_id: uuid.UUID, user_id: uuid.UUID,
) -> Enrollment:
    enrollment = await _get_own_enrollment(db, enrollment_id, user_id, "cancel")
    if enrollment.status == EnrollmentStatus.CANCELLED:
        raise BadRequestError("Enrollment is already cancelled")

    course = await _lock_course(db, enrollment.course_id)
    enrollment.status = EnrollmentStatus.CANCELLED
    course.enrollment_count = max(course.enrollment_count - 1, 0)
    await db.flush()
    await db.refresh(enrollment)
    logger.info("Enrollment %s cancelled", enrollment_id)
    return enrollment


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


async def courses_by_id(db: AsyncSession, course_ids: set[uuid.UUID]) -> dict[uuid.UUID, Course]:
    if not course_ids:
        return {}
    result = await db.execute(select(Course).where(Course.id.in_(course_ids)))
    return {course.id: course for course in result.scalars().all()}


async def list_user_enrollments(
    db: AsyncSession,
    user_id: uuid.UUID,
    params: ListParams,
    status: EnrollmentStatus | None = None,
) -> tuple[list[Enrollment], dict[uuid.UUID, Course], PageMeta]:
    stmt = apply_filters(
        select(Enrollment),
        Enrollment.user_id == user_id,
        Enrollment.status == status if status is not None else None,
    )
    enrollments, meta = await paginate(
        db, stmt, params, order_by=order_clause(Enrollment, params, allowed=SORTABLE_FIELDS),
    )
    courses = await courses_by_id(db, {e.course_id for e in enrollments})
    return enrollments, courses, meta


async def list_course_enrollments(
    db: AsyncSession,
    course_id: uuid.UUID,
    params: ListParams,
    status: EnrollmentStatus | None = None,
) -> tuple[list[Enrollment], PageMeta]:
    if await db.get(Course, course_id) is None:
        raise NotFoundError("Course")
    stmt = apply_filters(
        select(Enrollment),
        Enrollment.course_id == course_id,
        Enrollment.status == status if status is not None else None,
    )
    return await paginate(
        db, stmt, params, order_by=order_clause(Enrollment, params, allowed=SORTABLE_FIELDS),
    )
