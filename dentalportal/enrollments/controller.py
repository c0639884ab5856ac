"""Enrollment controller."""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.courses.schemas import CourseSummary, EnrollmentResponse, EnrollmentWithCourse
from dentalportal.enrollments import service
from dentalportal.exceptions import DomainError, to_http_exception
from dentalportal.models.enums import EnrollmentStatus
from dentalportal.pagination import ListParams
from dentalportal.schemas import parse_uuid
from shared.models.pagination import ApiResponse, PaginatedResponse


async def enroll(db: AsyncSession, course_id: str, user_id: uuid.UUID) -> ApiResponse[EnrollmentResponse]:
    try:
        enrollment = await service.enroll(db, parse_uuid(course_id, "Course"), user_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="Successfully enrolled in course",
        data=EnrollmentResponse.model_validate(enrollment),
    )


async def my_enrollments(
    db: AsyncSession, user_id: uuid.UUID, params: ListParams, status: EnrollmentStatus | None,
) -> PaginatedResponse[EnrollmentWithCourse]:
    enrollments, courses, meta = await service.list_user_enrollments(db, user_id, params, status)
    data = []
    for enrollment in enrollments:
        item = EnrollmentWithCourse.model_validate(enrollment)
        course = courses.get(enrollment.course_id)
        if course is not None:
            item.course = CourseSummary.model_validate(course)
        data.append(item)
    return PaginatedResponse(message="Enrollments retrieved successfully", data=data, pagination=meta)


async def update_progress(
    db: AsyncSession, enrollment_id: str, user_id: uuid.UUID, progress: int,
) -> ApiResponse[EnrollmentResponse]:
    try:
        enrollment = await service.update_progress(
            db, parse_uuid(enrollment_id, "Enrollment"), user_id, progress,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="Progress updated successfully",
        data=EnrollmentResponse.model_validate(enrollment),
    )


async def cancel_enrollment(
    db: AsyncSession, enrollment_id: str, user_id: uuid.UUID,
) -> ApiResponse[EnrollmentResponse]:
    try:
        enrollment = await service.cancel_enrollment(
            db, parse_uuid(enrollment_id, "Enrollment"), user_id,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="Enrollment cancelled successfully",
        data=EnrollmentResponse.model_validate(enrollment),
    )


async def course_enrollments(
    db: AsyncSession, course_id: str, params: ListParams, status: EnrollmentStatus | None,
) -> PaginatedResponse[EnrollmentResponse]:
    try:
        enrollments, meta = await service.list_course_enrollments(
            db, parse_uuid(course_id, "Course"), params, status,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return PaginatedResponse(
        message="Course enrollments retrieved successfully",
        data=[EnrollmentResponse.model_validate(e) for e in enrollments],
        pagination=meta,
    )
