"""Course controller: maps service results to envelopes, catches domain errors."""

from __future__ import annotations

from fastapi import BackgroundTasks, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.config import Settings
from dentalportal.courses import service
from dentalportal.courses.media import PendingUpload, upload_course_media
from dentalportal.courses.schemas import (
    CourseFilters,
    CourseResponse,
    CourseStatistics,
    CreateCourseRequest,
    CreateCourseWithMediaForm,
    UpdateCourseRequest,
    UpdateCourseWithMediaForm,
)
from dentalportal.database import get_session_factory
from dentalportal.exceptions import BadRequestError, DomainError, to_http_exception
from dentalportal.integrations.storage import Uploader
from dentalportal.pagination import ListParams
from dentalportal.schemas import PublishRequest, parse_uuid
from shared.models.pagination import ApiResponse, PaginatedResponse
from shared.models.user import CurrentUser


async def _read_uploads(
    settings: Settings, thumbnail: UploadFile | None, video: UploadFile | None,
) -> list[PendingUpload]:
    """Read the request's files now; the request body is gone once the response is sent."""
    pending: list[PendingUpload] = []
    for field, upload in (("thumbnail_image", thumbnail), ("video_file", video)):
        if upload is None or not upload.filename:
            continue
        data = await upload.read()
        if len(data) > settings.max_upload_bytes:
            raise BadRequestError(f"{upload.filename} exceeds the maximum upload size")
        if data:
            pending.append(
                PendingUpload(
                    field=field,
                    data=data,
                    filename=upload.filename,
                    content_type=upload.content_type,
                )
            )
    return pending


def _schedule_media(
    background_tasks: BackgroundTasks, course_id, pending: list[PendingUpload], uploader: Uploader,
) -> None:
    if pending:
        background_tasks.add_task(
            upload_course_media, course_id, pending, uploader, get_session_factory(),
        )


async def create_course(
    db: AsyncSession, creator: CurrentUser, body: CreateCourseRequest,
) -> ApiResponse[CourseResponse]:
    try:
        course = await service.create_course(db, creator, body)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Course created successfully", data=CourseResponse.model_validate(course))


async def create_course_with_media(
    db: AsyncSession,
    creator: CurrentUser,
    form: CreateCourseWithMediaForm,
    settings: Settings,
    uploader: Uploader,
    background_tasks: BackgroundTasks,
) -> ApiResponse[CourseResponse]:
    try:
        pending = await _read_uploads(settings, form.thumbnail, form.video)
        course = await service.create_course(db, creator, form.course_fields())
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    # The upload task reads the course from its own session
    await db.commit()
    _schedule_media(background_tasks, course.id, pending, uploader)
    message = (
        "Course created successfully. Media is uploading in the background."
        if pending else "Course created successfully"
    )
    return ApiResponse(message=message, data=CourseResponse.model_validate(course))


async def list_courses(
    db: AsyncSession, params: ListParams, filters: CourseFilters, *, published_only: bool,
) -> PaginatedResponse[CourseResponse]:
    courses, meta = await service.list_courses(db, params, filters, published_only=published_only)
    return PaginatedResponse(
        message="Courses retrieved successfully",
        data=[CourseResponse.model_validate(c) for c in courses],
        pagination=meta,
    )


async def search_courses(db: AsyncSession, term: str) -> ApiResponse[list[CourseResponse]]:
    courses = await service.search_courses(db, term)
    return ApiResponse(
        message="Courses retrieved successfully",
        data=[CourseResponse.model_validate(c) for c in courses],
    )


async def get_course(
    db: AsyncSession, course_id: str, viewer: CurrentUser | None,
) -> ApiResponse[CourseResponse]:
    try:
        course = await service.get_course(db, parse_uuid(course_id, "Course"), viewer)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Course retrieved successfully", data=CourseResponse.model_validate(course))


async def get_course_by_slug(
    db: AsyncSession, slug: str, viewer: CurrentUser | None,
) -> ApiResponse[CourseResponse]:
    try:
        course = await service.get_course_by_slug(db, slug, viewer)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Course retrieved successfully", data=CourseResponse.model_validate(course))


async def update_course(
    db: AsyncSession, course_id: str, actor: CurrentUser, body: UpdateCourseRequest,
) -> ApiResponse[CourseResponse]:
    try:
        course = await service.update_course(
            db, parse_uuid(course_id, "Course"), actor, body.model_dump(exclude_unset=True),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Course updated successfully", data=CourseResponse.model_validate(course))


async def update_course_with_media(
    db: AsyncSession,
    course_id: str,
    actor: CurrentUser,
    form: UpdateCourseWithMediaForm,
    settings: Settings,
    uploader: Uploader,
    background_tasks: BackgroundTasks,
) -> ApiResponse[CourseResponse]:
    try:
        pending = await _read_uploads(settings, form.thumbnail, form.video)
        course = await service.update_course(
            db, parse_uuid(course_id, "Course"), actor, form.changed_fields(),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    # The upload task reads the course from its own session
    await db.commit()
    _schedule_media(background_tasks, course.id, pending, uploader)
    return ApiResponse(message="Course updated successfully", data=CourseResponse.model_validate(course))


async def publish_course(
    db: AsyncSession, course_id: str, actor: CurrentUser, body: PublishRequest | None,
) -> ApiResponse[CourseResponse]:
    try:
        course = await service.publish_course(
            db, parse_uuid(course_id, "Course"), actor, body.published_at if body else None,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Course published successfully", data=CourseResponse.model_validate(course))


async def unpublish_course(
    db: AsyncSession, course_id: str, actor: CurrentUser,
) -> ApiResponse[CourseResponse]:
    try:
        course = await service.unpublish_course(db, parse_uuid(course_id, "Course"), actor)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Course unpublished successfully", data=CourseResponse.model_validate(course))


async def delete_course(db: AsyncSession, course_id: str, actor: CurrentUser) -> ApiResponse[None]:
    try:
        await service.delete_course(db, parse_uuid(course_id, "Course"), actor)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Course deleted successfully")


async def statistics(db: AsyncSession) -> ApiResponse[CourseStatistics]:
    return ApiResponse(
        message="Course statistics retrieved successfully",
        data=await service.course_statistics(db),
    )
