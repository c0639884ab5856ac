"""Course router: HTTP layer only.

JSON and multipart variants exist for create and update; the multipart ones
accept thumbnail and video files that are uploaded after the response.
"""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Form, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.config import Settings
from dentalportal.courses import controller
from dentalportal.courses.schemas import (
    CourseFilters,
    CourseResponse,
    CourseStatistics,
    CreateCourseRequest,
    CreateCourseWithMediaForm,
    UpdateCourseRequest,
    UpdateCourseWithMediaForm,
)
from dentalportal.database import get_db
from dentalportal.dependencies import (
    get_current_user,
    get_optional_user,
    get_settings,
    get_uploader,
    require_admin,
)
from dentalportal.integrations.storage import Uploader
from dentalportal.models.enums import ContentStatus
from dentalportal.pagination import ListParams, list_params
from dentalportal.schemas import PublishRequest
from shared.models.pagination import ApiResponse, PaginatedResponse
from shared.models.user import CurrentUser

router = APIRouter(prefix="/courses", tags=["courses"])


# ======================================================================
# Create
# ======================================================================


@router.post(
    "",
    response_model=ApiResponse[CourseResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a course",
    description="Admin only. Created as DRAFT unless `status` is given. "
    "Slug is generated from the title if not provided.",
)
async def create_course(
    body: CreateCourseRequest,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> ApiResponse[CourseResponse]:
    return await controller.create_course(db, admin, body)


@router.post(
    "/with-media",
    response_model=ApiResponse[CourseResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a course with thumbnail and video files",
    description="Multipart form. The course is saved immediately; files are uploaded "
    "in the background and their URLs patched onto the course when done.",
)
async def create_course_with_media(
    form: Annotated[CreateCourseWithMediaForm, Form()],
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
    settings: Settings = Depends(get_settings),
    uploader: Uploader = Depends(get_uploader),
) -> ApiResponse[CourseResponse]:
    return await controller.create_course_with_media(
        db, admin, form, settings, uploader, background_tasks,
    )


# ======================================================================
# Read
# ======================================================================


@router.get(
    "",
    response_model=PaginatedResponse[CourseResponse],
    summary="Course catalogue",
    description="Published, active courses only.",
)
async def list_published_courses(
    params: ListParams = Depends(list_params),
    category: str | None = Query(None),
    is_free: bool | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[CourseResponse]:
    filters = CourseFilters(category=category, is_free=is_free)
    return await controller.list_courses(db, params, filters, published_only=True)


@router.get(
    "/admin",
    response_model=PaginatedResponse[CourseResponse],
    dependencies=[Depends(require_admin)],
    summary="List courses in every status",
)
async def list_all_courses(
    params: ListParams = Depends(list_params),
    status_filter: ContentStatus | None = Query(None, alias="status"),
    category: str | None = Query(None),
    is_free: bool | None = Query(None),
    is_active: bool | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[CourseResponse]:
    filters = CourseFilters(
        status=status_filter, category=category, is_free=is_free, is_active=is_active,
    )
    return await controller.list_courses(db, params, filters, published_only=False)


@router.get(
    "/search",
    response_model=ApiResponse[list[CourseResponse]],
    summary="Search published courses",
    description="Matches title, description, short description and category. At most 20 results.",
)
async def search_courses(
    q: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[CourseResponse]]:
    return await controller.search_courses(db, q)


@router.get(
    "/statistics",
    response_model=ApiResponse[CourseStatistics],
    dependencies=[Depends(require_admin)],
    summary="Course counts by status, views and enrollments",
)
async def statistics(db: AsyncSession = Depends(get_db)) -> ApiResponse[CourseStatistics]:
    return await controller.statistics(db)


@router.get("/slug/{slug}", response_model=ApiResponse[CourseResponse], summary="Get a course by slug")
async def get_course_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db),
    viewer: CurrentUser | None = Depends(get_optional_user),
) -> ApiResponse[CourseResponse]:
    return await controller.get_course_by_slug(db, slug, viewer)


@router.get("/{course_id}", response_model=ApiResponse[CourseResponse], summary="Get a course")
async def get_course(
    course_id: str,
    db: AsyncSession = Depends(get_db),
    viewer: CurrentUser | None = Depends(get_optional_user),
) -> ApiResponse[CourseResponse]:
    return await controller.get_course(db, course_id, viewer)


# ======================================================================
# Update / lifecycle / delete
# ======================================================================


@router.put("/{course_id}", response_model=ApiResponse[CourseResponse], summary="Update a course")
async def update_course(
    course_id: str,
    body: UpdateCourseRequest,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[CourseResponse]:
    return await controller.update_course(db, course_id, current_user, body)


@router.put(
    "/{course_id}/with-media",
    response_model=ApiResponse[CourseResponse],
    summary="Update a course and replace its thumbnail or video",
)
async def update_course_with_media(
    course_id: str,
    form: Annotated[UpdateCourseWithMediaForm, Form()],
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    uploader: Uploader = Depends(get_uploader),
) -> ApiResponse[CourseResponse]:
    return await controller.update_course_with_media(
        db, course_id, current_user, form, settings, uploader, background_tasks,
    )


@router.patch("/{course_id}/publish", response_model=ApiResponse[CourseResponse], summary="Publish a course")
async def publish_course(
    course_id: str,
    body: PublishRequest | None = Body(None),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[CourseResponse]:
    return await controller.publish_course(db, course_id, current_user, body)


@router.patch(
    "/{course_id}/unpublish",
    response_model=ApiResponse[CourseResponse],
    summary="Move a published course back to draft",
)
async def unpublish_course(
    course_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[CourseResponse]:
    return await controller.unpublish_course(db, course_id, current_user)


@router.delete("/{course_id}", response_model=ApiResponse[None], summary="Delete a course")
async def delete_course(
    course_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[None]:
    return await controller.delete_course(db, course_id, current_user)
