"""Enrollment router: mounted under ``/courses`` next to the course routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.courses.schemas import EnrollmentResponse, EnrollmentWithCourse, UpdateProgressRequest
from dentalportal.database import get_db
from dentalportal.dependencies import get_current_user, require_admin
from dentalportal.enrollments import controller
from dentalportal.models.enums import EnrollmentStatus
from dentalportal.pagination import ListParams, list_params
from shared.models.pagination import ApiResponse, PaginatedResponse
from shared.models.user import CurrentUser

router = APIRouter(prefix="/courses", tags=["enrollments"])


@router.post(
    "/{course_id}/enroll",
    response_model=ApiResponse[EnrollmentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Enroll in a published course",
    description="Fails with 409 if the user was ever enrolled (cancelled enrollments included) "
    "and with 400 once the course reaches `max_enrollments` active enrollments.",
)
async def enroll(
    course_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[EnrollmentResponse]:
    return await controller.enroll(db, course_id, current_user.id)


@router.get(
    "/enrollment/my-enrollments",
    response_model=PaginatedResponse[EnrollmentWithCourse],
    summary="My enrollments",
)
async def my_enrollments(
    params: ListParams = Depends(list_params),
    status_filter: EnrollmentStatus | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> PaginatedResponse[EnrollmentWithCourse]:
    return await controller.my_enrollments(db, current_user.id, params, status_filter)


@router.patch(
    "/enrollments/{enrollment_id}/progress",
    response_model=ApiResponse[EnrollmentResponse],
    summary="Update my progress",
    description="Reaching 100 marks the enrollment COMPLETED.",
)
async def update_progress(
    enrollment_id: str,
    body: UpdateProgressRequest,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[EnrollmentResponse]:
    return await controller.update_progress(db, enrollment_id, current_user.id, body.progress)


@router.delete(
    "/enrollments/{enrollment_id}",
    response_model=ApiResponse[EnrollmentResponse],
    summary="Cancel my enrollment",
    description="The enrollment is kept as CANCELLED, so re-enrolling is not possible.",
)
async def cancel_enrollment(
    enrollment_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[EnrollmentResponse]:
    return await controller.cancel_enrollment(db, enrollment_id, current_user.id)


@router.get(
    "/{course_id}/enrollments",
    response_model=PaginatedResponse[EnrollmentResponse],
    dependencies=[Depends(require_admin)],
    summary="Enrollments of a course",
)
async def course_enrollments(
    course_id: str,
    params: ListParams = Depends(list_params),
    status_filter: EnrollmentStatus | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[EnrollmentResponse]:
    return await controller.course_enrollments(db, course_id, params, status_filter)
