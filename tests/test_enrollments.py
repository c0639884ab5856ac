from decimal import Decimal

import pytest

from dentalportal.enrollments import service
from dentalportal.exceptions import (
    AlreadyEnrolledError,
    BadRequestError,
    CourseNotPublishedError,
    EnrollmentLimitReachedError,
    ForbiddenError,
)
from dentalportal.models.course import Course
from dentalportal.models.enums import ContentStatus, EnrollmentStatus

from .conftest import create_user
from .test_courses import COURSES, create_course


async def _course(db, **fields) -> Course:
    course = Course(
        title="Implant Basics",
        slug=f"implant-basics-{len(fields)}",
        description="d" * 60,
        content="c" * 60,
        tags=[],
        status=ContentStatus.PUBLISHED,
        **fields,
    )
    db.add(course)
    await db.flush()
    return course


async def test_capacity_is_released_on_cancel_but_rejoining_is_blocked(db_session, session_factory) -> None:
    first = await create_user(session_factory, "first@clinic.in")
    second = await create_user(session_factory, "second@clinic.in")
    course = await _course(db_session, max_enrollments=1)

    enrollment = await service.enroll(db_session, course.id, first.id)
    assert course.enrollment_count == 1

    with pytest.raises(EnrollmentLimitReachedError) as excinfo:
        await service.enroll(db_session, course.id, second.id)
    assert excinfo.value.message == "Course enrollment limit reached"

    await service.cancel_enrollment(db_session, enrollment.id, first.id)
    assert course.enrollment_count == 0

    with pytest.raises(AlreadyEnrolledError):
        await service.enroll(db_session, course.id, first.id)

    # The freed seat is available to someone new
    await service.enroll(db_session, course.id, second.id)
    assert course.enrollment_count == 1


async def test_draft_courses_cannot_be_joined(db_session, session_factory) -> None:
    user = await create_user(session_factory, "first@clinic.in")
    course = await _course(db_session)
    course.status = ContentStatus.DRAFT
    await db_session.flush()

    with pytest.raises(CourseNotPublishedError):
        await service.enroll(db_session, course.id, user.id)


async def test_paid_course_records_amount(db_session, session_factory) -> None:
    user = await create_user(session_factory, "first@clinic.in")
    course = await _course(db_session, is_free=False, price=Decimal("2499.00"))

    enrollment = await service.enroll(db_session, course.id, user.id)

    assert enrollment.amount_paid == Decimal("2499.00")


async def test_progress_completion_is_stamped_once(db_session, session_factory) -> None:
    user = await create_user(session_factory, "first@clinic.in")
    course = await _course(db_session)
    enrollment = await service.enroll(db_session, course.id, user.id)

    halfway = await service.update_progress(db_session, enrollment.id, user.id, 50)
    assert halfway.status == EnrollmentStatus.ACTIVE

    done = await service.update_progress(db_session, enrollment.id, user.id, 100)
    completed_at = done.completed_at
    assert done.status == EnrollmentStatus.COMPLETED
    assert completed_at is not None

    again = await service.update_progress(db_session, enrollment.id, user.id, 100)
    assert again.completed_at == completed_at


async def test_enrollments_belong_to_their_user(db_session, session_factory) -> None:
    owner = await create_user(session_factory, "first@clinic.in")
    intruder = await create_user(session_factory, "second@clinic.in")
    course = await _course(db_session)
    enrollment = await service.enroll(db_session, course.id, owner.id)

    with pytest.raises(ForbiddenError):
        await service.update_progress(db_session, enrollment.id, intruder.id, 10)
    with pytest.raises(ForbiddenError):
        await service.cancel_enrollment(db_session, enrollment.id, intruder.id)


async def test_cancelled_enrollment_is_frozen(db_session, session_factory) -> None:
    user = await create_user(session_factory, "first@clinic.in")
    course = await _course(db_session)
    enrollment = await service.enroll(db_session, course.id, user.id)
    await service.cancel_enrollment(db_session, enrollment.id, user.id)

    with pytest.raises(BadRequestError, match="not active"):
        await service.update_progress(db_session, enrollment.id, user.id, 80)
    with pytest.raises(BadRequestError, match="already cancelled"):
        await service.cancel_enrollment(db_session, enrollment.id, user.id)
    assert course.enrollment_count == 0


async def test_enrollment_endpoints(client, admin_headers, dentist_headers, other_headers) -> None:
    course = await create_course(client, admin_headers, status="PUBLISHED", max_enrollments=1)
    enroll_url = f"{COURSES}/{course['id']}/enroll"

    joined = await client.post(enroll_url, headers=dentist_headers)
    assert joined.status_code == 201
    enrollment = joined.json()["data"]
    assert enrollment["status"] == "ACTIVE"
    assert enrollment["enrolled_at"]

    full = await client.post(enroll_url, headers=other_headers)
    assert full.status_code == 400
    assert full.json()["message"] == "Course enrollment limit reached"

    progress = await client.patch(
        f"{COURSES}/enrollments/{enrollment['id']}/progress",
        json={"progress": 40},
        headers=dentist_headers,
    )
    assert progress.json()["data"]["progress"] == 40

    mine = await client.get(f"{COURSES}/enrollment/my-enrollments", headers=dentist_headers)
    assert mine.json()["pagination"]["total"] == 1
    assert mine.json()["data"][0]["course"]["title"] == "Aligner Essentials"

    roster = await client.get(f"{COURSES}/{course['id']}/enrollments", headers=admin_headers)
    assert roster.json()["pagination"]["total"] == 1

    cancelled = await client.delete(f"{COURSES}/enrollments/{enrollment['id']}", headers=dentist_headers)
    assert cancelled.json()["data"]["status"] == "CANCELLED"

    rejoin = await client.post(enroll_url, headers=dentist_headers)
    assert rejoin.status_code == 409
    assert rejoin.json()["message"] == "You are already enrolled in this course"

    stored = await client.get(f"{COURSES}/{course['id']}")
    assert stored.json()["data"]["enrollment_count"] == 0


async def test_enrolling_in_unknown_course(client, dentist_headers) -> None:
    response = await client.post(
        f"{COURSES}/00000000-0000-0000-0000-000000000000/enroll", headers=dentist_headers,
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Course not found"
