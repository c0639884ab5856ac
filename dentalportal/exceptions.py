"""Domain exception classes.

Raised by service-layer code and caught by controllers, which map them to
HTTP responses via :func:`to_http_exception`. Each concrete error derives from
one of five categories that fix its status code.
"""

from fastapi import HTTPException, status


class DomainError(Exception):
    """Base for every error a service may raise on purpose."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found."

    def __init__(self, resource: str = "Resource", message: str | None = None):
        self.resource = resource
        super().__init__(message or f"{resource} not found")


class BadRequestError(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request."


class ForbiddenError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to perform this action."


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists."


class UnauthorizedError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated."


# ---------------------------------------------------------------------------
# Concrete errors
# ---------------------------------------------------------------------------


class InvalidStatusTransitionError(BadRequestError):
    """Raised when a lifecycle action is not allowed from the current state."""

    def __init__(self, current: str, action: str, message: str | None = None):
        self.current = current
        self.action = action
        super().__init__(message or f"Cannot {action.lower()} from {current}")


class AlreadyPublishedError(ConflictError):
    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} is already published")


class SlugTakenError(ConflictError):
    """Raised when a concurrent writer claimed the slug first; safe to retry."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Slug '{slug}' was taken concurrently, please retry")


class AlreadyEnrolledError(ConflictError):
    default_message = "You are already enrolled in this course"


class CourseNotPublishedError(BadRequestError):
    default_message = "Course is not published"


class EnrollmentLimitReachedError(BadRequestError):
    default_message = "Course enrollment limit reached"


class GeocodingFailedError(BadRequestError):
    default_message = "Could not geocode the provided location"


class UploadFailedError(BadRequestError):
    default_message = "Failed to upload file"


def to_http_exception(exc: DomainError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)
