import enum

import sqlalchemy as sa


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


class ProfessionalType(str, enum.Enum):
    DENTIST = "DENTIST"
    ORTHODONTIST = "ORTHODONTIST"


class ContentStatus(str, enum.Enum):
    """Lifecycle shared by blogs, courses and ebooks."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"
    UNDER_REVIEW = "UNDER_REVIEW"


class LiveSessionStatus(str, enum.Enum):
    SCHEDULED = "SCHEDULED"
    LIVE = "LIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    POSTPONED = "POSTPONED"


class EnrollmentStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


class Gender(str, enum.Enum):
    MALE = "M"
    FEMALE = "F"


def _enum_type(enum_cls: type[enum.Enum], name: str) -> sa.Enum:
    return sa.Enum(
        enum_cls,
        name=name,
        values_callable=lambda e: [x.value for x in e],
        validate_strings=True,
    )


# SQLAlchemy Enum instances (reuse across models to avoid duplicate type creation)
user_role_enum = _enum_type(UserRole, "user_role")
professional_type_enum = _enum_type(ProfessionalType, "professional_type")
content_status_enum = _enum_type(ContentStatus, "content_status")
live_session_status_enum = _enum_type(LiveSessionStatus, "live_session_status")
enrollment_status_enum = _enum_type(EnrollmentStatus, "enrollment_status")
gender_enum = _enum_type(Gender, "gender")
