"""initial schema: accounts, content, enrollments, live sessions, showcase, map directory

Revision ID: 3f1a9c2e7b40
Revises:
Create Date: 2026-09-14 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "3f1a9c2e7b40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = postgresql.ENUM("admin", "user", name="user_role", create_type=False)
professional_type = postgresql.ENUM("DENTIST", "ORTHODONTIST", name="professional_type", create_type=False)
content_status = postgresql.ENUM(
    "DRAFT", "PUBLISHED", "ARCHIVED", "UNDER_REVIEW", name="content_status", create_type=False,
)
live_session_status = postgresql.ENUM(
    "SCHEDULED", "LIVE", "COMPLETED", "CANCELLED", "POSTPONED",
    name="live_session_status", create_type=False,
)
enrollment_status = postgresql.ENUM(
    "ACTIVE", "COMPLETED", "CANCELLED", "REFUNDED", name="enrollment_status", create_type=False,
)
gender = postgresql.ENUM("M", "F", name="gender", create_type=False)

ENUMS = (user_role, professional_type, content_status, live_session_status, enrollment_status, gender)


def _id() -> sa.Column:
    return sa.Column("id", sa.Uuid(), primary_key=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _publishable() -> list[sa.Column]:
    return [
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("slug", sa.String(320), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("meta_title", sa.String(300), nullable=True),
        sa.Column("meta_description", sa.String(500), nullable=True),
        sa.Column("status", content_status, nullable=False, server_default="DRAFT"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
    ]


def _owner_fk(name: str) -> sa.Column:
    return sa.Column(name, sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)


def _content_indexes(table: str, owner_column: str) -> None:
    op.create_index(f"ix_{table}_slug", table, ["slug"], unique=True)
    op.create_index(f"ix_{table}_category", table, ["category"])
    op.create_index(f"ix_{table}_status", table, ["status"])
    op.create_index(f"ix_{table}_created_at", table, ["created_at"])
    op.create_index(f"ix_{table}_{owner_column}", table, [owner_column])


def upgrade() -> None:
    bind = op.get_bind()
    for enum_type in ENUMS:
        enum_type.create(bind, checkfirst=True)

    # ── users ────────────────────────────────────────────────────────────
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("role", user_role, nullable=False, server_default="user"),
        sa.Column("professional_type", professional_type, nullable=True),
        sa.Column("clinic_name", sa.String(200), nullable=True),
        sa.Column("location", sa.String(300), nullable=True),
        sa.Column("dci_registration_number", sa.String(50), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("show_on_map", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_email_verified", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("email_verification_token", sa.String(128), nullable=True),
        sa.Column("email_verification_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("password_reset_token", sa.String(128), nullable=True),
        sa.Column("password_reset_expires_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("ix_users_created_at", "users", ["created_at"])
    op.create_index("ix_users_email_verification_token", "users", ["email_verification_token"])
    op.create_index("ix_users_password_reset_token", "users", ["password_reset_token"])

    # ── publishable content ──────────────────────────────────────────────
    op.create_table(
        "blogs",
        _id(),
        *_publishable(),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.String(500), nullable=True),
        sa.Column("featured_image", sa.String(500), nullable=True),
        sa.Column("is_for_dentist", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        _owner_fk("author_id"),
        sa.Column("author_name", sa.String(200), nullable=False, server_default=""),
        *_timestamps(),
    )
    _content_indexes("blogs", "author_id")

    op.create_table(
        "courses",
        _id(),
        *_publishable(),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("short_description", sa.String(500), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("thumbnail_image", sa.String(500), nullable=True),
        sa.Column("video_url", sa.String(500), nullable=True),
        sa.Column("video_file", sa.String(500), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0.00"),
        sa.Column("currency", sa.String(3), nullable=False, server_default="INR"),
        sa.Column("is_free", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("max_enrollments", sa.Integer(), nullable=True),
        sa.Column("enrollment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("rating", sa.Numeric(3, 2), nullable=True),
        sa.Column("review_count", sa.Integer(), nullable=False, server_default="0"),
        _owner_fk("created_by_id"),
        sa.Column("created_by_name", sa.String(200), nullable=False, server_default=""),
        *_timestamps(),
        sa.CheckConstraint("enrollment_count >= 0", name="ck_courses_enrollment_count_non_negative"),
    )
    _content_indexes("courses", "created_by_id")

    op.create_table(
        "ebooks",
        _id(),
        *_publishable(),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("author", sa.String(200), nullable=False),
        sa.Column("cover_image", sa.String(500), nullable=True),
        sa.Column("pdf_url", sa.String(500), nullable=True),
        sa.Column("preview_images", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("page_count", sa.Integer(), nullable=True),
        sa.Column("language", sa.String(50), nullable=False, server_default="English"),
        sa.Column("isbn", sa.String(20), nullable=True),
        sa.Column("edition_published_on", sa.Date(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0.00"),
        sa.Column("is_free", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("is_downloadable", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("download_count", sa.Integer(), nullable=False, server_default="0"),
        _owner_fk("uploaded_by_id"),
        *_timestamps(),
    )
    _content_indexes("ebooks", "uploaded_by_id")

    # ── enrollments ──────────────────────────────────────────────────────
    op.create_table(
        "enrollments",
        _id(),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("course_id", sa.Uuid(), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", enrollment_status, nullable=False, server_default="ACTIVE"),
        sa.Column("progress", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("amount_paid", sa.Numeric(10, 2), nullable=False, server_default="0.00"),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "course_id", name="uq_enrollments_user_course"),
        sa.CheckConstraint("progress >= 0 AND progress <= 100", name="ck_enrollments_progress_range"),
    )
    op.create_index("ix_enrollments_user_id", "enrollments", ["user_id"])
    op.create_index("ix_enrollments_course_status", "enrollments", ["course_id", "status"])
    op.create_index("ix_enrollments_created_at", "enrollments", ["created_at"])

    # ── live sessions ────────────────────────────────────────────────────
    op.create_table(
        "live_sessions",
        _id(),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("slug", sa.String(320), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("topic", sa.String(200), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("thumbnail_image", sa.String(500), nullable=True),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("timezone", sa.String(64), nullable=False, server_default="Asia/Kolkata"),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("meeting_link", sa.String(500), nullable=True),
        sa.Column("meeting_id", sa.String(100), nullable=True),
        sa.Column("max_participants", sa.Integer(), nullable=True),
        sa.Column("is_recorded", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("recording_url", sa.String(500), nullable=True),
        sa.Column("materials", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("status", live_session_status, nullable=False, server_default="SCHEDULED"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("registration_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("attendance_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        _owner_fk("host_id"),
        sa.Column("host_name", sa.String(200), nullable=False, server_default=""),
        *_timestamps(),
    )
    op.create_index("ix_live_sessions_slug", "live_sessions", ["slug"], unique=True)
    op.create_index("ix_live_sessions_category", "live_sessions", ["category"])
    op.create_index("ix_live_sessions_scheduled_at", "live_sessions", ["scheduled_at"])
    op.create_index("ix_live_sessions_status", "live_sessions", ["status"])
    op.create_index("ix_live_sessions_host_id", "live_sessions", ["host_id"])
    op.create_index("ix_live_sessions_created_at", "live_sessions", ["created_at"])

    # ── showcase ─────────────────────────────────────────────────────────
    op.create_table(
        "case_studies",
        _id(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("age", sa.SmallInteger(), nullable=False),
        sa.Column("case_description", sa.Text(), nullable=False),
        sa.Column("gender", gender, nullable=False),
        sa.Column("upper", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("lower", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("image_before", sa.String(500), nullable=True),
        sa.Column("image_after", sa.String(500), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_case_studies_created_at", "case_studies", ["created_at"])

    op.create_table(
        "testimonials",
        _id(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_testimonials_created_at", "testimonials", ["created_at"])

    op.create_table(
        "aligner_process",
        _id(),
        sa.Column("video_url", sa.String(500), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_aligner_process_created_at", "aligner_process", ["created_at"])

    op.create_table(
        "aligner_cases",
        _id(),
        sa.Column("patient_name", sa.String(200), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("quantity > 0", name="ck_aligner_cases_quantity_positive"),
    )
    op.create_index("ix_aligner_cases_user_id", "aligner_cases", ["user_id"])
    op.create_index("ix_aligner_cases_created_at", "aligner_cases", ["created_at"])

    # ── contact queries and map directory ────────────────────────────────
    op.create_table(
        "contact_queries",
        _id(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("message", sa.String(500), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_contact_queries_user_id", "contact_queries", ["user_id"])
    op.create_index("ix_contact_queries_created_at", "contact_queries", ["created_at"])

    op.create_table(
        "map_users",
        _id(),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False, unique=True),
        sa.Column("location", sa.String(300), nullable=False),
        sa.Column("clinic_name", sa.String(200), nullable=False),
        sa.Column("zip_code", sa.String(12), nullable=False),
        sa.Column("show_on_map", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_map_users_location", "map_users", ["location"])
    op.create_index("ix_map_users_show_on_map", "map_users", ["show_on_map"])
    op.create_index("ix_map_users_created_at", "map_users", ["created_at"])


def downgrade() -> None:
    for table in (
        "map_users",
        "contact_queries",
        "aligner_cases",
        "aligner_process",
        "testimonials",
        "case_studies",
        "live_sessions",
        "enrollments",
        "ebooks",
        "courses",
        "blogs",
        "users",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in reversed(ENUMS):
        enum_type.drop(bind, checkfirst=True)
