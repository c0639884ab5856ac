import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

# Configure application logging so background task logs are visible
logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s: %(message)s")
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from dentalportal.aligner.router import cases_router as aligner_cases_router
from dentalportal.aligner.router import process_router as aligner_process_router
from dentalportal.auth.router import router as auth_router
from dentalportal.blogs.router import router as blogs_router
from dentalportal.case_studies.router import router as case_studies_router
from dentalportal.config import get_settings
from dentalportal.contacts.router import router as contacts_router
from dentalportal.courses.router import router as courses_router
from dentalportal.database import close_db, init_db
from dentalportal.ebooks.router import router as ebooks_router
from dentalportal.enrollments.router import router as enrollments_router
from dentalportal.live_sessions.router import router as live_sessions_router
from dentalportal.map_users.router import router as map_users_router
from dentalportal.media.router import router as media_router
from dentalportal.rate_limit import limiter
from dentalportal.testimonials.router import router as testimonials_router
from dentalportal.users.router import router as users_router
from shared.middleware.error_handler import error_envelope_middleware, install_error_handlers
from shared.middleware.request_id import request_id_middleware


# ── OpenAPI metadata ──────────────────────────────────────────────────────────

_DESCRIPTION = """
## DentistPortal API

Backend for a dental professional portal.

* **Accounts**: signup with admin, dentist or orthodontist roles, email verification,
  password reset, cookie or Bearer JWT sessions.
* **Content**: blogs, courses and ebooks with a DRAFT → PUBLISHED → ARCHIVED lifecycle,
  unique slugs and view counters.
* **Courses**: enrollment with capacity limits, progress tracking and background media upload.
* **Live sessions**: scheduling in the presenter's timezone, start/end/cancel/postpone/reschedule.
* **Showcase**: case studies, testimonials, aligner cases and the aligner process video.
* **Directory**: geocoded practices shown on the public map.

### Authentication
Protected endpoints read the JWT from the `access_token` cookie or from:
```
Authorization: Bearer <access_token>
```
Admin endpoints additionally require the `admin` role in the token.

### Response shape
Successful responses are wrapped as `{"success": true, "message": ..., "data": ...}`;
list endpoints add `pagination`. Errors return
`{"success": false, "message": ..., "request_id": ...}`.
"""

_TAGS_METADATA = [
    {"name": "auth", "description": "Signup, login, logout, email verification and password reset."},
    {"name": "users", "description": "Own map location, public map coordinates and user administration."},
    {"name": "blogs", "description": "Blog posts and their publication lifecycle."},
    {"name": "courses", "description": "Course catalogue, lifecycle and media."},
    {"name": "enrollments", "description": "Enrolling in courses and tracking progress."},
    {"name": "ebooks", "description": "Ebook catalogue and downloads."},
    {"name": "live-sessions", "description": "Scheduled live sessions."},
    {"name": "case-studies", "description": "Treatment case studies."},
    {"name": "testimonials", "description": "Patient and practitioner testimonials."},
    {"name": "aligner-cases", "description": "Aligner cases submitted for practitioners."},
    {"name": "aligner-process", "description": "The aligner process explainer video."},
    {"name": "contacts", "description": "Contact form."},
    {"name": "map-users", "description": "The curated find-a-dentist directory."},
    {"name": "media", "description": "Admin upload proxy to object storage."},
]


# ── Health schema ─────────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str
    service: str


# ── App factory ───────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    init_db(settings.database_url)
    yield
    await close_db()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="DentistPortal API",
        version="1.0.0",
        description=_DESCRIPTION,
        openapi_tags=_TAGS_METADATA,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Attach rate limiter state before middleware
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    install_error_handlers(app)

    # Middleware (applied in reverse-registration order: last added = outermost)
    app.add_middleware(SlowAPIMiddleware)
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(error_envelope_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    for router in (
        auth_router,
        users_router,
        blogs_router,
        enrollments_router,
        courses_router,
        ebooks_router,
        live_sessions_router,
        case_studies_router,
        testimonials_router,
        aligner_cases_router,
        aligner_process_router,
        contacts_router,
        map_users_router,
        media_router,
    ):
        app.include_router(router, prefix="/api/v1")

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="dentalportal")

    return app


app = create_app()
