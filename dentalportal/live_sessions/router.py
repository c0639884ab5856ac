"""Live session router: HTTP layer only."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.database import get_db
from dentalportal.dependencies import get_current_user, get_optional_user, require_admin
from dentalportal.live_sessions import controller
from dentalportal.live_sessions.schemas import (
    CreateLiveSessionRequest,
    LiveSessionFilters,
    LiveSessionResponse,
    LiveSessionStatistics,
    RescheduleRequest,
    UpdateLiveSessionRequest,
)
from dentalportal.models.enums import LiveSessionStatus
from dentalportal.pagination import ListParams, list_params
from shared.models.pagination import ApiResponse, PaginatedResponse
from shared.models.user import CurrentUser

router = APIRouter(prefix="/live-sessions", tags=["live-sessions"])

Session = ApiResponse[LiveSessionResponse]


@router.post(
    "",
    response_model=Session,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule a live session",
    description="`scheduled_at` must be in the future. A naive time is read in `timezone`.",
)
async def create_session(
    body: CreateLiveSessionRequest,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> Session:
    return await controller.create_session(db, admin, body)


@router.get(
    "",
    response_model=PaginatedResponse[LiveSessionResponse],
    summary="Upcoming and live sessions",
    description="Active sessions that are LIVE or SCHEDULED in the future, soonest first.",
)
async def list_upcoming_sessions(
    params: ListParams = Depends(list_params),
    category: str | None = Query(None),
    topic: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[LiveSessionResponse]:
    filters = LiveSessionFilters(category=category, topic=topic)
    return await controller.list_upcoming_sessions(db, params, filters)


@router.get(
    "/admin",
    response_model=PaginatedResponse[LiveSessionResponse],
    dependencies=[Depends(require_admin)],
    summary="List every live session",
)
async def list_all_sessions(
    params: ListParams = Depends(list_params),
    status_filter: LiveSessionStatus | None = Query(None, alias="status"),
    category: str | None = Query(None),
    topic: str | None = Query(None),
    is_active: bool | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[LiveSessionResponse]:
    filters = LiveSessionFilters(
        status=status_filter, category=category, topic=topic, is_active=is_active,
    )
    return await controller.list_sessions(db, params, filters)


@router.get(
    "/search",
    response_model=ApiResponse[list[LiveSessionResponse]],
    summary="Search upcoming sessions",
    description="At most 20 results.",
)
async def search_sessions(
    q: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[LiveSessionResponse]]:
    return await controller.search_sessions(db, q)


@router.get(
    "/statistics",
    response_model=ApiResponse[LiveSessionStatistics],
    dependencies=[Depends(require_admin)],
    summary="Session counts by status",
)
async def statistics(db: AsyncSession = Depends(get_db)) -> ApiResponse[LiveSessionStatistics]:
    return await controller.statistics(db)


@router.get("/slug/{slug}", response_model=Session, summary="Get a session by slug")
async def get_session_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db),
    viewer: CurrentUser | None = Depends(get_optional_user),
) -> Session:
    return await controller.get_session_by_slug(db, slug, viewer)


@router.get("/{session_id}", response_model=Session, summary="Get a session")
async def get_session(
    session_id: str,
    db: AsyncSession = Depends(get_db),
    viewer: CurrentUser | None = Depends(get_optional_user),
) -> Session:
    return await controller.get_session(db, session_id, viewer)


@router.put("/{session_id}", response_model=Session, summary="Update a session")
async def update_session(
    session_id: str,
    body: UpdateLiveSessionRequest,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Session:
    return await controller.update_session(db, session_id, current_user, body)


@router.patch("/{session_id}/start", response_model=Session, summary="Go live (SCHEDULED → LIVE)")
async def start_session(
    session_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Session:
    return await controller.start_session(db, session_id, current_user)


@router.patch("/{session_id}/end", response_model=Session, summary="End (LIVE → COMPLETED)")
async def end_session(
    session_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Session:
    return await controller.end_session(db, session_id, current_user)


@router.patch(
    "/{session_id}/cancel",
    response_model=Session,
    summary="Cancel a session",
    description="Allowed until the session is COMPLETED. Cancelling twice is a no-op.",
)
async def cancel_session(
    session_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Session:
    return await controller.cancel_session(db, session_id, current_user)


@router.patch("/{session_id}/postpone", response_model=Session, summary="Postpone (SCHEDULED → POSTPONED)")
async def postpone_session(
    session_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Session:
    return await controller.postpone_session(db, session_id, current_user)


@router.patch(
    "/{session_id}/reschedule",
    response_model=Session,
    summary="Reschedule (POSTPONED → SCHEDULED)",
    description="The new time must be in the future.",
)
async def reschedule_session(
    session_id: str,
    body: RescheduleRequest,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Session:
    return await controller.reschedule_session(db, session_id, current_user, body)


@router.delete("/{session_id}", response_model=ApiResponse[None], summary="Delete a session")
async def delete_session(
    session_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[None]:
    return await controller.delete_session(db, session_id, current_user)
