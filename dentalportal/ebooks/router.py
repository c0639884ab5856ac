"""Ebook router: HTTP layer only."""

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.database import get_db
from dentalportal.dependencies import get_current_user, get_optional_user, require_admin
from dentalportal.ebooks import controller
from dentalportal.ebooks.schemas import (
    CreateEbookRequest,
    EbookDownload,
    EbookFilters,
    EbookResponse,
    EbookStatistics,
    UpdateEbookRequest,
)
from dentalportal.models.enums import ContentStatus
from dentalportal.pagination import ListParams, list_params
from dentalportal.schemas import PublishRequest
from shared.models.pagination import ApiResponse, PaginatedResponse
from shared.models.user import CurrentUser

router = APIRouter(prefix="/ebooks", tags=["ebooks"])


@router.post(
    "",
    response_model=ApiResponse[EbookResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add an ebook",
)
async def create_ebook(
    body: CreateEbookRequest,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> ApiResponse[EbookResponse]:
    return await controller.create_ebook(db, admin, body)


@router.get("", response_model=PaginatedResponse[EbookResponse], summary="List published ebooks")
async def list_published_ebooks(
    params: ListParams = Depends(list_params),
    category: str | None = Query(None),
    language: str | None = Query(None),
    is_free: bool | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[EbookResponse]:
    filters = EbookFilters(category=category, language=language, is_free=is_free)
    return await controller.list_ebooks(db, params, filters, published_only=True)


@router.get(
    "/admin",
    response_model=PaginatedResponse[EbookResponse],
    dependencies=[Depends(require_admin)],
    summary="List ebooks in every status",
)
async def list_all_ebooks(
    params: ListParams = Depends(list_params),
    status_filter: ContentStatus | None = Query(None, alias="status"),
    category: str | None = Query(None),
    language: str | None = Query(None),
    is_free: bool | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[EbookResponse]:
    filters = EbookFilters(status=status_filter, category=category, language=language, is_free=is_free)
    return await controller.list_ebooks(db, params, filters, published_only=False)


@router.get(
    "/search",
    response_model=ApiResponse[list[EbookResponse]],
    summary="Search published ebooks",
    description="Matches title, description, author and category. At most 20 results.",
)
async def search_ebooks(
    q: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[EbookResponse]]:
    return await controller.search_ebooks(db, q)


@router.get(
    "/statistics",
    response_model=ApiResponse[EbookStatistics],
    dependencies=[Depends(require_admin)],
    summary="Ebook counts by status, views and downloads",
)
async def statistics(db: AsyncSession = Depends(get_db)) -> ApiResponse[EbookStatistics]:
    return await controller.statistics(db)


@router.get("/slug/{slug}", response_model=ApiResponse[EbookResponse], summary="Get an ebook by slug")
async def get_ebook_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db),
    viewer: CurrentUser | None = Depends(get_optional_user),
) -> ApiResponse[EbookResponse]:
    return await controller.get_ebook_by_slug(db, slug, viewer)


@router.get(
    "/{ebook_id}/download",
    response_model=ApiResponse[EbookDownload],
    summary="Download a published ebook",
    description="Counts the download and returns the PDF URL.",
)
async def download_ebook(ebook_id: str, db: AsyncSession = Depends(get_db)) -> ApiResponse[EbookDownload]:
    return await controller.download_ebook(db, ebook_id)


@router.get("/{ebook_id}", response_model=ApiResponse[EbookResponse], summary="Get an ebook")
async def get_ebook(
    ebook_id: str,
    db: AsyncSession = Depends(get_db),
    viewer: CurrentUser | None = Depends(get_optional_user),
) -> ApiResponse[EbookResponse]:
    return await controller.get_ebook(db, ebook_id, viewer)


@router.put("/{ebook_id}", response_model=ApiResponse[EbookResponse], summary="Update an ebook")
async def update_ebook(
    ebook_id: str,
    body: UpdateEbookRequest,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[EbookResponse]:
    return await controller.update_ebook(db, ebook_id, current_user, body)


@router.patch("/{ebook_id}/publish", response_model=ApiResponse[EbookResponse], summary="Publish an ebook")
async def publish_ebook(
    ebook_id: str,
    body: PublishRequest | None = Body(None),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[EbookResponse]:
    return await controller.publish_ebook(db, ebook_id, current_user, body)


@router.patch(
    "/{ebook_id}/unpublish",
    response_model=ApiResponse[EbookResponse],
    summary="Move a published ebook back to draft",
)
async def unpublish_ebook(
    ebook_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[EbookResponse]:
    return await controller.unpublish_ebook(db, ebook_id, current_user)


@router.delete("/{ebook_id}", response_model=ApiResponse[None], summary="Delete an ebook")
async def delete_ebook(
    ebook_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[None]:
    return await controller.delete_ebook(db, ebook_id, current_user)
