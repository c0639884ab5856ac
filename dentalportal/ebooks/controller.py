"""Ebook controller."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal.ebooks import service
from dentalportal.ebooks.schemas import (
    CreateEbookRequest,
    EbookDownload,
    EbookFilters,
    EbookResponse,
    EbookStatistics,
    UpdateEbookRequest,
)
from dentalportal.exceptions import DomainError, to_http_exception
from dentalportal.pagination import ListParams
from dentalportal.schemas import PublishRequest, parse_uuid
from shared.models.pagination import ApiResponse, PaginatedResponse
from shared.models.user import CurrentUser


def _one(message: str, ebook) -> ApiResponse[EbookResponse]:
    return ApiResponse(message=message, data=EbookResponse.model_validate(ebook))


async def create_ebook(
    db: AsyncSession, uploader: CurrentUser, body: CreateEbookRequest,
) -> ApiResponse[EbookResponse]:
    try:
        ebook = await service.create_ebook(db, uploader, body)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Ebook created successfully", ebook)


async def list_ebooks(
    db: AsyncSession, params: ListParams, filters: EbookFilters, *, published_only: bool,
) -> PaginatedResponse[EbookResponse]:
    ebooks, meta = await service.list_ebooks(db, params, filters, published_only=published_only)
    return PaginatedResponse(
        message="Ebooks retrieved successfully",
        data=[EbookResponse.model_validate(e) for e in ebooks],
        pagination=meta,
    )


async def search_ebooks(db: AsyncSession, term: str) -> ApiResponse[list[EbookResponse]]:
    ebooks = await service.search_ebooks(db, term)
    return ApiResponse(
        message="Ebooks retrieved successfully",
        data=[EbookResponse.model_validate(e) for e in ebooks],
    )


async def get_ebook(
    db: AsyncSession, ebook_id: str, viewer: CurrentUser | None,
) -> ApiResponse[EbookResponse]:
    try:
        ebook = await service.get_ebook(db, parse_uuid(ebook_id, "Ebook"), viewer)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Ebook retrieved successfully", ebook)


async def get_ebook_by_slug(
    db: AsyncSession, slug: str, viewer: CurrentUser | None,
) -> ApiResponse[EbookResponse]:
    try:
        ebook = await service.get_ebook_by_slug(db, slug, viewer)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Ebook retrieved successfully", ebook)


async def update_ebook(
    db: AsyncSession, ebook_id: str, actor: CurrentUser, body: UpdateEbookRequest,
) -> ApiResponse[EbookResponse]:
    try:
        ebook = await service.update_ebook(
            db, parse_uuid(ebook_id, "Ebook"), actor, body.model_dump(exclude_unset=True),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Ebook updated successfully", ebook)


async def publish_ebook(
    db: AsyncSession, ebook_id: str, actor: CurrentUser, body: PublishRequest | None,
) -> ApiResponse[EbookResponse]:
    try:
        ebook = await service.publish_ebook(
            db, parse_uuid(ebook_id, "Ebook"), actor, body.published_at if body else None,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Ebook published successfully", ebook)


async def unpublish_ebook(
    db: AsyncSession, ebook_id: str, actor: CurrentUser,
) -> ApiResponse[EbookResponse]:
    try:
        ebook = await service.unpublish_ebook(db, parse_uuid(ebook_id, "Ebook"), actor)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _one("Ebook unpublished successfully", ebook)


async def delete_ebook(db: AsyncSession, ebook_id: str, actor: CurrentUser) -> ApiResponse[None]:
    try:
        await service.delete_ebook(db, parse_uuid(ebook_id, "Ebook"), actor)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Ebook deleted successfully")


async def download_ebook(db: AsyncSession, ebook_id: str) -> ApiResponse[EbookDownload]:
    try:
        ebook = await service.download_ebook(db, parse_uuid(ebook_id, "Ebook"))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="Ebook download link generated",
        data=EbookDownload(
            id=ebook.id, title=ebook.title, pdf_url=ebook.pdf_url, download_count=ebook.download_count,
        ),
    )


async def statistics(db: AsyncSession) -> ApiResponse[EbookStatistics]:
    return ApiResponse(
        message="Ebook statistics retrieved successfully", data=await service.ebook_statistics(db),
    )
