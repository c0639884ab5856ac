"""Ebook service: pure business logic, no FastAPI imports."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dentalportal import publishing
from dentalportal.ebooks.schemas import CreateEbookRequest, EbookFilters, EbookStatistics
from dentalportal.exceptions import BadRequestError, NotFoundError
from dentalportal.models.ebook import Ebook
from dentalportal.models.enums import ContentStatus
from dentalportal.pagination import (
    SEARCH_RESULT_CAP,
    ListParams,
    apply_filters,
    order_clause,
    paginate,
    search_clause,
)
from dentalportal.policy import ensure_can_modify, ensure_visible
from dentalportal.slugs import flush_guarding_slug, resolve_slug
from shared.models.pagination import PageMeta
from shared.models.user import CurrentUser

RESOURCE = "Ebook"
SORTABLE_FIELDS = (
    "created_at", "updated_at", "published_at", "title", "author",
    "price", "view_count", "download_count",
)
SEARCH_COLUMNS = (Ebook.title, Ebook.description, Ebook.author, Ebook.category)
REQUIRED_FIELDS = (
    "title", "description", "author", "tags", "preview_images", "language",
    "price", "is_free", "is_downloadable", "status",
)


async def create_ebook(db: AsyncSession, uploader: CurrentUser, body: CreateEbookRequest) -> Ebook:
    ebook = Ebook(
        **body.model_dump(exclude={"slug", "status"}),
        slug=await resolve_slug(db, Ebook, title=body.title, explicit=body.slug),
        uploaded_by_id=uploader.id,
    )
    publishing.initial_status(ebook, body.status)
    db.add(ebook)
    await flush_guarding_slug(db, ebook)
    return ebook


async def list_ebooks(
    db: AsyncSession,
    params: ListParams,
    filters: EbookFilters,
    *,
    published_only: bool,
) -> tuple[list[Ebook], PageMeta]:
    status = ContentStatus.PUBLISHED if published_only else filters.status
    stmt = apply_filters(
        select(Ebook),
        Ebook.status == status if status is not None else None,
        Ebook.category == filters.category if filters.category else None,
        Ebook.language == filters.language if filters.language else None,
        Ebook.is_free == filters.is_free if filters.is_free is not None else None,
        search_clause(SEARCH_COLUMNS, params.search),
    )
    return await paginate(
        db, stmt, params, order_by=order_clause(Ebook, params, allowed=SORTABLE_FIELDS),
    )


async def search_ebooks(db: AsyncSession, term: str) -> list[Ebook]:
    result = await db.execute(
        select(Ebook)
        .where(Ebook.status == ContentStatus.PUBLISHED, search_clause(SEARCH_COLUMNS, term))
        .order_by(Ebook.published_at.desc(), Ebook.id.asc())
        .limit(SEARCH_RESULT_CAP)
    )
    return list(result.scalars().all())


async def _get(db: AsyncSession, ebook_id: uuid.UUID) -> Ebook:
    ebook = await db.get(Ebook, ebook_id)
    if ebook is None:
        raise NotFoundError(RESOURCE)
    return ebook


async def _view(db: AsyncSession, ebook: Ebook | None, viewer: CurrentUser | None) -> Ebook:
    is_public = ebook is not None and ebook.status == ContentStatus.PUBLISHED
    ensure_visible(ebook, viewer, is_public=is_public, resource=RESOURCE)
    if is_public:
        await publishing.record_view(db, ebook)
    return ebook


async def get_ebook(db: AsyncSession, ebook_id: uuid.UUID, viewer: CurrentUser | None) -> Ebook:
    return await _view(db, await db.get(Ebook, ebook_id), viewer)


async def get_ebook_by_slug(db: AsyncSession, slug: str, viewer: CurrentUser | None) -> Ebook:
    result = await db.execute(select(Ebook).where(Ebook.slug == slug))
    return await _view(db, result.scalar_one_or_none(), viewer)


async def update_ebook(
    db: AsyncSession, ebook_id: uuid.UUID, actor: CurrentUser, fields: dict,
) -> Ebook:
    ebook = await _get(db, ebook_id)
    ensure_can_modify(ebook, actor, resource=RESOURCE)
    fields = publishing.without_nulls(fields, REQUIRED_FIELDS)
    status = fields.pop("status", None)
    if fields.get("is_free"):
        fields["price"] = 0
    await publishing.reslug_on_update(db, ebook, fields)
    publishing.apply_fields(ebook, fields)
    if status is not None:
        publishing.change_status(ebook, status, resource=RESOURCE)
    await flush_guarding_slug(db, ebook)
    return ebook


async def publish_ebook(
    db: AsyncSession, ebook_id: uuid.UUID, actor: CurrentUser, published_at: datetime | None = None,
) -> Ebook:
    ebook = await _get(db, ebook_id)
    ensure_can_modify(ebook, actor, resource=RESOURCE)
    publishing.publish(ebook, resource=RESOURCE, published_at=published_at)
    await db.flush()
    await db.refresh(ebook)
    return ebook


async def unpublish_ebook(db: AsyncSession, ebook_id: uuid.UUID, actor: CurrentUser) -> Ebook:
    ebook = await _get(db, ebook_id)
    ensure_can_modify(ebook, actor, resource=RESOURCE)
    publishing.unpublish(ebook, resource=RESOURCE)
    await db.flush()
    await db.refresh(ebook)
    return ebook


async def delete_ebook(db: AsyncSession, ebook_id: uuid.UUID, actor: CurrentUser) -> None:
    ebook = await _get(db, ebook_id)
    ensure_can_modify(ebook, actor, resource=RESOURCE)
    await db.delete(ebook)
    await db.flush()


async def download_ebook(db: AsyncSession, ebook_id: uuid.UUID) -> Ebook:
    ebook = await _get(db, ebook_id)
    if ebook.status != ContentStatus.PUBLISHED:
        raise BadRequestError("Ebook is not available for download")
    if not ebook.is_downloadable:
        raise BadRequestError("This ebook is not downloadable")
    if not ebook.pdf_url:
        raise BadRequestError("Ebook has no downloadable file")
    await db.execute(
        update(Ebook).where(Ebook.id == ebook.id).values(download_count=Ebook.download_count + 1)
    )
    await db.refresh(ebook, attribute_names=["download_count"])
    return ebook


async def ebook_statistics(db: AsyncSession) -> EbookStatistics:
    counts = await publishing.status_counts(db, Ebook)
    views, downloads = (
        await db.execute(
            select(
                func.coalesce(func.sum(Ebook.view_count), 0),
                func.coalesce(func.sum(Ebook.download_count), 0),
            )
        )
    ).one()
    return EbookStatistics(
        total=sum(counts.values()),
        published=counts[ContentStatus.PUBLISHED],
        draft=counts[ContentStatus.DRAFT],
        archived=counts[ContentStatus.ARCHIVED],
        under_review=counts[ContentStatus.UNDER_REVIEW],
        total_views=views,
        total_downloads=downloads,
    )
