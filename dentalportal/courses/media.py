"""Best-effort background upload of course media.

The request that creates or updates a course returns as soon as the row is
written. Thumbnail and video bytes are then pushed to object storage and the
resulting URLs patched onto the course in a fresh session. Nothing here is
retried: failures are logged and the course keeps its previous media.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dentalportal.courses import service
from dentalportal.exceptions import UploadFailedError
from dentalportal.integrations.storage import Uploader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingUpload:
    field: str  # Course column receiving the URL
    data: bytes
    filename: str
    content_type: str | None = None


async def upload_course_media(
    course_id: uuid.UUID,
    uploads: list[PendingUpload],
    uploader: Uploader,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    media: dict[str, str] = {}
    for item in uploads:
        try:
            uploaded = await uploader.upload(
                item.data,
                item.filename,
                f"courses/{course_id}",
                tags=["course", item.field],
                content_type=item.content_type,
            )
        except UploadFailedError as exc:
            logger.error("Course %s: %s upload failed: %s", course_id, item.field, exc.message)
            continue
        except Exception:
            logger.exception("Course %s: unexpected error uploading %s", course_id, item.field)
            continue
        media[item.field] = uploaded.url

    if not media:
        return

    async with session_factory() as session:
        try:
            course = await service.apply_media(session, course_id, media)
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            logger.exception("Course %s: could not store uploaded media", course_id)
            return
    if course is None:
        logger.warning("Course %s was deleted before its media finished uploading", course_id)
    else:
        logger.info("Course %s media updated: %s", course_id, ", ".join(sorted(media)))
