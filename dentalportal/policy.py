"""Who may see and who may change an item.

Admins bypass every rule. Anyone else sees an item only when it is public
(published, or active for live sessions) or when they own it; hidden items
are reported as missing so their existence does not leak. Changing an item
requires ownership, and a known item owned by someone else is refused
outright.
"""

from __future__ import annotations

import uuid
from typing import Protocol

from dentalportal.exceptions import ForbiddenError, NotFoundError
from shared.models.user import CurrentUser


class Owned(Protocol):
    @property
    def owner_id(self) -> uuid.UUID | None: ...


def is_owner(item: Owned, viewer: CurrentUser | None) -> bool:
    return viewer is not None and item.owner_id is not None and item.owner_id == viewer.id


def can_view(item: Owned, viewer: CurrentUser | None, *, is_public: bool) -> bool:
    if viewer is not None and viewer.is_admin:
        return True
    return is_public or is_owner(item, viewer)


def ensure_visible(
    item: Owned | None,
    viewer: CurrentUser | None,
    *,
    is_public: bool,
    resource: str,
) -> None:
    if item is None or not can_view(item, viewer, is_public=is_public):
        raise NotFoundError(resource)


def ensure_can_modify(item: Owned, actor: CurrentUser, *, resource: str) -> None:
    if actor.is_admin or is_owner(item, actor):
        return
    raise ForbiddenError(f"You can only modify your own {resource.lower()}s or you must be an admin")
