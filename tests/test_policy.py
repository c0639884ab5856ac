import uuid

import pytest

from dentalportal.exceptions import ForbiddenError, NotFoundError
from dentalportal.models.blog import Blog
from dentalportal.policy import can_view, ensure_can_modify, ensure_visible
from shared.constants import Role
from shared.models.user import CurrentUser

OWNER = CurrentUser(id=uuid.uuid4(), email="owner@clinic.in")
STRANGER = CurrentUser(id=uuid.uuid4(), email="stranger@clinic.in")
ADMIN = CurrentUser(id=uuid.uuid4(), email="admin@clinic.in", role=Role.ADMIN)


def _blog() -> Blog:
    return Blog(title="t", slug="t", content="c", tags=[], author_id=OWNER.id)


def test_hidden_items_are_visible_to_owner_and_admin_only() -> None:
    blog = _blog()

    assert can_view(blog, OWNER, is_public=False)
    assert can_view(blog, ADMIN, is_public=False)
    assert not can_view(blog, STRANGER, is_public=False)
    assert not can_view(blog, None, is_public=False)


def test_hidden_items_look_missing() -> None:
    with pytest.raises(NotFoundError) as excinfo:
        ensure_visible(_blog(), STRANGER, is_public=False, resource="Blog")
    assert excinfo.value.message == "Blog not found"


def test_missing_item_is_not_found() -> None:
    with pytest.raises(NotFoundError):
        ensure_visible(None, ADMIN, is_public=True, resource="Blog")


def test_only_owner_or_admin_can_modify() -> None:
    blog = _blog()
    ensure_can_modify(blog, OWNER, resource="Blog")
    ensure_can_modify(blog, ADMIN, resource="Blog")

    with pytest.raises(ForbiddenError):
        ensure_can_modify(blog, STRANGER, resource="Blog")
