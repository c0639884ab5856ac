from datetime import datetime, timezone

import pytest

from dentalportal import publishing
from dentalportal.exceptions import AlreadyPublishedError, InvalidStatusTransitionError
from dentalportal.lifecycle import (
    CONTENT_LIFECYCLE,
    LIVE_SESSION_LIFECYCLE,
    ContentAction,
    SessionAction,
)
from dentalportal.models.blog import Blog
from dentalportal.models.enums import ContentStatus, LiveSessionStatus


def _draft() -> Blog:
    blog = Blog(title="t", slug="t", content="c", tags=[])
    blog.status = ContentStatus.DRAFT
    blog.published_at = None
    return blog


@pytest.mark.parametrize(
    "source", [ContentStatus.DRAFT, ContentStatus.ARCHIVED, ContentStatus.UNDER_REVIEW],
)
def test_publish_from_unpublished_states(source: ContentStatus) -> None:
    assert CONTENT_LIFECYCLE.next_state(source, ContentAction.PUBLISH) == ContentStatus.PUBLISHED


def test_publishing_twice_is_a_conflict() -> None:
    with pytest.raises(AlreadyPublishedError) as excinfo:
        CONTENT_LIFECYCLE.next_state(ContentStatus.PUBLISHED, ContentAction.PUBLISH, resource="Blog")
    assert excinfo.value.message == "Blog is already published"
    assert excinfo.value.status_code == 409


def test_unpublish_requires_published() -> None:
    with pytest.raises(InvalidStatusTransitionError) as excinfo:
        CONTENT_LIFECYCLE.next_state(ContentStatus.DRAFT, ContentAction.UNPUBLISH, resource="Ebook")
    assert excinfo.value.message == "Ebook is not published"
    assert excinfo.value.status_code == 400


@pytest.mark.parametrize(
    ("source", "action", "target"),
    [
        (LiveSessionStatus.SCHEDULED, SessionAction.START, LiveSessionStatus.LIVE),
        (LiveSessionStatus.LIVE, SessionAction.END, LiveSessionStatus.COMPLETED),
        (LiveSessionStatus.LIVE, SessionAction.CANCEL, LiveSessionStatus.CANCELLED),
        (LiveSessionStatus.CANCELLED, SessionAction.CANCEL, LiveSessionStatus.CANCELLED),
        (LiveSessionStatus.SCHEDULED, SessionAction.POSTPONE, LiveSessionStatus.POSTPONED),
        (LiveSessionStatus.POSTPONED, SessionAction.RESCHEDULE, LiveSessionStatus.SCHEDULED),
    ],
)
def test_live_session_transitions(source, action, target) -> None:
    assert LIVE_SESSION_LIFECYCLE.next_state(source, action) == target


@pytest.mark.parametrize(
    ("source", "action", "message"),
    [
        (LiveSessionStatus.LIVE, SessionAction.START, "Session is not scheduled"),
        (LiveSessionStatus.SCHEDULED, SessionAction.END, "Session is not live"),
        (LiveSessionStatus.COMPLETED, SessionAction.CANCEL, "Cannot cancel a completed session"),
        (LiveSessionStatus.LIVE, SessionAction.POSTPONE, "Only scheduled sessions can be postponed"),
        (LiveSessionStatus.SCHEDULED, SessionAction.RESCHEDULE, "Only postponed sessions can be rescheduled"),
    ],
)
def test_live_session_rejections(source, action, message) -> None:
    with pytest.raises(InvalidStatusTransitionError) as excinfo:
        LIVE_SESSION_LIFECYCLE.next_state(source, action)
    assert excinfo.value.message == message


@pytest.mark.parametrize("action", list(SessionAction))
def test_completed_session_accepts_no_action(action: SessionAction) -> None:
    with pytest.raises(InvalidStatusTransitionError):
        LIVE_SESSION_LIFECYCLE.next_state(LiveSessionStatus.COMPLETED, action)


def test_publish_sets_published_at() -> None:
    blog = _draft()
    when = datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc)

    publishing.publish(blog, resource="Blog", published_at=when)

    assert blog.status == ContentStatus.PUBLISHED
    assert blog.published_at == when


def test_unpublish_clears_published_at() -> None:
    blog = _draft()
    publishing.publish(blog, resource="Blog")

    publishing.unpublish(blog, resource="Blog")

    assert blog.status == ContentStatus.DRAFT
    assert blog.published_at is None


def test_change_status_keeps_published_at_in_step() -> None:
    blog = _draft()

    publishing.change_status(blog, ContentStatus.PUBLISHED, resource="Blog")
    assert blog.published_at is not None

    publishing.change_status(blog, ContentStatus.ARCHIVED, resource="Blog")
    assert blog.status == ContentStatus.ARCHIVED
    assert blog.published_at is None


def test_change_status_to_published_when_already_published_is_a_no_op() -> None:
    blog = _draft()
    publishing.publish(blog, resource="Blog")
    stamp = blog.published_at

    publishing.change_status(blog, ContentStatus.PUBLISHED, resource="Blog")

    assert blog.published_at == stamp
