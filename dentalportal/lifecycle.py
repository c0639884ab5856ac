"""Publication state machines.

Each machine is an explicit transition table ``(state, action) -> state``.
Pairs missing from the table are rejected with the error registered for the
(state, action) pair, falling back to the action's default rejection.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from typing import Generic, TypeVar

from dentalportal.exceptions import (
    AlreadyPublishedError,
    DomainError,
    InvalidStatusTransitionError,
)
from dentalportal.models.enums import ContentStatus, LiveSessionStatus

S = TypeVar("S", bound=enum.Enum)
A = TypeVar("A", bound=enum.Enum)

Rejection = Callable[[enum.Enum, enum.Enum, str], DomainError]


class ContentAction(str, enum.Enum):
    PUBLISH = "PUBLISH"
    UNPUBLISH = "UNPUBLISH"


class SessionAction(str, enum.Enum):
    START = "START"
    END = "END"
    CANCEL = "CANCEL"
    POSTPONE = "POSTPONE"
    RESCHEDULE = "RESCHEDULE"


def _bad_request(message: str) -> Rejection:
    def build(state: enum.Enum, action: enum.Enum, resource: str) -> DomainError:
        return InvalidStatusTransitionError(
            state.value, action.value, message.format(resource=resource),
        )
    return build


class StateMachine(Generic[S, A]):
    def __init__(
        self,
        transitions: Mapping[tuple[S, A], S],
        rejections: Mapping[A, Rejection],
        overrides: Mapping[tuple[S, A], Rejection] | None = None,
    ) -> None:
        self._transitions = dict(transitions)
        self._rejections = dict(rejections)
        self._overrides = dict(overrides or {})

    def next_state(self, state: S, action: A, *, resource: str = "Resource") -> S:
        try:
            return self._transitions[(state, action)]
        except KeyError:
            reject = self._overrides.get((state, action)) or self._rejections[action]
            raise reject(state, action, resource) from None


CONTENT_LIFECYCLE: StateMachine[ContentStatus, ContentAction] = StateMachine(
    transitions={
        (ContentStatus.DRAFT, ContentAction.PUBLISH): ContentStatus.PUBLISHED,
        (ContentStatus.ARCHIVED, ContentAction.PUBLISH): ContentStatus.PUBLISHED,
        (ContentStatus.UNDER_REVIEW, ContentAction.PUBLISH): ContentStatus.PUBLISHED,
        (ContentStatus.PUBLISHED, ContentAction.UNPUBLISH): ContentStatus.DRAFT,
    },
    rejections={
        ContentAction.PUBLISH: _bad_request("{resource} cannot be published"),
        ContentAction.UNPUBLISH: _bad_request("{resource} is not published"),
    },
    overrides={
        (ContentStatus.PUBLISHED, ContentAction.PUBLISH): (
            lambda state, action, resource: AlreadyPublishedError(resource)
        ),
    },
)


LIVE_SESSION_LIFECYCLE: StateMachine[LiveSessionStatus, SessionAction] = StateMachine(
    transitions={
        (LiveSessionStatus.SCHEDULED, SessionAction.START): LiveSessionStatus.LIVE,
        (LiveSessionStatus.LIVE, SessionAction.END): LiveSessionStatus.COMPLETED,
        (LiveSessionStatus.SCHEDULED, SessionAction.CANCEL): LiveSessionStatus.CANCELLED,
        (LiveSessionStatus.LIVE, SessionAction.CANCEL): LiveSessionStatus.CANCELLED,
        (LiveSessionStatus.POSTPONED, SessionAction.CANCEL): LiveSessionStatus.CANCELLED,
        # Re-cancelling is accepted as a no-op
        (LiveSessionStatus.CANCELLED, SessionAction.CANCEL): LiveSessionStatus.CANCELLED,
        (LiveSessionStatus.SCHEDULED, SessionAction.POSTPONE): LiveSessionStatus.POSTPONED,
        (LiveSessionStatus.POSTPONED, SessionAction.RESCHEDULE): LiveSessionStatus.SCHEDULED,
    },
    rejections={
        SessionAction.START: _bad_request("Session is not scheduled"),
        SessionAction.END: _bad_request("Session is not live"),
        SessionAction.CANCEL: _bad_request("Cannot cancel a completed session"),
        SessionAction.POSTPONE: _bad_request("Only scheduled sessions can be postponed"),
        SessionAction.RESCHEDULE: _bad_request("Only postponed sessions can be rescheduled"),
    },
)


def sync_published_at(entity, previous: ContentStatus, now) -> None:
    """Keep ``published_at`` set exactly while the entity is PUBLISHED."""
    if entity.status == ContentStatus.PUBLISHED and previous != ContentStatus.PUBLISHED:
        entity.published_at = entity.published_at or now
    elif entity.status != ContentStatus.PUBLISHED:
        entity.published_at = None
