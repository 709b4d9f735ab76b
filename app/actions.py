from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

import redis

from app.api.models import (
    FilterRequest,
    ListingEventRequest,
    ListingPage,
    ListingSnapshot,
    NavigateRequest,
    OverviewPage,
    ScrollRequest,
    ScrollUnavailableRequest,
    SessionView,
    SetSortRequest,
)
from app.config import Settings
from app.core.events import FilterWords, ListingMsg, Navigate, ScrollSignal, ScrollUnavailable, SetSort
from app.dataset.singleton import get_dataset
from app.listing.session import ListingSession
from app.lock import session_lock
from app.session_store import require_session, save_session

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EventResult:
    snapshot: ListingSnapshot
    view: SessionView


def msg_from_request(body: ListingEventRequest) -> ListingMsg:
    if isinstance(body, SetSortRequest):
        return SetSort(order=body.sort)
    if isinstance(body, FilterRequest):
        return FilterWords(query=body.query)
    if isinstance(body, NavigateRequest):
        if body.mod_id is None:
            return Navigate(page=ListingPage())
        return Navigate(page=OverviewPage(mod_id=body.mod_id))
    if isinstance(body, ScrollRequest):
        return ScrollSignal(
            scroll_y=body.scroll_y,
            viewport_height=body.viewport_height,
            content_height=body.content_height,
        )
    if isinstance(body, ScrollUnavailableRequest):
        return ScrollUnavailable()
    raise ValueError(f"Unknown event: {body!r}")


def load_listing_session(*, snapshot: ListingSnapshot, settings: Settings) -> ListingSession:
    return ListingSession.from_snapshot(
        snapshot,
        get_dataset(),
        default_max_count=settings.default_max_count,
        threshold_px=settings.scroll_threshold_px,
    )


def view_session(*, r: redis.Redis, session_id: UUID, settings: Settings) -> SessionView:
    snapshot = require_session(r=r, session_id=session_id)
    return load_listing_session(snapshot=snapshot, settings=settings).view(snapshot)


def dispatch_event(*, r: redis.Redis, session_id: UUID, msg: ListingMsg, settings: Settings) -> EventResult:
    """Apply one event to a stored session.

    Loads the snapshot under the session lock, rebuilds the listing session over
    the current dataset, applies the event, persists, and returns the new view.
    """

    with session_lock(r=r, session_id=str(session_id)):
        snapshot = require_session(r=r, session_id=session_id)
        session = load_listing_session(snapshot=snapshot, settings=settings)

        session.update(msg)
        logger.debug("session %s applied %s", session_id, type(msg).__name__)

        snapshot = session.apply_to_snapshot(snapshot)
        save_session(r=r, snapshot=snapshot, ttl_s=settings.session_ttl_s)

        return EventResult(snapshot=snapshot, view=session.view(snapshot))
