from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID, uuid4

import redis

from app.api.models import ListingPage, ListingSnapshot, OverviewPage
from app.config import Settings

SESSION_KEY_PREFIX = "modlist:session:"  # + {uuid}


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _session_key(session_id: UUID) -> str:
    return f"{SESSION_KEY_PREFIX}{session_id}"


def save_session(*, r: redis.Redis, snapshot: ListingSnapshot, ttl_s: int) -> None:
    snapshot.last_updated_at = _now()
    # Sessions are UI state only; let abandoned ones expire.
    r.set(_session_key(snapshot.session_id), snapshot.model_dump_json(), ex=ttl_s)


def get_session(*, r: redis.Redis, session_id: UUID) -> ListingSnapshot | None:
    raw = r.get(_session_key(session_id))
    if not raw:
        return None
    return ListingSnapshot.model_validate_json(raw)


def require_session(*, r: redis.Redis, session_id: UUID) -> ListingSnapshot:
    snapshot = get_session(r=r, session_id=session_id)
    if snapshot is None:
        raise ValueError("Session not found")
    return snapshot


def create_session(
    *,
    r: redis.Redis,
    settings: Settings,
    page: ListingPage | OverviewPage | None = None,
) -> ListingSnapshot:
    now = _now()
    snapshot = ListingSnapshot(
        session_id=uuid4(),
        created_at=now,
        last_updated_at=now,
        max_count=settings.default_max_count,
        page=page or ListingPage(),
    )
    save_session(r=r, snapshot=snapshot, ttl_s=settings.session_ttl_s)
    return snapshot
