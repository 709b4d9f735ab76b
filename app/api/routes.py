from __future__ import annotations

from typing import Any
from uuid import UUID

import redis
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import TypeAdapter, ValidationError

from app.actions import dispatch_event, msg_from_request, view_session
from app.api.deps import get_redis, get_settings
from app.api.models import (
    ListingEventRequest,
    MarkupRenderRequest,
    OverviewView,
    SessionView,
    StyledText,
)
from app.config import MOD_VERSION, Settings
from app.dataset.singleton import get_dataset
from app.listing.routing import page_from_query
from app.listing.view import overview_item, styled
from app.lock import SessionBusyError
from app.session_store import create_session

router = APIRouter()

_EVENT_ADAPTER: TypeAdapter[Any] = TypeAdapter(ListingEventRequest)


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/info")
async def info() -> dict[str, object]:
    return {"name": "mindustry-mods", "version": "0.1.0", "mod_version": MOD_VERSION, "records": len(get_dataset())}


@router.post("/sessions", response_model=SessionView, status_code=status.HTTP_201_CREATED)
async def create_session_route(
    mod: str | None = None,
    r: redis.Redis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> SessionView:
    page = page_from_query(f"mod={mod}" if mod else None)
    snapshot = create_session(r=r, settings=settings, page=page)
    return view_session(r=r, session_id=snapshot.session_id, settings=settings)


@router.get("/sessions/{session_id}", response_model=SessionView)
async def get_session_route(
    session_id: UUID,
    r: redis.Redis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> SessionView:
    try:
        return view_session(r=r, session_id=session_id, settings=settings)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/sessions/{session_id}/events", response_model=SessionView)
async def session_event_route(
    session_id: UUID,
    body: dict[str, Any],
    r: redis.Redis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> SessionView:
    try:
        event = _EVENT_ADAPTER.validate_python(body)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    try:
        result = dispatch_event(r=r, session_id=session_id, msg=msg_from_request(event), settings=settings)
    except SessionBusyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return result.view


@router.get("/mods/{mod_id}", response_model=OverviewView)
async def get_mod_route(mod_id: str) -> OverviewView:
    record = next((m for m in get_dataset() if m.mod_id == mod_id), None)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mod not found")
    return overview_item(record)


@router.post("/markup/render", response_model=list[StyledText])
async def render_markup_route(payload: MarkupRenderRequest) -> list[StyledText]:
    return styled(payload.text)
