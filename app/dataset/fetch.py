from __future__ import annotations

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from app.api.models import ModRecord
from app.config import MOD_VERSION
from app.core.events import DatasetFailed, DatasetLoaded

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[ModRecord])


def modmeta_path(version: str = MOD_VERSION) -> str:
    return f"data/modmeta.{version}.json"


def parse_modmeta(raw: str | bytes) -> tuple[ModRecord, ...]:
    """Validate a modmeta JSON array. Raises pydantic.ValidationError."""

    return tuple(_RECORDS.validate_json(raw))


async def fetch_modmeta(client: httpx.AsyncClient, *, base_url: str = "") -> DatasetLoaded | DatasetFailed:
    """Issue the single dataset GET and turn its outcome into a listing event.

    No retry and no timeout beyond the client's own configuration.
    """

    url = base_url.rstrip("/") + "/" + modmeta_path() if base_url else modmeta_path()
    logger.info("fetching modmeta from %s", url)
    try:
        resp = await client.get(url)
        resp.raise_for_status()
        records = parse_modmeta(resp.content)
    except httpx.HTTPError as e:
        return DatasetFailed(error=f"{type(e).__name__}: {e}")
    except ValidationError as e:
        return DatasetFailed(error=f"invalid modmeta: {e.error_count()} validation errors")
    return DatasetLoaded(records=records)
