from __future__ import annotations

import logging

import httpx

from app.config import Settings
from app.dataset.fetch import fetch_modmeta
from app.dataset.singleton import init_dataset, is_dataset_initialized
from app.listing.session import ListingSession

logger = logging.getLogger(__name__)


async def load_dataset_for_app(settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
    """Run the startup fetch once and publish the resulting record set.

    The fetch result goes through a ListingSession like any other event, so a
    failed fetch leaves an empty (not stale) dataset.
    """

    if is_dataset_initialized():
        return

    session = ListingSession(default_max_count=settings.default_max_count)
    async with httpx.AsyncClient(transport=transport) as client:
        await session.run_fetch(lambda: fetch_modmeta(client, base_url=settings.dataset_base_url))

    records = init_dataset(session.listing.records)
    logger.info("dataset ready: %d records", len(records))
