from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime

from app.api.models import GrowthPhase, ListingPage, ListingSnapshot, ModRecord, OverviewPage, SessionView
from app.config import DEFAULT_MAX_COUNT, SCROLL_THRESHOLD_PX
from app.core.events import (
    DatasetFailed,
    DatasetLoaded,
    FilterWords,
    ListingMsg,
    Navigate,
    ScrollSignal,
    ScrollUnavailable,
    SetSort,
)
from app.fsm import ScrollGrowthFSM
from app.listing.model import ListingModel
from app.listing.routing import query_for_page
from app.listing.view import listing_item, overview_item

logger = logging.getLogger(__name__)


class ListingSession:
    """Owns one ListingModel and its scroll growth controller.

    All mutation goes through `update()`, one event at a time.
    """

    def __init__(
        self,
        records: Sequence[ModRecord] = (),
        *,
        default_max_count: int = DEFAULT_MAX_COUNT,
        threshold_px: int = SCROLL_THRESHOLD_PX,
        listing: ListingModel | None = None,
        growth: GrowthPhase = GrowthPhase.idle,
    ) -> None:
        if listing is None:
            listing = ListingModel(records=tuple(records), default_max_count=default_max_count)
        self.listing = listing
        self.growth = ScrollGrowthFSM(self.listing, phase=growth, threshold_px=threshold_px)

    def _reset_max_count(self) -> None:
        # Once scroll tracking is gone nothing can grow the cap again.
        if self.growth.is_errored:
            self.listing.reveal_all()
        else:
            self.listing.reset_max_count()

    def update(self, msg: ListingMsg) -> None:
        if isinstance(msg, SetSort):
            self.listing.set_sort(msg.order)
            self._reset_max_count()
        elif isinstance(msg, FilterWords):
            self.listing.set_filter(msg.query)
            self._reset_max_count()
        elif isinstance(msg, Navigate):
            self.listing.navigate(msg.page)
            if isinstance(msg.page, ListingPage):
                self._reset_max_count()
        elif isinstance(msg, (ScrollSignal, ScrollUnavailable)):
            self.growth.process_scroll(msg)
        elif isinstance(msg, DatasetLoaded):
            self.listing.replace_records(msg.records)
            logger.info("modmeta loaded: %d records", len(self.listing.records))
            if self.growth.is_errored:
                self.listing.reveal_all()
        elif isinstance(msg, DatasetFailed):
            logger.error("modmeta loading failed: %s", msg.error)
            self.listing.replace_records(())
            if self.growth.is_errored:
                self.listing.reveal_all()
        else:
            raise ValueError(f"Unknown listing message: {msg!r}")

    async def run_fetch(self, fetch: Callable[[], Awaitable[DatasetLoaded | DatasetFailed]]) -> None:
        """Await the one-shot dataset fetch and apply its result as a single event."""

        self.update(await fetch())

    @property
    def page(self) -> ListingPage | OverviewPage:
        return self.listing.page

    @property
    def query_string(self) -> str:
        return query_for_page(self.listing.page)

    # Persistence.

    @classmethod
    def from_snapshot(
        cls,
        snapshot: ListingSnapshot,
        records: Sequence[ModRecord],
        *,
        default_max_count: int = DEFAULT_MAX_COUNT,
        threshold_px: int = SCROLL_THRESHOLD_PX,
    ) -> "ListingSession":
        listing = ListingModel(
            records=tuple(records),
            sort=snapshot.sort,
            query=snapshot.query,
            page=snapshot.page,
            default_max_count=default_max_count,
            max_count=snapshot.max_count,
        )
        return cls(listing=listing, growth=snapshot.growth, threshold_px=threshold_px)

    def apply_to_snapshot(self, snapshot: ListingSnapshot) -> ListingSnapshot:
        return snapshot.model_copy(
            update={
                "sort": self.listing.sort,
                "query": self.listing.query,
                "max_count": self.listing.max_count,
                "page": self.listing.page,
                "growth": self.growth.phase,
            }
        )

    def view(self, snapshot: ListingSnapshot, *, now: datetime | None = None) -> SessionView:
        matching = self.listing.matching_items()
        visible = matching[: self.listing.max_count]

        record = self.listing.current_record()
        overview = overview_item(record, now=now) if record is not None else None

        return SessionView(
            session_id=snapshot.session_id,
            page=self.listing.page,
            query_string=self.query_string,
            sort=self.listing.sort,
            query=self.listing.query,
            max_count=self.listing.max_count,
            growth=self.growth.phase,
            total=len(self.listing.records),
            matching=len(matching),
            # Overview of an unknown id falls back to the listing.
            items=[] if overview is not None else [listing_item(r, now=now) for r in visible],
            overview=overview,
        )
