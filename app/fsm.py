from __future__ import annotations

import logging

from statemachine import State, StateMachine

from app.api.models import GrowthPhase
from app.config import SCROLL_THRESHOLD_PX
from app.core.events import ScrollSignal, ScrollUnavailable
from app.listing.model import ListingModel

logger = logging.getLogger(__name__)


class ScrollGrowthFSM(StateMachine):
    """Grows a ListingModel's visible cap from scroll signals.

    - idle -> growing on the first near-bottom signal, growing -> growing after that.
    - any -> errored when scroll tracking is unavailable; the cap becomes the full
      record count and no transition leaves errored.
    """

    idle = State(GrowthPhase.idle.value, value=GrowthPhase.idle.value, initial=True)
    growing = State(GrowthPhase.growing.value, value=GrowthPhase.growing.value)
    errored = State(GrowthPhase.errored.value, value=GrowthPhase.errored.value, final=True)

    grow = idle.to(growing) | growing.to.itself()
    scroll_lost = idle.to(errored) | growing.to(errored)

    def __init__(
        self,
        listing: ListingModel,
        *,
        phase: GrowthPhase = GrowthPhase.idle,
        threshold_px: int = SCROLL_THRESHOLD_PX,
    ):
        self.listing = listing
        self.threshold_px = threshold_px
        super().__init__(start_value=phase.value)

    @property
    def phase(self) -> GrowthPhase:
        return GrowthPhase(str(self.current_state.value))

    @property
    def is_errored(self) -> bool:
        return self.current_state == self.errored

    def on_grow(self) -> None:
        self.listing.grow()

    def on_scroll_lost(self) -> None:
        logger.error("scroll tracking unavailable; revealing all %d records", len(self.listing.records))
        self.listing.reveal_all()

    def process_scroll(self, signal: ScrollSignal | ScrollUnavailable) -> bool:
        """Apply one scroll input. Returns True if a transition fired."""

        if self.is_errored:
            return False

        if isinstance(signal, ScrollUnavailable):
            self.scroll_lost()
            return True

        if not signal.near_bottom(threshold_px=self.threshold_px):
            return False
        self.grow()
        return True
