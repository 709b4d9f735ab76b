from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from app.api.models import ListingPage, ModRecord, OverviewPage, SortOrder


@dataclass(frozen=True, slots=True)
class SetSort:
    order: SortOrder


@dataclass(frozen=True, slots=True)
class FilterWords:
    query: str


@dataclass(frozen=True, slots=True)
class Navigate:
    page: ListingPage | OverviewPage


@dataclass(frozen=True, slots=True)
class ScrollSignal:
    scroll_y: int
    viewport_height: int
    content_height: int

    def near_bottom(self, *, threshold_px: int) -> bool:
        return self.viewport_height + self.scroll_y > self.content_height - threshold_px


@dataclass(frozen=True, slots=True)
class ScrollUnavailable:
    """Scroll position could not be read; reason untracked."""


@dataclass(frozen=True, slots=True)
class DatasetLoaded:
    records: tuple[ModRecord, ...]


@dataclass(frozen=True, slots=True)
class DatasetFailed:
    error: str


ListingMsg = Union[SetSort, FilterWords, Navigate, ScrollSignal, ScrollUnavailable, DatasetLoaded, DatasetFailed]
