from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from app.api.models import ListingPage, ModRecord, OverviewPage, SortOrder
from app.config import DEFAULT_MAX_COUNT


def matches_query(record: ModRecord, query: str) -> bool:
    """True if every whitespace-separated word occurs in at least one searchable field.

    Matching is a case-insensitive substring test; an empty query matches everything.
    """

    words = query.casefold().split()
    if not words:
        return True

    haystacks = [
        record.author,
        record.desc,
        record.repo,
        record.readme,
        " ".join(record.contents),
        " ".join(record.assets),
    ]
    haystacks = [h.casefold() for h in haystacks]
    return all(any(w in h for h in haystacks) for w in words)


def _unique(records: Iterable[ModRecord]) -> tuple[ModRecord, ...]:
    """Drop repeated repositories, keeping the first occurrence."""

    seen: set[str] = set()
    out: list[ModRecord] = []
    for r in records:
        if r.repo in seen:
            continue
        seen.add(r.repo)
        out.append(r)
    return tuple(out)


def _sort_key(order: SortOrder):
    if order == SortOrder.stars:
        return lambda r: r.stars
    return lambda r: r.date_tt


@dataclass(slots=True)
class ListingModel:
    """Sort/filter/cap state over the full record set.

    `visible_items()` depends only on the fields below.
    """

    records: tuple[ModRecord, ...] = ()
    sort: SortOrder = SortOrder.commit
    query: str | None = None
    page: ListingPage | OverviewPage = field(default_factory=ListingPage)
    default_max_count: int = DEFAULT_MAX_COUNT
    max_count: int | None = None

    def __post_init__(self) -> None:
        if self.default_max_count < 1:
            raise ValueError("default_max_count must be >= 1")
        self.records = _unique(self.records)
        if self.max_count is None:
            self.max_count = self.default_max_count

    def reset_max_count(self) -> None:
        self.max_count = self.default_max_count

    def set_sort(self, order: SortOrder) -> None:
        self.reset_max_count()
        self.sort = order

    def set_filter(self, query: str | None) -> None:
        self.reset_max_count()
        self.query = query

    def navigate(self, page: ListingPage | OverviewPage) -> None:
        if isinstance(page, ListingPage):
            self.reset_max_count()
        self.page = page

    def grow(self) -> None:
        self.max_count += self.max_count

    def reveal_all(self) -> None:
        self.max_count = len(self.records)

    def replace_records(self, records: Iterable[ModRecord]) -> None:
        self.records = _unique(records)

    def sorted_records(self) -> list[ModRecord]:
        # Descending and stable: equal keys keep insertion order.
        return sorted(self.records, key=_sort_key(self.sort), reverse=True)

    def matching_items(self) -> list[ModRecord]:
        items = self.sorted_records()
        if self.query is None:
            return items
        return [r for r in items if matches_query(r, self.query)]

    def visible_items(self) -> list[ModRecord]:
        return self.matching_items()[: self.max_count]

    def find(self, mod_id: str) -> ModRecord | None:
        return next((r for r in self.records if r.mod_id == mod_id), None)

    def current_record(self) -> ModRecord | None:
        """Record shown by an Overview page; None for the listing or an unknown id."""

        if isinstance(self.page, OverviewPage):
            return self.find(self.page.mod_id)
        return None
