from __future__ import annotations

import pytest

from app.api.models import ListingPage, OverviewPage
from app.listing.routing import page_from_query, query_for_page


@pytest.mark.parametrize(
    "search,page",
    [
        (None, ListingPage()),
        ("", ListingPage()),
        ("?", ListingPage()),
        ("mod=Anuke--ExampleMod", OverviewPage(mod_id="Anuke--ExampleMod")),
        ("?mod=Anuke--ExampleMod", OverviewPage(mod_id="Anuke--ExampleMod")),
        ("?tab=x&mod=a--b&y=2", OverviewPage(mod_id="a--b")),
        ("?mod=", ListingPage()),
        ("?mod", ListingPage()),
        ("?model=a--b", ListingPage()),
    ],
)
def test_page_from_query(search: str | None, page) -> None:
    assert page_from_query(search) == page


def test_query_for_page_round_trips() -> None:
    page = OverviewPage(mod_id="Redwood--IronWorks")
    assert query_for_page(page) == "mod=Redwood--IronWorks"
    assert page_from_query(query_for_page(page)) == page
    assert query_for_page(ListingPage()) == ""
