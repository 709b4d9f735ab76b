from __future__ import annotations

from app.api.models import ListingPage, OverviewPage

MOD_PARAM = "mod"


def page_from_query(search: str | None) -> ListingPage | OverviewPage:
    """Page selected by a URL query string such as `?mod=owner--repo&x=1`.

    Without a non-empty `mod` value the listing is selected. Whether the id
    names a known record is checked later, when the page is rendered.
    """

    if not search:
        return ListingPage()

    for pair in search.lstrip("?").split("&"):
        key, sep, value = pair.partition("=")
        if key == MOD_PARAM and sep and value:
            return OverviewPage(mod_id=value)

    return ListingPage()


def query_for_page(page: ListingPage | OverviewPage) -> str:
    if isinstance(page, OverviewPage):
        return f"{MOD_PARAM}={page.mod_id}"
    return ""
