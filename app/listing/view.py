from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from markdown_it import MarkdownIt

from app.api.models import (
    NOTHING_ICON,
    IconView,
    LinksView,
    ListingItemView,
    ModRecord,
    OverviewView,
    StyledText,
)
from app.dates import format_ago
from app.markup.render import render_markup

# Every mod declares this asset folder; listing it adds nothing.
_GENERIC_TAG = "content"

# Readmes come from third-party repositories, so inline HTML stays text.
_MARKDOWN = MarkdownIt("commonmark", {"html": False})


def styled(source: str | None) -> list[StyledText]:
    if not source:
        return []
    return [StyledText(text=s.text, color=s.color.css) for s in render_markup(source)]


def tag_list(tags: Sequence[str]) -> list[str]:
    return [t for t in tags if t != _GENERIC_TAG]


def stars_glyphs(stars: int) -> str:
    return "☆" if stars == 0 else "★" * stars


def icon_view(record: ModRecord) -> IconView:
    """Icon source with a load-failure fallback.

    An explicit icon path points into the repository and may 404, so it gets
    the placeholder as fallback. The owner avatar needs none.
    """

    if record.icon:
        return IconView(src=record.icon_url, fallback=NOTHING_ICON)
    return IconView(src=record.icon_url)


def listing_item(record: ModRecord, *, now: datetime | None = None) -> ListingItemView:
    return ListingItemView(
        mod_id=record.mod_id,
        title=styled(record.name_markup),
        author=styled(record.author_markup or "null"),
        version_prefix="v" if record.version is not None else "",
        version=styled(record.version),
        last_commit=format_ago(record.date, now=now),
        stars=record.stars,
        stars_glyphs=stars_glyphs(record.stars),
        description=styled(record.desc_markup),
        icon=icon_view(record),
        links=LinksView(repository=record.link, archive=record.archive_link, wiki=record.wiki),
        assets=tag_list(record.assets),
        contents=tag_list(record.contents),
    )


def overview_item(record: ModRecord, *, now: datetime | None = None) -> OverviewView:
    return OverviewView(
        item=listing_item(record, now=now),
        readme=record.readme,
        readme_html=_MARKDOWN.render(record.readme),
    )
