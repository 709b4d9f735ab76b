from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

GITHUB = "https://github.com"
RAW_GITHUB = "https://raw.githubusercontent.com"
NOTHING_ICON = "images/nothing.png"


class ModRecord(BaseModel):
    """One entry of `data/modmeta.<version>.json`."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # ex: "What42Pizza/Mindustry-Production-Mod"
    repo: str
    name: str
    name_markup: str
    link: str
    desc: str = ""
    desc_markup: str | None = None
    icon: str | None = None
    stars: int = Field(0, ge=0)
    author: str = ""
    author_markup: str | None = None
    # Last commit, ISO formatted, and the same instant as epoch seconds.
    date: str
    date_tt: float
    readme: str = ""
    version: str | None = None
    assets: list[str] = Field(default_factory=list)
    contents: list[str] = Field(default_factory=list)
    wiki: str | None = None

    @property
    def mod_id(self) -> str:
        """URL-safe id (`owner--repo`) used by the `mod=` query parameter."""

        return self.repo.replace("/", "--")

    @property
    def owner(self) -> str:
        return self.repo.split("/", 1)[0]

    @property
    def archive_link(self) -> str:
        return f"{GITHUB}/{self.repo}/archive/master.zip"

    @property
    def icon_url(self) -> str:
        if not self.icon:
            if not self.owner:
                return NOTHING_ICON
            return f"{GITHUB}/{self.owner}.png?size=64"
        return f"{RAW_GITHUB}/{self.repo}/master/{self.icon}"


class SortOrder(StrEnum):
    stars = "stars"
    commit = "commit"


class ListingPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["listing"] = "listing"


class OverviewPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["overview"] = "overview"
    mod_id: str


Page = Annotated[ListingPage | OverviewPage, Field(discriminator="kind")]


class GrowthPhase(StrEnum):
    idle = "idle"
    growing = "growing"
    errored = "errored"


class ListingSnapshot(BaseModel):
    """Persisted form of one listing session (records live in the dataset)."""

    session_id: UUID
    created_at: datetime
    last_updated_at: datetime

    sort: SortOrder = SortOrder.commit
    query: str | None = None
    max_count: int = Field(..., ge=0)
    page: Page = Field(default_factory=ListingPage)
    growth: GrowthPhase = GrowthPhase.idle


# Typed event bodies for POST /sessions/{id}/events.


class SetSortRequest(BaseModel):
    type: Literal["set_sort"]
    sort: SortOrder


class FilterRequest(BaseModel):
    type: Literal["filter"]
    query: str = Field("", max_length=500)


class NavigateRequest(BaseModel):
    type: Literal["navigate"]
    # None navigates back to the listing.
    mod_id: str | None = None


class ScrollRequest(BaseModel):
    type: Literal["scroll"]
    scroll_y: int
    viewport_height: int
    content_height: int


class ScrollUnavailableRequest(BaseModel):
    type: Literal["scroll_unavailable"]


ListingEventRequest = Annotated[
    SetSortRequest | FilterRequest | NavigateRequest | ScrollRequest | ScrollUnavailableRequest,
    Field(discriminator="type"),
]


class MarkupRenderRequest(BaseModel):
    text: str = Field(..., max_length=20_000)


# Views.


class StyledText(BaseModel):
    text: str
    color: str


class IconView(BaseModel):
    src: str
    fallback: str | None = None


class LinksView(BaseModel):
    repository: str
    archive: str
    wiki: str | None = None


class ListingItemView(BaseModel):
    mod_id: str
    title: list[StyledText]
    author: list[StyledText]
    version_prefix: str
    version: list[StyledText]
    last_commit: str
    stars: int
    stars_glyphs: str
    description: list[StyledText]
    icon: IconView
    links: LinksView
    assets: list[str]
    contents: list[str]


class OverviewView(BaseModel):
    item: ListingItemView
    readme: str
    # Rendered from `readme`; raw HTML in the source is escaped.
    readme_html: str


class SessionView(BaseModel):
    session_id: UUID
    page: Page
    query_string: str
    sort: SortOrder
    query: str | None
    max_count: int
    growth: GrowthPhase
    total: int
    matching: int
    items: list[ListingItemView]
    overview: OverviewView | None = None
