"""Convert the upstream mod list (`mods.json`) into modmeta records.

Only the fields the upstream list carries are filled; readme, icon, version
and tag lists stay empty since they would require scraping each repository.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from app.api.models import GITHUB, ModRecord
from app.dates import parse_timestamp
from app.markup.render import strip_markup


class ModSource(BaseModel):
    """One entry of the upstream list."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    # ex: "What42Pizza/Mindustry-Production-Mod"
    repo: str
    name: str
    # ex: "[orange]What42Pizza"
    author: str = ""
    # ex: "2020-03-18T16:35:29Z"
    last_updated: str = Field(..., alias="lastUpdated")
    stars: int = Field(0, ge=0)
    # ex: "[white]This mod gives you [orange]iron[white]..."
    description: str = ""


def record_from_source(source: ModSource) -> ModRecord:
    """Build a record; raises app.dates.FormattingError on a bad timestamp."""

    date = parse_timestamp(source.last_updated)
    return ModRecord(
        repo=source.repo,
        name=strip_markup(source.name),
        name_markup=source.name,
        link=f"{GITHUB}/{source.repo}",
        desc=strip_markup(source.description),
        desc_markup=source.description or None,
        stars=source.stars,
        author=strip_markup(source.author),
        author_markup=source.author or None,
        date=source.last_updated,
        date_tt=date.timestamp(),
    )


def load_sources(path: Path) -> list[ModSource]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"Expected a JSON array in {path}")
    return [ModSource.model_validate(item) for item in raw]


def dump_modmeta(records: list[ModRecord]) -> str:
    return json.dumps([r.model_dump(mode="json") for r in records], indent=2, ensure_ascii=False) + "\n"
