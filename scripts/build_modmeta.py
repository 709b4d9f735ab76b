"""Build `data/modmeta.<version>.json` from the upstream mod list.

Contract
- Input: `<repo>/data/mods.json`, the upstream list of
  `{repo, name, author, lastUpdated, stars, description}` entries.
- Output: `<repo>/data/modmeta.<MOD_VERSION>.json`, the array the service fetches.
- Entries with an unparseable `lastUpdated` are skipped and reported.
- Repeated repositories keep their first entry.

Usage:
    python scripts/build_modmeta.py

This script is deterministic (output order follows the input list).
"""

from __future__ import annotations

import logging
from pathlib import Path

from app.config import MOD_VERSION
from app.dataset.convert import dump_modmeta, load_sources, record_from_source
from app.dates import FormattingError

logger = logging.getLogger("build_modmeta")


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    repo_root = Path(__file__).resolve().parents[1]
    src = repo_root / "data" / "mods.json"
    dst = repo_root / "data" / f"modmeta.{MOD_VERSION}.json"

    if not src.exists():
        raise FileNotFoundError(f"Missing upstream mod list: {src}")

    records = []
    seen: set[str] = set()
    for source in load_sources(src):
        if source.repo in seen:
            continue
        try:
            records.append(record_from_source(source))
        except FormattingError as e:
            logger.warning("skipping %s: %s", source.repo, e)
            continue
        seen.add(source.repo)

    dst.write_text(dump_modmeta(records), encoding="utf-8")
    logger.info("wrote %d records to %s", len(records), dst)


if __name__ == "__main__":
    main()
