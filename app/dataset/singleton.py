from __future__ import annotations

from collections.abc import Iterable

from app.api.models import ModRecord

# Modmeta records shared by every listing session in this process.
_DATASET: tuple[ModRecord, ...] | None = None


def init_dataset(records: Iterable[ModRecord]) -> tuple[ModRecord, ...]:
    """Publish the startup record set.

    First call wins: a repeated startup hook gets back the records that are
    already being served, never a second copy.
    """

    global _DATASET
    if _DATASET is None:
        _DATASET = tuple(records)
    return _DATASET


def is_dataset_initialized() -> bool:
    return _DATASET is not None


def reset_dataset_for_tests() -> None:
    """Drop the published records so a test can install its own modmeta."""

    global _DATASET
    _DATASET = None


def get_dataset() -> tuple[ModRecord, ...]:
    if _DATASET is None:
        raise RuntimeError("modmeta not loaded; load_dataset_for_app() runs at startup")
    return _DATASET
