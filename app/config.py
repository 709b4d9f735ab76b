from __future__ import annotations

import os
from dataclasses import dataclass

# Bumped whenever the record shape changes; the dataset path embeds it so
# stale cached copies are never read by a newer client.
MOD_VERSION = "3.2"

DEFAULT_MAX_COUNT = 8
SCROLL_THRESHOLD_PX = 50


@dataclass(frozen=True, slots=True)
class Settings:
    dataset_base_url: str
    redis_url: str = "redis://localhost:6379/0"
    default_max_count: int = DEFAULT_MAX_COUNT
    scroll_threshold_px: int = SCROLL_THRESHOLD_PX
    session_ttl_s: int = 86_400


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from e


def settings_from_env() -> Settings:
    return Settings(
        dataset_base_url=os.environ.get(
            "MODLIST_DATASET_BASE_URL", "https://simonwoodburyforget.github.io/mindustry-mods/"
        ),
        redis_url=os.environ.get("REDIS_URL", "redis://localhost:6379/0"),
        default_max_count=_int_from_env("MODLIST_DEFAULT_MAX_COUNT", DEFAULT_MAX_COUNT),
        scroll_threshold_px=_int_from_env("MODLIST_SCROLL_THRESHOLD_PX", SCROLL_THRESHOLD_PX),
        session_ttl_s=_int_from_env("MODLIST_SESSION_TTL_S", 86_400),
    )
