from __future__ import annotations

from collections.abc import Generator

import redis

from app.config import Settings, settings_from_env


def get_settings() -> Settings:
    return settings_from_env()


def get_redis() -> Generator[redis.Redis, None, None]:
    # Session snapshots are JSON text; decode so reads return str, not bytes.
    client = redis.Redis.from_url(settings_from_env().redis_url, decode_responses=True)
    try:
        yield client
    finally:
        client.close()
