from __future__ import annotations

from contextlib import contextmanager

import redis

SESSION_LOCK_PREFIX = "lock:session:"  # + {uuid}


class SessionBusyError(RuntimeError):
    pass


@contextmanager
def session_lock(*, r: redis.Redis, session_id: str, ttl_ms: int = 5_000):
    """Hold a listing session while one event is applied to it.

    A concurrent event for the same session fails fast with SessionBusyError
    instead of queueing. The key expires after `ttl_ms` if the holder dies
    mid-event; release is unconditional.
    """

    key = f"{SESSION_LOCK_PREFIX}{session_id}"
    if not r.set(key, "1", nx=True, px=ttl_ms):
        raise SessionBusyError(f"Session {session_id} is busy")
    try:
        yield
    finally:
        r.delete(key)
