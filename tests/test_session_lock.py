from __future__ import annotations

import fakeredis
import pytest

from app.lock import SESSION_LOCK_PREFIX, SessionBusyError, session_lock


def test_second_holder_is_rejected_until_release() -> None:
    r = fakeredis.FakeRedis(decode_responses=True)

    with session_lock(r=r, session_id="s1"):
        assert r.pttl(f"{SESSION_LOCK_PREFIX}s1") > 0
        with pytest.raises(SessionBusyError, match="s1"):
            with session_lock(r=r, session_id="s1"):
                pass
        # Other sessions are independent.
        with session_lock(r=r, session_id="s2"):
            pass

    with session_lock(r=r, session_id="s1"):
        pass


def test_lock_is_released_when_the_event_fails() -> None:
    r = fakeredis.FakeRedis(decode_responses=True)

    with pytest.raises(ValueError):
        with session_lock(r=r, session_id="s1"):
            raise ValueError("Session not found")

    assert r.get(f"{SESSION_LOCK_PREFIX}s1") is None
