"""
Tests for the session store.
"""

import pytest

from ..engine_core.state import GameSession, PlayerResult
from ..storage import InMemorySessionStore


def make_session(session_id=1):
    return GameSession(
        session_id=session_id,
        player1="a",
        player2="b",
        player1_points=1,
        player2_points=2,
        commitment=b"\x00" * 32,
    )


class TestInMemorySessionStore:

    def test_get_returns_copy(self, store):
        store.set(1, make_session())

        copy = store.get(1)
        copy.resolved = True

        assert not store.get(1).resolved

    def test_missing(self, store):
        assert store.get(1) is None
        assert not store.contains(1)

    def test_expiry(self, store, clock):
        store.set(1, make_session())
        clock.advance(3600)
        assert store.get(1) is None

    def test_set_keeps_deadline(self, store, clock):
        store.set(1, make_session())
        deadline = store.expires_at(1)

        clock.advance(100)
        store.set(1, make_session())

        assert store.expires_at(1) == deadline

    def test_extend_ttl_never_shortens(self, store, clock):
        store.set(1, make_session())
        deadline = store.expires_at(1)

        store.extend_ttl(1, ttl_seconds=10)

        assert store.expires_at(1) == deadline

    def test_purge_expired(self, store, clock):
        store.set(1, make_session(1))
        clock.advance(1800)
        store.set(2, make_session(2))
        clock.advance(1801)

        assert store.purge_expired() == 1
        assert store.session_ids() == [2]

    def test_new_session_frees_expired_entries(self, store, clock):
        for sid in range(50):
            store.set(sid, make_session(sid))
        clock.advance(10_000)

        store.set(9999, make_session(9999))

        assert store.purge_expired() == 0
        assert store.session_ids() == [9999]
        assert store.expires_at(0) is None

    def test_update_does_not_sweep(self, store, clock):
        store.set(1, make_session(1))
        clock.advance(1800)
        store.set(2, make_session(2))
        clock.advance(1800)

        store.set(2, make_session(2))

        assert store.expires_at(1) is not None

    def test_transaction_rolls_back(self, store):
        store.set(1, make_session())

        with pytest.raises(RuntimeError):
            with store.transaction():
                session = store.get(1)
                session.player1_result = PlayerResult(cost=3)
                store.set(1, session)
                store.set(2, make_session(2))
                raise RuntimeError("abort")

        assert store.get(1).player1_result is None
        assert store.get(2) is None

    def test_transaction_commits(self, store):
        with store.transaction():
            store.set(1, make_session())
        assert store.contains(1)

    def test_default_ttl_is_thirty_days(self):
        assert InMemorySessionStore().ttl_seconds == 30 * 24 * 3600
