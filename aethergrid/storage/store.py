"""
Session Store - Durable session_id -> GameSession map with expiry.

The store:
- Hands out copies, so a caller mutating a record without `set` changes nothing
- Expires entries after their TTL (abandoned sessions simply disappear);
  storing a new session frees every expired entry
- Supports `transaction()`: any exception inside restores the pre-transaction
  contents and is re-raised

Expiry is only extended explicitly, mirroring a ledger's temporary storage:
`set` keeps an entry's current deadline, `extend_ttl` pushes it out.
"""

from __future__ import annotations
import copy
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator

import structlog

from ..engine_core.state import GameSession

logger = structlog.get_logger(__name__)

# 30 days
DEFAULT_SESSION_TTL_SECONDS = 30 * 24 * 3600


class SessionStore(ABC):
    """Transactional get/set primitive for session records."""

    @abstractmethod
    def get(self, session_id: int) -> GameSession | None:
        ...

    @abstractmethod
    def set(self, session_id: int, session: GameSession):
        ...

    @abstractmethod
    def extend_ttl(self, session_id: int, ttl_seconds: int | None = None):
        ...

    @abstractmethod
    def transaction(self):
        """Context manager with rollback on exception."""
        ...

    def contains(self, session_id: int) -> bool:
        return self.get(session_id) is not None


@dataclass
class StoreEntry:
    """A stored session with its expiry deadline."""
    session: GameSession
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class InMemorySessionStore(SessionStore):
    """
    In-process store.

    Usage:
        store = InMemorySessionStore(ttl_seconds=3600)
        with store.transaction():
            store.set(1, session)
            store.extend_ttl(1)
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[int, StoreEntry] = {}
        self._log = logger.bind(component="session_store")

    def get(self, session_id: int) -> GameSession | None:
        entry = self._entries.get(session_id)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._log.debug("session_expired", session_id=session_id)
            del self._entries[session_id]
            return None
        return copy.deepcopy(entry.session)

    def set(self, session_id: int, session: GameSession):
        now = self._clock()
        entry = self._entries.get(session_id)
        if entry is None or entry.is_expired(now):
            self.purge_expired()
            expires_at = now + self.ttl_seconds
        else:
            expires_at = entry.expires_at
        self._entries[session_id] = StoreEntry(
            session=copy.deepcopy(session),
            expires_at=expires_at,
        )

    def extend_ttl(self, session_id: int, ttl_seconds: int | None = None):
        entry = self._entries.get(session_id)
        if entry is None:
            return
        deadline = self._clock() + (ttl_seconds if ttl_seconds is not None else self.ttl_seconds)
        entry.expires_at = max(entry.expires_at, deadline)

    def expires_at(self, session_id: int) -> float | None:
        entry = self._entries.get(session_id)
        return entry.expires_at if entry else None

    def purge_expired(self) -> int:
        """Drop expired entries. Returns how many were removed."""
        now = self._clock()
        stale = [sid for sid, entry in self._entries.items() if entry.is_expired(now)]
        for sid in stale:
            del self._entries[sid]
        if stale:
            self._log.info("sessions_purged", count=len(stale))
        return len(stale)

    def session_ids(self) -> list[int]:
        now = self._clock()
        return sorted(sid for sid, entry in self._entries.items() if not entry.is_expired(now))

    @contextmanager
    def transaction(self) -> Iterator[InMemorySessionStore]:
        snapshot = {
            sid: StoreEntry(session=copy.deepcopy(e.session), expires_at=e.expires_at)
            for sid, e in self._entries.items()
        }
        try:
            yield self
        except BaseException:
            self._entries = snapshot
            self._log.debug("transaction_rolled_back")
            raise
