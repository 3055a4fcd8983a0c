"""
In-process game hub.

Locks stakes when a session registers and records the winner when it is
reported. Duplicate registrations and second reports are refused, so a
misbehaving engine shows up as a LedgerRejected abort instead of silently
double-paying.
"""

from __future__ import annotations
from dataclasses import dataclass, field

import structlog

from ..engine_core.errors import LedgerRejected
from .interfaces import Ledger

logger = structlog.get_logger(__name__)


@dataclass
class LedgerEntry:
    """Stakes locked for one session, and its result once reported."""
    game_id: str
    session_id: int
    player1: str
    player2: str
    player1_points: int
    player2_points: int
    player1_won: bool | None = None

    @property
    def is_settled(self) -> bool:
        return self.player1_won is not None


@dataclass
class InMemoryLedger(Ledger):
    """
    Ledger kept in memory.

    `register_calls` / `report_calls` count every invocation, including
    refused ones, so tests can assert exactly-once reporting.
    """
    entries: dict[int, LedgerEntry] = field(default_factory=dict)
    reject_registrations: bool = False
    register_calls: int = 0
    report_calls: int = 0
    reports: list[tuple[int, bool]] = field(default_factory=list)

    def register(self, game_id, session_id, player1, player2, player1_points, player2_points):
        self.register_calls += 1
        if self.reject_registrations:
            raise LedgerRejected(f"Hub is not accepting session {session_id}")
        if session_id in self.entries:
            raise LedgerRejected(f"Session {session_id} is already registered")
        self.entries[session_id] = LedgerEntry(
            game_id=game_id,
            session_id=session_id,
            player1=player1,
            player2=player2,
            player1_points=player1_points,
            player2_points=player2_points,
        )
        logger.info("stakes_locked", session_id=session_id, game_id=game_id)

    def report(self, session_id, player1_won):
        self.report_calls += 1
        entry = self.entries.get(session_id)
        if entry is None:
            raise LedgerRejected(f"Session {session_id} was never registered")
        if entry.is_settled:
            raise LedgerRejected(f"Session {session_id} is already settled")
        entry.player1_won = player1_won
        self.reports.append((session_id, player1_won))
        logger.info("result_recorded", session_id=session_id, player1_won=player1_won)

    def reports_for(self, session_id: int) -> list[bool]:
        return [won for sid, won in self.reports if sid == session_id]
