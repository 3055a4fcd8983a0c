"""
Session State - The per-duel record owned by the engine.

Design principles:
- One record per session id, nothing shared across sessions
- Append-only result slots: absent -> present, never back
- Commitment fixed at creation
- Serializable: plain values only, safe to deep-copy into storage
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


U32_MAX = 2**32 - 1
I128_MIN = -(2**127)
I128_MAX = 2**127 - 1
COMMITMENT_SIZE = 32


class SessionPhase(Enum):
    """Lifecycle phases. No record exists before ACTIVE."""
    ACTIVE = "active"
    RESOLVED = "resolved"


class Outcome(Enum):
    """Resolved winner classification."""
    PLAYER1_WON = "player1_won"
    PLAYER2_WON = "player2_won"
    BOTH_FOUND = "both_found"  # tie or joint win, reported as player1
    NEITHER_FOUND = "neither_found"  # unreachable from resolve

    @property
    def player1_won(self) -> bool:
        """The flag reported to the game hub."""
        return self in (Outcome.PLAYER1_WON, Outcome.BOTH_FOUND)


@dataclass(frozen=True)
class PlayerResult:
    """
    A recorded, verified submission.

    `cost` is the energy the player claims to have spent. It is supplied by
    the caller and is NOT constrained by the proof; a dishonest player can
    underreport it.
    """
    cost: int | None = None


@dataclass
class GameSession:
    """
    State of a single duel.

    Stakes are opaque to the engine and only forwarded to the game hub.
    """
    session_id: int
    player1: str
    player2: str
    player1_points: int
    player2_points: int
    commitment: bytes

    player1_result: PlayerResult | None = None
    player2_result: PlayerResult | None = None
    resolved: bool = False

    @property
    def phase(self) -> SessionPhase:
        return SessionPhase.RESOLVED if self.resolved else SessionPhase.ACTIVE

    @property
    def has_submissions(self) -> bool:
        return self.player1_result is not None or self.player2_result is not None

    def is_player(self, player: str) -> bool:
        return player in (self.player1, self.player2)

    def result_for(self, player: str) -> PlayerResult | None:
        """Get the result slot for a player."""
        if player == self.player1:
            return self.player1_result
        if player == self.player2:
            return self.player2_result
        raise KeyError(f"{player} is not a player in session {self.session_id}")

    def record_result(self, player: str, result: PlayerResult):
        """Fill a player's slot. Filled slots are never overwritten."""
        if self.result_for(player) is not None:
            raise ValueError(f"{player} already has a result in session {self.session_id}")
        if player == self.player1:
            self.player1_result = result
        else:
            self.player2_result = result

    def to_dict(self) -> dict:
        """Serialize for API responses and the CLI."""
        return {
            "session_id": self.session_id,
            "player1": self.player1,
            "player2": self.player2,
            "player1_points": self.player1_points,
            "player2_points": self.player2_points,
            "commitment": "0x" + self.commitment.hex(),
            "player1_cost": _cost_or_none(self.player1_result),
            "player2_cost": _cost_or_none(self.player2_result),
            "player1_submitted": self.player1_result is not None,
            "player2_submitted": self.player2_result is not None,
            "resolved": self.resolved,
            "phase": self.phase.value,
        }


def _cost_or_none(result: PlayerResult | None) -> int | None:
    return result.cost if result is not None else None
