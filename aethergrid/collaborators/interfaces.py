"""
Collaborator Interfaces - Capabilities the engine is given, never owns.

- Ledger: the game hub that locks stakes and records final results
- Verifier: accepts or aborts on a proof; never returns "false"
- Authenticator: answers "did this identity sign this request"

Implementations are injected, so the engine runs against deterministic
in-process fakes in tests and real adapters in deployment.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any


class Ledger(ABC):
    """The external system of record for stakes and results."""

    @abstractmethod
    def register(
        self,
        game_id: str,
        session_id: int,
        player1: str,
        player2: str,
        player1_points: int,
        player2_points: int,
    ):
        """Lock both stakes for a session. Raises LedgerRejected to refuse."""
        ...

    @abstractmethod
    def report(self, session_id: int, player1_won: bool):
        """Record the final result. Called at most once per session."""
        ...


class Verifier(ABC):
    """
    Proof verifier.

    Contract: the verifier MUST raise on an invalid proof and MUST NOT
    signal failure through its return value. Returning normally means the
    proof is valid. Neither argument is ever parsed by the engine.
    """

    @abstractmethod
    def verify_proof(self, proof: bytes, public_inputs: bytes) -> None:
        ...


class Authenticator(ABC):
    """Boolean gate over identities."""

    @abstractmethod
    def is_authorized(self, identity: str, args: tuple[Any, ...] | None = None) -> bool:
        """
        Check that `identity` authorised the current call.

        When `args` is given the authorisation must cover exactly those
        arguments (e.g. `(session_id, points)` at session start).
        """
        ...
