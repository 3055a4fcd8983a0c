"""
Game Engine - The session state machine.

The engine is the single point of session mutation:

    start   -> Active       registers stakes with the hub, stores the commitment
    submit  -> (Active)     verifies a proof, fills one result slot
    resolve -> Resolved     computes the outcome, reports it to the hub once

Every operation is one transaction: the engine lock serialises operations
and the store snapshot rolls back every write if anything inside raises.
The verifier and the hub are called inside that transaction, so a rejected
proof or a refused report leaves the session exactly as it was.

Recoverable failures come back as ActionResult failures. Malformed requests
(self-play, out-of-range ids, bad commitments) raise ValueError, and
collaborator aborts (ProofRejected, LedgerRejected) propagate unchanged.
"""

from __future__ import annotations
import threading
from contextlib import contextmanager
from typing import Iterator

import structlog

from ..admin import AdminConsole, ContractConfig
from ..collaborators.directory import CollaboratorDirectory
from ..collaborators.interfaces import Authenticator
from ..storage.store import InMemorySessionStore, SessionStore
from .commitment import CommitmentScheme, SuppliedCommitment
from .errors import SelfPlayError
from .outcome import CostTiebreakPolicy, OutcomePolicy
from .result import ActionResult, ErrorCode
from .state import GameSession, I128_MAX, I128_MIN, PlayerResult, U32_MAX

logger = structlog.get_logger(__name__)


class GameEngine:
    """
    Runs duels against injected collaborators.

    Usage:
        engine = GameEngine(config, directory, authenticator)
        engine.start(1, "alice", "bob", 100, 100, commitment)
        engine.submit(1, "alice", proof, commitment, cost=30)
        result = engine.resolve(1)
        result.value  # Outcome.PLAYER1_WON
    """

    def __init__(
        self,
        config: ContractConfig,
        directory: CollaboratorDirectory,
        authenticator: Authenticator,
        store: SessionStore | None = None,
        commitment_scheme: CommitmentScheme | None = None,
        outcome_policy: OutcomePolicy | None = None,
    ):
        self.admin = AdminConsole(config, authenticator)
        self.directory = directory
        self.authenticator = authenticator
        self.store = store or InMemorySessionStore()
        self.commitment_scheme = commitment_scheme or SuppliedCommitment()
        self.outcome_policy = outcome_policy or CostTiebreakPolicy()
        self._lock = threading.RLock()
        self._log = logger.bind(
            component="game_engine",
            commitment_mode=self.commitment_scheme.name,
            outcome_policy=self.outcome_policy.name,
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(
        self,
        session_id: int,
        player1: str,
        player2: str,
        player1_points: int,
        player2_points: int,
        commitment: bytes | None = None,
    ) -> ActionResult:
        """
        Start a duel between two players.

        Both players must authorise their own `(session_id, points)`. The hub
        locks the stakes before anything is stored; if it refuses, the
        LedgerRejected abort propagates and no session exists.
        """
        if player1 == player2:
            raise SelfPlayError(player1)
        _check_range("session_id", session_id, 0, U32_MAX)
        _check_range("player1_points", player1_points, I128_MIN, I128_MAX)
        _check_range("player2_points", player2_points, I128_MIN, I128_MAX)

        for player, points in ((player1, player1_points), (player2, player2_points)):
            if not self.authenticator.is_authorized(player, (session_id, points)):
                return ActionResult.failure(
                    ErrorCode.UNAUTHORIZED,
                    f"{player} has not authorised {points} points for session {session_id}",
                )

        expected = self.commitment_scheme.prepare(session_id, player1, player2, commitment)

        with self._transaction():
            if self.store.contains(session_id):
                self._log.warning("session_overwritten", session_id=session_id)

            hub = self.directory.ledger(self.admin.config.hub_address)
            hub.register(
                self.admin.config.contract_address,
                session_id,
                player1,
                player2,
                player1_points,
                player2_points,
            )

            session = GameSession(
                session_id=session_id,
                player1=player1,
                player2=player2,
                player1_points=player1_points,
                player2_points=player2_points,
                commitment=expected,
            )
            self.store.set(session_id, session)
            self.store.extend_ttl(session_id)

        self._log.info(
            "session_started",
            session_id=session_id,
            player1=player1,
            player2=player2,
        )
        return ActionResult.ok(session)

    def submit(
        self,
        session_id: int,
        player: str,
        proof: bytes,
        public_inputs: bytes,
        cost: int | None = None,
    ) -> ActionResult:
        """
        Submit a proof of discovery.

        `public_inputs` must equal the session commitment byte for byte. The
        comparison covers the whole buffer; nothing is sliced or decoded.

        The verifier either returns (valid) or raises (invalid). A raise
        unwinds this call and the session is left untouched.

        `cost` is caller-supplied and not constrained by the proof.
        """
        if not self.authenticator.is_authorized(player):
            return ActionResult.failure(
                ErrorCode.UNAUTHORIZED, f"{player} did not sign this submission"
            )
        cost = self.outcome_policy.validate_cost(cost)

        with self._transaction():
            session = self.store.get(session_id)
            if session is None:
                return _not_found(session_id)
            if session.resolved:
                return ActionResult.failure(
                    ErrorCode.ALREADY_RESOLVED, f"Session {session_id} is already resolved"
                )
            if not session.is_player(player):
                return ActionResult.failure(
                    ErrorCode.NOT_PLAYER, f"{player} is not a player in session {session_id}"
                )
            if session.result_for(player) is not None:
                return ActionResult.failure(
                    ErrorCode.ALREADY_SUBMITTED,
                    f"{player} already submitted a proof for session {session_id}",
                )
            if bytes(public_inputs) != session.commitment:
                return ActionResult.failure(
                    ErrorCode.COMMITMENT_MISMATCH,
                    f"Public inputs do not match the commitment of session {session_id}",
                )

            verifier = self.directory.verifier(self.admin.config.verifier_address)
            try:
                verifier.verify_proof(bytes(proof), bytes(public_inputs))
            except Exception:
                self._log.info("proof_rejected", session_id=session_id, player=player)
                raise

            session.record_result(player, PlayerResult(cost=cost))
            self.store.set(session_id, session)
            self.store.extend_ttl(session_id)

        self._log.info("proof_accepted", session_id=session_id, player=player, cost=cost)
        return ActionResult.ok(session)

    def resolve(self, session_id: int) -> ActionResult:
        """
        Resolve the duel and report the winner to the hub.

        Callable by anyone. After the first success it is idempotent: later
        calls recompute the same outcome from the stored results and touch
        neither the store nor the hub.
        """
        with self._transaction():
            session = self.store.get(session_id)
            if session is None:
                return _not_found(session_id)

            if session.resolved:
                outcome = self._decide(session)
                self._log.debug("resolve_replayed", session_id=session_id, outcome=outcome.value)
                return ActionResult.ok(outcome)

            if not session.has_submissions:
                return ActionResult.failure(
                    ErrorCode.NO_SUBMISSIONS,
                    f"Neither player has submitted a proof for session {session_id}",
                )

            outcome = self._decide(session)
            session.resolved = True
            self.store.set(session_id, session)

            hub = self.directory.ledger(self.admin.config.hub_address)
            hub.report(session_id, outcome.player1_won)

        self._log.info(
            "session_resolved",
            session_id=session_id,
            outcome=outcome.value,
            player1_won=outcome.player1_won,
        )
        return ActionResult.ok(outcome)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_session(self, session_id: int) -> ActionResult:
        with self._lock:
            session = self.store.get(session_id)
        if session is None:
            return _not_found(session_id)
        return ActionResult.ok(session)

    def get_commitment(self, session_id: int) -> ActionResult:
        """The public input every proof for this session must carry."""
        result = self.get_session(session_id)
        if not result.success:
            return result
        return ActionResult.ok(result.value.commitment)

    # =========================================================================
    # Internals
    # =========================================================================

    def _decide(self, session: GameSession):
        return self.outcome_policy.decide(session.player1_result, session.player2_result)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        with self._lock:
            try:
                with self.store.transaction():
                    yield
            except Exception as e:
                self._log.debug("transaction_rolled_back", error=type(e).__name__)
                raise


def _not_found(session_id: int) -> ActionResult:
    return ActionResult.failure(
        ErrorCode.SESSION_NOT_FOUND, f"No session with id {session_id}"
    )


def _check_range(name: str, value: int, low: int, high: int):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise ValueError(f"{name} out of range: {value}")
