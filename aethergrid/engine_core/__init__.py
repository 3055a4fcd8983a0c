"""
Engine Core - Session state, commitments, outcomes and the state machine.

The engine:
1. Derives or accepts a per-session commitment
2. Validates submissions against it (whole-buffer equality)
3. Delegates proof checks to the verifier
4. Computes a deterministic, idempotent outcome
5. Reports the outcome to the game hub exactly once

GameEngine lives in `engine_core.engine`; it depends on the collaborator
and admin packages, which themselves import the leaf modules below.
"""

from .state import GameSession, PlayerResult, SessionPhase, Outcome
from .result import ActionResult, ErrorCode
from .errors import (
    AetherGridError,
    SelfPlayError,
    ProofRejected,
    LedgerRejected,
    ConfigurationError,
    AdminAuthorizationError,
)
from .commitment import (
    CommitmentScheme,
    SuppliedCommitment,
    DerivedCommitment,
    derive_commitment,
    session_nullifier,
    commitment_from_hex,
    commitment_to_hex,
)
from .outcome import (
    OutcomePolicy,
    CostTiebreakPolicy,
    BinaryVerificationPolicy,
    compute_outcome,
)

__all__ = [
    "GameSession",
    "PlayerResult",
    "SessionPhase",
    "Outcome",
    "ActionResult",
    "ErrorCode",
    "AetherGridError",
    "SelfPlayError",
    "ProofRejected",
    "LedgerRejected",
    "ConfigurationError",
    "AdminAuthorizationError",
    "CommitmentScheme",
    "SuppliedCommitment",
    "DerivedCommitment",
    "derive_commitment",
    "session_nullifier",
    "commitment_from_hex",
    "commitment_to_hex",
    "OutcomePolicy",
    "CostTiebreakPolicy",
    "BinaryVerificationPolicy",
    "compute_outcome",
]
