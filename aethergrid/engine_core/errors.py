"""
Aborts - Unrecoverable failures that unwind a whole operation.

Recoverable contention cases (wrong player, double submission, ...) are
returned as ActionResult failures. The exceptions here are different:
raising one inside an engine transaction rolls back every store write
made earlier in the same operation, and the exception reaches the caller.
"""

from __future__ import annotations


class AetherGridError(Exception):
    """Base class for every abort raised by the engine and its collaborators."""
    error_code = "INTERNAL_ERROR"


class SelfPlayError(AetherGridError, ValueError):
    """Both sides of a session are the same identity."""
    error_code = "SELF_PLAY"

    def __init__(self, player: str):
        super().__init__(f"Cannot play against yourself: {player}")
        self.player = player


class ProofRejected(AetherGridError):
    """
    The verifier refused a proof.

    Verifiers signal failure ONLY by raising. A normal return is success.
    """
    error_code = "PROOF_REJECTED"


class LedgerRejected(AetherGridError):
    """The game hub refused to register a session or record its result."""
    error_code = "LEDGER_REJECTED"


class ConfigurationError(AetherGridError):
    """A collaborator address does not resolve to a usable instance."""
    error_code = "CONFIGURATION_ERROR"


class AdminAuthorizationError(AetherGridError):
    """A guarded admin operation was attempted without the admin's signature."""
    error_code = "ADMIN_UNAUTHORIZED"
