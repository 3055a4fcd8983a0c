"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Byte fields (commitments, proofs, public inputs, code hashes) travel as hex
strings, with or without a 0x prefix.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- UNAUTHORIZED: A required signature is missing
- NOT_PLAYER: Submitter is not part of the session
- ALREADY_SUBMITTED: Player already has a verified submission
- ALREADY_RESOLVED: Session is closed to submissions
- COMMITMENT_MISMATCH: Public inputs differ from the session commitment
- NO_SUBMISSIONS: Resolve attempted before any verified submission
- PROOF_REJECTED: The verifier refused the proof
- LEDGER_REJECTED: The game hub refused the session or the result
- SELF_PLAY: Both players are the same identity
- ADMIN_UNAUTHORIZED: Admin change without the admin's signature
- CONFIGURATION_ERROR: Hub or verifier address does not resolve
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.state import U32_MAX


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_PLAYER = "NOT_PLAYER"
    ALREADY_SUBMITTED = "ALREADY_SUBMITTED"
    ALREADY_RESOLVED = "ALREADY_RESOLVED"
    COMMITMENT_MISMATCH = "COMMITMENT_MISMATCH"
    NO_SUBMISSIONS = "NO_SUBMISSIONS"
    PROOF_REJECTED = "PROOF_REJECTED"
    LEDGER_REJECTED = "LEDGER_REJECTED"
    SELF_PLAY = "SELF_PLAY"
    ADMIN_UNAUTHORIZED = "ADMIN_UNAUTHORIZED"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SessionPhase(str, Enum):
    ACTIVE = "active"
    RESOLVED = "resolved"


class OutcomeValue(str, Enum):
    PLAYER1_WON = "player1_won"
    PLAYER2_WON = "player2_won"
    BOTH_FOUND = "both_found"
    NEITHER_FOUND = "neither_found"


# =============================================================================
# Requests
# =============================================================================

class StartSessionRequest(BaseModel):
    """Start a duel. Both players must be listed in X-Signers."""
    session_id: int = Field(ge=0, le=U32_MAX)
    player1: str = Field(min_length=1)
    player2: str = Field(min_length=1)
    player1_points: int
    player2_points: int
    commitment: Optional[str] = Field(
        None, description="32-byte hex; required in supplied mode, omitted in derived mode"
    )


class SubmitProofRequest(BaseModel):
    """Submit a proof. The player must be listed in X-Signers."""
    player: str = Field(min_length=1)
    proof: str = Field(description="Raw proof bytes as hex")
    public_inputs: str = Field(description="Must equal the session commitment")
    cost: Optional[int] = Field(
        None, ge=0, le=U32_MAX,
        description="Energy spent; caller-supplied and not proven",
    )


class AddressUpdateRequest(BaseModel):
    address: str = Field(min_length=1)


class UpgradeRequest(BaseModel):
    code_hash: str = Field(description="32-byte hex hash of the new code")


# =============================================================================
# Responses
# =============================================================================

class SessionResponse(BaseModel):
    """Full session record."""
    session_id: int
    player1: str
    player2: str
    player1_points: int
    player2_points: int
    commitment: str
    player1_submitted: bool = False
    player2_submitted: bool = False
    player1_cost: Optional[int] = None
    player2_cost: Optional[int] = None
    resolved: bool = False
    phase: SessionPhase = SessionPhase.ACTIVE
    api_version: str = "v1"


class CommitmentResponse(BaseModel):
    session_id: int
    commitment: str


class OutcomeResponse(BaseModel):
    """Result of resolve; identical on every call for a session."""
    session_id: int
    outcome: OutcomeValue
    player1_won: bool


class ConfigResponse(BaseModel):
    contract_address: str
    admin: str
    hub_address: str
    verifier_address: str
    code_hash: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    commitment_mode: str
    outcome_policy: str
