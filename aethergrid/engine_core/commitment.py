"""
Commitment Deriver - The 32-byte public target a proof must reference.

Two strategies:

SuppliedCommitment
    The caller hands over an opaque 32-byte value at start. It is expected to
    be Poseidon2(x, y, nullifier) where the nullifier is `session_nullifier`
    below, computed off-path. Replay resistance comes from the private
    coordinates plus the session-bound nullifier: a proof for one session
    does not reference any other session's commitment.

DerivedCommitment
    The engine computes keccak256 over the session identity itself. No
    coordination is needed, but there is no secret salt, so the target is
    guessable by anyone who knows the session id and both players. It still
    binds each commitment to exactly one (session_id, player1, player2).

Identities are UTF-8 encoded and length-prefixed; without the prefixes
("ab", "c") and ("a", "bc") would hash identically.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from eth_utils import keccak

from .state import COMMITMENT_SIZE, U32_MAX


NULLIFIER_TAG = b"AETHERGRID_NULLIFIER_V1"
COMMITMENT_TAG = b"AETHERGRID_COMMITMENT_V1"


def _session_preimage(tag: bytes, session_id: int, player1: str, player2: str) -> bytes:
    if not 0 <= session_id <= U32_MAX:
        raise ValueError(f"session_id out of u32 range: {session_id}")
    parts = [tag, session_id.to_bytes(4, "big")]
    for player in (player1, player2):
        raw = player.encode("utf-8")
        parts.append(len(raw).to_bytes(4, "big"))
        parts.append(raw)
    return b"".join(parts)


def session_nullifier(session_id: int, player1: str, player2: str) -> bytes:
    """
    Session-binding salt for off-path commitment derivation.

    keccak256(tag || be32(session_id) || be32(len) || player1 || be32(len) || player2)
    """
    return keccak(_session_preimage(NULLIFIER_TAG, session_id, player1, player2))


def derive_commitment(session_id: int, player1: str, player2: str) -> bytes:
    """On-path commitment for DerivedCommitment."""
    return keccak(_session_preimage(COMMITMENT_TAG, session_id, player1, player2))


def commitment_from_hex(value: str) -> bytes:
    """Parse a 32-byte commitment from hex, with or without 0x."""
    text = value[2:] if value.startswith(("0x", "0X")) else value
    raw = bytes.fromhex(text)
    if len(raw) != COMMITMENT_SIZE:
        raise ValueError(f"commitment must be {COMMITMENT_SIZE} bytes, got {len(raw)}")
    return raw


def commitment_to_hex(value: bytes) -> str:
    return "0x" + value.hex()


class CommitmentScheme(ABC):
    """Strategy that produces a session's commitment at start."""

    name: str = "abstract"

    @abstractmethod
    def prepare(
        self,
        session_id: int,
        player1: str,
        player2: str,
        supplied: bytes | None = None,
    ) -> bytes:
        """Return the commitment to store. Malformed input raises ValueError."""
        ...


class SuppliedCommitment(CommitmentScheme):
    """Accept an externally derived commitment verbatim."""

    name = "supplied"

    def prepare(self, session_id, player1, player2, supplied=None):
        if supplied is None:
            raise ValueError("a commitment must be supplied at start")
        if len(supplied) != COMMITMENT_SIZE:
            raise ValueError(
                f"commitment must be {COMMITMENT_SIZE} bytes, got {len(supplied)}"
            )
        return bytes(supplied)


class DerivedCommitment(CommitmentScheme):
    """Hash the session identity on-path."""

    name = "derived"

    def prepare(self, session_id, player1, player2, supplied=None):
        if supplied is not None:
            raise ValueError("commitment is derived from the session; do not supply one")
        return derive_commitment(session_id, player1, player2)


SCHEMES: dict[str, type[CommitmentScheme]] = {
    SuppliedCommitment.name: SuppliedCommitment,
    DerivedCommitment.name: DerivedCommitment,
}


def get_scheme(name: str) -> CommitmentScheme:
    """Look up a strategy by its configuration name."""
    try:
        return SCHEMES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown commitment mode: {name} (expected one of {sorted(SCHEMES)})"
        ) from None
