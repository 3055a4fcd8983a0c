"""
Verifier adapters.

StubVerifier
    Deterministic stand-in: rejects empty proofs and proofs whose first byte
    is 0xff, accepts anything else. Used for development servers and tests.

CommandVerifier
    Runs an external verifier binary (e.g. Barretenberg's `bb verify`) on
    temp files. A non-zero exit status is a rejection.
"""

from __future__ import annotations
import shlex
import subprocess
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from ..engine_core.errors import ConfigurationError, ProofRejected
from .interfaces import Verifier

logger = structlog.get_logger(__name__)

INVALID_PROOF_MARKER = 0xFF


@dataclass
class StubVerifier(Verifier):
    """Accepts well-formed-looking proofs; counts calls."""
    calls: int = 0

    def verify_proof(self, proof, public_inputs):
        self.calls += 1
        if not proof:
            raise ProofRejected("verify_proof: empty proof")
        if proof[0] == INVALID_PROOF_MARKER:
            raise ProofRejected("verify_proof: invalid proof")


DEFAULT_COMMAND = (
    "bb verify --scheme ultra_honk -k {vk} -p {proof} -i {public_inputs}"
)


@dataclass
class CommandVerifier(Verifier):
    """
    Shell out to a verifier CLI.

    `command` is a template; `{proof}` and `{public_inputs}` are replaced by
    paths of temp files holding the raw bytes, `{vk}` by `vk_path`.
    """
    command: list[str] = field(default_factory=lambda: shlex.split(DEFAULT_COMMAND))
    vk_path: str | None = None
    timeout: float = 120.0

    @classmethod
    def from_string(cls, command: str, vk_path: str | None = None, timeout: float = 120.0) -> CommandVerifier:
        return cls(command=shlex.split(command), vk_path=vk_path, timeout=timeout)

    def verify_proof(self, proof, public_inputs):
        with tempfile.TemporaryDirectory(prefix="aethergrid-verify-") as tmp:
            proof_path = Path(tmp) / "proof"
            inputs_path = Path(tmp) / "public_inputs"
            proof_path.write_bytes(proof)
            inputs_path.write_bytes(public_inputs)

            args = [
                part.format(
                    proof=proof_path,
                    public_inputs=inputs_path,
                    vk=self.vk_path or "",
                )
                for part in self.command
            ]
            try:
                result = subprocess.run(
                    args,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                    check=False,
                )
            except FileNotFoundError as e:
                raise ConfigurationError(f"Verifier binary not found: {args[0]}") from e
            except subprocess.TimeoutExpired as e:
                raise ProofRejected(f"Verifier timed out after {self.timeout}s") from e

        if result.returncode != 0:
            stderr = result.stderr.strip() or "unknown verifier error"
            logger.info("external_verifier_rejected", returncode=result.returncode)
            raise ProofRejected(f"Verifier rejected proof: {stderr}")
