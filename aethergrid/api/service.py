"""
API Service - Business logic layer between API and engine.

The service:
1. Builds the engine and its collaborators from Settings
2. Decodes hex request fields into bytes
3. Scopes request signatures for the authenticator
4. Returns engine ActionResults untouched

This layer is framework-agnostic (can be used with FastAPI, a CLI, tests).
"""

from __future__ import annotations
import contextlib
from dataclasses import dataclass
from typing import ContextManager, Iterable

from ..admin import ContractConfig
from ..collaborators import (
    CollaboratorDirectory,
    CommandVerifier,
    InMemoryLedger,
    SignerAuthenticator,
    StubVerifier,
)
from ..config import Settings
from ..engine_core.commitment import commitment_from_hex, get_scheme
from ..engine_core.engine import GameEngine
from ..engine_core.outcome import get_policy
from ..engine_core.result import ActionResult
from ..storage import InMemorySessionStore


def decode_hex(value: str, field_name: str) -> bytes:
    """Hex string (optional 0x) to bytes; bad input raises ValueError."""
    text = value[2:] if value.startswith(("0x", "0X")) else value
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise ValueError(f"{field_name} is not valid hex") from None


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService.from_settings()

        with service.signed_by(["alice", "bob"]):
            service.start_session(1, "alice", "bob", 100, 100, "0xabab...")
    """
    engine: GameEngine

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> APIService:
        """Wire an engine with in-process collaborators at the configured addresses."""
        settings = settings or Settings.from_env()

        directory = CollaboratorDirectory()
        directory.register(settings.hub_address, InMemoryLedger())
        if settings.verifier_command:
            verifier = CommandVerifier.from_string(
                settings.verifier_command, vk_path=settings.verifier_vk
            )
        else:
            verifier = StubVerifier()
        directory.register(settings.verifier_address, verifier)

        config = ContractConfig(
            contract_address=settings.contract_address,
            admin=settings.admin,
            hub_address=settings.hub_address,
            verifier_address=settings.verifier_address,
        )
        engine = GameEngine(
            config=config,
            directory=directory,
            authenticator=SignerAuthenticator(),
            store=InMemorySessionStore(ttl_seconds=settings.session_ttl_seconds),
            commitment_scheme=get_scheme(settings.commitment_mode),
            outcome_policy=get_policy(settings.outcome_policy),
        )
        return cls(engine=engine)

    def signed_by(self, signers: Iterable[str]) -> ContextManager[None]:
        """Scope request signatures; a no-op for authenticators without signer support."""
        authenticator = self.engine.authenticator
        if isinstance(authenticator, SignerAuthenticator):
            return authenticator.signed_by(*signers)
        return contextlib.nullcontext()

    # =========================================================================
    # Sessions
    # =========================================================================

    def start_session(
        self,
        session_id: int,
        player1: str,
        player2: str,
        player1_points: int,
        player2_points: int,
        commitment: str | None = None,
    ) -> ActionResult:
        supplied = commitment_from_hex(commitment) if commitment is not None else None
        return self.engine.start(
            session_id, player1, player2, player1_points, player2_points, supplied
        )

    def submit_proof(
        self,
        session_id: int,
        player: str,
        proof: str,
        public_inputs: str,
        cost: int | None = None,
    ) -> ActionResult:
        return self.engine.submit(
            session_id,
            player,
            decode_hex(proof, "proof"),
            decode_hex(public_inputs, "public_inputs"),
            cost,
        )

    def resolve(self, session_id: int) -> ActionResult:
        return self.engine.resolve(session_id)

    def get_session(self, session_id: int) -> ActionResult:
        return self.engine.get_session(session_id)

    def get_commitment(self, session_id: int) -> ActionResult:
        return self.engine.get_commitment(session_id)

    # =========================================================================
    # Admin
    # =========================================================================

    def get_config(self) -> ContractConfig:
        return self.engine.admin.config

    def set_admin(self, address: str) -> ContractConfig:
        self.engine.admin.set_admin(address)
        return self.get_config()

    def set_hub(self, address: str) -> ContractConfig:
        self.engine.admin.set_hub(address)
        return self.get_config()

    def set_verifier(self, address: str) -> ContractConfig:
        self.engine.admin.set_verifier(address)
        return self.get_config()

    def upgrade(self, code_hash: str) -> ContractConfig:
        self.engine.admin.upgrade(decode_hex(code_hash, "code_hash"))
        return self.get_config()
