"""
Admin Console - Guarded access to the deployment configuration.

The configuration is an explicit, immutable record. Writes go through
AdminConsole, which swaps the record only after the current admin has
signed the call. Reads are open.
"""

from __future__ import annotations
from dataclasses import dataclass, replace

import structlog

from .collaborators.interfaces import Authenticator
from .engine_core.errors import AdminAuthorizationError
from .engine_core.state import COMMITMENT_SIZE

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ContractConfig:
    """
    Addresses the engine runs with.

    `contract_address` doubles as the game id sent to the hub.
    `code_hash` is the hash of the code most recently installed by `upgrade`.
    """
    contract_address: str
    admin: str
    hub_address: str
    verifier_address: str
    code_hash: bytes | None = None

    def to_dict(self) -> dict:
        return {
            "contract_address": self.contract_address,
            "admin": self.admin,
            "hub_address": self.hub_address,
            "verifier_address": self.verifier_address,
            "code_hash": "0x" + self.code_hash.hex() if self.code_hash else None,
        }


class AdminConsole:
    """Getters and admin-guarded setters over a ContractConfig."""

    def __init__(self, config: ContractConfig, authenticator: Authenticator):
        self._config = config
        self._authenticator = authenticator
        self._log = logger.bind(component="admin_console")

    @property
    def config(self) -> ContractConfig:
        return self._config

    def get_admin(self) -> str:
        return self._config.admin

    def get_hub(self) -> str:
        return self._config.hub_address

    def get_verifier(self) -> str:
        return self._config.verifier_address

    def set_admin(self, new_admin: str):
        self._update(admin=new_admin)

    def set_hub(self, new_hub: str):
        self._update(hub_address=new_hub)

    def set_verifier(self, new_verifier: str):
        """
        Point the engine at a different verifier.

        If the new verifier embeds a different verification key, proofs
        generated against the old key will fail for every active session.
        """
        self._update(verifier_address=new_verifier)

    def upgrade(self, new_code_hash: bytes):
        if len(new_code_hash) != COMMITMENT_SIZE:
            raise ValueError(f"code hash must be {COMMITMENT_SIZE} bytes")
        self._update(code_hash=bytes(new_code_hash))

    def _update(self, **changes):
        admin = self._config.admin
        if not self._authenticator.is_authorized(admin):
            raise AdminAuthorizationError(f"Admin {admin} must authorise this change")
        for name, value in changes.items():
            if name != "code_hash" and not value:
                raise ValueError(f"{name} must not be empty")
        self._config = replace(self._config, **changes)
        self._log.info(
            "config_updated",
            fields=sorted(changes),
            admin=self._config.admin,
        )
