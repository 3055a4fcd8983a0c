"""
Settings - Environment configuration.

Environment Variables:
- AETHERGRID_ENV: "development" (console logs) or "production" (JSON logs)
- AETHERGRID_SESSION_TTL_SECONDS: Session lifetime in storage (default: 30 days)
- AETHERGRID_COMMITMENT_MODE: "supplied" or "derived" (default: supplied)
- AETHERGRID_OUTCOME_POLICY: "cost" or "binary" (default: cost)
- AETHERGRID_CONTRACT_ADDRESS: Game id reported to the hub (default: aethergrid)
- AETHERGRID_ADMIN: Initial admin identity (default: admin)
- AETHERGRID_HUB_ADDRESS: Game hub address (default: game-hub)
- AETHERGRID_VERIFIER_ADDRESS: Verifier address (default: ultrahonk-verifier)
- AETHERGRID_VERIFIER_COMMAND: External verifier command; unset uses the stub verifier
- AETHERGRID_VERIFIER_VK: Verification key path passed as {vk}
- ALLOWED_ORIGINS: Comma-separated CORS origins (default: *)
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field

from .storage.store import DEFAULT_SESSION_TTL_SECONDS


def _get_str_env(key: str, default: str) -> str:
    value = os.environ.get(key)
    return value if value else default


def _get_int_env(key: str, default: int, minimum: int | None = None) -> int:
    """Get integer environment variable, falling back on missing, invalid or below-minimum values."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    if minimum is not None and parsed < minimum:
        return default
    return parsed


@dataclass(frozen=True)
class Settings:
    """Runtime configuration. Build with `Settings.from_env()`."""
    environment: str = "development"
    session_ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS
    commitment_mode: str = "supplied"
    outcome_policy: str = "cost"
    contract_address: str = "aethergrid"
    admin: str = "admin"
    hub_address: str = "game-hub"
    verifier_address: str = "ultrahonk-verifier"
    verifier_command: str | None = None
    verifier_vk: str | None = None
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self):
        if self.session_ttl_seconds <= 0:
            raise ValueError("session_ttl_seconds must be positive")

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            environment=_get_str_env("AETHERGRID_ENV", "development"),
            session_ttl_seconds=_get_int_env(
                "AETHERGRID_SESSION_TTL_SECONDS", DEFAULT_SESSION_TTL_SECONDS, minimum=1
            ),
            commitment_mode=_get_str_env("AETHERGRID_COMMITMENT_MODE", "supplied"),
            outcome_policy=_get_str_env("AETHERGRID_OUTCOME_POLICY", "cost"),
            contract_address=_get_str_env("AETHERGRID_CONTRACT_ADDRESS", "aethergrid"),
            admin=_get_str_env("AETHERGRID_ADMIN", "admin"),
            hub_address=_get_str_env("AETHERGRID_HUB_ADDRESS", "game-hub"),
            verifier_address=_get_str_env("AETHERGRID_VERIFIER_ADDRESS", "ultrahonk-verifier"),
            verifier_command=os.environ.get("AETHERGRID_VERIFIER_COMMAND") or None,
            verifier_vk=os.environ.get("AETHERGRID_VERIFIER_VK") or None,
            allowed_origins=_get_str_env("ALLOWED_ORIGINS", "*").split(","),
        )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
