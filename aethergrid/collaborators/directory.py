"""
Collaborator Directory - Resolves configured addresses to instances.

The engine looks addresses up on every call, so pointing the admin config
at a new hub or verifier takes effect for the next operation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TypeVar

from ..engine_core.errors import ConfigurationError
from .interfaces import Ledger, Verifier

T = TypeVar("T")


@dataclass
class CollaboratorDirectory:
    """address -> collaborator instance."""
    _instances: dict[str, object] = field(default_factory=dict)

    def register(self, address: str, instance: object):
        self._instances[address] = instance

    def addresses(self) -> list[str]:
        return sorted(self._instances)

    def ledger(self, address: str | None) -> Ledger:
        return self._lookup(address, Ledger, "GameHub")

    def verifier(self, address: str | None) -> Verifier:
        return self._lookup(address, Verifier, "Verifier")

    def _lookup(self, address: str | None, kind: type[T], label: str) -> T:
        if not address:
            raise ConfigurationError(f"{label} not set")
        instance = self._instances.get(address)
        if instance is None:
            raise ConfigurationError(f"{label} address {address!r} is not deployed")
        if not isinstance(instance, kind):
            raise ConfigurationError(
                f"{label} address {address!r} resolves to {type(instance).__name__}"
            )
        return instance
