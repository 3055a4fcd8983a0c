"""
Collaborators - External capabilities behind narrow interfaces.

The engine never reaches a collaborator directly: it resolves the game hub
and verifier through the directory using the addresses in the admin
config, and asks the authenticator whether identities signed the request.
"""

from .interfaces import Ledger, Verifier, Authenticator
from .ledger import InMemoryLedger, LedgerEntry
from .verifier import StubVerifier, CommandVerifier
from .auth import SignerAuthenticator
from .directory import CollaboratorDirectory

__all__ = [
    "Ledger",
    "Verifier",
    "Authenticator",
    "InMemoryLedger",
    "LedgerEntry",
    "StubVerifier",
    "CommandVerifier",
    "SignerAuthenticator",
    "CollaboratorDirectory",
]
