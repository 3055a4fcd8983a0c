"""
API Module - HTTP interface for duel clients.

Clients:
1. Start a duel (both players sign)
2. Fetch the session commitment to use as the proof's public input
3. Submit proofs
4. Resolve the duel

All game state lives in the engine's session store.
"""

from .service import APIService
from .app import create_app

__all__ = [
    "APIService",
    "create_app",
]
