"""
Storage - Session persistence with expiry.

Sessions are never deleted by the engine; the store's expiry policy
disposes of abandoned ones.
"""

from .store import (
    SessionStore,
    InMemorySessionStore,
    StoreEntry,
    DEFAULT_SESSION_TTL_SECONDS,
)

__all__ = [
    "SessionStore",
    "InMemorySessionStore",
    "StoreEntry",
    "DEFAULT_SESSION_TTL_SECONDS",
]
