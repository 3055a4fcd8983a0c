"""
Authenticators.

SignerAuthenticator approves identities that signed the current request;
the API layer sets them per request.
"""

from __future__ import annotations
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

from .interfaces import Authenticator


_current_signers: ContextVar[frozenset[str]] = ContextVar(
    "aethergrid_signers", default=frozenset()
)


class SignerAuthenticator(Authenticator):
    """
    Identities that signed the in-flight request.

    A signature covers the whole request, so argument-bound checks pass for
    any `args` once the identity has signed.

    Usage:
        auth = SignerAuthenticator()
        with auth.signed_by("alice", "bob"):
            engine.start(...)
    """

    def is_authorized(self, identity, args=None):
        return identity in _current_signers.get()

    @contextmanager
    def signed_by(self, *identities: str) -> Iterator[None]:
        token = _current_signers.set(frozenset(i for i in identities if i))
        try:
            yield
        finally:
            _current_signers.reset(token)

    @staticmethod
    def current_signers() -> frozenset[str]:
        return _current_signers.get()
