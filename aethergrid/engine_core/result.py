"""
Operation results - Typed outcomes of engine operations.

Every recoverable failure is returned, never raised, so callers can react
to contention (a late submission, a second submission, ...) without
exception handling. Aborts live in errors.py.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Recoverable failure codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_PLAYER = "NOT_PLAYER"
    ALREADY_SUBMITTED = "ALREADY_SUBMITTED"
    ALREADY_RESOLVED = "ALREADY_RESOLVED"
    COMMITMENT_MISMATCH = "COMMITMENT_MISMATCH"
    NO_SUBMISSIONS = "NO_SUBMISSIONS"


@dataclass
class ActionResult:
    """
    Result of an engine operation.

    Contains:
    - Whether the operation succeeded
    - The returned value (session, commitment, outcome) on success
    - Error message and code on failure
    """
    success: bool
    value: Any | None = None
    error: str | None = None
    error_code: ErrorCode | None = None

    @classmethod
    def ok(cls, value: Any = None) -> ActionResult:
        """Create a success result."""
        return cls(success=True, value=value)

    @classmethod
    def failure(cls, error_code: ErrorCode, error: str) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)
