"""Invariant failures raised inside a caller's transaction.

Raising (rather than returning a result) lets the enclosing
``Database.transaction()`` roll back every write made before the check
failed. ``message`` is user-facing copy; ``status_code`` is the HTTP
status a route layer should answer with.
"""

from __future__ import annotations

from typing import ClassVar


class InvariantError(Exception):
    """Base class for cross-entity rule violations."""

    code: ClassVar[str] = "INVARIANT"
    status_code: ClassVar[int] = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(InvariantError):
    """Entity absent or owned by another user; the two are indistinguishable."""

    code = "NOT_FOUND"
    status_code = 404


class LinkageError(InvariantError):
    code = "INVALID_LINK"
    status_code = 400


class CapExceededError(InvariantError):
    code = "CAP_EXCEEDED"
    status_code = 409


class DuplicateError(InvariantError):
    code = "DUPLICATE"
    status_code = 409
