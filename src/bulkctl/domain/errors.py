"""Batch-level failure signal.

Per-record failures are never raised; they are carried as data in
:class:`~bulkctl.domain.results.CanonicalResult`. Only a store refusing the
whole batch surfaces as an exception.
"""

from __future__ import annotations


class BatchRejectedError(Exception):
    """The bulk write was refused as a whole; no per-record results exist."""

    def __init__(self, code: str, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.operation = operation

    def __repr__(self) -> str:
        return f"BatchRejectedError(code={self.code!r}, message={self.message!r})"
