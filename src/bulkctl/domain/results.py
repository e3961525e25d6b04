"""CanonicalResult and CanonicalError — the uniform per-record outcome.

INVARIANT: ``result.success == (len(result.errors) == 0)`` for every result
produced by :meth:`CanonicalResult.from_outcome`. Plain construction does
not validate and never fails.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from bulkctl.domain.taxonomy import categorize
from bulkctl.domain.types import ErrorCategory, StatusCode

NO_MESSAGE = "No message provided"
MISSING_DETAIL_MESSAGE = "Outcome reported failure without error detail"


class CanonicalError(BaseModel):
    """One normalized error attached to a record."""

    model_config = {"frozen": True}

    fields: tuple[str, ...] = ()
    message: str = NO_MESSAGE
    status_code: str = StatusCode.UNKNOWN

    @property
    def category(self) -> ErrorCategory:
        return categorize(self.status_code)


class CanonicalResult(BaseModel):
    """Normalized outcome of writing one record.

    Attributes:
        record_id: Identifier of the affected record, or None when the
            store neither assigned nor knew one. ``""`` is a real id.
        success: True iff the store reported success and no errors.
        errors: Errors for this record; empty iff ``success``.
    """

    model_config = {"frozen": True}

    record_id: str | None = None
    success: bool
    errors: tuple[CanonicalError, ...] = Field(default_factory=tuple)

    @classmethod
    def from_outcome(
        cls,
        record_id: str | None,
        reported_success: bool,
        errors: Iterable[CanonicalError] = (),
    ) -> CanonicalResult:
        """Build a result that honours the success/errors invariant.

        Errors present always win over a reported success. A reported
        failure without any error detail gets one ``UNKNOWN`` error.
        """
        collected = tuple(errors)
        if not reported_success and not collected:
            collected = (CanonicalError(message=MISSING_DETAIL_MESSAGE),)
        return cls(record_id=record_id, success=not collected, errors=collected)

    @classmethod
    def unrecognized(cls, type_name: str) -> CanonicalResult:
        """Failure result for an outcome whose shape could not be read."""
        error = CanonicalError(
            message=f"Unrecognized outcome shape: {type_name}",
            status_code=StatusCode.UNRECOGNIZED_OUTCOME,
        )
        return cls(record_id=None, success=False, errors=(error,))
