"""ServiceResult — what a bulkctl command gets back from the service layer.

A bulk write is ``ok`` whenever the store accepted the batch, even if every
record in it failed: per-record outcomes sit in ``data["results"]`` and a
summary warning is attached. ``ok=False`` is reserved for a rejected batch,
whose :class:`ServiceError` code is one of ``INVALID_OPERATION``,
``EMPTY_BATCH``, ``STORE_UNAVAILABLE`` or ``OUTCOME_COUNT_MISMATCH``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from bulkctl.domain.errors import BatchRejectedError


class ServiceError(BaseModel):
    """A rejected batch. ``detail`` holds the operation and the batch size."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_rejection(cls, exc: BatchRejectedError, *, records: int) -> ServiceError:
        return cls(
            code=exc.code,
            message=exc.message,
            detail={"operation": exc.operation, "records": records},
        )


class ServiceResult(BaseModel):
    """Outcome of one bulkctl operation.

    Attributes:
        ok: False only when the batch as a whole was rejected.
        op: ``bulk_update``, ``bulk_upsert``, ``bulk_delete``, ``normalize``
            or ``init``.
        data: Summary counts plus one entry per record, validated against
            :mod:`bulkctl.services.contracts`.
        warnings: Failed-record summary and other non-fatal notes.
        error: The rejection, when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @property
    def exit_code(self) -> int:
        """CLI exit status: 1 for a rejected batch, 0 otherwise."""
        return 0 if self.ok else 1
