"""ResultService — bulk writes in, canonical results out.

INVARIANT: output is index-aligned with input. ``normalize_all`` never
raises; per-record failures are data. The only exception that escapes
``perform_bulk_write`` is a batch-level
:class:`~bulkctl.domain.errors.BatchRejectedError`.

Retry policy belongs to the caller. A common approach is to resubmit only
the records whose result has ``success=False``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from bulkctl.domain.errors import BatchRejectedError
from bulkctl.domain.types import OperationKind
from bulkctl.services.registry import DEFAULT_REGISTRY, StrategyRegistry

if TYPE_CHECKING:
    from bulkctl.domain.ports import BulkWriteClient, Record
    from bulkctl.domain.results import CanonicalResult


class ResultService:
    """Normalizes bulk write outcomes through a :class:`StrategyRegistry`.

    Usage::

        svc = ResultService(store)
        results = svc.bulk_upsert([{"external_id": "A-1", "name": "Ada"}])
        failed = [r for r in results if not r.success]
    """

    def __init__(
        self,
        client: BulkWriteClient | None = None,
        *,
        registry: StrategyRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self._client = client
        self._registry = registry

    def normalize(self, raw: Any) -> CanonicalResult:
        """Normalize one raw outcome.

        A strategy that raises on a malformed outcome of its own type
        (``errors=None``, an error object whose accessors fail) degrades to
        the fallback.
        """
        strategy = self._registry.resolve(raw)
        try:
            return strategy.normalize(raw)
        except Exception:
            return self._registry.fallback.normalize(raw)

    def normalize_all(self, raw_outcomes: Sequence[Any]) -> list[CanonicalResult]:
        """Normalize a mixed sequence of outcomes, preserving order and length."""
        return [self.normalize(raw) for raw in raw_outcomes]

    def perform_bulk_write(
        self,
        operation: OperationKind | str,
        records: Sequence[Record],
    ) -> list[CanonicalResult]:
        """Submit *records* with partial success allowed and normalize the outcomes."""
        if self._client is None:
            msg = "ResultService has no bulk-write client configured"
            raise RuntimeError(msg)

        try:
            kind = OperationKind(operation)
        except ValueError:
            raise BatchRejectedError(
                "INVALID_OPERATION",
                f"Unsupported operation: {operation!r}",
                operation=str(operation),
            ) from None

        raw_outcomes = self._client.bulk_write(kind, records, all_or_none=False)
        if len(raw_outcomes) != len(records):
            raise BatchRejectedError(
                "OUTCOME_COUNT_MISMATCH",
                f"Store returned {len(raw_outcomes)} outcomes for {len(records)} records",
                operation=kind.value,
            )
        return self.normalize_all(raw_outcomes)

    def bulk_update(self, records: Sequence[Record]) -> list[CanonicalResult]:
        """Insert records without ``id``; update records that carry one."""
        return self.perform_bulk_write(OperationKind.UPDATE, records)

    def bulk_upsert(self, records: Sequence[Record]) -> list[CanonicalResult]:
        """Insert or update records matched on the store's external-id field."""
        return self.perform_bulk_write(OperationKind.UPSERT, records)

    def bulk_delete(self, records: Sequence[Record]) -> list[CanonicalResult]:
        """Delete records given as ids or mappings with an ``id``."""
        return self.perform_bulk_write(OperationKind.DELETE, records)
