"""BulkWriteService — bulk writes and normalization reported as ServiceResult.

Partial failure is a successful operation: ``ok`` is True and failed
records are listed in ``data["results"]``. Only a rejected batch yields
``ok=False``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from bulkctl.domain.errors import BatchRejectedError
from bulkctl.domain.types import OperationKind
from bulkctl.services.base import BaseService
from bulkctl.services.contracts import BulkWriteResultData, NormalizeResultData, dump_validated
from bulkctl.services.result import ServiceError, ServiceResult
from bulkctl.services.results import ResultService

if TYPE_CHECKING:
    from bulkctl.domain.ports import Record
    from bulkctl.domain.results import CanonicalResult
    from bulkctl.infrastructure.store import RecordStore

logger = logging.getLogger(__name__)


def summarize(results: Sequence[CanonicalResult]) -> dict[str, Any]:
    """Count and serialize canonical results for a payload."""
    items = [
        {
            "index": i,
            "record_id": r.record_id,
            "success": r.success,
            "errors": [
                {
                    "fields": list(e.fields),
                    "message": e.message,
                    "status_code": e.status_code,
                    "category": e.category.value,
                }
                for e in r.errors
            ],
        }
        for i, r in enumerate(results)
    ]
    succeeded = sum(1 for r in results if r.success)
    return {
        "count": len(items),
        "succeeded": succeeded,
        "failed": len(items) - succeeded,
        "results": items,
    }


class BulkWriteService(BaseService):
    """Runs bulk writes through :class:`ResultService` for the CLI."""

    def __init__(self, store: RecordStore | None) -> None:
        super().__init__(store)
        self._results = ResultService(store)

    def write(self, operation: OperationKind | str, records: Sequence[Record]) -> ServiceResult:
        """Perform a bulk write; per-record failures stay in the payload."""
        op = f"bulk_{operation}"
        try:
            results = self._results.perform_bulk_write(operation, records)
        except BatchRejectedError as exc:
            logger.warning("Bulk %s rejected: %s (%s)", operation, exc.message, exc.code)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError.from_rejection(exc, records=len(records)),
            )

        data = summarize(results)
        data["operation"] = str(OperationKind(operation))
        warnings = []
        if data["failed"]:
            warnings.append(f"{data['failed']} of {data['count']} records failed")
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(BulkWriteResultData, data),
            warnings=warnings,
        )

    def normalize(self, raw_outcomes: Sequence[Any]) -> ServiceResult:
        """Normalize already-produced raw outcomes (no write is performed)."""
        results = self._results.normalize_all(raw_outcomes)
        data = summarize(results)
        return ServiceResult(
            ok=True,
            op="normalize",
            data=dump_validated(NormalizeResultData, data),
        )
