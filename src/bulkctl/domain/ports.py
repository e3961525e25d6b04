"""Port for the external bulk-write collaborator."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from bulkctl.domain.types import OperationKind

type Record = Mapping[str, Any] | str


class BulkWriteClient(Protocol):
    """Anything that can submit a batch and report one outcome per record.

    Implementations must return an index-aligned sequence of raw outcomes
    and must not raise for per-record failures when ``all_or_none`` is
    False. Refusing the whole batch is signalled with
    :class:`~bulkctl.domain.errors.BatchRejectedError`.
    """

    def bulk_write(
        self,
        operation: OperationKind,
        records: Sequence[Record],
        *,
        all_or_none: bool = False,
    ) -> Sequence[object]: ...
