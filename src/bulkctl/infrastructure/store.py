"""RecordStore — SQLite-backed bulk-write collaborator.

Implements :class:`~bulkctl.domain.ports.BulkWriteClient`. Every record is
written inside its own savepoint so one bad record never aborts the rest
of the batch. Outcomes are the store-native dataclasses from
:mod:`bulkctl.domain.outcomes`, index-aligned with the submitted records.

With ``all_or_none=True`` a single failure rolls back the whole batch and
every record that had succeeded is reported as rolled back.
"""

from __future__ import annotations

import logging
import re
import secrets
from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, OperationalError, StatementError

from bulkctl.domain.errors import BatchRejectedError
from bulkctl.domain.outcomes import (
    DeleteError,
    DeleteOutcome,
    RawError,
    SaveOutcome,
    UpsertOutcome,
)
from bulkctl.domain.types import OperationKind, StatusCode
from bulkctl.infrastructure.database.schema import WRITABLE_COLUMNS, records

if TYPE_CHECKING:
    from sqlalchemy import Connection, Executable
    from sqlalchemy.engine import Engine

    from bulkctl.domain.ports import Record

logger = logging.getLogger(__name__)

RECORD_ID_PREFIX = "rec_"

_SCALARS = (str, int, float, type(None))

# SQLite INTEGER is a signed 64-bit value.
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1

_CONSTRAINT_RE = re.compile(r"(UNIQUE|NOT NULL) constraint failed: (?P<columns>[\w.,\s]+)")

type Outcome = SaveOutcome | UpsertOutcome | DeleteOutcome


def generate_record_id() -> str:
    """New random record id: ``rec_`` + 12 hex chars."""
    return f"{RECORD_ID_PREFIX}{secrets.token_hex(6)}"


def now_iso() -> str:
    """Current UTC time as standard ISO 8601."""
    return datetime.now(UTC).isoformat()


def integrity_error(exc: IntegrityError) -> RawError:
    """Translate a SQLite constraint violation into a store error."""
    detail = str(exc.orig)
    match = _CONSTRAINT_RE.search(detail)
    if match is None:
        return RawError(detail, StatusCode.FIELD_INTEGRITY_EXCEPTION)
    columns = tuple(c.strip().rsplit(".", 1)[-1] for c in match["columns"].split(","))
    if match.group(1) == "UNIQUE":
        return RawError(
            f"Duplicate value for {', '.join(columns)}", StatusCode.DUPLICATE_VALUE, columns
        )
    return RawError(
        f"Required fields are missing: {', '.join(columns)}",
        StatusCode.REQUIRED_FIELD_MISSING,
        columns,
    )


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class RecordStore:
    """Bulk insert/update, upsert, and delete against the ``records`` table."""

    def __init__(self, engine: Engine, *, external_id_field: str = "external_id") -> None:
        if external_id_field not in WRITABLE_COLUMNS:
            msg = f"External id field must be a writable column, got {external_id_field!r}"
            raise ValueError(msg)
        self._engine = engine
        self._external_id_field = external_id_field

    @property
    def external_id_field(self) -> str:
        return self._external_id_field

    # ------------------------------------------------------------------
    # Bulk write entry point
    # ------------------------------------------------------------------

    def bulk_write(
        self,
        operation: OperationKind | str,
        records: Sequence[Record],
        *,
        all_or_none: bool = False,
    ) -> list[Outcome]:
        """Apply *operation* to every record and return one outcome each.

        Raises:
            BatchRejectedError: The batch as a whole was refused (unknown
                operation, empty batch, or the database is unusable).
        """
        try:
            kind = OperationKind(operation)
        except ValueError:
            raise BatchRejectedError(
                "INVALID_OPERATION",
                f"Unsupported operation: {operation!r}",
                operation=str(operation),
            ) from None
        if not records:
            raise BatchRejectedError("EMPTY_BATCH", "No records submitted", operation=kind.value)

        handlers: dict[OperationKind, Callable[[Connection, Any], Outcome]] = {
            OperationKind.UPDATE: self._save,
            OperationKind.UPSERT: self._upsert,
            OperationKind.DELETE: self._delete,
        }
        handler = handlers[kind]
        logger.debug("Bulk %s of %d records (all_or_none=%s)", kind, len(records), all_or_none)

        try:
            with self._engine.connect() as conn, conn.begin() as txn:
                outcomes = [handler(conn, record) for record in records]
                if all_or_none and not all(o.success for o in outcomes):
                    txn.rollback()
                    logger.debug("Bulk %s rolled back after record failure", kind)
                    return [self._rolled_back(o) for o in outcomes]
        except OperationalError as exc:
            raise BatchRejectedError(
                "STORE_UNAVAILABLE", str(exc.orig), operation=kind.value
            ) from exc

        failed = sum(1 for o in outcomes if not o.success)
        logger.debug("Bulk %s finished: %d ok, %d failed", kind, len(outcomes) - failed, failed)
        return outcomes

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, record_id: str) -> dict[str, Any] | None:
        """Fetch one record row as a dict, or None."""
        with self._engine.connect() as conn:
            row = conn.execute(select(records).where(records.c.id == record_id)).mappings().first()
        return dict(row) if row is not None else None

    def count(self) -> int:
        """Number of stored records."""
        with self._engine.connect() as conn:
            return int(conn.execute(select(func.count(records.c.id))).scalar_one())

    # ------------------------------------------------------------------
    # Per-operation handlers
    # ------------------------------------------------------------------

    def _save(self, conn: Connection, record: Any) -> SaveOutcome:
        if not isinstance(record, Mapping):
            return SaveOutcome(False, None, (_not_a_mapping(),))
        values = dict(record)
        record_id = values.pop("id", None)
        if error := _check_columns(values):
            return SaveOutcome(False, _text_id(record_id), (error,))
        if record_id is None:
            new_id, error = self._insert_row(conn, values)
            return SaveOutcome(error is None, new_id, () if error is None else (error,))
        record_id = str(record_id)
        error = self._update_row(conn, record_id, values)
        return SaveOutcome(error is None, record_id, () if error is None else (error,))

    def _upsert(self, conn: Connection, record: Any) -> UpsertOutcome:
        if not isinstance(record, Mapping):
            return UpsertOutcome(False, None, (_not_a_mapping(),))
        field = self._external_id_field
        values = dict(record)
        values.pop("id", None)
        if _is_blank(values.get(field)):
            error = RawError(
                f"Upsert requires a value for {field}", StatusCode.MISSING_EXTERNAL_ID, (field,)
            )
            return UpsertOutcome(False, None, (error,))
        if error := _check_columns(values):
            return UpsertOutcome(False, None, (error,))

        existing = conn.execute(
            select(records.c.id).where(records.c[field] == values[field])
        ).scalar_one_or_none()
        if existing is None:
            new_id, error = self._insert_row(conn, values)
            return UpsertOutcome(error is None, new_id, () if error is None else (error,), True)
        error = self._update_row(conn, existing, values)
        return UpsertOutcome(error is None, existing, () if error is None else (error,), False)

    def _delete(self, conn: Connection, record: Any) -> DeleteOutcome:
        record_id = record.get("id") if isinstance(record, Mapping) else record
        if _is_blank(record_id) or not isinstance(record_id, (str, int)):
            error = DeleteError("Delete requires a record id", StatusCode.REQUIRED_FIELD_MISSING)
            return DeleteOutcome(False, None, (error,))
        record_id = str(record_id)
        row = conn.execute(
            select(records.c.locked).where(records.c.id == record_id)
        ).first()
        if row is None:
            error = DeleteError(f"No record with id {record_id}", StatusCode.ENTITY_NOT_FOUND)
            return DeleteOutcome(False, record_id, (error,))
        if row.locked:
            error = DeleteError(f"Record {record_id} is locked", StatusCode.INSUFFICIENT_ACCESS)
            return DeleteOutcome(False, record_id, (error,))
        conn.execute(delete(records).where(records.c.id == record_id))
        return DeleteOutcome(True, record_id)

    # ------------------------------------------------------------------
    # Row helpers
    # ------------------------------------------------------------------

    def _insert_row(
        self, conn: Connection, values: dict[str, Any]
    ) -> tuple[str | None, RawError | None]:
        if _is_blank(values.get("name")):
            return None, RawError(
                "Required fields are missing: name", StatusCode.REQUIRED_FIELD_MISSING, ("name",)
            )
        new_id = generate_record_id()
        timestamp = now_iso()
        stmt = insert(records).values(id=new_id, created=timestamp, modified=timestamp, **values)
        error = self._execute(conn, stmt)
        return (new_id, None) if error is None else (None, error)

    def _update_row(
        self, conn: Connection, record_id: str, values: dict[str, Any]
    ) -> RawError | None:
        row = conn.execute(select(records.c.locked).where(records.c.id == record_id)).first()
        if row is None:
            return RawError(f"No record with id {record_id}", StatusCode.ENTITY_NOT_FOUND, ("id",))
        if row.locked:
            return RawError(f"Record {record_id} is locked", StatusCode.INSUFFICIENT_ACCESS)
        if "name" in values and _is_blank(values["name"]):
            return RawError(
                "Required fields are missing: name", StatusCode.REQUIRED_FIELD_MISSING, ("name",)
            )
        stmt = update(records).where(records.c.id == record_id).values(modified=now_iso(), **values)
        return self._execute(conn, stmt)

    @staticmethod
    def _execute(conn: Connection, stmt: Executable) -> RawError | None:
        """Run *stmt* in a savepoint; per-record driver errors become store errors.

        ``OperationalError`` is left to propagate: it means the database
        itself is unusable and the batch is rejected.
        """
        try:
            with conn.begin_nested():
                conn.execute(stmt)
        except IntegrityError as exc:
            return integrity_error(exc)
        except OperationalError:
            raise
        except StatementError as exc:
            return RawError(str(exc.orig or exc), StatusCode.FIELD_INTEGRITY_EXCEPTION)
        except OverflowError as exc:
            return RawError(str(exc), StatusCode.INVALID_TYPE_ON_FIELD)
        return None

    @staticmethod
    def _rolled_back(outcome: Outcome) -> Outcome:
        if not outcome.success:
            return outcome
        message = "Rolled back because another record in the batch failed"
        code = StatusCode.ALL_OR_NONE_OPERATION_ROLLED_BACK
        if isinstance(outcome, DeleteOutcome):
            return replace(outcome, success=False, id=None, errors=(DeleteError(message, code),))
        return replace(outcome, success=False, id=None, errors=(RawError(message, code),))


def _check_columns(values: Mapping[str, Any]) -> RawError | None:
    unknown = tuple(sorted(set(values) - WRITABLE_COLUMNS))
    if unknown:
        return RawError(f"Unknown fields: {', '.join(unknown)}", StatusCode.INVALID_FIELD, unknown)
    bad_types = tuple(sorted(k for k, v in values.items() if not isinstance(v, _SCALARS)))
    if bad_types:
        return RawError(
            f"Fields must hold scalar values: {', '.join(bad_types)}",
            StatusCode.INVALID_TYPE_ON_FIELD,
            bad_types,
        )
    too_large = tuple(
        sorted(
            k
            for k, v in values.items()
            if isinstance(v, int) and not _INT_MIN <= v <= _INT_MAX
        )
    )
    if too_large:
        return RawError(
            f"Integer out of range for fields: {', '.join(too_large)}",
            StatusCode.INVALID_TYPE_ON_FIELD,
            too_large,
        )
    return None


def _not_a_mapping() -> RawError:
    return RawError("Record must be a mapping of field values", StatusCode.INVALID_FIELD)


def _text_id(record_id: Any) -> str | None:
    return None if record_id is None else str(record_id)
