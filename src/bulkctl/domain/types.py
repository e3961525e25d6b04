"""Operation kinds, error categories, and status codes.

Status codes are symbolic strings. Raw codes reported by a store are kept
verbatim; the two sentinels cover missing and unrecognizable detail.
"""

from __future__ import annotations

from enum import StrEnum


class OperationKind(StrEnum):
    """Bulk write operations supported by the store."""

    UPDATE = "update"
    UPSERT = "upsert"
    DELETE = "delete"


class ErrorCategory(StrEnum):
    """Coarse classes a status code falls into."""

    FIELD_VALIDATION = "FieldValidationError"
    DUPLICATE_VALUE = "DuplicateValueError"
    PERMISSION = "PermissionError"
    UNKNOWN_OUTCOME_SHAPE = "UnknownOutcomeShapeError"
    UNCATEGORIZED = "UncategorizedError"


class StatusCode(StrEnum):
    """Codes emitted by the bundled record store, plus the sentinels."""

    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    INVALID_FIELD = "INVALID_FIELD"
    INVALID_TYPE_ON_FIELD = "INVALID_TYPE_ON_FIELD_IN_RECORD"
    MISSING_EXTERNAL_ID = "MISSING_EXTERNAL_ID"
    FIELD_INTEGRITY_EXCEPTION = "FIELD_INTEGRITY_EXCEPTION"
    DUPLICATE_VALUE = "DUPLICATE_VALUE"
    INSUFFICIENT_ACCESS = "INSUFFICIENT_ACCESS"
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    ALL_OR_NONE_OPERATION_ROLLED_BACK = "ALL_OR_NONE_OPERATION_ROLLED_BACK"

    # --- Sentinels ---
    UNKNOWN = "UNKNOWN"
    UNRECOGNIZED_OUTCOME = "UNRECOGNIZED_OUTCOME"
