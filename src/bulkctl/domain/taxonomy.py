"""Stable mapping from status codes to error categories."""

from __future__ import annotations

from bulkctl.domain.types import ErrorCategory, StatusCode

CATEGORY_BY_CODE: dict[str, ErrorCategory] = {
    StatusCode.REQUIRED_FIELD_MISSING: ErrorCategory.FIELD_VALIDATION,
    StatusCode.INVALID_FIELD: ErrorCategory.FIELD_VALIDATION,
    StatusCode.MISSING_EXTERNAL_ID: ErrorCategory.FIELD_VALIDATION,
    StatusCode.FIELD_INTEGRITY_EXCEPTION: ErrorCategory.FIELD_VALIDATION,
    "STRING_TOO_LONG": ErrorCategory.FIELD_VALIDATION,
    StatusCode.INVALID_TYPE_ON_FIELD: ErrorCategory.FIELD_VALIDATION,
    "FIELD_CUSTOM_VALIDATION_EXCEPTION": ErrorCategory.FIELD_VALIDATION,
    StatusCode.DUPLICATE_VALUE: ErrorCategory.DUPLICATE_VALUE,
    "DUPLICATE_EXTERNAL_ID": ErrorCategory.DUPLICATE_VALUE,
    "DUPLICATES_DETECTED": ErrorCategory.DUPLICATE_VALUE,
    StatusCode.INSUFFICIENT_ACCESS: ErrorCategory.PERMISSION,
    "INSUFFICIENT_ACCESS_OR_READONLY": ErrorCategory.PERMISSION,
    "INSUFFICIENT_ACCESS_ON_CROSS_REFERENCE_ENTITY": ErrorCategory.PERMISSION,
    StatusCode.UNRECOGNIZED_OUTCOME: ErrorCategory.UNKNOWN_OUTCOME_SHAPE,
}


def categorize(status_code: str | None) -> ErrorCategory:
    """Return the category for *status_code*.

    Examples:
        >>> categorize("DUPLICATE_VALUE")
        <ErrorCategory.DUPLICATE_VALUE: 'DuplicateValueError'>
        >>> categorize("SOMETHING_ELSE")
        <ErrorCategory.UNCATEGORIZED: 'UncategorizedError'>
    """
    if not status_code:
        return ErrorCategory.UNCATEGORIZED
    return CATEGORY_BY_CODE.get(status_code, ErrorCategory.UNCATEGORIZED)
