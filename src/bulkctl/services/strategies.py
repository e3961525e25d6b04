"""OutcomeStrategy — one normalizer per raw outcome shape.

Each strategy turns one raw outcome into a :class:`CanonicalResult`. All
strategies are stateless and pure. The typed strategies read the
store-native dataclasses directly; :class:`GenericOutcomeStrategy` probes
unknown objects through a fixed list of attribute and key names and never
raises.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from bulkctl.domain.outcomes import DeleteError, RawError
from bulkctl.domain.results import NO_MESSAGE, CanonicalError, CanonicalResult
from bulkctl.domain.types import StatusCode

# Probe names, checked in order. Zero-argument callables are invoked.
SUCCESS_KEYS = ("success", "is_success", "isSuccess")
ID_KEYS = ("id", "record_id", "recordId", "getId")
ERRORS_KEYS = ("errors", "getErrors")
FIELDS_KEYS = ("fields", "getFields")
MESSAGE_KEYS = ("message", "getMessage")
STATUS_CODE_KEYS = ("status_code", "statusCode", "getStatusCode")

TRUE_STRINGS = frozenset({"true", "1"})

_MISSING: Any = object()


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def normalize_id(raw_id: object) -> str | None:
    """Render an identifier as text, keeping None as absent."""
    if raw_id is None:
        return None
    return raw_id if isinstance(raw_id, str) else str(raw_id)


def normalize_fields(raw_fields: object) -> tuple[str, ...]:
    """Coerce field detail to a tuple of names (a lone string is one field)."""
    if raw_fields is None or raw_fields is _MISSING:
        return ()
    if isinstance(raw_fields, str):
        return (raw_fields,) if raw_fields else ()
    if isinstance(raw_fields, Iterable):
        return tuple(str(f) for f in raw_fields if f is not None)
    return ()


def normalize_error(
    *,
    fields: object = _MISSING,
    message: object = _MISSING,
    status_code: object = _MISSING,
) -> CanonicalError:
    """Build a CanonicalError, filling the fixed defaults for missing detail.

    Blank values count as missing; anything else is kept verbatim.
    """
    text = _text_or_none(message)
    code = _text_or_none(status_code)
    return CanonicalError(
        fields=normalize_fields(fields),
        message=NO_MESSAGE if text is None else text,
        status_code=StatusCode.UNKNOWN if code is None else code,
    )


def _text_or_none(value: object) -> str | None:
    if value is None or value is _MISSING:
        return None
    text = value if isinstance(value, str) else str(value)
    return text if text.strip() else None


def convert_error(raw_error: object) -> CanonicalError:
    """Normalize an error attached to a store-native outcome.

    :class:`RawError` and :class:`DeleteError` are read directly (the latter
    has no ``fields``); any other shape goes through :func:`probe_error`.
    """
    if isinstance(raw_error, RawError):
        return normalize_error(
            fields=raw_error.fields,
            message=raw_error.message,
            status_code=raw_error.status_code,
        )
    if isinstance(raw_error, DeleteError):
        return normalize_error(message=raw_error.message, status_code=raw_error.status_code)
    return probe_error(raw_error)


def is_success_flag(value: object) -> bool:
    """True only for ``True`` or a string spelling of true (``"true"``, ``"1"``)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return False


# ---------------------------------------------------------------------------
# Strategy contract
# ---------------------------------------------------------------------------


class OutcomeStrategy(ABC):
    """Normalizes exactly one raw outcome shape."""

    @abstractmethod
    def normalize(self, raw: Any) -> CanonicalResult:
        """Convert *raw* into a CanonicalResult. Pure; no side effects."""


class _TypedOutcomeStrategy(OutcomeStrategy):
    """Shared reading logic for store-native outcome dataclasses."""

    def normalize(self, raw: Any) -> CanonicalResult:
        errors = [convert_error(e) for e in raw.errors]
        return CanonicalResult.from_outcome(normalize_id(raw.id), bool(raw.success), errors)


class SaveOutcomeStrategy(_TypedOutcomeStrategy):
    """Insert/update outcomes (:class:`SaveOutcome`)."""


class UpsertOutcomeStrategy(_TypedOutcomeStrategy):
    """Upsert outcomes (:class:`UpsertOutcome`). ``created`` is dropped."""


class DeleteOutcomeStrategy(_TypedOutcomeStrategy):
    """Delete outcomes (:class:`DeleteOutcome`). Errors carry no field detail."""


# ---------------------------------------------------------------------------
# Generic fallback
# ---------------------------------------------------------------------------


def probe(source: object, keys: tuple[str, ...]) -> Any:
    """Read the first of *keys* present on *source*; ``_MISSING`` if none.

    Mappings are read by key, everything else by attribute. A value that is
    a zero-argument callable (``getId``-style accessors) is invoked; one
    that fails when called is treated as absent.
    """
    for key in keys:
        try:
            if isinstance(source, Mapping):
                if key not in source:
                    continue
                value = source[key]
            else:
                value = getattr(source, key)
        except Exception:
            continue
        if callable(value):
            try:
                value = value()
            except Exception:
                continue
        return value
    return _MISSING


def probe_error(raw_error: object) -> CanonicalError:
    """Normalize a raw error of unknown shape. A bare string is its message."""
    if isinstance(raw_error, str):
        return normalize_error(message=raw_error)
    return normalize_error(
        fields=probe(raw_error, FIELDS_KEYS),
        message=probe(raw_error, MESSAGE_KEYS),
        status_code=probe(raw_error, STATUS_CODE_KEYS),
    )


def probe_outcome(raw: object) -> CanonicalResult:
    """Best-effort structural read of an outcome of unknown shape.

    Fallback defaults when only some detail is readable:

    - missing success flag: not succeeded
    - success flag that is not ``True`` or a true string: not succeeded
    - missing errors: no errors
    - missing id: absent

    When none of the three can be read the result is the single
    ``UNRECOGNIZED_OUTCOME`` failure.
    """
    success = probe(raw, SUCCESS_KEYS)
    raw_id = probe(raw, ID_KEYS)
    raw_errors = probe(raw, ERRORS_KEYS)

    if success is _MISSING and raw_id is _MISSING and raw_errors is _MISSING:
        return CanonicalResult.unrecognized(type(raw).__name__)

    errors: list[CanonicalError] = []
    if raw_errors not in (None, _MISSING):
        if isinstance(raw_errors, (str, Mapping)) or not isinstance(raw_errors, Iterable):
            raw_errors = [raw_errors]
        errors = [probe_error(e) for e in raw_errors]

    return CanonicalResult.from_outcome(
        None if raw_id is _MISSING else normalize_id(raw_id),
        is_success_flag(success),
        errors,
    )


class GenericOutcomeStrategy(OutcomeStrategy):
    """Catch-all for shapes no typed strategy recognizes. Never raises."""

    def normalize(self, raw: Any) -> CanonicalResult:
        try:
            return probe_outcome(raw)
        except Exception:
            return CanonicalResult.unrecognized(type(raw).__name__)
