"""Store-native raw outcome variants.

These are the per-record objects a bulk write returns before normalization.
Save, upsert and delete outcomes share one logical shape and differ only in
type identity. :class:`DeleteError` carries no field-level detail.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RawError:
    """Store error for a save or upsert."""

    message: str
    status_code: str
    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class DeleteError:
    """Store error for a delete (no ``fields`` attribute)."""

    message: str
    status_code: str


@dataclass(frozen=True)
class SaveOutcome:
    """Outcome of an insert or update."""

    success: bool
    id: str | None = None
    errors: tuple[RawError, ...] = ()


@dataclass(frozen=True)
class UpsertOutcome:
    """Outcome of an upsert. ``created`` is True when a row was inserted."""

    success: bool
    id: str | None = None
    errors: tuple[RawError, ...] = ()
    created: bool = False


@dataclass(frozen=True)
class DeleteOutcome:
    """Outcome of a delete."""

    success: bool
    id: str | None = None
    errors: tuple[DeleteError, ...] = ()
