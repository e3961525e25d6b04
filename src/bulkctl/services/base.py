"""BaseService — shared foundation for CLI-facing services.

Every service receives the record store at construction time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bulkctl.infrastructure.store import RecordStore


class BaseService:
    """Base for service classes that work against the record store.

    Usage::

        class MyService(BaseService):
            def count(self) -> int:
                return self._store.count()
    """

    def __init__(self, store: RecordStore | None) -> None:
        self._store = store
