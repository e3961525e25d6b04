"""StrategyRegistry — ordered lookup from raw outcome type to strategy.

Classification is by runtime type, checked in a fixed precedence order:
save, upsert, delete, then the generic catch-all. ``resolve`` is total.

The registry is immutable after construction and holds only stateless
strategy instances, so one instance can be shared by every caller.
Supporting a new shape means one new strategy plus one new table entry
(see :meth:`StrategyRegistry.with_entry`).
"""

from __future__ import annotations

from typing import Any

from bulkctl.domain.outcomes import DeleteOutcome, SaveOutcome, UpsertOutcome
from bulkctl.services.strategies import (
    DeleteOutcomeStrategy,
    GenericOutcomeStrategy,
    OutcomeStrategy,
    SaveOutcomeStrategy,
    UpsertOutcomeStrategy,
)

type RegistryEntry = tuple[type, OutcomeStrategy]


class StrategyRegistry:
    """Maps a raw outcome to the strategy that normalizes it."""

    __slots__ = ("_entries", "_fallback")

    def __init__(
        self,
        entries: tuple[RegistryEntry, ...],
        fallback: OutcomeStrategy,
    ) -> None:
        self._entries = tuple(entries)
        self._fallback = fallback

    @property
    def entries(self) -> tuple[RegistryEntry, ...]:
        return self._entries

    @property
    def fallback(self) -> OutcomeStrategy:
        return self._fallback

    def resolve(self, raw: Any) -> OutcomeStrategy:
        """Return the first matching strategy, or the fallback."""
        for outcome_type, strategy in self._entries:
            if isinstance(raw, outcome_type):
                return strategy
        return self._fallback

    def with_entry(self, outcome_type: type, strategy: OutcomeStrategy) -> StrategyRegistry:
        """Return a new registry with *outcome_type* appended before the fallback."""
        return StrategyRegistry((*self._entries, (outcome_type, strategy)), self._fallback)


def build_default_registry() -> StrategyRegistry:
    """Registry for the store-native outcome variants."""
    return StrategyRegistry(
        (
            (SaveOutcome, SaveOutcomeStrategy()),
            (UpsertOutcome, UpsertOutcomeStrategy()),
            (DeleteOutcome, DeleteOutcomeStrategy()),
        ),
        fallback=GenericOutcomeStrategy(),
    )


DEFAULT_REGISTRY = build_default_registry()
