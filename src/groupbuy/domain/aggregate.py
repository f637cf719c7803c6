"""AggregateRoot: identity plus the domain events raised since the last save."""
from __future__ import annotations

from typing import List

from groupbuy.domain.events import DomainEvent


class AggregateRoot:
    """
    Base for aggregates. Equality is by id; subclasses may be dataclasses
    declared with eq=False so this comparison is kept.
    """

    id: str

    def raise_event(self, event: DomainEvent) -> None:
        self.__dict__.setdefault("_pending_events", []).append(event)

    def collect_pending_events(self) -> List[DomainEvent]:
        """Return and clear pending events (called by the application layer after persisting)."""
        events: List[DomainEvent] = self.__dict__.pop("_pending_events", [])
        return events

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AggregateRoot) or type(other) is not type(self):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))
