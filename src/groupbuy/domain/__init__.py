"""Domain layer base classes: AggregateRoot, DomainEvent, EventBus, Repository."""
from groupbuy.domain.aggregate import AggregateRoot
from groupbuy.domain.events import DomainEvent, EventBus, InProcessEventDispatcher
from groupbuy.domain.repository import Repository

__all__ = [
    "AggregateRoot",
    "DomainEvent",
    "EventBus",
    "InProcessEventDispatcher",
    "Repository",
]
