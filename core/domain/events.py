"""
Domain events and the publish/subscribe contract.

Events describe something that already happened to an application. The
approval event drives step provisioning; the rest feed the audit log.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Type


class DomainEvent:
    """
    Base class for all domain events.

    Subclasses call this initializer with the aggregate they concern and
    then set their own payload attributes, which ``to_dict`` picks up.
    """

    def __init__(self, aggregate_id: Any, occurred_at: Optional[datetime] = None):
        self.event_id = uuid.uuid4()
        self.occurred_at = occurred_at or datetime.now(timezone.utc)
        self.aggregate_id = str(aggregate_id)

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def payload(self) -> Dict[str, Any]:
        """Subclass attributes, with ids and statuses as strings."""
        identity = {"event_id", "occurred_at", "aggregate_id"}
        return {
            key: value if value is None or isinstance(value, (int, bool)) else str(value)
            for key, value in vars(self).items()
            if key not in identity
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
            **self.payload(),
        }

    def __repr__(self) -> str:
        return f"{self.event_type}({self.aggregate_id})"


class EventHandler(ABC):
    """Handles one or more event types."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        pass


class EventBus(ABC):
    """
    Abstract event bus.

    ``publish`` must not raise because of a failing subscriber.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        pass

    @abstractmethod
    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        pass
