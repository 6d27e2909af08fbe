"""
In-memory event bus implementation.

Handlers run inside the publishing request; a failing handler is logged
and never propagates to the operation that published the event.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Dict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    Dispatches events to the handlers subscribed to their exact type.

    Subscribing the same handler twice to one type is a no-op, so
    repeated registration at startup does not double-deliver.
    """

    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        subscribed = self._handlers[event_type]
        if handler in subscribed:
            return
        subscribed.append(handler)
        logger.debug("Subscribed %s to %s", type(handler).__name__, event_type.__name__)

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._handlers.get(event_type, ()))

    async def publish(self, event: DomainEvent) -> None:
        handlers = self.handlers_for(type(event))
        if not handlers:
            logger.debug("No handlers registered for %s", event.event_type)
            return

        logger.info("Publishing %s to %d handler(s)", event.event_type, len(handlers))
        outcomes = await asyncio.gather(
            *(handler.handle(event) for handler in handlers), return_exceptions=True
        )
        for handler, outcome in zip(handlers, outcomes):
            if isinstance(outcome, Exception):
                logger.error(
                    "Error handling %s with %s: %s",
                    event.event_type,
                    type(handler).__name__,
                    outcome,
                    exc_info=outcome,
                )


# Global event bus instance
event_bus = InMemoryEventBus()
