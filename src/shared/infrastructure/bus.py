"""In-memory event bus implementation."""

from __future__ import annotations

import threading
from typing import Dict, List, Type

import structlog

from shared.domain.bus import IEventBus, IEventHandler
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class InMemoryEventBus(IEventBus):
    """In-process event bus.

    Handlers run synchronously on the publishing thread.  Subscriptions
    may happen while other threads publish, so the registry is guarded.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[IEventHandler]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        with self._lock:
            handlers = self._handlers.setdefault(event_class, [])
            if handler not in handlers:
                handlers.append(handler)

    def publish(self, event: DomainEvent) -> None:
        with self._lock:
            handlers = list(self._handlers.get(type(event), []))
        logger.debug(
            "event_bus.published",
            event_name=event.event_name,
            aggregate_id=event.aggregate_id,
            handler_count=len(handlers),
        )
        for handler in handlers:
            handler.handle(event)


# Process-wide bus; ``OrdersConfig.ready`` registers the order handlers on it.
event_bus = InMemoryEventBus()
