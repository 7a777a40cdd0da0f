"""In-memory implementation of the Order repository.

Status transitions run inside ``locked(order_id)``: a per-order lock
serialises concurrent transitions of one order (so a cancellation
releases stock once) while orders with different ids proceed in
parallel.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import structlog

from modules.core.repositories.memory import InMemoryRepository
from modules.orders.models import Order
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class InMemoryOrderRepository(InMemoryRepository[Order], IOrderRepository):
    """Concrete Order repository backed by a locked dictionary."""

    def __init__(self) -> None:
        super().__init__()
        self._order_locks: Dict[str, threading.Lock] = {}

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        orders = super().list(filters)
        return sorted(orders, key=lambda o: (o.created_at, o.id), reverse=True)

    def list_by_user(self, user_id: str) -> List[Order]:
        return self.list({"user_id": user_id})

    @contextmanager
    def locked(self, id: str) -> Iterator[Optional[Order]]:
        with self._lock:
            if str(id) not in self._items:
                order_lock = None
            else:
                order_lock = self._order_locks.setdefault(str(id), threading.Lock())
        if order_lock is None:
            yield None
            return
        with order_lock:
            yield self.get_by_id(id)

    def save(self, entity: Order) -> Order:
        entity = super().save(entity)
        logger.debug("order.saved", order_id=entity.id, status=str(entity.status))
        return entity
