"""Process-wide wiring of stores and services.

Views resolve their service through ``get_container()``; tests call
``reset_container()`` to start from empty stores.
"""

from __future__ import annotations

import threading
from typing import Optional

from django.conf import settings

from modules.orders.repositories import InMemoryOrderRepository
from modules.orders.services import OrderService
from modules.products.repositories import InMemoryProductRepository
from modules.products.services import ProductService
from modules.users.repositories import InMemoryUserRepository
from modules.users.services import UserService
from shared.infrastructure.bus import event_bus


class Container:
    """Builds one instance of every store and service."""

    def __init__(self) -> None:
        self.product_repository = InMemoryProductRepository()
        self.user_repository = InMemoryUserRepository()
        self.order_repository = InMemoryOrderRepository()

        self.product_service = ProductService(self.product_repository)
        self.user_service = UserService(self.user_repository)
        self.order_service = OrderService(
            order_repository=self.order_repository,
            product_service=self.product_service,
            user_service=self.user_service,
            event_bus=event_bus,
            tax_rate=settings.ORDER_TAX_RATE,
        )


_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    global _container
    with _container_lock:
        if _container is None:
            _container = Container()
        return _container


def reset_container(container: Optional[Container] = None) -> Container:
    """Replace the process-wide container (a fresh one by default)."""
    global _container
    with _container_lock:
        _container = container or Container()
        return _container
