"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
Catalog failures (``ProductNotFound``, ``InsufficientStock``) come
from ``modules.products.exceptions`` and propagate unchanged.
"""

from __future__ import annotations

from shared.domain.exceptions import DomainError, NotFound


class OrderNotFound(NotFound):
    """The requested order does not exist."""

    default_message = "Order not found."


class InvalidTransition(DomainError):
    """The state machine does not allow the requested status change.

    Carries the ``current`` and ``requested`` statuses.
    """

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot transition order from {current} to {requested}.")
