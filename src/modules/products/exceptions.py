"""Product domain exceptions.

Raised by the Catalog store and service when business rules are
violated.  The API layer renders them through the shared exception
handler.
"""

from __future__ import annotations

from shared.domain.exceptions import Conflict, NotFound


class ProductNotFound(NotFound):
    """The requested product does not exist."""

    default_message = "Product not found."


class InsufficientStock(Conflict):
    """Requested quantity exceeds available stock.

    Carries ``available`` and ``requested`` for diagnostics.
    """

    def __init__(self, product_name: str, available: int, requested: int) -> None:
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_name}: "
            f"requested {requested}, available {available}."
        )
