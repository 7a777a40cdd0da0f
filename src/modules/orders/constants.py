"""Order domain constants.

Defines status choices and valid status transitions for the order
state machine.  Cancellation is reachable from PENDING and PROCESSED
only; once an order has shipped it can only be delivered.
"""

from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    PROCESSED = "PROCESSED", "Processed"
    SHIPPED = "SHIPPED", "Shipped"
    DELIVERED = "DELIVERED", "Delivered"
    CANCELLED = "CANCELLED", "Cancelled"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PENDING: {OrderStatus.PROCESSED, OrderStatus.CANCELLED},
    OrderStatus.PROCESSED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}

# Statuses whose cancellation hands the reserved stock back to the catalog.
STOCK_RELEASING_STATES: set[str] = {OrderStatus.PENDING, OrderStatus.PROCESSED}

DEFAULT_TAX_RATE = Decimal("0.15")

MAX_ITEM_QUANTITY = 1_000_000

# Largest order total accepted; ``total`` is rendered with 2 decimal places.
MAX_ORDER_TOTAL = Decimal("99999999999999.99")
TOTAL_MAX_DIGITS = 16
TOTAL_WITH_TAX_MAX_DIGITS = 24
