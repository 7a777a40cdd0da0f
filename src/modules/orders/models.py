"""Order, OrderLine and StatusChange values.

- ``OrderLine`` snapshots product name and unit price at order time;
  later catalog changes never reach an existing order.
- ``Order.total`` is ``Σ(unit_price × quantity)``; ``total_with_tax``
  is ``total × (1 + tax_rate)``, both exact ``Decimal`` values.
- After creation only ``status``, ``history`` and ``updated_at`` change,
  always through ``with_status`` which returns a new value.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Tuple

import uuid6
from django.utils import timezone

from modules.orders.constants import TERMINAL_STATES, VALID_TRANSITIONS, OrderStatus


@dataclass(frozen=True)
class OrderLine:
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class StatusChange:
    """One entry of the append-only status history.

    ``old_status`` is ``None`` for the entry recorded at creation.
    """

    old_status: Optional[str]
    new_status: str
    notes: str
    created_at: datetime


@dataclass(frozen=True)
class Order:
    """Order aggregate root."""

    id: str
    user_id: str
    shipping_address: str
    lines: Tuple[OrderLine, ...]
    total: Decimal
    total_with_tax: Decimal
    status: str
    history: Tuple[StatusChange, ...]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def place(
        cls,
        user_id: str,
        shipping_address: str,
        lines: Iterable[OrderLine],
        tax_rate: Decimal,
    ) -> Order:
        """Build a new PENDING order and compute its totals."""
        lines = tuple(lines)
        total = sum((line.subtotal for line in lines), Decimal("0"))
        now = timezone.now()
        return cls(
            id=str(uuid6.uuid7()),
            user_id=user_id,
            shipping_address=shipping_address,
            lines=lines,
            total=total,
            total_with_tax=total * (1 + tax_rate),
            status=OrderStatus.PENDING,
            history=(StatusChange(None, OrderStatus.PENDING, "Order created", now),),
            created_at=now,
            updated_at=now,
        )

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is in a terminal state."""
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        allowed = VALID_TRANSITIONS.get(self.status, set())
        return new_status in allowed

    def with_status(self, new_status: str, notes: str = "") -> Order:
        """Return a copy in *new_status* with a history entry appended.

        Does not validate the transition; callers check
        ``can_transition_to`` first.
        """
        now = timezone.now()
        change = StatusChange(self.status, new_status, notes, now)
        return replace(
            self,
            status=new_status,
            history=self.history + (change,),
            updated_at=now,
        )

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def __str__(self) -> str:
        return f"{self.id} ({self.status})"
