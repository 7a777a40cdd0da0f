"""Product entity.

A ``Product`` is a frozen value: catalog writes build a replacement with
``dataclasses.replace`` and the store swaps it in under its lock.

Invariants (checked by the DTOs before a value is built):
- ``price`` is greater than zero. At most ``PRICE_MAX_DIGITS`` digits,
  ``PRICE_DECIMAL_PLACES`` of them after the point.
- ``stock_quantity`` is never negative (also enforced by
  ``IProductRepository.adjust_stock``). Requests may not set it above
  ``MAX_STOCK_QUANTITY``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal

import uuid6
from django.utils import timezone

PRICE_MAX_DIGITS = 10
PRICE_DECIMAL_PLACES = 2
MAX_STOCK_QUANTITY = 1_000_000


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: Decimal
    stock_quantity: int
    description: str = ""
    category: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def new(
        cls,
        name: str,
        price: Decimal,
        stock_quantity: int,
        description: str = "",
        category: str = "",
    ) -> Product:
        """Build a product with a fresh UUIDv7 id and timestamps."""
        now = timezone.now()
        return cls(
            id=str(uuid6.uuid7()),
            name=name,
            price=price,
            stock_quantity=stock_quantity,
            description=description,
            category=category,
            created_at=now,
            updated_at=now,
        )

    def with_stock(self, stock_quantity: int) -> Product:
        return replace(self, stock_quantity=stock_quantity, updated_at=timezone.now())

    def __str__(self) -> str:
        return f"{self.name} ({self.stock_quantity} in stock)"
