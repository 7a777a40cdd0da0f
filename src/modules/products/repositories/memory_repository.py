"""In-memory implementation of the Product repository."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

import structlog
from django.utils import timezone

from modules.core.repositories.memory import InMemoryRepository
from modules.products.exceptions import InsufficientStock, ProductNotFound
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class InMemoryProductRepository(InMemoryRepository[Product], IProductRepository):
    """Concrete Product repository backed by a locked dictionary."""

    def update(self, entity: Product) -> Optional[Product]:
        return self._replace(
            entity.id,
            lambda current: replace(
                entity, created_at=current.created_at, updated_at=timezone.now()
            ),
        )

    def adjust_stock(self, id: str, delta: int) -> Product:
        def apply(current: Product) -> Product:
            new_stock = current.stock_quantity + delta
            if new_stock < 0:
                raise InsufficientStock(
                    product_name=current.name,
                    available=current.stock_quantity,
                    requested=-delta,
                )
            return current.with_stock(new_stock)

        product = self._replace(id, apply)
        if product is None:
            raise ProductNotFound(f"Product {id} not found.")
        logger.debug(
            "product.stock_adjusted",
            product_id=str(id),
            delta=delta,
            stock_quantity=product.stock_quantity,
        )
        return product
