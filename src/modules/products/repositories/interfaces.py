"""Product repository interface.

Extends ``IRepository[Product]`` with the full-replace update and the
delta stock adjustment the order workflow relies on.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def update(self, entity: Product) -> Optional[Product]:
        """Replace an existing product; ``None`` if it does not exist.

        ``created_at`` is kept from the stored value.
        """

    @abstractmethod
    def adjust_stock(self, id: str, delta: int) -> Product:
        """Add ``delta`` to the stock of a product atomically.

        Negative deltas reserve stock, positive deltas release it.

        Raises:
            ProductNotFound: the product does not exist.
            InsufficientStock: the result would drop below zero.
        """
