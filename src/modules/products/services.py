"""Product service layer (Catalog Service).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Business rules enforced here:
- Price must be greater than zero (validated by DTO).
- Stock cannot be negative (validated by DTO and by ``adjust_stock``).
- Products are replaced as a whole on update; ``created_at`` survives.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog

from modules.products.exceptions import ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a new product from a validated DTO."""
        product = Product.new(
            name=dto.name,
            price=dto.price,
            stock_quantity=dto.stock_quantity,
            description=dto.description,
            category=dto.category,
        )
        product = self._repo.save(product)
        logger.info(
            "product.created",
            product_id=product.id,
            stock_quantity=product.stock_quantity,
        )
        return product

    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Replace every editable field of an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        replacement = Product(
            id=str(id),
            name=dto.name,
            price=dto.price,
            stock_quantity=dto.stock_quantity,
            description=dto.description,
            category=dto.category,
        )
        product = self._repo.update(replacement)
        if product is None:
            raise ProductNotFound(f"Product {id} not found.")
        logger.info("product.updated", product_id=str(id))
        return product

    def adjust_stock(self, id: str, delta: int) -> Product:
        """Apply a stock delta; negative reserves, positive releases.

        Raises:
            ProductNotFound: if the product does not exist.
            InsufficientStock: if the stock would drop below zero.
        """
        product = self._repo.adjust_stock(str(id), delta)
        logger.info(
            "product.stock_adjusted",
            product_id=str(id),
            delta=delta,
            stock_quantity=product.stock_quantity,
        )
        return product

    def delete_product(self, id: str) -> None:
        """Remove a product from the catalog.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.delete(str(id)):
            raise ProductNotFound(f"Product {id} not found.")
        logger.info("product.deleted", product_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, category: Optional[str] = None) -> List[Product]:
        """Return every product, optionally restricted to one category."""
        filters = {"category": category} if category else None
        return self._repo.list(filters)

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(str(id))
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
