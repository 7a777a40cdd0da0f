"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``UpdateOrderStatusDTO``: input for a status transition.
"""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modules.orders.constants import MAX_ITEM_QUANTITY, OrderStatus

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order item in a creation request.

    The client sends ``product_id`` and ``quantity``.  Name and
    ``unit_price`` are resolved by the Service Layer from the catalog.
    """

    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: int = Field(le=MAX_ITEM_QUANTITY)

    @field_validator("product_id")
    @classmethod
    def product_id_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Product id must not be empty.")
        return v.strip()

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``user_id`` and ``shipping_address`` are not blank.
    - ``items`` must contain at least one item.
    - Each item quantity must be positive and at most ``MAX_ITEM_QUANTITY``.
    - A product appears at most once.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    shipping_address: str
    items: List[CreateOrderItemDTO]

    @field_validator("user_id", "shipping_address")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Field must not be empty.")
        return v.strip()

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    @model_validator(mode="after")
    def no_duplicate_products(self):
        """Prevent duplicate product IDs in the same order."""
        product_ids = [item.product_id for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValueError("Duplicate product IDs are not allowed in the same order.")
        return self


class UpdateOrderStatusDTO(BaseModel):
    """Immutable DTO for status transitions.

    ``status`` is matched case-insensitively against ``OrderStatus``.
    """

    model_config = ConfigDict(frozen=True)

    status: OrderStatus
    notes: str = ""

    @field_validator("status", mode="before")
    @classmethod
    def status_is_upper_case(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v
