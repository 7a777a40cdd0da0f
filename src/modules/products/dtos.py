"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for a full product replacement.
- ``AdjustStockDTO``: input for a delta stock adjustment.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.products.models import (
    MAX_STOCK_QUANTITY,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
)

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` is a non-empty string.
    - ``price`` is a Decimal greater than zero with at most 8 whole
      digits and 2 decimal places.
    - ``stock_quantity`` is between 0 and ``MAX_STOCK_QUANTITY``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal = Field(
        max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )
    stock_quantity: int = Field(default=0, le=MAX_STOCK_QUANTITY)
    description: str = ""
    category: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v

    @field_validator("stock_quantity")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock quantity cannot be negative.")
        return v

    @field_validator("category")
    @classmethod
    def category_is_trimmed(cls, v: str) -> str:
        return v.strip()


class UpdateProductDTO(CreateProductDTO):
    """Immutable DTO for ``PUT`` requests.

    A full replacement: every field is validated exactly as on creation
    and omitted optional fields fall back to their defaults.
    """


class AdjustStockDTO(BaseModel):
    """Immutable DTO for a stock delta (negative reserves, positive releases)."""

    model_config = ConfigDict(frozen=True)

    delta: int = Field(ge=-MAX_STOCK_QUANTITY, le=MAX_STOCK_QUANTITY)

    @field_validator("delta")
    @classmethod
    def delta_must_not_be_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError("Delta must not be zero.")
        return v
