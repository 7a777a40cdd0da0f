"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import (
    MAX_ITEM_QUANTITY,
    TOTAL_MAX_DIGITS,
    TOTAL_WITH_TAX_MAX_DIGITS,
)
from modules.products.models import PRICE_DECIMAL_PLACES, PRICE_MAX_DIGITS

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single item in an order creation request."""

    product_id = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_ITEM_QUANTITY)


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload.

    ``user_id`` may be omitted when the request carries a bearer token.
    """

    user_id = serializers.CharField(required=False, allow_blank=True, default="")
    shipping_address = serializers.CharField()
    items = CreateOrderItemSerializer(many=True, allow_empty=False)


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
    notes = serializers.CharField(required=False, default="", allow_blank=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderLineSerializer(serializers.Serializer):
    """Read serializer for order lines with the product snapshot."""

    product_id = serializers.CharField(read_only=True)
    product_name = serializers.CharField(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    unit_price = serializers.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        read_only=True,
    )
    subtotal = serializers.DecimalField(
        max_digits=TOTAL_MAX_DIGITS, decimal_places=2, read_only=True
    )


class StatusChangeSerializer(serializers.Serializer):
    """Read serializer for order status history entries."""

    old_status = serializers.CharField(read_only=True, allow_null=True)
    new_status = serializers.CharField(read_only=True)
    notes = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)


class OrderSerializer(serializers.Serializer):
    """Read serializer for orders with nested lines and history."""

    id = serializers.CharField(read_only=True)
    user_id = serializers.CharField(read_only=True)
    shipping_address = serializers.CharField(read_only=True)
    status = serializers.CharField(read_only=True)
    total = serializers.DecimalField(
        max_digits=TOTAL_MAX_DIGITS, decimal_places=2, read_only=True
    )
    total_with_tax = serializers.DecimalField(
        max_digits=TOTAL_WITH_TAX_MAX_DIGITS, decimal_places=4, read_only=True
    )
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
    lines = OrderLineSerializer(many=True, read_only=True)
    history = StatusChangeSerializer(many=True, read_only=True)
