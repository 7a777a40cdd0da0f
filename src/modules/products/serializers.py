"""Product DRF serializers for API output.

The serializer operates at the Interface layer (API Views).
Input is validated by the Pydantic DTOs in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import PRICE_DECIMAL_PLACES, PRICE_MAX_DIGITS


class ProductSerializer(serializers.Serializer):
    """Read serializer for the Product resource."""

    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    price = serializers.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        read_only=True,
    )
    stock_quantity = serializers.IntegerField(read_only=True)
    category = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
