"""Inventory DRF serializers for API input/output.

The serializers operate at the Interface layer (API Views).
Business logic lives in ``InventoryService``, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.stock.models import Stock

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class SetQuantitySerializer(serializers.Serializer):
    """Validates a direct quantity set request."""

    quantity = serializers.IntegerField(min_value=0)


class AvailabilityQuerySerializer(serializers.Serializer):
    """Validates the ``?number=N`` query of a single availability check."""

    number = serializers.IntegerField(min_value=1)


class OrderLineSerializer(serializers.Serializer):
    """Validates a single order line.

    ``product_id`` stays a string: malformed ids are rejected by the engine
    so that the whole batch fails as one.
    """

    product_id = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class StockedProductSerializer(serializers.Serializer):
    """Read serializer for a product with its quantity on hand."""

    id = serializers.UUIDField(source="product.id", read_only=True)
    name = serializers.CharField(source="product.name", read_only=True)
    description = serializers.CharField(source="product.description", read_only=True)
    sku = serializers.CharField(source="product.sku", read_only=True)
    quantity = serializers.IntegerField(read_only=True)


class StockSerializer(serializers.ModelSerializer):
    """Read serializer for stock records."""

    class Meta:
        model = Stock
        fields = ["product_id", "quantity"]
        read_only_fields = fields
