"""Stock model: the mutable quantity-on-hand of a product.

Business rules implemented:
- Exactly one stock record per ``(owner_id, product_id)`` (unique constraint).
- ``quantity`` is never negative (check constraint + conditional updates).
- ``version`` is bumped by every quantity write; direct quantity sets
  compare-and-swap on it.
"""

from __future__ import annotations

import structlog
from django.core.exceptions import ValidationError
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Stock(BaseModel):
    """Quantity record paired one-to-one with a ``Product``.

    ``product_id`` is a plain UUID, not a foreign key: the store does not
    enforce the pairing, ``InventoryService`` does.
    """

    owner_id = models.UUIDField(editable=False)
    product_id = models.UUIDField(editable=False)
    quantity = models.IntegerField(default=0)
    version = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "stocks"
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["owner_id", "product_id"],
                name="stocks_owner_product_unique",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name="stocks_quantity_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 0:
            raise ValidationError({"quantity": "Quantity cannot be negative."})

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity}"
