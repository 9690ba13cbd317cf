"""Product model with owner scoping and generated SKU.

Business rules implemented:
- A product belongs to exactly one owner (tenant); ``owner_id`` never changes.
- ``sku`` is generated on first save from a random alphanumeric seed grouped
  into dash-separated blocks (``XXXX-XXXX-XXXX-XXXX``) and never changes.
- SKU generation failures raise ``SkuGenerationError`` (recoverable).
"""

from __future__ import annotations

import secrets
import string
from typing import Any

import structlog
from django.conf import settings
from django.db import models

from modules.core.models import BaseModel
from modules.products.exceptions import SkuGenerationError

logger = structlog.get_logger(__name__)

SKU_RANDOM_MAX_SIZE = 30
SKU_MAX_RETRIES = 5
SKU_ALPHABET = string.ascii_letters + string.digits


def generate_random_alphanum(size: int) -> str:
    """Return *size* random characters drawn from ``[A-Za-z0-9]``.

    Raises:
        SkuGenerationError: if *size* exceeds ``SKU_RANDOM_MAX_SIZE`` or the
            operating system entropy source is unavailable.
    """
    if size > SKU_RANDOM_MAX_SIZE:
        raise SkuGenerationError(
            f"size must not be greater than {SKU_RANDOM_MAX_SIZE}"
        )
    try:
        return "".join(secrets.choice(SKU_ALPHABET) for _ in range(size))
    except OSError as exc:
        raise SkuGenerationError("random source unavailable") from exc


def split_into_parts(value: str, size: int) -> str:
    """Group *value* into dash-separated blocks of *size* characters.

    >>> split_into_parts("abcdefghijk", 4)
    'abcd-efgh-ijk'
    """
    return "-".join(value[i : i + size] for i in range(0, len(value), size))


class Product(BaseModel):
    """Product aggregate root.

    There is no foreign key to ``Stock``: the one-to-one pairing is kept by
    ``InventoryService``, which creates and deletes both records together.
    """

    owner_id = models.UUIDField(db_index=True, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    sku = models.CharField(max_length=64, unique=True, editable=False)

    class Meta:
        db_table = "products"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["owner_id", "id"], name="products_owner_idx"),
        ]

    # ------------------------------------------------------------------
    # SKU generation
    # ------------------------------------------------------------------

    @staticmethod
    def generate_sku() -> str:
        """Generate a SKU: ``INVENTORY_SKU_LENGTH`` random characters in groups."""
        seed = generate_random_alphanum(settings.INVENTORY_SKU_LENGTH)
        return split_into_parts(seed, settings.INVENTORY_SKU_GROUP_SIZE)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        is_new = self._state.adding
        if not self.sku:
            for _attempt in range(SKU_MAX_RETRIES):
                candidate = self.generate_sku()
                if not Product.objects.filter(sku=candidate).exists():
                    self.sku = candidate
                    break
            else:
                raise SkuGenerationError(
                    f"Failed to generate unique sku after {SKU_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=str(self.id),
                owner_id=str(self.owner_id),
                sku=self.sku,
            )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.sku} - {self.name}"
