"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
and writes return affected-row counts instead of raising; the inventory
engine decides how to translate them.  Database errors propagate.
"""

from __future__ import annotations

from typing import Iterable, List, Optional
from uuid import UUID

import structlog
from django.db import transaction
from django.utils import timezone

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    @transaction.atomic
    def insert(self, entity: Product) -> Product:
        """Insert a new product (generates its SKU)."""
        entity.save(force_insert=True)
        logger.info(
            "product.inserted",
            product_id=str(entity.id),
            owner_id=str(entity.owner_id),
            sku=entity.sku,
        )
        return entity

    @transaction.atomic
    def restore(self, product: Product) -> Product:
        """Re-insert a deleted product as it was read.

        ``save(force_insert=True)`` stamps fresh ``created_at``/``updated_at``
        values, so the captured timestamps are written back afterwards.
        """
        created_at, updated_at = product.created_at, product.updated_at
        product.save(force_insert=True)
        Product.objects.filter(id=product.id).update(
            created_at=created_at, updated_at=updated_at
        )
        product.created_at, product.updated_at = created_at, updated_at
        logger.warning(
            "product.restored",
            product_id=str(product.id),
            owner_id=str(product.owner_id),
            sku=product.sku,
        )
        return product

    def get_by_id(self, owner_id: UUID, product_id: UUID) -> Optional[Product]:
        """Retrieve a product by id and owner.

        Returns ``None`` when no product matches both.
        """
        return Product.objects.filter(id=product_id, owner_id=owner_id).first()

    def get_by_owner(self, owner_id: UUID) -> List[Product]:
        return list(Product.objects.filter(owner_id=owner_id))

    def get_by_ids(self, owner_id: UUID, product_ids: Iterable[UUID]) -> List[Product]:
        return list(
            Product.objects.filter(owner_id=owner_id, id__in=list(product_ids))
        )

    def update(self, owner_id: UUID, product: Product) -> int:
        """Write ``name`` and ``description`` filtered by id AND owner.

        A single ``UPDATE`` statement; the matched-row count is returned so
        the caller can detect a record that vanished since it was read.
        """
        modified = Product.objects.filter(id=product.id, owner_id=owner_id).update(
            name=product.name,
            description=product.description,
            updated_at=timezone.now(),
        )
        logger.info(
            "product.updated",
            product_id=str(product.id),
            owner_id=str(owner_id),
            modified=modified,
        )
        return modified

    def delete_by_id(self, owner_id: UUID, product_id: UUID) -> int:
        deleted, _ = Product.objects.filter(id=product_id, owner_id=owner_id).delete()
        logger.info(
            "product.deleted",
            product_id=str(product_id),
            owner_id=str(owner_id),
            deleted=deleted,
        )
        return deleted
