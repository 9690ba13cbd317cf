"""Django ORM implementation of the Stock repository.

Satisfies ``IStockRepository`` using Django's QuerySet API.

Concurrency control does not use ``select_for_update()``: every quantity
write is a single ``UPDATE`` whose ``WHERE`` clause carries the guard
(``quantity >= n`` for decrements, ``version = v`` for direct sets), so
the database applies check and write in one step.
"""

from __future__ import annotations

from typing import Iterable, List, Optional
from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from modules.stock.models import Stock
from modules.stock.repositories.interfaces import IStockRepository

logger = structlog.get_logger(__name__)


class StockDjangoRepository(IStockRepository):
    """Concrete Stock repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create / Read
    # ------------------------------------------------------------------

    @transaction.atomic
    def insert(self, entity: Stock) -> Stock:
        entity.save(force_insert=True)
        logger.info(
            "stock.inserted",
            stock_id=str(entity.id),
            owner_id=str(entity.owner_id),
            product_id=str(entity.product_id),
            quantity=entity.quantity,
        )
        return entity

    def get_by_owner_and_product(
        self, owner_id: UUID, product_id: UUID
    ) -> Optional[Stock]:
        return Stock.objects.filter(owner_id=owner_id, product_id=product_id).first()

    def get_by_owner(self, owner_id: UUID) -> List[Stock]:
        return list(Stock.objects.filter(owner_id=owner_id))

    def get_by_owner_and_products(
        self, owner_id: UUID, product_ids: Iterable[UUID]
    ) -> List[Stock]:
        """Single ``IN`` query; avoids one round-trip per order line."""
        return list(
            Stock.objects.filter(owner_id=owner_id, product_id__in=list(product_ids))
        )

    # ------------------------------------------------------------------
    # Quantity writes
    # ------------------------------------------------------------------

    def update(self, stock: Stock, expected_version: int) -> int:
        modified = Stock.objects.filter(
            id=stock.id,
            owner_id=stock.owner_id,
            product_id=stock.product_id,
            version=expected_version,
        ).update(
            quantity=stock.quantity,
            version=expected_version + 1,
            updated_at=timezone.now(),
        )
        if modified:
            stock.version = expected_version + 1
        logger.info(
            "stock.quantity_set",
            stock_id=str(stock.id),
            quantity=stock.quantity,
            expected_version=expected_version,
            modified=modified,
        )
        return modified

    def decrement(self, owner_id: UUID, product_id: UUID, quantity: int) -> int:
        modified = Stock.objects.filter(
            owner_id=owner_id,
            product_id=product_id,
            quantity__gte=quantity,
        ).update(
            quantity=F("quantity") - quantity,
            version=F("version") + 1,
            updated_at=timezone.now(),
        )
        logger.info(
            "stock.decremented",
            owner_id=str(owner_id),
            product_id=str(product_id),
            quantity=quantity,
            modified=modified,
        )
        return modified

    def increment(self, owner_id: UUID, product_id: UUID, quantity: int) -> int:
        modified = Stock.objects.filter(
            owner_id=owner_id,
            product_id=product_id,
        ).update(
            quantity=F("quantity") + quantity,
            version=F("version") + 1,
            updated_at=timezone.now(),
        )
        logger.info(
            "stock.incremented",
            owner_id=str(owner_id),
            product_id=str(product_id),
            quantity=quantity,
            modified=modified,
        )
        return modified

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_by_owner_and_product(self, owner_id: UUID, product_id: UUID) -> int:
        deleted, _ = Stock.objects.filter(
            owner_id=owner_id, product_id=product_id
        ).delete()
        logger.info(
            "stock.deleted",
            owner_id=str(owner_id),
            product_id=str(product_id),
            deleted=deleted,
        )
        return deleted
