"""Inventory engine exceptions.

Raised by ``InventoryService`` for order-batch rules and storage failures.
Product and stock specific errors live in their own modules.
"""

from __future__ import annotations

from typing import Iterable
from uuid import UUID

from modules.core.exceptions import FailedPrecondition, InternalFailure


class EmptyOrderBatch(FailedPrecondition):
    """An order batch was submitted without any line."""


class DuplicateOrderLine(FailedPrecondition):
    """The same product appears more than once in an order batch."""


class StorageFailure(InternalFailure):
    """The storage layer raised; the original error is chained."""


class OrderBatchPartiallyApplied(InternalFailure):
    """An order batch failed mid-apply and some decrements could not be undone."""

    def __init__(self, message: str, product_ids: Iterable[UUID] = ()) -> None:
        super().__init__(message)
        self.product_ids = list(product_ids)
