"""Stock domain exceptions."""

from __future__ import annotations

from typing import Iterable
from uuid import UUID

from modules.core.exceptions import FailedPrecondition, InternalFailure
from modules.products.exceptions import ProductNotFound


class StockRecordMissing(ProductNotFound):
    """A product exists but its paired stock record does not.

    This is a data-integrity violation; it is surfaced exactly like a
    missing product so callers see a single "not found" outcome.
    """


class InsufficientStock(FailedPrecondition):
    """Requested quantity exceeds the quantity on hand."""

    def __init__(self, message: str, product_ids: Iterable[UUID] = ()) -> None:
        super().__init__(message)
        self.product_ids = list(product_ids)


class QuantityDecreaseNotAllowed(FailedPrecondition):
    """A direct quantity set tried to lower the quantity on hand.

    Quantities only decrease through order processing.
    """


class StockUpdateConflict(InternalFailure):
    """The stock record kept changing under a compare-and-swap update."""
