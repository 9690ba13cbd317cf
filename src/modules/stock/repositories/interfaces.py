"""Stock repository interface.

Mirrors ``IProductRepository`` but keyed by ``(owner_id, product_id)``.
Quantity writes are expressed as single conditional statements so that
no caller ever performs an unguarded read-modify-write.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IOwnedRepository

if TYPE_CHECKING:
    from modules.stock.models import Stock


class IStockRepository(IOwnedRepository["Stock"]):
    """Repository contract for Stock records."""

    @abstractmethod
    def get_by_owner_and_product(
        self, owner_id: UUID, product_id: UUID
    ) -> Optional[Stock]:
        """Retrieve the stock of one product."""

    @abstractmethod
    def get_by_owner(self, owner_id: UUID) -> List[Stock]:
        """List every stock record of the owner."""

    @abstractmethod
    def get_by_owner_and_products(
        self, owner_id: UUID, product_ids: Iterable[UUID]
    ) -> List[Stock]:
        """Retrieve the stocks of several products in one read."""

    @abstractmethod
    def update(self, stock: Stock, expected_version: int) -> int:
        """Set ``stock.quantity`` if the stored version is *expected_version*.

        Filtered by stock id, owner id, product id and version.  Returns the
        number of records modified (``0`` on a lost race).
        """

    @abstractmethod
    def decrement(self, owner_id: UUID, product_id: UUID, quantity: int) -> int:
        """Atomically subtract *quantity* where at least *quantity* is on hand.

        Returns ``1`` when applied, ``0`` when the record is missing or short.
        """

    @abstractmethod
    def increment(self, owner_id: UUID, product_id: UUID, quantity: int) -> int:
        """Atomically add *quantity*; returns the number of records modified."""

    @abstractmethod
    def delete_by_owner_and_product(self, owner_id: UUID, product_id: UUID) -> int:
        """Delete the stock of one product; returns the number deleted."""
