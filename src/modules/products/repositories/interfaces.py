"""Product repository interface.

Extends ``IOwnedRepository[Product]`` with the owner-scoped look-ups and
writes required by the inventory engine.  An ``update`` or delete that
matches zero records (wrong owner or missing id) reports ``0``; the two
cases are indistinguishable at the storage filter.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IOwnedRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IOwnedRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_id(self, owner_id: UUID, product_id: UUID) -> Optional[Product]:
        """Retrieve a product by id within the owner's scope."""

    @abstractmethod
    def get_by_owner(self, owner_id: UUID) -> List[Product]:
        """List every product of the owner."""

    @abstractmethod
    def get_by_ids(self, owner_id: UUID, product_ids: Iterable[UUID]) -> List[Product]:
        """Retrieve several products of the owner in one read."""

    @abstractmethod
    def update(self, owner_id: UUID, product: Product) -> int:
        """Persist ``name``/``description``; return the number of records modified."""

    @abstractmethod
    def restore(self, product: Product) -> Product:
        """Re-insert a previously deleted product with its original id, SKU and timestamps."""

    @abstractmethod
    def delete_by_id(self, owner_id: UUID, product_id: UUID) -> int:
        """Delete a product; return the number of records deleted."""
