"""Generic repository interface (Dependency Inversion Principle).

Provides ``IOwnedRepository[T]``, the base abstract class that every
tenant-scoped repository interface extends.  Service-layer code depends
on this abstraction, never on Django ORM directly.

Every read and write is filtered by ``owner_id`` so that tenant isolation
is enforced at the storage-filter level, not by callers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, TypeVar
from uuid import UUID

T = TypeVar("T")


class IOwnedRepository(ABC, Generic[T]):
    """Base generic repository contract for owner-scoped entities.

    Type parameter ``T`` represents the entity managed by the repository
    (e.g. ``Product``, ``Stock``).
    """

    @abstractmethod
    def insert(self, entity: T) -> T:
        """Persist a new entity and return it with its identity assigned."""

    @abstractmethod
    def get_by_owner(self, owner_id: UUID) -> List[T]:
        """List every entity belonging to *owner_id*."""
