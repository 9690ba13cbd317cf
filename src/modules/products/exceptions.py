"""Product domain exceptions.

Raised by the model and the inventory engine when product rules are
violated.  Each exception belongs to one of the kinds defined in
``modules.core.exceptions``; the API layer maps the kind to a response.
"""

from __future__ import annotations

from modules.core.exceptions import InternalFailure, NotFound


class ProductNotFound(NotFound):
    """The requested product does not exist for this owner."""


class ProductUpdateConflict(InternalFailure):
    """The product matched on read but no record was modified on write.

    Typically a concurrent delete between the fetch and the update.
    """


class SkuGenerationError(InternalFailure):
    """A SKU could not be generated (random source or uniqueness failure)."""
