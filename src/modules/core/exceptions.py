"""Error taxonomy shared by every inventory module.

Every failure the engine reports belongs to exactly one of three kinds:

- ``InternalFailure``: storage errors, missing data after a successful
  write, identifier generation failures.  Opaque to the caller.
- ``NotFound``: the referenced product/stock does not exist for the owner.
- ``FailedPrecondition``: the request is well-formed but breaks a business
  rule (oversell, duplicate order line, malformed id, ...).

Module-specific exceptions subclass one of these kinds.  The API layer
translates the kind into a transport status; the engine never does.
"""

from __future__ import annotations


class InventoryError(Exception):
    """Base class for every error raised by the inventory engine."""


class InternalFailure(InventoryError):
    """Unexpected or storage-layer failure."""


class NotFound(InventoryError):
    """The referenced entity does not exist under the owner's scope."""


class FailedPrecondition(InventoryError):
    """Caller-supplied data violates a business rule."""


class InvalidIdentifier(FailedPrecondition):
    """An externally supplied identifier is not a valid UUID."""
