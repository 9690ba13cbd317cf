"""Inventory DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views/Serializers)
and ``InventoryService``.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product + stock creation.
- ``UpdateProductDTO``: input for name/description updates.
- ``OrderLineDTO``: one line of an order batch or availability check.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

NAME_MAX_LENGTH = 255

# ---------------------------------------------------------------------------
# Product DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` is a non-empty string of at most 255 characters.
    - ``quantity`` is an integer (booleans rejected) of at least 1.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(max_length=NAME_MAX_LENGTH)
    description: str = ""
    quantity: StrictInt

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("quantity cannot be less than 1")
        return v


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    Both fields are optional; only supplied fields are updated.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip() if v is not None else v


# ---------------------------------------------------------------------------
# Order DTOs
# ---------------------------------------------------------------------------


class OrderLineDTO(BaseModel):
    """Immutable DTO for a single order line.

    ``product_id`` is kept as the raw string the client sent; the engine
    parses it so a malformed id rejects the whole batch.
    """

    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: StrictInt

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v
