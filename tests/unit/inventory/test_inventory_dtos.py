"""Unit tests for inventory DTOs (Pydantic v2).

Covers:
- CreateProductDTO: name required/stripped/at most 255 characters, quantity a
  strict integer >= 1, immutability.
- UpdateProductDTO: optional fields, blank or overlong name rejected.
- OrderLineDTO: raw product id kept, quantity a strict integer >= 1.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.inventory.dtos import CreateProductDTO, OrderLineDTO, UpdateProductDTO

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# CreateProductDTO
# ---------------------------------------------------------------------------


class TestCreateProductDTO:
    def test_valid(self):
        dto = CreateProductDTO(name="  Widget ", description="Blue", quantity=3)
        assert dto.name == "Widget"
        assert dto.description == "Blue"
        assert dto.quantity == 3

    def test_description_defaults_to_empty(self):
        assert CreateProductDTO(name="Widget", quantity=1).description == ""

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_below_one_rejected(self, quantity):
        with pytest.raises(ValidationError, match="quantity cannot be less than 1"):
            CreateProductDTO(name="Widget", quantity=quantity)

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, name):
        with pytest.raises(ValidationError):
            CreateProductDTO(name=name, quantity=1)

    def test_is_frozen(self):
        dto = CreateProductDTO(name="Widget", quantity=1)
        with pytest.raises(ValidationError):
            dto.quantity = 5

    @pytest.mark.parametrize("quantity", [True, "3", 2.0])
    def test_non_integer_quantity_rejected(self, quantity):
        with pytest.raises(ValidationError):
            CreateProductDTO(name="Widget", quantity=quantity)

    def test_name_length_limit(self):
        assert CreateProductDTO(name="x" * 255, quantity=1).name == "x" * 255
        with pytest.raises(ValidationError):
            CreateProductDTO(name="x" * 256, quantity=1)


# ---------------------------------------------------------------------------
# UpdateProductDTO
# ---------------------------------------------------------------------------


class TestUpdateProductDTO:
    def test_all_fields_optional(self):
        dto = UpdateProductDTO()
        assert dto.name is None
        assert dto.description is None

    def test_partial(self):
        dto = UpdateProductDTO(description="")
        assert dto.name is None
        assert dto.description == ""

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(name="  ")

    def test_long_name_rejected(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(name="x" * 256)


# ---------------------------------------------------------------------------
# OrderLineDTO
# ---------------------------------------------------------------------------


class TestOrderLineDTO:
    def test_keeps_raw_product_id(self):
        dto = OrderLineDTO(product_id="not-a-uuid", quantity=1)
        assert dto.product_id == "not-a-uuid"

    def test_quantity_below_one_rejected(self):
        with pytest.raises(ValidationError):
            OrderLineDTO(product_id="x", quantity=0)

    def test_boolean_quantity_rejected(self):
        with pytest.raises(ValidationError):
            OrderLineDTO(product_id="x", quantity=True)
