"""Unit tests for the Product model and SKU helpers.

Covers:
- Random alphanumeric generation (alphabet, size limit, entropy failure).
- Grouping into dash-separated blocks.
- SKU generated on first save, unique, immutable afterwards.
- Uniqueness retry exhaustion.
- UUIDv7 primary key and timestamps (inherited from BaseModel).
"""

from __future__ import annotations

import re
import uuid

import pytest
from django.db import IntegrityError
from django.test import override_settings

from modules.products import models as product_models
from modules.products.exceptions import SkuGenerationError
from modules.products.models import (
    SKU_ALPHABET,
    SKU_MAX_RETRIES,
    Product,
    generate_random_alphanum,
    split_into_parts,
)

pytestmark = pytest.mark.unit

SKU_PATTERN = re.compile(r"^[A-Za-z0-9]{4}-[A-Za-z0-9]{4}-[A-Za-z0-9]{4}-[A-Za-z0-9]{4}$")


def _make_product(**overrides) -> Product:
    defaults = {"owner_id": uuid.uuid4(), "name": "Widget"}
    defaults.update(overrides)
    product = Product(**defaults)
    product.save()
    return product


# ---------------------------------------------------------------------------
# generate_random_alphanum
# ---------------------------------------------------------------------------


class TestGenerateRandomAlphanum:
    def test_returns_requested_length(self):
        assert len(generate_random_alphanum(16)) == 16

    def test_uses_alphanumeric_alphabet(self):
        value = generate_random_alphanum(30)
        assert all(char in SKU_ALPHABET for char in value)

    def test_zero_size_returns_empty_string(self):
        assert generate_random_alphanum(0) == ""

    def test_size_above_limit_raises(self):
        with pytest.raises(SkuGenerationError, match="size must not be greater than 30"):
            generate_random_alphanum(31)

    def test_entropy_failure_raises(self, monkeypatch):
        def _broken_choice(_alphabet):
            raise OSError("no entropy")

        monkeypatch.setattr(product_models.secrets, "choice", _broken_choice)
        with pytest.raises(SkuGenerationError):
            generate_random_alphanum(16)


# ---------------------------------------------------------------------------
# split_into_parts
# ---------------------------------------------------------------------------


class TestSplitIntoParts:
    def test_even_split(self):
        assert split_into_parts("abcdefghijklmnop", 4) == "abcd-efgh-ijkl-mnop"

    def test_trailing_partial_group(self):
        assert split_into_parts("abcdefghijk", 4) == "abcd-efgh-ijk"

    def test_short_value_unchanged(self):
        assert split_into_parts("abc", 4) == "abc"


# ---------------------------------------------------------------------------
# SKU on save
# ---------------------------------------------------------------------------


class TestProductSku:
    def test_sku_generated_on_save(self):
        product = _make_product()
        assert SKU_PATTERN.match(product.sku)

    def test_sku_never_changes_on_later_saves(self):
        product = _make_product()
        original = product.sku
        product.name = "Renamed"
        product.save()
        product.refresh_from_db()
        assert product.sku == original

    def test_skus_are_distinct(self):
        skus = {_make_product().sku for _ in range(5)}
        assert len(skus) == 5

    @override_settings(INVENTORY_SKU_LENGTH=8, INVENTORY_SKU_GROUP_SIZE=2)
    def test_sku_shape_follows_settings(self):
        product = _make_product()
        assert re.match(r"^[A-Za-z0-9]{2}(-[A-Za-z0-9]{2}){3}$", product.sku)

    def test_retry_exhaustion_raises(self, monkeypatch):
        existing = _make_product()
        calls = []

        def _always_taken():
            calls.append(1)
            return existing.sku

        monkeypatch.setattr(Product, "generate_sku", staticmethod(_always_taken))
        with pytest.raises(SkuGenerationError):
            _make_product()
        assert len(calls) == SKU_MAX_RETRIES

    def test_retry_recovers_from_collision(self, monkeypatch):
        existing = _make_product()
        candidates = iter([existing.sku, "free-sku0-0000-0000"])
        monkeypatch.setattr(
            Product, "generate_sku", staticmethod(lambda: next(candidates))
        )
        product = _make_product()
        assert product.sku == "free-sku0-0000-0000"

    def test_sku_unique_at_database_level(self):
        existing = _make_product()
        with pytest.raises(IntegrityError):
            _make_product(sku=existing.sku)


# ---------------------------------------------------------------------------
# BaseModel behaviour
# ---------------------------------------------------------------------------


class TestProductIdentity:
    def test_id_is_uuid7(self):
        product = _make_product()
        assert isinstance(product.id, uuid.UUID)
        assert product.id.version == 7

    def test_timestamps_set_on_create(self):
        product = _make_product()
        assert product.created_at is not None
        assert product.updated_at is not None

    def test_update_fields_refreshes_updated_at(self):
        product = _make_product()
        before = product.updated_at
        product.name = "Changed"
        product.save(update_fields=["name"])
        product.refresh_from_db()
        assert product.updated_at >= before
        assert product.name == "Changed"

    def test_str_representation(self):
        product = _make_product(name="Gadget")
        assert str(product) == f"{product.sku} - Gadget"
