"""Unit tests for the inventory app's startup checks on engine settings."""

from __future__ import annotations

import pytest
from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from django.test import override_settings

pytestmark = pytest.mark.unit


def _ready() -> None:
    apps.get_app_config("inventory").ready()


class TestInventoryConfigReady:
    def test_default_settings_accepted(self):
        _ready()

    @pytest.mark.parametrize("group_size", [0, -4])
    def test_sku_group_size_below_one_rejected(self, group_size):
        with override_settings(INVENTORY_SKU_GROUP_SIZE=group_size):
            with pytest.raises(ImproperlyConfigured, match="INVENTORY_SKU_GROUP_SIZE"):
                _ready()

    @pytest.mark.parametrize("length", [0, 31])
    def test_sku_length_out_of_range_rejected(self, length):
        with override_settings(INVENTORY_SKU_LENGTH=length):
            with pytest.raises(ImproperlyConfigured, match="INVENTORY_SKU_LENGTH"):
                _ready()

    def test_zero_update_retries_rejected(self):
        with override_settings(INVENTORY_STOCK_UPDATE_MAX_RETRIES=0):
            with pytest.raises(
                ImproperlyConfigured, match="INVENTORY_STOCK_UPDATE_MAX_RETRIES"
            ):
                _ready()
