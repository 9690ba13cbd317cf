from io import StringIO

import pytest
from django.core.management import call_command

from modules.products.models import Product
from modules.stock.models import Stock

pytestmark = pytest.mark.integration


class TestSeedDataCommand:
    def test_seeds_paired_products(self):
        out = StringIO()
        call_command("seed_data", "--owners", "1", stdout=out)

        assert "Seed completed" in out.getvalue()
        assert Product.objects.count() == 10
        assert Stock.objects.count() == 10
        product_ids = set(Product.objects.values_list("id", flat=True))
        assert set(Stock.objects.values_list("product_id", flat=True)) == product_ids
