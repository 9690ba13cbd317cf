import uuid

import pytest

from rest_framework.test import APIClient

from modules.inventory.dtos import CreateProductDTO
from modules.inventory.services import InventoryService
from modules.products.repositories import ProductDjangoRepository
from modules.stock.repositories import StockDjangoRepository


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def owner_id():
    return uuid.uuid4()


@pytest.fixture()
def other_owner_id():
    return uuid.uuid4()


@pytest.fixture()
def inventory_service():
    """InventoryService wired to the Django repositories."""
    return InventoryService(
        product_repository=ProductDjangoRepository(),
        stock_repository=StockDjangoRepository(),
    )


@pytest.fixture()
def make_stocked_product(inventory_service, owner_id):
    """Factory creating a product with its stock through the engine."""

    def _make(quantity=10, name="Widget", description="", owner=None):
        return inventory_service.create_product(
            owner or owner_id,
            CreateProductDTO(name=name, description=description, quantity=quantity),
        )

    return _make
