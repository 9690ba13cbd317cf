"""Inventory URL configuration.

Every route is scoped by the owner id captured in the prefix.
"""

from __future__ import annotations

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from modules.inventory.views import OrderViewSet, ProductViewSet

router = SimpleRouter(trailing_slash=True)
router.register("products", ProductViewSet, basename="product")
router.register("orders", OrderViewSet, basename="order")

urlpatterns = [
    path("<str:owner_id>/", include(router.urls)),
]
