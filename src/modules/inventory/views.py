"""Inventory API views.

Exposes ``InventoryService`` via HTTP using DRF ViewSets.  Every route is
nested under the owner id (``/api/v1/<owner_id>/...``).

Engine exceptions are caught and translated by kind:

- ``NotFound`` -> 404
- ``InsufficientStock`` -> 409
- other ``FailedPrecondition`` (including malformed ids) -> 400
- ``InternalFailure`` -> 500 with a generic message; detail is logged only.
"""

from __future__ import annotations

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import FailedPrecondition, InventoryError, NotFound
from modules.core.identifiers import parse_identifier
from modules.inventory.dtos import CreateProductDTO, OrderLineDTO, UpdateProductDTO
from modules.inventory.serializers import (
    AvailabilityQuerySerializer,
    OrderLineSerializer,
    SetQuantitySerializer,
    StockedProductSerializer,
    StockSerializer,
)
from modules.inventory.services import InventoryService
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.stock.exceptions import InsufficientStock
from modules.stock.repositories.django_repository import StockDjangoRepository

logger = structlog.get_logger(__name__)


def _build_service() -> InventoryService:
    return InventoryService(
        product_repository=ProductDjangoRepository(),
        stock_repository=StockDjangoRepository(),
    )


def _error_response(exc: InventoryError) -> Response:
    """Map an engine error to an HTTP response."""
    if isinstance(exc, NotFound):
        return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, InsufficientStock):
        return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
    if isinstance(exc, FailedPrecondition):
        return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    logger.error(
        "inventory.request_failed",
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return Response(
        {"detail": "Internal server error."},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _order_lines(request: Request) -> list[OrderLineDTO]:
    """Validate a JSON array of ``{"product_id", "quantity"}`` objects."""
    serializer = OrderLineSerializer(data=request.data, many=True)
    serializer.is_valid(raise_exception=True)
    return [
        OrderLineDTO(product_id=line["product_id"], quantity=line["quantity"])
        for line in serializer.validated_data
    ]


class ProductViewSet(GenericViewSet):
    """ViewSet for product + stock operations of one owner.

    Uses ``InventoryService`` with the Django repositories (DIP).
    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    serializer_class = StockedProductSerializer
    lookup_url_kwarg = "product_id"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _build_service()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request, owner_id: str | None = None) -> Response:
        """GET /api/v1/{owner_id}/products/"""
        try:
            items = self._service.list_products(parse_identifier(owner_id, "owner id"))
        except InventoryError as exc:
            return _error_response(exc)
        return Response({"products": StockedProductSerializer(items, many=True).data})

    def retrieve(
        self,
        request: Request,
        owner_id: str | None = None,
        product_id: str | None = None,
    ) -> Response:
        """GET /api/v1/{owner_id}/products/{product_id}/"""
        try:
            item = self._service.get_product(
                parse_identifier(owner_id, "owner id"),
                parse_identifier(product_id, "product id"),
            )
        except InventoryError as exc:
            return _error_response(exc)
        return Response(StockedProductSerializer(item).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request, owner_id: str | None = None) -> Response:
        """POST /api/v1/{owner_id}/products/"""
        data = request.data
        if not isinstance(data, dict):
            return Response(
                {"detail": "Expected a JSON object."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            dto = CreateProductDTO(
                name=data.get("name", ""),
                description=data.get("description", ""),
                quantity=data.get("quantity", 0),
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            item = self._service.create_product(
                parse_identifier(owner_id, "owner id"), dto
            )
        except InventoryError as exc:
            return _error_response(exc)

        out = StockedProductSerializer(item)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def update(
        self,
        request: Request,
        owner_id: str | None = None,
        product_id: str | None = None,
    ) -> Response:
        """PUT/PATCH /api/v1/{owner_id}/products/{product_id}/"""
        data = request.data
        if not isinstance(data, dict):
            return Response(
                {"detail": "Expected a JSON object."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            dto = UpdateProductDTO(
                name=data.get("name"),
                description=data.get("description"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            item = self._service.update_product(
                parse_identifier(owner_id, "owner id"),
                parse_identifier(product_id, "product id"),
                dto,
            )
        except InventoryError as exc:
            return _error_response(exc)

        return Response(StockedProductSerializer(item).data)

    def partial_update(
        self,
        request: Request,
        owner_id: str | None = None,
        product_id: str | None = None,
    ) -> Response:
        """PATCH /api/v1/{owner_id}/products/{product_id}/"""
        return self.update(request, owner_id, product_id)

    def destroy(
        self,
        request: Request,
        owner_id: str | None = None,
        product_id: str | None = None,
    ) -> Response:
        """DELETE /api/v1/{owner_id}/products/{product_id}/"""
        try:
            self._service.delete_product(
                parse_identifier(owner_id, "owner id"),
                parse_identifier(product_id, "product id"),
            )
        except InventoryError as exc:
            return _error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Quantity
    # ------------------------------------------------------------------

    @action(detail=True, methods=["put"], url_path="quantity")
    def quantity(
        self,
        request: Request,
        owner_id: str | None = None,
        product_id: str | None = None,
    ) -> Response:
        """PUT /api/v1/{owner_id}/products/{product_id}/quantity/

        Accepts ``{"quantity": N}``.  Quantities can only be raised here.
        """
        serializer = SetQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            stock = self._service.set_quantity(
                parse_identifier(owner_id, "owner id"),
                parse_identifier(product_id, "product id"),
                serializer.validated_data["quantity"],
            )
        except InventoryError as exc:
            return _error_response(exc)
        return Response({"quantity": stock.quantity})

    @action(detail=True, methods=["get"], url_path="availability")
    def availability(
        self,
        request: Request,
        owner_id: str | None = None,
        product_id: str | None = None,
    ) -> Response:
        """GET /api/v1/{owner_id}/products/{product_id}/availability/?number=N"""
        serializer = AvailabilityQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        try:
            self._service.check_availability(
                parse_identifier(owner_id, "owner id"),
                parse_identifier(product_id, "product id"),
                serializer.validated_data["number"],
            )
        except InventoryError as exc:
            return _error_response(exc)
        return Response({"detail": "product is available in requested number"})

    @action(
        detail=False,
        methods=["post"],
        url_path="availability",
        url_name="availability-batch",
    )
    def availability_batch(
        self, request: Request, owner_id: str | None = None
    ) -> Response:
        """POST /api/v1/{owner_id}/products/availability/

        Accepts the same body as an order batch; nothing is decremented.
        """
        lines = _order_lines(request)
        try:
            self._service.check_availability_batch(
                parse_identifier(owner_id, "owner id"), lines
            )
        except InventoryError as exc:
            return _error_response(exc)
        return Response({"detail": "products are available in requested numbers"})


class OrderViewSet(GenericViewSet):
    """ViewSet for order batches of one owner."""

    serializer_class = OrderLineSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _build_service()

    def create(self, request: Request, owner_id: str | None = None) -> Response:
        """POST /api/v1/{owner_id}/orders/

        Body: ``[{"product_id": "...", "quantity": N}, ...]``.  The batch is
        applied entirely or not at all.
        """
        lines = _order_lines(request)
        try:
            stocks = self._service.process_orders(
                parse_identifier(owner_id, "owner id"), lines
            )
        except InventoryError as exc:
            return _error_response(exc)
        return Response(
            {
                "detail": "order processed successfully",
                "stocks": StockSerializer(stocks, many=True).data,
            }
        )
