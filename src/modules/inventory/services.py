"""Inventory consistency engine (Use Cases).

``InventoryService`` pairs every product with exactly one stock record and
is the only component allowed to change quantities.  It is written against
a store that offers single-record atomicity only:

- Product + Stock creation and deletion run as a saga: a failed second
  step triggers a compensating action on the first.
- Quantity writes are conditional single-statement updates (see
  ``IStockRepository``); there is no read-modify-write on ``quantity``.
- Order batches run in three phases (normalize, check, apply) and the
  apply phase compensates every applied line when a later line fails.

Storage exceptions are logged once here and re-raised as ``StorageFailure``.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Iterator,
    List,
    NamedTuple,
    NoReturn,
    Sequence,
    Tuple,
)
from uuid import UUID

import structlog
from django.conf import settings
from django.db import DatabaseError

from modules.core.exceptions import InternalFailure, InventoryError
from modules.core.identifiers import parse_identifier
from modules.inventory.exceptions import (
    DuplicateOrderLine,
    EmptyOrderBatch,
    OrderBatchPartiallyApplied,
    StorageFailure,
)
from modules.products.exceptions import ProductNotFound, ProductUpdateConflict
from modules.products.models import Product
from modules.stock.exceptions import (
    InsufficientStock,
    QuantityDecreaseNotAllowed,
    StockRecordMissing,
    StockUpdateConflict,
)
from modules.stock.models import Stock

if TYPE_CHECKING:
    from modules.inventory.dtos import CreateProductDTO, OrderLineDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository
    from modules.stock.repositories.interfaces import IStockRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockedProduct:
    """A product together with its quantity on hand."""

    product: Product
    quantity: int


class _Line(NamedTuple):
    product_id: UUID
    quantity: int


@contextmanager
def _storage(operation: str, **context: Any) -> Iterator[None]:
    """Translate storage exceptions raised inside the block into ``StorageFailure``."""
    try:
        yield
    except DatabaseError as exc:
        logger.error(
            "inventory.storage_failure",
            operation=operation,
            error=str(exc),
            **context,
        )
        raise StorageFailure(f"cannot {operation}") from exc


class InventoryService:
    """Application service for product, stock and order use-cases.

    Receives both repositories via constructor injection (DIP).  Holds no
    mutable state, so a single instance may serve concurrent requests.
    """

    def __init__(
        self,
        product_repository: IProductRepository,
        stock_repository: IStockRepository,
        max_update_retries: int | None = None,
    ) -> None:
        self._products = product_repository
        self._stocks = stock_repository
        if max_update_retries is None:
            max_update_retries = settings.INVENTORY_STOCK_UPDATE_MAX_RETRIES
        self._max_update_retries = max_update_retries

    # ------------------------------------------------------------------
    # Product commands
    # ------------------------------------------------------------------

    def create_product(self, owner_id: UUID, dto: CreateProductDTO) -> StockedProduct:
        """Create a product and its paired stock record.

        If the stock insert fails the product is deleted again so that no
        product is ever left without a stock.

        Raises:
            InternalFailure: SKU generation or storage failure.
        """
        log = logger.bind(owner_id=str(owner_id))

        product = Product(owner_id=owner_id, name=dto.name, description=dto.description)
        with _storage("insert product", owner_id=str(owner_id)):
            product = self._products.insert(product)

        stock = Stock(owner_id=owner_id, product_id=product.id, quantity=dto.quantity)
        try:
            with _storage("insert stock", product_id=str(product.id)):
                stock = self._stocks.insert(stock)
        except InternalFailure:
            log.warning("inventory.create_compensating", product_id=str(product.id))
            self._discard_product(owner_id, product.id)
            raise

        log.info(
            "inventory.product_created",
            product_id=str(product.id),
            sku=product.sku,
            quantity=stock.quantity,
        )
        return StockedProduct(product=product, quantity=stock.quantity)

    def update_product(
        self, owner_id: UUID, product_id: UUID, dto: UpdateProductDTO
    ) -> StockedProduct:
        """Update name and/or description of a product.

        Raises:
            ProductNotFound: product (or its stock) does not exist.
            ProductUpdateConflict: the product vanished between read and write.
        """
        product, stock = self._fetch_pair(owner_id, product_id)
        log = logger.bind(owner_id=str(owner_id), product_id=str(product_id))

        for field in ("name", "description"):
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)

        with _storage("update product", product_id=str(product_id)):
            modified = self._products.update(owner_id, product)
        if not modified:
            log.warning("inventory.product_update_lost")
            raise ProductUpdateConflict(f"cannot update product {product_id}")

        log.info("inventory.product_updated")
        return StockedProduct(product=product, quantity=stock.quantity)

    def delete_product(self, owner_id: UUID, product_id: UUID) -> None:
        """Delete a product and then its stock.

        If the stock delete fails the product is re-inserted so that the
        pair stays intact.

        Raises:
            ProductNotFound: product does not exist.
            InternalFailure: storage failure.
        """
        log = logger.bind(owner_id=str(owner_id), product_id=str(product_id))
        product = self._fetch_product(owner_id, product_id)

        with _storage("delete product", product_id=str(product_id)):
            deleted = self._products.delete_by_id(owner_id, product_id)
        if not deleted:
            raise ProductNotFound(f"product {product_id} not found")

        try:
            with _storage("delete stock", product_id=str(product_id)):
                removed = self._stocks.delete_by_owner_and_product(owner_id, product_id)
        except InternalFailure:
            log.warning("inventory.delete_compensating")
            self._restore_product(product)
            raise

        if not removed:
            log.warning("inventory.stock_already_gone")
        log.info("inventory.product_deleted")

    # ------------------------------------------------------------------
    # Product queries
    # ------------------------------------------------------------------

    def get_product(self, owner_id: UUID, product_id: UUID) -> StockedProduct:
        """Retrieve a product with its quantity.

        Raises:
            ProductNotFound: product does not exist for this owner.
            StockRecordMissing: product exists without a stock record.
        """
        product, stock = self._fetch_pair(owner_id, product_id)
        return StockedProduct(product=product, quantity=stock.quantity)

    def list_products(self, owner_id: UUID) -> List[StockedProduct]:
        """Return every product of the owner with its quantity.

        Products and stocks are read with one query each and joined in
        memory.  A product without stock is an integrity violation and is
        reported exactly as in ``get_product``.

        Raises:
            StockRecordMissing: some product has no stock record.
        """
        with _storage("list products", owner_id=str(owner_id)):
            products = self._products.get_by_owner(owner_id)
            stocks = self._stocks.get_by_owner(owner_id)

        by_product = {stock.product_id: stock for stock in stocks}
        result = []
        for product in products:
            stock = by_product.get(product.id)
            if stock is None:
                self._report_missing_stock(owner_id, product.id)
            result.append(StockedProduct(product=product, quantity=stock.quantity))
        return result

    # ------------------------------------------------------------------
    # Quantity commands
    # ------------------------------------------------------------------

    def set_quantity(self, owner_id: UUID, product_id: UUID, quantity: int) -> Stock:
        """Raise the quantity on hand to *quantity*.

        Setting the current value is a no-op that succeeds.  The write is a
        compare-and-swap on ``Stock.version``; a lost race re-reads and
        re-validates, up to ``max_update_retries`` attempts.

        Raises:
            ProductNotFound: product (or its stock) does not exist.
            QuantityDecreaseNotAllowed: *quantity* is below the current one.
            StockUpdateConflict: every attempt lost its race.
        """
        log = logger.bind(owner_id=str(owner_id), product_id=str(product_id))

        for attempt in range(1, self._max_update_retries + 1):
            _, stock = self._fetch_pair(owner_id, product_id)
            if quantity < stock.quantity:
                raise QuantityDecreaseNotAllowed(
                    f"quantity cannot be decreased from {stock.quantity} to {quantity}"
                )
            if quantity == stock.quantity:
                log.info("inventory.quantity_unchanged", quantity=quantity)
                return stock

            expected_version = stock.version
            stock.quantity = quantity
            with _storage("set quantity", product_id=str(product_id)):
                modified = self._stocks.update(stock, expected_version)
            if modified:
                log.info("inventory.quantity_set", quantity=quantity, attempt=attempt)
                return stock
            log.warning("inventory.quantity_set_conflict", attempt=attempt)

        raise StockUpdateConflict(
            f"cannot set quantity of product {product_id}: concurrent updates"
        )

    def check_availability(self, owner_id: UUID, product_id: UUID, requested: int) -> None:
        """Verify that *requested* units are on hand.  Never mutates.

        Raises:
            ProductNotFound: product (or its stock) does not exist.
            InsufficientStock: fewer than *requested* units are on hand.
        """
        _, stock = self._fetch_pair(owner_id, product_id)
        if requested > stock.quantity:
            raise InsufficientStock(
                f"product {product_id}: requested {requested}, "
                f"available {stock.quantity}",
                product_ids=[product_id],
            )

    # ------------------------------------------------------------------
    # Order batches
    # ------------------------------------------------------------------

    def check_availability_batch(
        self, owner_id: UUID, lines: Sequence[OrderLineDTO]
    ) -> None:
        """Validate a batch like ``process_orders`` would, without applying it.

        Raises:
            FailedPrecondition: empty batch, malformed id, duplicate line or
                insufficient stock.
            ProductNotFound: a product (or its stock) does not exist.
        """
        normalized = self._normalize(lines)
        self._check(owner_id, normalized)

    def process_orders(self, owner_id: UUID, lines: Sequence[OrderLineDTO]) -> List[Stock]:
        """Decrement stock for every line of an order batch, all or nothing.

        Steps:
        1. Normalize: parse ids, reject empty batches and duplicate products.
        2. Check: read every stock at once; reject the batch if any product
           is missing or short.  Nothing is mutated in this phase.
        3. Apply: decrement line by line with a conditional update.  If a
           line no longer fits (stock consumed concurrently) every applied
           line is restored and the batch fails.

        Returns the stock records of the batch after decrement, in line order.

        Raises:
            FailedPrecondition: empty batch, malformed id, duplicate line or
                insufficient stock (including stock lost during apply).
            ProductNotFound: a product (or its stock) does not exist.
            OrderBatchPartiallyApplied: compensation could not restore
                every applied line.
        """
        log = logger.bind(owner_id=str(owner_id))
        normalized = self._normalize(lines)
        log.info("inventory.order_received", lines=len(normalized))

        self._check(owner_id, normalized)
        log.info("inventory.order_checked")

        applied: List[_Line] = []
        try:
            for line in normalized:
                with _storage("decrement stock", product_id=str(line.product_id)):
                    modified = self._stocks.decrement(
                        owner_id, line.product_id, line.quantity
                    )
                if not modified:
                    raise InsufficientStock(
                        f"product {line.product_id}: stock changed while the "
                        f"order was being applied",
                        product_ids=[line.product_id],
                    )
                applied.append(line)
        except InventoryError:
            self._compensate(owner_id, applied)
            raise

        log.info("inventory.order_committed", lines=len(applied))

        product_ids = [line.product_id for line in normalized]
        with _storage("fetch stocks", owner_id=str(owner_id)):
            stocks = self._stocks.get_by_owner_and_products(owner_id, product_ids)
        position = {product_id: index for index, product_id in enumerate(product_ids)}
        return sorted(stocks, key=lambda stock: position[stock.product_id])

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fetch_product(self, owner_id: UUID, product_id: UUID) -> Product:
        with _storage("fetch product", product_id=str(product_id)):
            product = self._products.get_by_id(owner_id, product_id)
        if product is None:
            raise ProductNotFound(f"product {product_id} not found")
        return product

    def _fetch_pair(self, owner_id: UUID, product_id: UUID) -> Tuple[Product, Stock]:
        product = self._fetch_product(owner_id, product_id)
        with _storage("fetch stock", product_id=str(product_id)):
            stock = self._stocks.get_by_owner_and_product(owner_id, product_id)
        if stock is None:
            self._report_missing_stock(owner_id, product_id)
        return product, stock

    @staticmethod
    def _report_missing_stock(owner_id: UUID, product_id: UUID) -> NoReturn:
        logger.error(
            "inventory.stock_missing",
            owner_id=str(owner_id),
            product_id=str(product_id),
        )
        raise StockRecordMissing(f"product {product_id} not found")

    @staticmethod
    def _normalize(lines: Sequence[OrderLineDTO]) -> List[_Line]:
        if not lines:
            raise EmptyOrderBatch("order batch must contain at least one line")

        seen: set[UUID] = set()
        normalized = []
        for line in lines:
            product_id = parse_identifier(line.product_id, "product id")
            if product_id in seen:
                raise DuplicateOrderLine(f"duplicate order for product {product_id}")
            seen.add(product_id)
            normalized.append(_Line(product_id, line.quantity))
        return normalized

    def _check(self, owner_id: UUID, lines: List[_Line]) -> None:
        product_ids = [line.product_id for line in lines]
        with _storage("check stocks", owner_id=str(owner_id)):
            products = self._products.get_by_ids(owner_id, product_ids)
            stocks = self._stocks.get_by_owner_and_products(owner_id, product_ids)

        known = {product.id for product in products}
        by_product = {stock.product_id: stock for stock in stocks}

        missing = [pid for pid in product_ids if pid not in known]
        if missing:
            raise ProductNotFound(
                "products not found: " + ", ".join(str(pid) for pid in missing)
            )
        for product_id in product_ids:
            if product_id not in by_product:
                self._report_missing_stock(owner_id, product_id)

        short = [
            line for line in lines if line.quantity > by_product[line.product_id].quantity
        ]
        if short:
            raise InsufficientStock(
                "insufficient stock: "
                + ", ".join(
                    f"product {line.product_id} requested {line.quantity}, "
                    f"available {by_product[line.product_id].quantity}"
                    for line in short
                ),
                product_ids=[line.product_id for line in short],
            )

    def _compensate(self, owner_id: UUID, applied: List[_Line]) -> None:
        """Undo applied decrements in reverse order."""
        log = logger.bind(owner_id=str(owner_id))
        unrestored = []
        for line in reversed(applied):
            try:
                with _storage("restore stock", product_id=str(line.product_id)):
                    restored = self._stocks.increment(
                        owner_id, line.product_id, line.quantity
                    )
            except StorageFailure:
                restored = 0
            if not restored:
                unrestored.append(line.product_id)

        if unrestored:
            log.error(
                "inventory.order_partially_applied",
                product_ids=[str(pid) for pid in unrestored],
            )
            raise OrderBatchPartiallyApplied(
                "order batch left partially applied for products: "
                + ", ".join(str(pid) for pid in unrestored),
                product_ids=unrestored,
            )
        log.warning("inventory.order_compensated", lines=len(applied))

    def _discard_product(self, owner_id: UUID, product_id: UUID) -> None:
        try:
            with _storage("discard product", product_id=str(product_id)):
                self._products.delete_by_id(owner_id, product_id)
        except StorageFailure:
            logger.error(
                "inventory.orphan_product",
                owner_id=str(owner_id),
                product_id=str(product_id),
            )

    def _restore_product(self, product: Product) -> None:
        try:
            with _storage("restore product", product_id=str(product.id)):
                self._products.restore(product)
        except StorageFailure:
            logger.error(
                "inventory.orphan_stock",
                owner_id=str(product.owner_id),
                product_id=str(product.id),
            )
