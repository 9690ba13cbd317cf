from __future__ import annotations

import uuid

import pytest

from modules.core.exceptions import (
    FailedPrecondition,
    InternalFailure,
    InvalidIdentifier,
    InventoryError,
    NotFound,
)
from modules.core.identifiers import parse_identifier
from modules.inventory.exceptions import (
    DuplicateOrderLine,
    EmptyOrderBatch,
    OrderBatchPartiallyApplied,
    StorageFailure,
)
from modules.products.exceptions import (
    ProductNotFound,
    ProductUpdateConflict,
    SkuGenerationError,
)
from modules.stock.exceptions import (
    InsufficientStock,
    QuantityDecreaseNotAllowed,
    StockRecordMissing,
    StockUpdateConflict,
)

pytestmark = pytest.mark.unit


class TestParseIdentifier:
    def test_parses_canonical_string(self):
        value = uuid.uuid4()
        assert parse_identifier(str(value)) == value

    def test_passes_uuid_through(self):
        value = uuid.uuid4()
        assert parse_identifier(value) is value

    @pytest.mark.parametrize("raw", ["", "not-a-uuid", "1234", None, 42])
    def test_rejects_malformed(self, raw):
        with pytest.raises(InvalidIdentifier, match="invalid product id"):
            parse_identifier(raw, "product id")

    def test_invalid_identifier_is_failed_precondition(self):
        assert issubclass(InvalidIdentifier, FailedPrecondition)


class TestErrorKinds:
    @pytest.mark.parametrize(
        "exc_class, kind",
        [
            (ProductNotFound, NotFound),
            (StockRecordMissing, NotFound),
            (InsufficientStock, FailedPrecondition),
            (QuantityDecreaseNotAllowed, FailedPrecondition),
            (EmptyOrderBatch, FailedPrecondition),
            (DuplicateOrderLine, FailedPrecondition),
            (ProductUpdateConflict, InternalFailure),
            (SkuGenerationError, InternalFailure),
            (StockUpdateConflict, InternalFailure),
            (StorageFailure, InternalFailure),
            (OrderBatchPartiallyApplied, InternalFailure),
        ],
    )
    def test_every_error_has_one_kind(self, exc_class, kind):
        assert issubclass(exc_class, kind)
        assert issubclass(exc_class, InventoryError)
        others = {NotFound, FailedPrecondition, InternalFailure} - {kind}
        assert not any(issubclass(exc_class, other) for other in others)

    def test_missing_stock_reads_as_missing_product(self):
        assert issubclass(StockRecordMissing, ProductNotFound)

    def test_insufficient_stock_carries_product_ids(self):
        pid = uuid.uuid4()
        exc = InsufficientStock("short", product_ids=[pid])
        assert exc.product_ids == [pid]
        assert str(exc) == "short"
