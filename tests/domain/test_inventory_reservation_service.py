"""Unit tests for the InventoryReservationService domain service."""

import pytest

from storefront.domain.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from storefront.domain.model.value_objects import Money
from storefront.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from tests.fakes import FakeProductRepository, make_product


class RacingProductRepository(FakeProductRepository):
    """Another order takes the last units of one product between the phases."""

    def __init__(self, products, steal_from: str) -> None:
        super().__init__(products)
        self._steal_from = steal_from

    def decrement_stock(self, product_id: str, quantity: int):
        if product_id == self._steal_from:
            self._store[product_id].stock_quantity = 0
        return super().decrement_stock(product_id, quantity)


class BrokenRecordProductRepository(FakeProductRepository):
    """Decrementing one product fails with a non-domain error."""

    def __init__(self, products, broken: str) -> None:
        super().__init__(products)
        self._broken = broken

    def decrement_stock(self, product_id: str, quantity: int):
        if product_id == self._broken:
            raise KeyError("stock_quantity")
        return super().decrement_stock(product_id, quantity)


class TestReserve:

    def test_reserves_all_items(self):
        repo = FakeProductRepository([make_product("P1", stock=5), make_product("P2", stock=10)])
        svc = InventoryReservationService(repo)

        items = svc.reserve([("P1", 2), ("P2", 1)])

        assert [i.product_id for i in items] == ["P1", "P2"]
        assert repo.stock_of("P1") == 3
        assert repo.stock_of("P2") == 9

    def test_snapshots_product_data(self):
        repo = FakeProductRepository([make_product("P1", price="30.00", seller_id="s7", name="Lamp")])
        item = InventoryReservationService(repo).reserve([("P1", 1)])[0]

        assert item.product_name == "Lamp"
        assert item.unit_price == Money.of("30.00")
        assert item.seller_id == "s7"
        assert item.seller_name == "Seller s7"
        assert item.product_image.endswith("P1.png")

    def test_insufficient_stock_rejected(self):
        repo = FakeProductRepository([make_product("P1", stock=3)])
        with pytest.raises(InsufficientStockError):
            InventoryReservationService(repo).reserve([("P1", 10)])
        assert repo.stock_of("P1") == 3

    def test_no_partial_decrement_on_failure(self):
        """If P1 is fine but P2 is short, P1 must not lose stock either."""
        repo = FakeProductRepository([make_product("P1", stock=100), make_product("P2", stock=3)])
        with pytest.raises(InsufficientStockError):
            InventoryReservationService(repo).reserve([("P1", 10), ("P2", 5)])

        assert repo.stock_of("P1") == 100
        assert repo.stock_of("P2") == 3
        assert repo.decrement_calls == []

    def test_unknown_product_rejected(self):
        repo = FakeProductRepository([make_product("P1")])
        with pytest.raises(ProductNotFoundError, match="Product NOPE not found"):
            InventoryReservationService(repo).reserve([("P1", 1), ("NOPE", 1)])
        assert repo.stock_of("P1") == 10

    def test_inactive_product_treated_as_missing(self):
        repo = FakeProductRepository([make_product("P1", is_active=False)])
        with pytest.raises(ProductNotFoundError):
            InventoryReservationService(repo).reserve([("P1", 1)])

    def test_non_positive_quantity_rejected(self):
        repo = FakeProductRepository([make_product("P1")])
        with pytest.raises(ValidationError, match="must be positive"):
            InventoryReservationService(repo).reserve([("P1", 0)])

    def test_duplicate_lines_checked_against_combined_quantity(self):
        repo = FakeProductRepository([make_product("P1", stock=5)])
        with pytest.raises(InsufficientStockError) as exc_info:
            InventoryReservationService(repo).reserve([("P1", 3), ("P1", 3)])
        assert exc_info.value.requested == 6
        assert repo.stock_of("P1") == 5

    def test_duplicate_lines_within_stock(self):
        repo = FakeProductRepository([make_product("P1", stock=5)])
        items = InventoryReservationService(repo).reserve([("P1", 2), ("P1", 3)])
        assert len(items) == 2
        assert repo.stock_of("P1") == 0


class TestCompensation:

    def test_lost_race_restores_earlier_decrements(self):
        repo = RacingProductRepository(
            [make_product("P1", stock=5), make_product("P2", stock=5)],
            steal_from="P2",
        )
        with pytest.raises(InsufficientStockError):
            InventoryReservationService(repo).reserve([("P1", 2), ("P2", 1)])

        assert repo.stock_of("P1") == 5
        assert repo.stock_of("P2") == 0

    def test_release_returns_stock(self):
        repo = FakeProductRepository([make_product("P1", stock=5)])
        svc = InventoryReservationService(repo)
        items = svc.reserve([("P1", 4)])

        svc.release(items)

        assert repo.stock_of("P1") == 5

    def test_unexpected_error_restores_earlier_decrements(self):
        repo = BrokenRecordProductRepository(
            [make_product("P1", stock=5), make_product("P2", stock=5)],
            broken="P2",
        )
        with pytest.raises(KeyError):
            InventoryReservationService(repo).reserve([("P1", 2), ("P2", 1)])

        assert repo.stock_of("P1") == 5
        assert repo.stock_of("P2") == 5
