"""Tests for the JSON-file repositories, against a temporary data directory."""

import json
import threading
from datetime import datetime, timezone

import pytest

from storefront.application.dto import Actor, AddressSpec, OrderItemSpec
from storefront.domain.exceptions import (
    InsufficientStockError,
    OrderNotFoundError,
    ProductNotFoundError,
    StorageError,
)
from storefront.domain.model.order import (
    BuyerInfo,
    Cancel,
    Order,
    OrderLineItem,
    OrderStatus,
    Ship,
    ShipmentDetails,
    ShippingAddress,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.pricing import PricingPolicy
from storefront.infrastructure import bootstrap
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_order_repository import JsonOrderRepository
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.json_seller_repository import (
    JsonSellerRepository,
)
from tests.fakes import make_product


def _order(seller_id: str = "s1") -> Order:
    items = [
        OrderLineItem(
            product_id="P1",
            product_name="Lamp",
            quantity=Quantity(2),
            unit_price=Money.of("30.00"),
            seller_id=seller_id,
            seller_name="Shop One",
            product_image="https://img.example/lamp.png",
        )
    ]
    return Order.place(
        buyer=BuyerInfo(id="b1", email="ada@example.com", name="Ada"),
        items=items,
        totals=PricingPolicy().calculate(items),
        shipping_address=ShippingAddress("Ada", "1 Main St", "Springfield", "IL", "62701", "US"),
        payment_method="paypal",
    )


class TestJsonProductRepository:

    def test_creates_empty_file(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "data" / "products.json")
        assert repo.list_all() == []
        assert json.loads((tmp_path / "data" / "products.json").read_text()) == []

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "products.json"
        JsonProductRepository(path).save(make_product("1", price="19.99", stock=4))

        product = JsonProductRepository(path).get_by_id("1")
        assert product.price == Money.of("19.99")
        assert product.stock_quantity == 4
        assert json.loads(path.read_text())[0]["in_stock"] is True

    def test_decrement_and_increment(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product("1", stock=5))

        assert repo.decrement_stock("1", 2).stock_quantity == 3
        assert repo.increment_stock("1", 1).stock_quantity == 4
        assert repo.get_by_id("1").stock_quantity == 4

    def test_decrement_to_zero_flips_in_stock(self, tmp_path):
        path = tmp_path / "products.json"
        repo = JsonProductRepository(path)
        repo.save(make_product("1", stock=2))

        repo.decrement_stock("1", 2)

        assert json.loads(path.read_text())[0]["in_stock"] is False

    def test_over_decrement_leaves_store_untouched(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product("1", stock=3))

        with pytest.raises(InsufficientStockError):
            repo.decrement_stock("1", 10)
        assert repo.get_by_id("1").stock_quantity == 3

    def test_decrement_missing_product(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        with pytest.raises(ProductNotFoundError):
            repo.decrement_stock("nope", 1)

    def test_concurrent_buyers_cannot_oversell(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product("1", stock=1))
        outcomes: list[str] = []

        def buy():
            try:
                JsonProductRepository(tmp_path / "products.json").decrement_stock("1", 1)
                outcomes.append("ok")
            except InsufficientStockError:
                outcomes.append("sold out")

        threads = [threading.Thread(target=buy) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count("ok") == 1
        assert repo.get_by_id("1").stock_quantity == 0

    def test_next_id(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        assert repo.next_id() == "1"
        repo.save(make_product("7"))
        assert repo.next_id() == "8"

    def test_corrupt_file_raises_storage_error(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("{not json")
        with pytest.raises(StorageError):
            JsonProductRepository(path).list_all()


class TestJsonOrderRepository:

    def test_round_trip_preserves_snapshot(self, tmp_path):
        path = tmp_path / "orders.json"
        order = _order()
        JsonOrderRepository(path).add(order)

        loaded = JsonOrderRepository(path).get_by_id(order.id)
        assert loaded == order

    def test_save_after_transition(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.add(order)

        eta = datetime(2024, 8, 1, 9, 30, tzinfo=timezone.utc)
        order.apply(Ship(ShipmentDetails(tracking_number="T1", estimated_delivery=eta)))
        repo.save(order)

        loaded = repo.get_by_id(order.id)
        assert loaded.status == OrderStatus.SHIPPED
        assert loaded.tracking_number == "T1"
        assert loaded.estimated_delivery == eta
        assert loaded.delivered_at is None

    def test_cancellation_persisted(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.add(order)
        order.apply(Cancel(reason="buyer request"))
        repo.save(order)

        loaded = repo.get_by_id(order.id)
        assert loaded.cancellation_reason == "buyer request"
        assert loaded.cancelled_at == order.cancelled_at

    def test_duplicate_add_rejected(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.add(order)
        with pytest.raises(StorageError, match="already exists"):
            repo.add(order)

    def test_save_unknown_order(self, tmp_path):
        with pytest.raises(OrderNotFoundError):
            JsonOrderRepository(tmp_path / "orders.json").save(_order())

    def test_list_for_seller(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        mine, theirs = _order("s1"), _order("s2")
        repo.add(mine)
        repo.add(theirs)
        assert [o.id for o in repo.list_for_seller("s2")] == [theirs.id]


class TestJsonSellerRepository:

    def test_record_sale_creates_and_accumulates(self, tmp_path):
        repo = JsonSellerRepository(tmp_path / "sellers.json")
        repo.record_sale("s1", "Shop One", "o1", 2, Money.of("60.00"))
        repo.record_sale("s1", "Shop One", "o2", 1, Money.of("5.50"))

        seller = repo.get_by_id("s1")
        assert seller.name == "Shop One"
        assert seller.total_sales == 3
        assert seller.total_revenue == Money.of("65.50")
        assert seller.order_ids == ["o1", "o2"]

    def test_same_order_recorded_once(self, tmp_path):
        repo = JsonSellerRepository(tmp_path / "sellers.json")
        repo.record_sale("s1", "Shop One", "o1", 2, Money.of("60.00"))
        repo.record_sale("s1", "Shop One", "o1", 2, Money.of("60.00"))
        assert repo.get_by_id("s1").total_sales == 2


class TestConcurrentPlacement:

    def test_last_unit_goes_to_exactly_one_buyer(self, tmp_path):
        settings = Settings(data_dir=tmp_path)
        bootstrap.product_repository(settings).save(make_product("1", price="30.00", stock=1))
        address = AddressSpec("Ada", "1 Main St", "Springfield", "IL", "62701")
        outcomes: list[str] = []
        start = threading.Barrier(10)

        def place(buyer_id: str):
            handler = bootstrap.place_order_handler(settings)
            start.wait()
            try:
                handler.handle(Actor.buyer(buyer_id), [OrderItemSpec("1", 1)], address, "card")
                outcomes.append("ok")
            except InsufficientStockError:
                outcomes.append("sold out")

        threads = [threading.Thread(target=place, args=(f"b{i}",)) for i in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count("ok") == 1
        assert outcomes.count("sold out") == 9
        assert bootstrap.product_repository(settings).get_by_id("1").stock_quantity == 0
        assert len(bootstrap.order_repository(settings).list_all()) == 1
