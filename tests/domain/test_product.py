"""Unit tests for the Product aggregate."""

import pytest

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.model.value_objects import Money
from tests.fakes import make_product


class TestProductStock:

    def test_in_stock_follows_quantity(self):
        p = make_product("P1", stock=1)
        assert p.in_stock
        p.decrement_stock(1)
        assert p.stock_quantity == 0
        assert not p.in_stock

    def test_decrement_beyond_stock_rejected(self):
        p = make_product("P1", stock=3, name="Lamp")
        with pytest.raises(InsufficientStockError, match="Insufficient stock for Lamp") as exc_info:
            p.decrement_stock(10)
        assert exc_info.value.requested == 10
        assert exc_info.value.available == 3
        assert p.stock_quantity == 3

    def test_restock(self):
        p = make_product("P1", stock=0)
        p.restock(4)
        assert p.stock_quantity == 4
        assert p.in_stock

    def test_negative_stock_rejected(self):
        p = make_product("P1")
        with pytest.raises(ValidationError, match="cannot be negative"):
            p.set_stock(-1)

    def test_purchasable_requires_active_and_stock(self):
        assert make_product("P1", stock=2).is_purchasable
        assert not make_product("P2", stock=0).is_purchasable
        assert not make_product("P3", stock=2, is_active=False).is_purchasable


class TestProductPrice:

    def test_zero_price_rejected_on_create(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            make_product("P1", price="0")

    def test_update_price(self):
        p = make_product("P1", price="10.00")
        p.update_price(Money.of("12.50"))
        assert p.price == Money.of("12.50")

    def test_deactivate_is_soft(self):
        p = make_product("P1")
        p.deactivate()
        assert not p.is_active
        assert p.stock_quantity == 10

    def test_sub_cent_price_rejected_on_create(self):
        with pytest.raises(ValidationError, match="whole cents"):
            make_product("P1", price="0.115")

    def test_sub_cent_price_rejected_on_update(self):
        p = make_product("P1", price="10.00")
        with pytest.raises(ValidationError, match="whole cents"):
            p.update_price(Money.of("9.999"))
        assert p.price == Money.of("10.00")

    def test_trailing_zero_precision_accepted(self):
        assert make_product("P1", price="12.5000").price == Money.of("12.50")
