"""Unit tests for the Order aggregate: placement and status transitions."""

import re
from datetime import datetime, timezone

import pytest

from storefront.domain.exceptions import InvalidTransitionError, ValidationError
from storefront.domain.model.order import (
    MAX_LINE_ITEMS,
    BuyerInfo,
    Cancel,
    Confirm,
    Deliver,
    MarkProcessing,
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    Ship,
    ShipmentDetails,
    ShippingAddress,
    UpdateShipmentDetails,
    generate_order_number,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.pricing import PricingPolicy

ADDRESS = ShippingAddress(
    name="Ada Buyer",
    street="1 Main St",
    city="Springfield",
    state="IL",
    zip_code="62701",
)


def _line(product_id: str = "P1", price: str = "30.00", qty: int = 2, seller_id: str = "s1") -> OrderLineItem:
    return OrderLineItem(
        product_id=product_id,
        product_name=f"Product {product_id}",
        quantity=Quantity(qty),
        unit_price=Money.of(price),
        seller_id=seller_id,
        seller_name=f"Seller {seller_id}",
    )


def _place(items: list[OrderLineItem] | None = None, payment_method: str = "card") -> Order:
    items = items if items is not None else [_line()]
    return Order.place(
        buyer=BuyerInfo(id="b1", email="ada@example.com", name="Ada"),
        items=items,
        totals=PricingPolicy().calculate(items),
        shipping_address=ADDRESS,
        payment_method=payment_method,
    )


class TestPlace:

    def test_new_order_is_confirmed_and_paid(self):
        order = _place()
        assert order.status == OrderStatus.CONFIRMED
        assert order.payment_status == PaymentStatus.PAID
        assert order.payment_method == PaymentMethod.CARD
        assert order.total.to_plain() == "64.80"
        assert order.created_at == order.updated_at

    def test_order_number_format(self):
        order = _place()
        assert re.fullmatch(r"ORD-\d+-[0-9A-Z]{9}", order.order_number)

    def test_ids_are_unique(self):
        assert _place().id != _place().id

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            _place(items=[])

    def test_too_many_lines_rejected(self):
        items = [_line(product_id=f"P{i}", price="1.00", qty=1) for i in range(MAX_LINE_ITEMS + 1)]
        with pytest.raises(ValidationError, match="Maximum"):
            _place(items=items)

    def test_unknown_payment_method_rejected(self):
        with pytest.raises(ValidationError, match="Unknown payment method"):
            _place(payment_method="barter")

    def test_seller_queries(self):
        order = _place(items=[_line("P1", seller_id="s1"), _line("P2", seller_id="s2")])
        assert order.seller_ids == frozenset({"s1", "s2"})
        assert order.involves_seller("s2")
        assert not order.involves_seller("s3")
        assert [i.product_id for i in order.items_for_seller("s1")] == ["P1"]


class TestShippingAddress:

    def test_missing_fields_rejected(self):
        with pytest.raises(ValidationError, match="city, zip_code"):
            ShippingAddress(name="A", street="1 Main", city=" ", state="IL", zip_code="")

    def test_country_optional(self):
        assert ShippingAddress(name="A", street="s", city="c", state="st", zip_code="z").country == ""


class TestOrderNumber:

    def test_uses_given_timestamp(self):
        assert generate_order_number(1700000000000).startswith("ORD-1700000000000-")

    def test_unique_within_the_same_millisecond(self):
        numbers = {generate_order_number(now_ms=1700000000000) for _ in range(1000)}
        assert len(numbers) == 1000

    def test_placed_orders_get_distinct_numbers(self):
        numbers = [_place().order_number for _ in range(200)]
        assert len(set(numbers)) == len(numbers)


class TestTransitions:

    def test_ship_from_confirmed_with_tracking(self):
        order = _place()
        order.apply(Ship(ShipmentDetails(tracking_number="TRK123")))
        assert order.status == OrderStatus.SHIPPED
        assert order.tracking_number == "TRK123"
        assert order.delivered_at is None

    def test_full_forward_chain(self):
        order = _place()
        for command in (MarkProcessing(), Ship(), Deliver()):
            order.apply(command)
        assert order.status == OrderStatus.DELIVERED
        assert order.delivered_at is not None

    def test_deliver_sets_timestamp(self):
        order = _place()
        now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        order.apply(Deliver(), now=now)
        assert order.delivered_at == now
        assert order.updated_at == now

    def test_cancel_records_reason(self):
        order = _place()
        order.apply(Cancel(reason="Out of stock at warehouse"))
        assert order.status == OrderStatus.CANCELLED
        assert order.cancellation_reason == "Out of stock at warehouse"
        assert order.cancelled_at is not None

    def test_backwards_move_rejected(self):
        order = _place()
        order.apply(Ship())
        with pytest.raises(InvalidTransitionError, match="from shipped to processing"):
            order.apply(MarkProcessing())
        assert order.status == OrderStatus.SHIPPED

    def test_confirm_after_processing_rejected(self):
        order = _place()
        order.apply(MarkProcessing())
        with pytest.raises(InvalidTransitionError):
            order.apply(Confirm())

    @pytest.mark.parametrize("terminal", [Deliver(), Cancel(reason="changed mind")])
    def test_terminal_states_reject_everything(self, terminal):
        order = _place()
        order.apply(terminal)
        for command in (Confirm(), MarkProcessing(), Ship(), Deliver(), Cancel(), UpdateShipmentDetails()):
            with pytest.raises(InvalidTransitionError):
                order.apply(command)

    def test_same_status_only_updates_details(self):
        order = _place()
        order.apply(MarkProcessing())
        order.apply(MarkProcessing(ShipmentDetails(delivery_partner="UPS")))
        assert order.status == OrderStatus.PROCESSING
        assert order.delivery_partner == "UPS"

    def test_details_without_status_change(self):
        order = _place()
        eta = datetime(2024, 6, 1, tzinfo=timezone.utc)
        order.apply(UpdateShipmentDetails(ShipmentDetails(tracking_number="T1", estimated_delivery=eta)))
        assert order.status == OrderStatus.CONFIRMED
        assert order.tracking_number == "T1"
        assert order.estimated_delivery == eta

    def test_none_details_leave_existing_values(self):
        order = _place()
        order.apply(Ship(ShipmentDetails(tracking_number="T1")))
        order.apply(Deliver())
        assert order.tracking_number == "T1"

    def test_snapshot_unchanged_by_transitions(self):
        order = _place()
        items_before, total_before = order.items, order.total
        order.apply(Ship(ShipmentDetails(tracking_number="T9")))
        assert order.items == items_before
        assert order.total == total_before
