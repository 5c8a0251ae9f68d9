"""Application service: Place Order use case.

Orchestrates the flow between repositories and the domain model:

1. Reserve stock for every requested item (domain service, two-phase).
2. Price the reserved line items.
3. Build the order snapshot and persist it in one write.
4. Credit each seller's statistics and announce the order.

An order is either fully created with its stock taken, or not created and
no stock is taken.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import Actor, AddressSpec, OrderDTO, OrderItemSpec
from storefront.application.notifications import NotificationSink, NullNotificationSink
from storefront.domain.exceptions import DomainException, ValidationError
from storefront.domain.model.order import BuyerInfo, Order, PaymentMethod, ShippingAddress
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.seller_repository import SellerRepository
from storefront.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from storefront.domain.service.pricing import PricingPolicy

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        seller_repo: SellerRepository,
        notifications: NotificationSink | None = None,
        pricing: PricingPolicy | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._seller_repo = seller_repo
        self._notifications = notifications or NullNotificationSink()
        self._pricing = pricing or PricingPolicy()

    def handle(
        self,
        actor: Actor,
        item_specs: list[OrderItemSpec],
        shipping_address: AddressSpec | None,
        payment_method: str,
    ) -> OrderDTO:
        actor.require_buyer()

        if not item_specs:
            raise ValidationError("Order must contain at least one item")
        if shipping_address is None:
            raise ValidationError("Shipping address is required")

        address = ShippingAddress(
            name=shipping_address.name,
            street=shipping_address.street,
            city=shipping_address.city,
            state=shipping_address.state,
            zip_code=shipping_address.zip_code,
            country=shipping_address.country,
        )
        # Checked up front so a bad payment method never touches stock.
        if payment_method not in {m.value for m in PaymentMethod}:
            raise ValidationError(f"Unknown payment method: {payment_method!r}")

        svc = InventoryReservationService(self._product_repo)
        try:
            line_items = svc.reserve([(s.product_id, s.quantity) for s in item_specs])
        except DomainException as exc:
            logger.info(
                "Order rejected during stock reservation",
                buyer_id=actor.id,
                reason=str(exc),
            )
            raise

        try:
            order = Order.place(
                buyer=BuyerInfo(id=actor.id, email=actor.email, name=actor.name),
                items=line_items,
                totals=self._pricing.calculate(line_items),
                shipping_address=address,
                payment_method=payment_method,
            )
            self._order_repo.add(order)
        except Exception:
            svc.release(line_items)
            raise

        logger.info(
            "Order placed",
            order_id=order.id,
            order_number=order.order_number,
            buyer_id=actor.id,
            item_count=len(order.items),
            total=order.total.to_plain(),
        )

        self._credit_sellers(order)
        self._notifications.order_placed(order)
        return OrderDTO.from_domain(order)

    def _credit_sellers(self, order: Order) -> None:
        """Add the order to each involved seller's sales statistics.

        The order already exists at this point; a statistics failure is
        logged and does not undo it.
        """
        for seller_id in sorted(order.seller_ids):
            items = order.items_for_seller(seller_id)
            revenue = Money.zero()
            for item in items:
                revenue = revenue + item.line_total
            units = sum(item.quantity.value for item in items)

            try:
                self._seller_repo.record_sale(
                    seller_id, items[0].seller_name, order.id, units, revenue
                )
            except DomainException:
                logger.error(
                    "Failed to update seller statistics",
                    order_id=order.id,
                    seller_id=seller_id,
                    exc_info=True,
                )
