"""Domain service: Inventory Reservation.

This service coordinates the cross-aggregate operation of taking stock
out of the catalog for an order.  It lives in the domain layer because
the logic is a core business rule, not just orchestration.

The two-phase approach (validate-then-mutate) ensures we never leave
stock partially decremented if one product fails validation, and the
compensation step covers the case where another order wins the race for
the last units between the two phases.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import structlog

from storefront.domain.exceptions import (
    DomainException,
    InsufficientStockError,
    ProductNotFoundError,
)
from storefront.domain.model.order import OrderLineItem
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class InventoryReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve(self, requested: Sequence[tuple[str, int]]) -> list[OrderLineItem]:
        """Reserve stock for every ``(product_id, quantity)`` pair, in order.

        Uses a two-phase approach:
          Phase 1 loads and validates.  Every product must exist, be active
          and have enough stock; prices and seller data are snapshotted.
          Nothing is mutated yet.
          Phase 2 runs one atomic conditional decrement per product.  If one
          loses a race, the decrements already applied are undone.

        Returns the line-item snapshots in request order.
        """
        # Phase 1: validate and snapshot
        snapshots: list[OrderLineItem] = []
        claimed: dict[str, int] = {}

        for product_id, qty in requested:
            quantity = Quantity(qty)
            product = self._product_repo.get_by_id(product_id)
            if product is None or not product.is_active:
                raise ProductNotFoundError(product_id)

            # The same product may appear on several lines of one cart.
            claimed[product.id] = claimed.get(product.id, 0) + quantity.value
            if not product.in_stock or product.stock_quantity < claimed[product.id]:
                raise InsufficientStockError(
                    product.id,
                    product.name,
                    claimed[product.id],
                    product.stock_quantity,
                )

            snapshots.append(
                OrderLineItem(
                    product_id=product.id,
                    product_name=product.name,
                    product_image=product.image,
                    quantity=quantity,
                    unit_price=product.price,  # <-- price snapshot
                    seller_id=product.seller_id,
                    seller_name=product.seller_name,
                )
            )

        # Phase 2: commit
        applied: list[OrderLineItem] = []
        try:
            for item in snapshots:
                self._product_repo.decrement_stock(item.product_id, item.quantity.value)
                applied.append(item)
        except Exception as exc:
            # Any failure here, domain or not, must give back what was taken.
            logger.warning(
                "Stock decrement failed, rolling back reservation",
                product_id=getattr(exc, "product_id", None),
                error=type(exc).__name__,
                rolled_back=len(applied),
            )
            self.release(applied)
            raise

        return snapshots

    def release(self, items: Iterable[OrderLineItem]) -> None:
        """Put the stock held by ``items`` back into the catalog.

        Keeps going past individual failures so one broken product does not
        strand the others; the failures are logged.
        """
        for item in items:
            try:
                self._product_repo.increment_stock(item.product_id, item.quantity.value)
            except DomainException:
                logger.error(
                    "Could not return stock to catalog",
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    exc_info=True,
                )
