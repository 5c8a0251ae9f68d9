"""Order aggregate: a placed order and its fulfilment status.

The Order is an aggregate root that owns its line items.  It is created
exactly once by ``Order.place()`` and afterwards only changes through the
status transition commands defined here; everything else (line items,
prices, buyer, address, totals) is a snapshot frozen at placement time.
"""

from __future__ import annotations

import random
import string
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Union

from storefront.domain.exceptions import InvalidTransitionError, ValidationError
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.pricing import PriceBreakdown


class OrderStatus(Enum):
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


# Forward skips along the fulfilment chain are allowed (a seller may ship
# straight from confirmed); nothing leaves a terminal state.
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.CONFIRMED: frozenset(
        {OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED}
    ),
    OrderStatus.PROCESSING: frozenset(
        {OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED}
    ),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


class PaymentStatus(Enum):
    PAID = "paid"


class PaymentMethod(Enum):
    CARD = "card"
    PAYPAL = "paypal"
    COD = "cod"


# ---------------------------------------------------------------------------
# Snapshots embedded in the order
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BuyerInfo:
    """Who placed the order, as known at order time."""

    id: str
    email: str = ""
    name: str = ""


@dataclass(frozen=True)
class ShippingAddress:

    name: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str = ""

    REQUIRED: ClassVar[tuple[str, ...]] = ("name", "street", "city", "state", "zip_code")

    def __post_init__(self) -> None:
        missing = [f for f in self.REQUIRED if not (getattr(self, f) or "").strip()]
        if missing:
            raise ValidationError(
                f"Shipping address is missing: {', '.join(missing)}"
            )


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the product as it was at order-creation time.

    Name, image, price and seller are copies; later catalog edits never
    reach back into existing orders.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    seller_id: str
    seller_name: str
    product_image: str = ""

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


# ---------------------------------------------------------------------------
# Status transition commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ShipmentDetails:
    """Optional logistics fields any transition may carry."""

    tracking_number: str | None = None
    delivery_partner: str | None = None
    estimated_delivery: datetime | None = None


@dataclass(frozen=True)
class Confirm:
    """Repeat of the initial status; accepted only while still confirmed."""

    details: ShipmentDetails = field(default_factory=ShipmentDetails)
    target: ClassVar[OrderStatus | None] = OrderStatus.CONFIRMED


@dataclass(frozen=True)
class MarkProcessing:
    details: ShipmentDetails = field(default_factory=ShipmentDetails)
    target: ClassVar[OrderStatus | None] = OrderStatus.PROCESSING


@dataclass(frozen=True)
class Ship:
    details: ShipmentDetails = field(default_factory=ShipmentDetails)
    target: ClassVar[OrderStatus | None] = OrderStatus.SHIPPED


@dataclass(frozen=True)
class Deliver:
    details: ShipmentDetails = field(default_factory=ShipmentDetails)
    target: ClassVar[OrderStatus | None] = OrderStatus.DELIVERED


@dataclass(frozen=True)
class Cancel:
    reason: str | None = None
    details: ShipmentDetails = field(default_factory=ShipmentDetails)
    target: ClassVar[OrderStatus | None] = OrderStatus.CANCELLED


@dataclass(frozen=True)
class UpdateShipmentDetails:
    """Change logistics fields without moving the order."""

    details: ShipmentDetails = field(default_factory=ShipmentDetails)
    target: ClassVar[OrderStatus | None] = None


StatusCommand = Union[Confirm, MarkProcessing, Ship, Deliver, Cancel, UpdateShipmentDetails]


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50
_ORDER_NUMBER_ALPHABET = string.digits + string.ascii_uppercase


def generate_order_number(now_ms: int | None = None) -> str:
    """Human-traceable order number: ``ORD-<epoch millis>-<9 base36 chars>``.

    Unique enough for support conversations; not a cryptographic id.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = "".join(random.choices(_ORDER_NUMBER_ALPHABET, k=9))
    return f"ORD-{now_ms}-{suffix}"


@dataclass
class Order:
    """Aggregate root for customer orders.

    New orders come from ``Order.place()``, which checks the placement
    rules.  The plain constructor is for repositories loading stored
    orders, which were validated when they were placed.
    """

    id: str
    order_number: str
    buyer: BuyerInfo
    items: tuple[OrderLineItem, ...]
    subtotal: Money
    shipping: Money
    tax: Money
    total: Money
    payment_method: PaymentMethod
    shipping_address: ShippingAddress
    status: OrderStatus = OrderStatus.CONFIRMED
    payment_status: PaymentStatus = PaymentStatus.PAID
    tracking_number: str | None = None
    delivery_partner: str | None = None
    estimated_delivery: datetime | None = None
    cancellation_reason: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None

    # --- Placement ------------------------------------------------------------

    @staticmethod
    def place(
        buyer: BuyerInfo,
        items: list[OrderLineItem],
        totals: PriceBreakdown,
        shipping_address: ShippingAddress,
        payment_method: str,
    ) -> Order:
        """Build a new confirmed, paid order from validated line items."""
        if not buyer.id:
            raise ValidationError("Buyer is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        try:
            method = PaymentMethod(payment_method)
        except ValueError:
            raise ValidationError(f"Unknown payment method: {payment_method!r}") from None

        now = datetime.now(timezone.utc)
        return Order(
            id=uuid.uuid4().hex,
            order_number=generate_order_number(int(now.timestamp() * 1000)),
            buyer=buyer,
            items=tuple(items),
            subtotal=totals.subtotal,
            shipping=totals.shipping,
            tax=totals.tax,
            total=totals.total,
            payment_method=method,
            shipping_address=shipping_address,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def apply(self, command: StatusCommand, now: datetime | None = None) -> None:
        """Run one status command against the order.

        Asking for the status the order already has only applies the
        shipment details.  Terminal orders reject every command.
        """
        now = now or datetime.now(timezone.utc)
        target = command.target

        if self.status.is_terminal:
            raise InvalidTransitionError(self.status.value, (target or self.status).value)

        if target is not None and target != self.status:
            if target not in ALLOWED_TRANSITIONS[self.status]:
                raise InvalidTransitionError(self.status.value, target.value)
            self.status = target
            if target == OrderStatus.DELIVERED:
                self.delivered_at = now
            elif target == OrderStatus.CANCELLED:
                self.cancelled_at = now
                self.cancellation_reason = command.reason  # type: ignore[union-attr]

        self._apply_details(command.details)
        self.updated_at = now

    # --- Queries --------------------------------------------------------------

    @property
    def seller_ids(self) -> frozenset[str]:
        return frozenset(item.seller_id for item in self.items)

    def involves_seller(self, seller_id: str) -> bool:
        return seller_id in self.seller_ids

    def items_for_seller(self, seller_id: str) -> list[OrderLineItem]:
        return [item for item in self.items if item.seller_id == seller_id]

    # --- Internal helpers -----------------------------------------------------

    def _apply_details(self, details: ShipmentDetails) -> None:
        if details.tracking_number is not None:
            self.tracking_number = details.tracking_number
        if details.delivery_partner is not None:
            self.delivery_partner = details.delivery_partner
        if details.estimated_delivery is not None:
            self.estimated_delivery = details.estimated_delivery
