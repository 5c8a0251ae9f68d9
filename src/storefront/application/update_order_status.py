"""Application service: Update Order Status use case (seller side).

A seller who owns at least one line item drives the order through the
status machine defined on the Order aggregate.  The loose field set
accepted by the adapters is turned into exactly one transition command by
``build_status_command`` before the aggregate sees it.
"""

from __future__ import annotations

from datetime import datetime

import structlog

from storefront.application.dto import Actor, OrderDTO
from storefront.application.notifications import NotificationSink, NullNotificationSink
from storefront.domain.exceptions import ForbiddenError, OrderNotFoundError, ValidationError
from storefront.domain.model.order import (
    Cancel,
    Confirm,
    Deliver,
    MarkProcessing,
    OrderStatus,
    Ship,
    ShipmentDetails,
    StatusCommand,
    UpdateShipmentDetails,
)
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


def build_status_command(
    status: str | None = None,
    tracking_number: str | None = None,
    delivery_partner: str | None = None,
    estimated_delivery: datetime | None = None,
    cancellation_reason: str | None = None,
) -> StatusCommand:
    """Map an update request's optional fields onto one transition command."""
    details = ShipmentDetails(
        tracking_number=tracking_number,
        delivery_partner=delivery_partner,
        estimated_delivery=estimated_delivery,
    )

    if status is None:
        if cancellation_reason is not None:
            raise ValidationError("cancellationReason requires status 'cancelled'")
        return UpdateShipmentDetails(details)

    try:
        target = OrderStatus(status)
    except ValueError:
        raise ValidationError(f"Unknown order status: {status!r}") from None

    if target == OrderStatus.CANCELLED:
        return Cancel(reason=cancellation_reason, details=details)
    if cancellation_reason is not None:
        raise ValidationError("cancellationReason requires status 'cancelled'")
    if target == OrderStatus.PROCESSING:
        return MarkProcessing(details)
    if target == OrderStatus.SHIPPED:
        return Ship(details)
    if target == OrderStatus.DELIVERED:
        return Deliver(details)
    return Confirm(details)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifications: NotificationSink | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._notifications = notifications or NullNotificationSink()

    def handle(self, actor: Actor, order_id: str, command: StatusCommand) -> OrderDTO:
        actor.require_seller()

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if not order.involves_seller(actor.id):
            raise ForbiddenError("Forbidden")

        previous = order.status
        order.apply(command)
        self._order_repo.save(order)

        if order.status != previous:
            logger.info(
                "Order status changed",
                order_id=order.id,
                seller_id=actor.id,
                from_status=previous.value,
                to_status=order.status.value,
            )
            self._notifications.order_status_changed(order, previous.value)

        return OrderDTO.from_domain(order)
