"""Notification sink that only records events in the log."""

from __future__ import annotations

import structlog

from storefront.application.notifications import NotificationSink
from storefront.domain.model.order import Order

logger = structlog.get_logger(__name__)


class LoggingNotificationSink(NotificationSink):

    def order_placed(self, order: Order) -> None:
        logger.info(
            "notify.order_placed",
            order_number=order.order_number,
            buyer_email=order.buyer.email,
            sellers=sorted(order.seller_ids),
        )

    def order_status_changed(self, order: Order, previous_status: str) -> None:
        logger.info(
            "notify.order_status_changed",
            order_number=order.order_number,
            buyer_email=order.buyer.email,
            from_status=previous_status,
            to_status=order.status.value,
        )
