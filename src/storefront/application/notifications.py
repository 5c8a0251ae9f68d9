"""Outbound notification port.

Use cases announce what happened; how (or whether) anyone is told is the
adapter's business.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class NotificationSink(ABC):

    @abstractmethod
    def order_placed(self, order: Order) -> None:
        """The buyer's order was created and stock reserved."""

    @abstractmethod
    def order_status_changed(self, order: Order, previous_status: str) -> None:
        """A seller moved the order to a new status."""


class NullNotificationSink(NotificationSink):

    def order_placed(self, order: Order) -> None:
        pass

    def order_status_changed(self, order: Order, previous_status: str) -> None:
        pass
