"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a brand-new order in a single write."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist changes to an existing order."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, in no particular order."""

    def list_for_buyer(
        self, buyer_id: str, status: OrderStatus | None = None
    ) -> list[Order]:
        """Orders placed by a buyer, newest first."""
        return self._newest_first(
            o for o in self.list_all()
            if o.buyer.id == buyer_id and (status is None or o.status == status)
        )

    def list_for_seller(
        self, seller_id: str, status: OrderStatus | None = None
    ) -> list[Order]:
        """Orders containing at least one of the seller's items, newest first."""
        return self._newest_first(
            o for o in self.list_all()
            if o.involves_seller(seller_id) and (status is None or o.status == status)
        )

    @staticmethod
    def _newest_first(orders) -> list[Order]:
        return sorted(orders, key=lambda o: o.created_at, reverse=True)
