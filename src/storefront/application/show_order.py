"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.dto import Actor, OrderDTO
from storefront.domain.exceptions import ForbiddenError, OrderNotFoundError
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, actor: Actor, order_id: str) -> OrderDTO:
        """Return one order to its buyer or to a seller with items in it."""
        actor.require_authenticated()

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if not actor.can_read(order):
            raise ForbiddenError("Forbidden")
        return OrderDTO.from_domain(order)
