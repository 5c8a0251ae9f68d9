"""Application service: List Orders use case (query).

Buyers see the orders they placed; sellers see every order that contains
at least one of their products.  Results are newest first and paginated.
"""

from __future__ import annotations

import math

from storefront.application.dto import Actor, OrderDTO, OrderPageDTO, PaginationDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        default_limit: int = DEFAULT_PAGE_SIZE,
        max_limit: int = MAX_PAGE_SIZE,
    ) -> None:
        self._order_repo = order_repo
        self._default_limit = default_limit
        self._max_limit = max_limit

    def handle(
        self,
        actor: Actor,
        page: int | None = None,
        limit: int | None = None,
        status: str | None = None,
    ) -> OrderPageDTO:
        actor.require_authenticated()

        page = page if page and page > 0 else 1
        limit = limit if limit and limit > 0 else self._default_limit
        limit = min(limit, self._max_limit)

        status_filter = self._parse_status(status)
        if actor.is_buyer:
            orders = self._order_repo.list_for_buyer(actor.id, status_filter)
        else:
            orders = self._order_repo.list_for_seller(actor.id, status_filter)

        total = len(orders)
        pages = math.ceil(total / limit)
        start = (page - 1) * limit

        return OrderPageDTO(
            orders=[OrderDTO.from_domain(o) for o in orders[start:start + limit]],
            pagination=PaginationDTO(
                page=page,
                limit=limit,
                total=total,
                pages=pages,
                has_next=page < pages,
                has_prev=page > 1,
            ),
        )

    @staticmethod
    def _parse_status(status: str | None) -> OrderStatus | None:
        if not status or status == "all":
            return None
        try:
            return OrderStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown order status: {status!r}") from None
