"""Seller aggregate: sales statistics and order history per seller."""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.value_objects import Money


@dataclass
class Seller:

    id: str
    name: str
    total_sales: int = 0
    total_revenue: Money = field(default_factory=Money.zero)
    order_ids: list[str] = field(default_factory=list)

    def record_sale(self, order_id: str, units: int, revenue: Money) -> None:
        """Add one order's share to this seller's running totals.

        Recording the same order twice is a no-op.
        """
        if order_id in self.order_ids:
            return
        self.order_ids.append(order_id)
        self.total_sales += units
        self.total_revenue = self.total_revenue + revenue
