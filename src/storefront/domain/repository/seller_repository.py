"""Abstract repository for Seller aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.seller import Seller
from storefront.domain.model.value_objects import Money


class SellerRepository(ABC):

    @abstractmethod
    def get_by_id(self, seller_id: str) -> Seller | None:
        """Return a seller by ID, or None if not found."""

    @abstractmethod
    def save(self, seller: Seller) -> None:
        """Persist a new or updated seller."""

    @abstractmethod
    def record_sale(
        self,
        seller_id: str,
        seller_name: str,
        order_id: str,
        units: int,
        revenue: Money,
    ) -> Seller:
        """Atomically add one order's share to a seller's statistics.

        Creates the seller record on first sale.
        """
