"""Abstract repository for Product aggregate (the catalog store).

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, active or not."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> Product:
        """Atomically take ``quantity`` units out of stock.

        The check and the write are one indivisible step: the decrement
        only happens if the resulting quantity stays >= 0.  Raises
        ProductNotFoundError or InsufficientStockError otherwise, leaving
        the stored product untouched.
        """

    @abstractmethod
    def increment_stock(self, product_id: str, quantity: int) -> Product:
        """Atomically put ``quantity`` units back into stock."""

    def next_id(self) -> str:
        products = self.list_all()
        numeric = [int(p.id) for p in products if p.id.isdigit()]
        return str(max(numeric, default=0) + 1)

    def list_by_seller(self, seller_id: str) -> list[Product]:
        return [p for p in self.list_all() if p.seller_id == seller_id]
