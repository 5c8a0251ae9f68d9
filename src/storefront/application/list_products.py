"""Application service: List / Show Products use cases (queries)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import ProductNotFoundError
from storefront.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, seller_id: str | None = None) -> list[ProductDTO]:
        """Shoppers see active, in-stock products; a seller filter shows
        all of that seller's active products, sold out included."""
        if seller_id:
            products = [p for p in self._product_repo.list_by_seller(seller_id) if p.is_active]
        else:
            products = [p for p in self._product_repo.list_all() if p.is_purchasable]
        return [ProductDTO.from_domain(p) for p in products]


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return ProductDTO.from_domain(product)
