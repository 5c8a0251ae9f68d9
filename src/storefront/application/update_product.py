"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.application.dto import Actor, ProductDTO
from storefront.domain.exceptions import ForbiddenError, ProductNotFoundError
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        actor: Actor,
        product_id: str,
        new_price: str | None = None,
        stock_quantity: int | None = None,
    ) -> ProductDTO:
        """Update a product's price and/or stock level.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time.
        """
        actor.require_seller()

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        if product.seller_id != actor.id:
            raise ForbiddenError("Forbidden - You can only update your own products")

        if new_price is not None:
            product.update_price(Money.of(new_price))
        if stock_quantity is not None:
            product.set_stock(stock_quantity)
        self._product_repo.save(product)
        return ProductDTO.from_domain(product)
