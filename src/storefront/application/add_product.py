"""Application service: Add Product use case."""

from __future__ import annotations

import structlog

from storefront.application.dto import Actor, ProductDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        actor: Actor,
        name: str,
        price: str,
        stock_quantity: int,
        image: str = "",
    ) -> ProductDTO:
        """List a new product under the calling seller."""
        actor.require_seller()

        if not name or not name.strip():
            raise ValidationError("Product name is required")

        product = Product(
            id=self._product_repo.next_id(),
            name=name.strip(),
            price=Money.of(price),
            stock_quantity=stock_quantity,
            seller_id=actor.id,
            seller_name=actor.name or actor.id,
            image=image,
        )
        self._product_repo.save(product)
        logger.info("Product added", product_id=product.id, seller_id=actor.id)
        return ProductDTO.from_domain(product)
