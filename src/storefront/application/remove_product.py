"""Application service: Remove Product use case.

Products are soft-deleted: past orders keep their snapshots, and the
product simply stops being purchasable.
"""

from __future__ import annotations

from storefront.application.dto import Actor
from storefront.domain.exceptions import ForbiddenError, ProductNotFoundError
from storefront.domain.repository.product_repository import ProductRepository


class RemoveProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, actor: Actor, product_id: str) -> None:
        actor.require_seller()

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        if product.seller_id != actor.id:
            raise ForbiddenError("Forbidden - You can only delete your own products")

        product.deactivate()
        self._product_repo.save(product)
