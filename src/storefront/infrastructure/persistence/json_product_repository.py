"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import ProductNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, product: Product) -> None:
        with self._file.locked():
            records = self._file.load()
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    records[i] = self._to_raw(product)
                    break
            else:
                records.append(self._to_raw(product))
            self._file.persist(records)

    def decrement_stock(self, product_id: str, quantity: int) -> Product:
        # Re-read under the lock: the check and the write see the same state.
        with self._file.locked():
            records = self._file.load()
            index, product = self._find(records, product_id)
            product.decrement_stock(quantity)
            records[index] = self._to_raw(product)
            self._file.persist(records)
        return product

    def increment_stock(self, product_id: str, quantity: int) -> Product:
        with self._file.locked():
            records = self._file.load()
            index, product = self._find(records, product_id)
            product.restock(quantity)
            records[index] = self._to_raw(product)
            self._file.persist(records)
        return product

    # --- Serialization --------------------------------------------------------

    @classmethod
    def _find(cls, records: list[dict], product_id: str) -> tuple[int, Product]:
        for i, raw in enumerate(records):
            if raw["id"] == product_id:
                return i, cls._to_domain(raw)
        raise ProductNotFoundError(product_id)

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock_quantity": product.stock_quantity,
            "in_stock": product.in_stock,
            "seller_id": product.seller_id,
            "seller_name": product.seller_name,
            "image": product.image,
            "is_active": product.is_active,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock_quantity=raw["stock_quantity"],
            seller_id=raw["seller_id"],
            seller_name=raw["seller_name"],
            image=raw.get("image", ""),
            is_active=raw.get("is_active", True),
        )
