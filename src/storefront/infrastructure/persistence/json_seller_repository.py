"""JSON-file-backed implementation of SellerRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.model.seller import Seller
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.seller_repository import SellerRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonSellerRepository(SellerRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get_by_id(self, seller_id: str) -> Seller | None:
        for raw in self._file.load():
            if raw["id"] == seller_id:
                return self._to_domain(raw)
        return None

    def save(self, seller: Seller) -> None:
        with self._file.locked():
            records = self._file.load()
            self._upsert(records, seller)
            self._file.persist(records)

    def record_sale(
        self,
        seller_id: str,
        seller_name: str,
        order_id: str,
        units: int,
        revenue: Money,
    ) -> Seller:
        with self._file.locked():
            records = self._file.load()
            seller = next(
                (self._to_domain(raw) for raw in records if raw["id"] == seller_id),
                None,
            ) or Seller(id=seller_id, name=seller_name)
            seller.record_sale(order_id, units, revenue)
            self._upsert(records, seller)
            self._file.persist(records)
        return seller

    def _upsert(self, records: list[dict], seller: Seller) -> None:
        for i, raw in enumerate(records):
            if raw["id"] == seller.id:
                records[i] = self._to_raw(seller)
                return
        records.append(self._to_raw(seller))

    @staticmethod
    def _to_raw(seller: Seller) -> dict:
        return {
            "id": seller.id,
            "name": seller.name,
            "total_sales": seller.total_sales,
            "total_revenue": str(seller.total_revenue.amount),
            "order_ids": list(seller.order_ids),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Seller:
        return Seller(
            id=raw["id"],
            name=raw["name"],
            total_sales=raw.get("total_sales", 0),
            total_revenue=Money(Decimal(raw.get("total_revenue", "0"))),
            order_ids=list(raw.get("order_ids", [])),
        )
