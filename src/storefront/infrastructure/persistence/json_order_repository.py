"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import OrderNotFoundError, StorageError
from storefront.domain.model.order import (
    BuyerInfo,
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingAddress,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def add(self, order: Order) -> None:
        with self._file.locked():
            orders = self._file.load()
            if any(raw["id"] == order.id for raw in orders):
                raise StorageError(f"Order {order.id} already exists")
            orders.append(self._to_raw(order))
            self._file.persist(orders)

    def save(self, order: Order) -> None:
        with self._file.locked():
            orders = self._file.load()
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    break
            else:
                raise OrderNotFoundError(order.id)
            self._file.persist(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        address = order.shipping_address
        return {
            "id": order.id,
            "order_number": order.order_number,
            "buyer": {
                "id": order.buyer.id,
                "email": order.buyer.email,
                "name": order.buyer.name,
            },
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "product_image": item.product_image,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                    "seller_id": item.seller_id,
                    "seller_name": item.seller_name,
                }
                for item in order.items
            ],
            "subtotal": str(order.subtotal.amount),
            "shipping": str(order.shipping.amount),
            "tax": str(order.tax.amount),
            "total": str(order.total.amount),
            "currency": order.total.currency,
            "payment_method": order.payment_method.value,
            "payment_status": order.payment_status.value,
            "shipping_address": {
                "name": address.name,
                "street": address.street,
                "city": address.city,
                "state": address.state,
                "zip_code": address.zip_code,
                "country": address.country,
            },
            "status": order.status.value,
            "tracking_number": order.tracking_number,
            "delivery_partner": order.delivery_partner,
            "estimated_delivery": _iso(order.estimated_delivery),
            "cancellation_reason": order.cancellation_reason,
            "created_at": order.created_at.isoformat(),
            "updated_at": _iso(order.updated_at),
            "delivered_at": _iso(order.delivered_at),
            "cancelled_at": _iso(order.cancelled_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        items = tuple(
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                product_image=i.get("product_image", ""),
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
                seller_id=i["seller_id"],
                seller_name=i["seller_name"],
            )
            for i in raw["items"]
        )
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            buyer=BuyerInfo(**raw["buyer"]),
            items=items,
            subtotal=Money(Decimal(raw["subtotal"]), currency),
            shipping=Money(Decimal(raw["shipping"]), currency),
            tax=Money(Decimal(raw["tax"]), currency),
            total=Money(Decimal(raw["total"]), currency),
            payment_method=PaymentMethod(raw["payment_method"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            shipping_address=ShippingAddress(**raw["shipping_address"]),
            status=OrderStatus(raw["status"]),
            tracking_number=raw.get("tracking_number"),
            delivery_partner=raw.get("delivery_partner"),
            estimated_delivery=_parse(raw.get("estimated_delivery")),
            cancellation_reason=raw.get("cancellation_reason"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=_parse(raw.get("updated_at")),
            delivered_at=_parse(raw.get("delivered_at")),
            cancelled_at=_parse(raw.get("cancelled_at")),
        )


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
