"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.application.add_product import AddProductHandler
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.list_products import ListProductsHandler, ShowProductHandler
from storefront.application.notifications import NotificationSink
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.remove_product import RemoveProductHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.infrastructure.config import Settings, get_settings
from storefront.infrastructure.notifications import LoggingNotificationSink
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.json_seller_repository import (
    JsonSellerRepository,
)


def product_repository(settings: Settings | None = None) -> JsonProductRepository:
    settings = settings or get_settings()
    return JsonProductRepository(settings.data_dir / "products.json")


def order_repository(settings: Settings | None = None) -> JsonOrderRepository:
    settings = settings or get_settings()
    return JsonOrderRepository(settings.data_dir / "orders.json")


def seller_repository(settings: Settings | None = None) -> JsonSellerRepository:
    settings = settings or get_settings()
    return JsonSellerRepository(settings.data_dir / "sellers.json")


def notification_sink() -> NotificationSink:
    return LoggingNotificationSink()


# --- Use cases ----------------------------------------------------------------


def place_order_handler(settings: Settings | None = None) -> PlaceOrderHandler:
    settings = settings or get_settings()
    return PlaceOrderHandler(
        order_repo=order_repository(settings),
        product_repo=product_repository(settings),
        seller_repo=seller_repository(settings),
        notifications=notification_sink(),
        pricing=settings.pricing_policy(),
    )


def list_orders_handler(settings: Settings | None = None) -> ListOrdersHandler:
    settings = settings or get_settings()
    return ListOrdersHandler(
        order_repo=order_repository(settings),
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )


def show_order_handler(settings: Settings | None = None) -> ShowOrderHandler:
    return ShowOrderHandler(order_repo=order_repository(settings))


def update_order_status_handler(
    settings: Settings | None = None,
) -> UpdateOrderStatusHandler:
    return UpdateOrderStatusHandler(
        order_repo=order_repository(settings),
        notifications=notification_sink(),
    )


def add_product_handler(settings: Settings | None = None) -> AddProductHandler:
    return AddProductHandler(product_repo=product_repository(settings))


def update_product_handler(settings: Settings | None = None) -> UpdateProductHandler:
    return UpdateProductHandler(product_repo=product_repository(settings))


def remove_product_handler(settings: Settings | None = None) -> RemoveProductHandler:
    return RemoveProductHandler(product_repo=product_repository(settings))


def list_products_handler(settings: Settings | None = None) -> ListProductsHandler:
    return ListProductsHandler(product_repo=product_repository(settings))


def show_product_handler(settings: Settings | None = None) -> ShowProductHandler:
    return ShowProductHandler(product_repo=product_repository(settings))
