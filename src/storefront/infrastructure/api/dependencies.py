"""FastAPI dependencies: the calling actor and wired use-case handlers."""

from __future__ import annotations

from fastapi import Depends, Header

from storefront.application.add_product import AddProductHandler
from storefront.application.dto import Actor
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.list_products import ListProductsHandler, ShowProductHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.remove_product import RemoveProductHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.infrastructure import bootstrap
from storefront.infrastructure.config import Settings, get_settings

_BUYER_TYPES = {"user", "buyer"}


def current_actor(
    x_actor_type: str | None = Header(default=None),
    x_actor_id: str | None = Header(default=None),
    x_actor_email: str = Header(default=""),
    x_actor_name: str = Header(default=""),
) -> Actor:
    """Identity as asserted by the upstream identity provider."""
    if not x_actor_id:
        return Actor.anonymous()
    kind = (x_actor_type or "").lower()
    if kind in _BUYER_TYPES:
        return Actor.buyer(x_actor_id, x_actor_email, x_actor_name)
    if kind == "seller":
        return Actor.seller(x_actor_id, x_actor_email, x_actor_name)
    return Actor.anonymous()


def place_order_handler(settings: Settings = Depends(get_settings)) -> PlaceOrderHandler:
    return bootstrap.place_order_handler(settings)


def list_orders_handler(settings: Settings = Depends(get_settings)) -> ListOrdersHandler:
    return bootstrap.list_orders_handler(settings)


def show_order_handler(settings: Settings = Depends(get_settings)) -> ShowOrderHandler:
    return bootstrap.show_order_handler(settings)


def update_order_status_handler(
    settings: Settings = Depends(get_settings),
) -> UpdateOrderStatusHandler:
    return bootstrap.update_order_status_handler(settings)


def add_product_handler(settings: Settings = Depends(get_settings)) -> AddProductHandler:
    return bootstrap.add_product_handler(settings)


def update_product_handler(settings: Settings = Depends(get_settings)) -> UpdateProductHandler:
    return bootstrap.update_product_handler(settings)


def remove_product_handler(settings: Settings = Depends(get_settings)) -> RemoveProductHandler:
    return bootstrap.remove_product_handler(settings)


def list_products_handler(settings: Settings = Depends(get_settings)) -> ListProductsHandler:
    return bootstrap.list_products_handler(settings)


def show_product_handler(settings: Settings = Depends(get_settings)) -> ShowProductHandler:
    return bootstrap.show_product_handler(settings)
