"""FastAPI routes for orders and the catalog."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from storefront.application.add_product import AddProductHandler
from storefront.application.dto import Actor, AddressSpec, OrderItemSpec
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.list_products import ListProductsHandler, ShowProductHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.remove_product import RemoveProductHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import (
    UpdateOrderStatusHandler,
    build_status_command,
)
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import ProductNotFoundError, ValidationError
from storefront.infrastructure.api import dependencies as deps
from storefront.infrastructure.api.schemas import (
    CreateProductRequest,
    MessageResponse,
    OrderListResponse,
    OrderResponse,
    OrderSchema,
    PlaceOrderRequest,
    ProductListResponse,
    ProductResponse,
    ProductSchema,
    UpdateOrderRequest,
    UpdateProductRequest,
)

# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
def place_order(
    body: PlaceOrderRequest,
    actor: Actor = Depends(deps.current_actor),
    handler: PlaceOrderHandler = Depends(deps.place_order_handler),
) -> OrderResponse:
    address = None
    if body.shipping_address is not None:
        address = AddressSpec(**body.shipping_address.model_dump())
    try:
        dto = handler.handle(
            actor,
            [OrderItemSpec(i.product_id, i.quantity) for i in body.items],
            address,
            body.payment_method,
        )
    except ProductNotFoundError as exc:
        # An unknown product here is bad caller input, not a missing resource.
        raise ValidationError(str(exc)) from exc
    return OrderResponse(message="Order created successfully", order=OrderSchema.from_dto(dto))


@order_router.get("", response_model=OrderListResponse)
def list_orders(
    page: int = 1,
    limit: int | None = None,
    status: str | None = None,
    actor: Actor = Depends(deps.current_actor),
    handler: ListOrdersHandler = Depends(deps.list_orders_handler),
) -> OrderListResponse:
    return OrderListResponse.from_dto(
        handler.handle(actor, page=page, limit=limit, status=status)
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: str,
    actor: Actor = Depends(deps.current_actor),
    handler: ShowOrderHandler = Depends(deps.show_order_handler),
) -> OrderResponse:
    return OrderResponse(order=OrderSchema.from_dto(handler.handle(actor, order_id)))


@order_router.put("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: str,
    body: UpdateOrderRequest,
    actor: Actor = Depends(deps.current_actor),
    handler: UpdateOrderStatusHandler = Depends(deps.update_order_status_handler),
) -> OrderResponse:
    actor.require_seller()
    command = build_status_command(
        status=body.status,
        tracking_number=body.tracking_number,
        delivery_partner=body.delivery_partner,
        estimated_delivery=body.estimated_delivery,
        cancellation_reason=body.cancellation_reason,
    )
    dto = handler.handle(actor, order_id, command)
    return OrderResponse(message="Order updated successfully", order=OrderSchema.from_dto(dto))


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=ProductListResponse)
def list_products(
    seller_id: str | None = Query(default=None, alias="sellerId"),
    handler: ListProductsHandler = Depends(deps.list_products_handler),
) -> ProductListResponse:
    products = handler.handle(seller_id=seller_id)
    return ProductListResponse(products=[ProductSchema.from_dto(p) for p in products])


@product_router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: str,
    handler: ShowProductHandler = Depends(deps.show_product_handler),
) -> ProductResponse:
    return ProductResponse(product=ProductSchema.from_dto(handler.handle(product_id)))


@product_router.post("", status_code=201, response_model=ProductResponse)
def add_product(
    body: CreateProductRequest,
    actor: Actor = Depends(deps.current_actor),
    handler: AddProductHandler = Depends(deps.add_product_handler),
) -> ProductResponse:
    dto = handler.handle(actor, body.name, str(body.price), body.stock_quantity, body.image)
    return ProductResponse(message="Product created successfully", product=ProductSchema.from_dto(dto))


@product_router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    body: UpdateProductRequest,
    actor: Actor = Depends(deps.current_actor),
    handler: UpdateProductHandler = Depends(deps.update_product_handler),
) -> ProductResponse:
    dto = handler.handle(
        actor,
        product_id,
        new_price=str(body.price) if body.price is not None else None,
        stock_quantity=body.stock_quantity,
    )
    return ProductResponse(message="Product updated successfully", product=ProductSchema.from_dto(dto))


@product_router.delete("/{product_id}", response_model=MessageResponse)
def remove_product(
    product_id: str,
    actor: Actor = Depends(deps.current_actor),
    handler: RemoveProductHandler = Depends(deps.remove_product_handler),
) -> MessageResponse:
    handler.handle(actor, product_id)
    return MessageResponse(message="Product deleted successfully")
