"""Pydantic request/response schemas for the HTTP API.

These are external contracts (anti-corruption layer), kept apart from the
application DTOs.  JSON keys are camelCase; money is a two-decimal string.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from storefront.application.dto import OrderDTO, OrderPageDTO, ProductDTO


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(CamelModel):
    name: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str = ""


class OrderItemRequest(CamelModel):
    product_id: str
    quantity: int


# ---------------------------------------------------------------------------
# Order requests
# ---------------------------------------------------------------------------
class PlaceOrderRequest(CamelModel):
    items: list[OrderItemRequest] = []
    shipping_address: AddressSchema | None = None
    payment_method: str = "card"


class UpdateOrderRequest(CamelModel):
    status: str | None = None
    tracking_number: str | None = None
    delivery_partner: str | None = None
    estimated_delivery: datetime | None = None
    cancellation_reason: str | None = None


# ---------------------------------------------------------------------------
# Order responses
# ---------------------------------------------------------------------------
class LineItemSchema(CamelModel):
    product_id: str
    product_name: str
    product_image: str
    quantity: int
    unit_price: str
    line_total: str
    seller_id: str
    seller_name: str


class OrderSchema(CamelModel):
    id: str
    order_number: str
    buyer_id: str
    buyer_email: str
    buyer_name: str
    status: str
    payment_method: str
    payment_status: str
    items: list[LineItemSchema]
    subtotal: str
    shipping: str
    tax: str
    total: str
    shipping_address: AddressSchema
    tracking_number: str | None = None
    delivery_partner: str | None = None
    estimated_delivery: datetime | None = None
    cancellation_reason: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None

    @classmethod
    def from_dto(cls, dto: OrderDTO) -> OrderSchema:
        return cls.model_validate(asdict(dto))


class PaginationSchema(CamelModel):
    page: int
    limit: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool


class OrderResponse(CamelModel):
    message: str | None = None
    order: OrderSchema


class OrderListResponse(CamelModel):
    orders: list[OrderSchema]
    pagination: PaginationSchema

    @classmethod
    def from_dto(cls, page: OrderPageDTO) -> OrderListResponse:
        return cls(
            orders=[OrderSchema.from_dto(o) for o in page.orders],
            pagination=PaginationSchema.model_validate(asdict(page.pagination)),
        )


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(CamelModel):
    name: str
    price: Decimal
    stock_quantity: int
    image: str = ""


class UpdateProductRequest(CamelModel):
    price: Decimal | None = None
    stock_quantity: int | None = None


class ProductSchema(CamelModel):
    id: str
    name: str
    price: str
    stock_quantity: int
    in_stock: bool
    seller_id: str
    seller_name: str
    image: str
    is_active: bool

    @classmethod
    def from_dto(cls, dto: ProductDTO) -> ProductSchema:
        return cls.model_validate(asdict(dto))


class ProductResponse(CamelModel):
    message: str | None = None
    product: ProductSchema


class ProductListResponse(CamelModel):
    products: list[ProductSchema]


class MessageResponse(CamelModel):
    message: str
