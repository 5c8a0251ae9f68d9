"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP adapters and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from storefront.domain.exceptions import AuthorizationError
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product


class ActorKind(Enum):
    BUYER = "user"
    SELLER = "seller"
    ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class Actor:
    """The authenticated caller, supplied by the identity provider.

    Every use case receives the actor explicitly; nothing reads session
    state from a global.
    """

    kind: ActorKind
    id: str = ""
    email: str = ""
    name: str = ""

    @staticmethod
    def anonymous() -> Actor:
        return Actor(ActorKind.ANONYMOUS)

    @staticmethod
    def buyer(id: str, email: str = "", name: str = "") -> Actor:
        return Actor(ActorKind.BUYER, id, email, name)

    @staticmethod
    def seller(id: str, email: str = "", name: str = "") -> Actor:
        return Actor(ActorKind.SELLER, id, email, name)

    @property
    def is_buyer(self) -> bool:
        return self.kind == ActorKind.BUYER and bool(self.id)

    @property
    def is_seller(self) -> bool:
        return self.kind == ActorKind.SELLER and bool(self.id)

    def require_authenticated(self) -> None:
        if not (self.is_buyer or self.is_seller):
            raise AuthorizationError("Unauthorized")

    def require_buyer(self) -> None:
        if not self.is_buyer:
            raise AuthorizationError("Unauthorized")

    def require_seller(self) -> None:
        if not self.is_seller:
            raise AuthorizationError("Unauthorized")

    def can_read(self, order: Order) -> bool:
        if self.is_buyer:
            return order.buyer.id == self.id
        if self.is_seller:
            return order.involves_seller(self.id)
        return False


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the buyer asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class AddressSpec:
    name: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str = ""


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    product_name: str
    product_image: str
    quantity: int
    unit_price: str  # two decimals, e.g. "30.00"
    line_total: str
    seller_id: str
    seller_name: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    order_number: str
    buyer_id: str
    buyer_email: str
    buyer_name: str
    status: str
    payment_method: str
    payment_status: str
    items: list[OrderLineItemDTO]
    subtotal: str
    shipping: str
    tax: str
    total: str
    shipping_address: AddressSpec
    tracking_number: str | None
    delivery_partner: str | None
    estimated_delivery: datetime | None
    cancellation_reason: str | None
    created_at: datetime
    updated_at: datetime | None
    delivered_at: datetime | None
    cancelled_at: datetime | None

    @staticmethod
    def from_domain(order: Order) -> OrderDTO:
        address = order.shipping_address
        return OrderDTO(
            id=order.id,
            order_number=order.order_number,
            buyer_id=order.buyer.id,
            buyer_email=order.buyer.email,
            buyer_name=order.buyer.name,
            status=order.status.value,
            payment_method=order.payment_method.value,
            payment_status=order.payment_status.value,
            items=[
                OrderLineItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    product_image=item.product_image,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.to_plain(),
                    line_total=item.line_total.to_plain(),
                    seller_id=item.seller_id,
                    seller_name=item.seller_name,
                )
                for item in order.items
            ],
            subtotal=order.subtotal.to_plain(),
            shipping=order.shipping.to_plain(),
            tax=order.tax.to_plain(),
            total=order.total.to_plain(),
            shipping_address=AddressSpec(
                name=address.name,
                street=address.street,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
            ),
            tracking_number=order.tracking_number,
            delivery_partner=order.delivery_partner,
            estimated_delivery=order.estimated_delivery,
            cancellation_reason=order.cancellation_reason,
            created_at=order.created_at,
            updated_at=order.updated_at,
            delivered_at=order.delivered_at,
            cancelled_at=order.cancelled_at,
        )


@dataclass(frozen=True)
class PaginationDTO:
    page: int
    limit: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool


@dataclass(frozen=True)
class OrderPageDTO:
    orders: list[OrderDTO]
    pagination: PaginationDTO


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: str
    stock_quantity: int
    in_stock: bool
    seller_id: str
    seller_name: str
    image: str
    is_active: bool

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=product.price.to_plain(),
            stock_quantity=product.stock_quantity,
            in_stock=product.in_stock,
            seller_id=product.seller_id,
            seller_name=product.seller_name,
            image=product.image,
            is_active=product.is_active,
        )
