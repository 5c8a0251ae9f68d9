"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
sellers list them, change prices and stock, and eventually withdraw them.
Withdrawn products are soft-deleted (``is_active=False``) and never removed,
because historical orders still carry snapshots of them.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.model.value_objects import CENT, Money


@dataclass
class Product:
    """A product in the catalog.

    ``in_stock`` is derived from ``stock_quantity`` rather than stored, so
    the two can never disagree after a mutation.
    """

    id: str
    name: str
    price: Money
    stock_quantity: int
    seller_id: str
    seller_name: str
    image: str = ""
    is_active: bool = True

    def __post_init__(self) -> None:
        _check_price(self.price)
        if self.stock_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0

    @property
    def is_purchasable(self) -> bool:
        return self.is_active and self.in_stock

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        _check_price(new_price)
        self.price = new_price

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        self.stock_quantity = quantity

    def decrement_stock(self, quantity: int) -> None:
        """Take ``quantity`` units out of stock, refusing to go below zero."""
        if quantity <= 0:
            raise ValidationError("Decrement quantity must be positive")
        if not self.in_stock or quantity > self.stock_quantity:
            raise InsufficientStockError(
                self.id, self.name, quantity, self.stock_quantity
            )
        self.stock_quantity -= quantity

    def restock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Restock quantity must be positive")
        self.stock_quantity += quantity

    def deactivate(self) -> None:
        self.is_active = False


def _check_price(price: Money) -> None:
    # Whole cents keep the displayed total equal to the displayed
    # subtotal + shipping + tax.
    if price.amount <= 0:
        raise ValidationError("Product price must be greater than zero")
    if price.amount != price.amount.quantize(CENT):
        raise ValidationError(f"Product price must be in whole cents, got {price.amount}")
