"""Domain service: Pricing.

Pure functions: no repository access, no side effects.  All arithmetic
uses ``Money`` (Decimal) at full precision.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Protocol

from storefront.domain.model.value_objects import Money, Quantity

FREE_SHIPPING_THRESHOLD = Money(Decimal("50"))
FLAT_SHIPPING_FEE = Money(Decimal("10"))
TAX_RATE = Decimal("0.08")


class PricedItem(Protocol):
    unit_price: Money
    quantity: Quantity


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Money
    shipping: Money
    tax: Money
    total: Money


@dataclass(frozen=True)
class PricingPolicy:
    """Shipping and tax parameters; the defaults are the storefront's rates."""

    free_shipping_threshold: Money = FREE_SHIPPING_THRESHOLD
    flat_shipping_fee: Money = FLAT_SHIPPING_FEE
    tax_rate: Decimal = TAX_RATE

    def calculate(self, items: Iterable[PricedItem]) -> PriceBreakdown:
        """Price a set of line items.

        Shipping is free only when the subtotal is strictly above the
        threshold; tax applies to the subtotal alone.
        """
        subtotal = Money.zero()
        for item in items:
            subtotal = subtotal + item.unit_price * item.quantity.value

        if subtotal > self.free_shipping_threshold:
            shipping = Money.zero()
        else:
            shipping = self.flat_shipping_fee

        tax = subtotal * self.tax_rate
        return PriceBreakdown(
            subtotal=subtotal,
            shipping=shipping,
            tax=tax,
            total=subtotal + shipping + tax,
        )
