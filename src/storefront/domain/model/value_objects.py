"""Immutable value types shared by the catalog and order models."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering

from storefront.domain.exceptions import ValidationError

CENT = Decimal("0.01")
DEFAULT_CURRENCY = "USD"


@total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative amount in one currency.

    Arithmetic never rounds: a subtotal built from many lines, or a tax
    computed from it, keeps every digit.  ``rounded()`` / ``to_plain()``
    round half-up to cents and are meant for output only.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount.is_signed() and self.amount != 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    @classmethod
    def of(cls, value: str | int | float | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Build from user input; goes through ``str`` so floats parse as written."""
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise ValidationError(f"Invalid money amount: {value!r}") from None
        if not amount.is_finite():
            raise ValidationError(f"Invalid money amount: {value!r}")
        return cls(amount, currency)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Money:
        return cls(Decimal("0"), currency)

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._same_currency(other).amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        difference = self.amount - self._same_currency(other).amount
        if difference < 0:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(difference, self.currency)

    def __mul__(self, factor: int | Decimal) -> Money:
        # bool is an int subclass; Money * True is always a bug
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._same_currency(other).amount

    def rounded(self) -> Decimal:
        return self.amount.quantize(CENT, rounding=ROUND_HALF_UP)

    def to_plain(self) -> str:
        """e.g. ``"64.80"``"""
        return f"{self.rounded():.2f}"

    def __str__(self) -> str:
        return "$" + self.to_plain()

    def _same_currency(self, other: Money) -> Money:
        if other.currency != self.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return other


@dataclass(frozen=True)
class Quantity:
    """Units of one product on an order line; always a positive int."""

    value: int

    def __post_init__(self) -> None:
        if type(self.value) is not int:
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
